from __future__ import annotations

# pdfutils/preview.py

import io
from typing import Callable, Iterator, List, Optional, Tuple

from PIL import Image

from pdfutils.encryption import open_pdf
from pdfutils.errors import InvalidInputError, OperationCancelled

PREVIEW_DPI = 50
THUMBNAIL_SIZE = (180, 210)


def render_thumbnails(
    source_pdf: str,
    page_numbers: Optional[List[int]] = None,
    password: Optional[str] = None,
    dpi: int = PREVIEW_DPI,
    size: Tuple[int, int] = THUMBNAIL_SIZE,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    cancel_callback: Optional[Callable[[], bool]] = None,
) -> Iterator[Tuple[int, Image.Image]]:
    """
    Yield (page_number, thumbnail) for the 1-based page_numbers of
    source_pdf, or for every page when page_numbers is None.
    """
    doc = open_pdf(source_pdf, password)
    try:
        total_pages = len(doc)
        numbers = list(page_numbers) if page_numbers is not None else list(range(1, total_pages + 1))
        missing = [n for n in numbers if n < 1 or n > total_pages]
        if missing:
            raise InvalidInputError(
                f"Page {missing[0]} is not in the document, file has {total_pages} pages"
            )

        for done, number in enumerate(numbers, start=1):
            if cancel_callback and cancel_callback():
                raise OperationCancelled("Preview closed")

            pix = doc[number - 1].get_pixmap(dpi=dpi, alpha=False)
            img = Image.open(io.BytesIO(pix.tobytes("ppm")))
            img.thumbnail(size, Image.Resampling.LANCZOS)

            if progress_callback:
                progress_callback(done, len(numbers), f"Page {number}")
            yield number, img
    finally:
        doc.close()


class PageSelection:
    """Pages toggled in the page viewer, 1-based."""

    def __init__(self):
        self._selected = set()

    def toggle(self, page_number: int) -> bool:
        if page_number in self._selected:
            self._selected.discard(page_number)
            return False
        self._selected.add(page_number)
        return True

    def is_selected(self, page_number: int) -> bool:
        return page_number in self._selected

    def result(self) -> List[int]:
        return sorted(self._selected)
