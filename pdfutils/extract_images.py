from __future__ import annotations

# pdfutils/extract_images.py

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Optional

from pdfutils.encryption import open_pdf
from pdfutils.errors import InvalidInputError, OperationCancelled
from pdfutils.file_manager import require_directory
from pdfutils.page_ops import numbered_name, page_range_to_indices

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_PREFIX = "img_"
DEFAULT_DPI = 300


@dataclass
class ExtractImagesOptions:
    image_prefix: str = DEFAULT_IMAGE_PREFIX
    dpi: int = DEFAULT_DPI
    password: str = ""


def extract_to_images(
    source_pdf: str,
    dest_dir: str,
    from_page: int,
    to_page: int,
    options: Optional[ExtractImagesOptions] = None,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    cancel_callback: Optional[Callable[[], bool]] = None,
) -> List[str]:
    """
    Render pages from_page..to_page (1-based, inclusive) of source_pdf to
    PNG files in dest_dir. Returns the written paths in page order.
    """
    options = options or ExtractImagesOptions()

    def cancelled():
        return cancel_callback and cancel_callback()

    if not options.image_prefix or not options.image_prefix.strip():
        raise InvalidInputError("Image prefix must not be empty.")
    if options.dpi < 1:
        raise InvalidInputError("Resolution (DPI) must be a positive number.")
    require_directory(dest_dir)

    doc = open_pdf(source_pdf, options.password or None)
    written = []
    try:
        total_pages = len(doc)
        if from_page < 1 or from_page > to_page or to_page > total_pages:
            raise InvalidInputError(
                f"Pages {from_page}-{to_page} are not in the document, file has {total_pages} pages"
            )

        indices = page_range_to_indices(from_page, to_page)
        logger.info("Extracting %d page(s) of %s to images", len(indices), source_pdf)

        for counter, idx in enumerate(indices, start=1):
            if cancelled():
                raise OperationCancelled("Extraction cancelled")

            pix = doc[idx].get_pixmap(dpi=options.dpi, alpha=False)
            file_name = numbered_name(options.image_prefix, counter, len(indices), ".png")
            out_path = os.path.join(dest_dir, file_name)
            pix.save(out_path)
            written.append(out_path)

            if progress_callback:
                progress_callback(counter, len(indices), f"Page {idx + 1} saved as {file_name}")
    finally:
        doc.close()

    return written
