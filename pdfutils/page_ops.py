from __future__ import annotations

# pdfutils/page_ops.py

from typing import Iterable, List, Optional, Tuple

from pdfutils.errors import InvalidInputError


# ---------------------------------------------------------------------------
# From / To page inputs
# ---------------------------------------------------------------------------

def _shown(text: str) -> str:
    text = (text or "").strip()
    return text if text else "[EMPTY]"


def parse_page_bounds(
    from_text: str,
    to_text: str,
    total_pages: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Parse the "From this page" and "To this page" inputs into an
    inclusive, 1-based (from_page, to_page) pair.
    """
    message = f"{_shown(from_text)} and {_shown(to_text)} is not a valid range of pages!"
    try:
        start = int(str(from_text).strip())
        end = int(str(to_text).strip())
    except (TypeError, ValueError):
        raise InvalidInputError(message)

    if start < 1 or end < 1 or start > end:
        raise InvalidInputError(message)

    if total_pages is not None and end > total_pages:
        raise InvalidInputError(
            f"Page range exceeds total pages, file has {total_pages} pages"
        )

    return start, end


def page_range_to_indices(from_page: int, to_page: int) -> List[int]:
    """Inclusive 1-based interval -> zero-based indices."""
    return list(range(from_page - 1, to_page))


# ---------------------------------------------------------------------------
# Individual pages
# ---------------------------------------------------------------------------

def parse_page_list(range_text: str, total_pages: Optional[int] = None) -> List[int]:
    """
    Convert comma separated page numbers into a sorted list of zero-based indices.
    Supports:
        "1,3,5", "2-4,7", " 6 "
    """
    text = (range_text or "").strip()
    if not text:
        raise InvalidInputError("Enter the pages to extract, separated by commas.")

    indices = set()
    parts = [p.strip() for p in text.split(",") if p.strip()]

    for part in parts:
        if "-" in part:
            start_str, end_str = [p.strip() for p in part.split("-", 1)]
            if not start_str or not end_str:
                raise InvalidInputError(f"Invalid range format: '{part}'")

            try:
                start = int(start_str)
                end = int(end_str)
            except ValueError:
                raise InvalidInputError("Page numbers must be integers")

            if start < 1 or end < 1 or start > end:
                raise InvalidInputError(f"Invalid range order: '{part}'")

            if total_pages is not None and end > total_pages:
                raise InvalidInputError(
                    f"Page range exceeds total pages, file has {total_pages} pages"
                )

            for page_num in range(start, end + 1):
                indices.add(page_num - 1)

        else:
            try:
                page_num = int(part)
            except ValueError:
                raise InvalidInputError("Page numbers must be integers")

            if page_num < 1 or (total_pages is not None and page_num > total_pages):
                raise InvalidInputError(
                    f"Page number {page_num} out of range"
                    + (f", file has {total_pages} pages" if total_pages is not None else "")
                )

            indices.add(page_num - 1)

    if not indices:
        raise InvalidInputError("No valid pages selected")

    return sorted(indices)


def format_page_list(page_numbers: Iterable[int]) -> str:
    """1-based page numbers from the page viewer -> "1,4,7"."""
    return ",".join(str(n) for n in sorted(set(page_numbers)))


# ---------------------------------------------------------------------------
# Output naming
# ---------------------------------------------------------------------------

def numbered_name(prefix: str, counter: int, total: int, ext: str = ".png") -> str:
    """
    Name for the counter-th of total generated files. The counter is
    zero-padded to the width of total so that name order is page order.
    """
    width = len(str(max(total, 1)))
    return f"{prefix}{counter:0{width}d}{ext}"
