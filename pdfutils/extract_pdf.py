# pdfutils/extract_pdf.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Callable, Optional

import logging
import os
import tempfile

from PyPDF2 import PdfReader, PdfWriter

from pdfutils.encryption import protect_pdf, unlock_reader
from pdfutils.errors import InvalidInputError, OperationCancelled
from pdfutils.file_manager import ensure_pdf_name, require_directory

logger = logging.getLogger(__name__)


@dataclass
class ExtractPdfOptions:
    name: str = ""
    password: str = ""          # opens the source
    result_password: str = ""   # protects the result


# ---------------------------------------------------------------------------
# Page copy pipeline
# ---------------------------------------------------------------------------


def extract_to_pdf(
    source_pdf: str,
    dest_dir: str,
    page_indices: List[int],
    options: ExtractPdfOptions,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    cancel_callback: Optional[Callable[[], bool]] = None,
) -> str:
    """
    Copy the zero-based page_indices of source_pdf, in order, into
    dest_dir/<name>.pdf. Returns the output path.
    """
    def cancelled():
        return cancel_callback and cancel_callback()

    file_name = ensure_pdf_name(options.name)
    require_directory(dest_dir)
    if not page_indices:
        raise InvalidInputError("No pages selected")
    if not os.path.isfile(source_pdf):
        raise FileNotFoundError(f"File not found: {source_pdf}")

    output_path = str(Path(dest_dir) / file_name)
    total = len(page_indices)

    with open(source_pdf, "rb") as pdf_file:
        pdf_reader = unlock_reader(PdfReader(pdf_file), options.password, source_pdf)
        total_pages = len(pdf_reader.pages)

        bad = [i + 1 for i in page_indices if i < 0 or i >= total_pages]
        if bad:
            raise InvalidInputError(
                f"Page {bad[0]} is not in the document, file has {total_pages} pages"
            )

        logger.info("Extracting %d page(s) of %s to %s", total, source_pdf, output_path)
        pdf_writer = PdfWriter()
        for done, idx in enumerate(page_indices, start=1):
            if cancelled():
                raise OperationCancelled("Extraction cancelled")
            pdf_writer.add_page(pdf_reader.pages[idx])
            if progress_callback:
                progress_callback(done, total + 1, f"Copied page {idx + 1}")

        if cancelled():
            raise OperationCancelled("Extraction cancelled")

        if progress_callback:
            progress_callback(total, total + 1, "Writing PDF...")

        # ------------------------------------------------------------------
        # Write plain output, or a temp file that gets encrypted afterwards
        # ------------------------------------------------------------------
        if options.result_password:
            fd, temp_path = tempfile.mkstemp(suffix=".pdf")
            os.close(fd)
            try:
                with open(temp_path, "wb") as out_file:
                    pdf_writer.write(out_file)
                protect_pdf(temp_path, output_path, options.result_password)
            finally:
                os.remove(temp_path)
        else:
            with open(output_path, "wb") as out_file:
                pdf_writer.write(out_file)

    if progress_callback:
        progress_callback(total + 1, total + 1, "Done")

    return output_path
