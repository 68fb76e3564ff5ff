from __future__ import annotations
# pdfutils/images_to_pdf.py

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from PIL import Image
from reportlab.pdfgen import canvas

from pdfutils.encryption import protect_pdf
from pdfutils.errors import InvalidInputError, OperationCancelled
from pdfutils.file_manager import ensure_pdf_name, is_image_file, require_directory

logger = logging.getLogger(__name__)

IMAGE_DPI = 96


@dataclass
class ImagesToPdfOptions:
    name: str = ""
    result_password: str = ""


def load_flat_image(image_path: str) -> Image.Image:
    """Open an image as RGB, transparent areas flattened onto white."""
    try:
        img = Image.open(image_path)
        img.load()  # Ensure image is fully loaded before use
    except OSError as e:
        raise InvalidInputError(f"Failed to open image file '{image_path}': {e}")

    # JPEG data in the PDF cannot carry transparency
    if img.mode in ("RGBA", "LA", "P"):
        if img.mode == "P":
            img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        img = background
    else:
        # a fresh copy, reportlab reads the source file again for JPEG images
        img = img.convert("RGB")
    return img


def page_size_for(img: Image.Image) -> tuple:
    img_width, img_height = img.size
    return (img_width / IMAGE_DPI) * 72, (img_height / IMAGE_DPI) * 72


def _draw_images(
    image_paths: List[str],
    pdf_path: str,
    progress_callback: Optional[Callable[[int, int, str], None]],
    cancelled: Callable[[], bool],
) -> None:
    c = canvas.Canvas(pdf_path)
    total = len(image_paths)
    for done, image_path in enumerate(image_paths, start=1):
        if cancelled():
            raise OperationCancelled("Combination cancelled")

        img = load_flat_image(image_path)
        page_width, page_height = page_size_for(img)
        c.setPageSize((page_width, page_height))
        c.drawInlineImage(img, 0, 0, width=page_width, height=page_height)
        c.showPage()

        if progress_callback:
            progress_callback(done, total + 1, f"Added {Path(image_path).name}")
    c.save()


def images_to_pdf(
    image_paths: List[str],
    dest_dir: str,
    options: ImagesToPdfOptions,
    progress_callback: Optional[Callable[[int, int, str], None]] = None,
    cancel_callback: Optional[Callable[[], bool]] = None,
) -> str:
    """
    Combine image_paths, in order, into dest_dir/<name>.pdf with one image
    per page. Returns the output path.
    """
    def cancelled():
        return bool(cancel_callback and cancel_callback())

    file_name = ensure_pdf_name(options.name)
    require_directory(dest_dir)
    if not image_paths:
        raise InvalidInputError("Select at least one image to combine.")
    unsupported = [Path(p).name for p in image_paths if not is_image_file(p)]
    if unsupported:
        raise InvalidInputError(f"Unsupported image file: {unsupported[0]}")

    output_path = str(Path(dest_dir) / file_name)
    total = len(image_paths)
    logger.info("Combining %d image(s) into %s", total, output_path)

    if options.result_password:
        fd, temp_path = tempfile.mkstemp(suffix=".pdf")
        os.close(fd)
        try:
            _draw_images(image_paths, temp_path, progress_callback, cancelled)
            if progress_callback:
                progress_callback(total, total + 1, "Encrypting PDF...")
            protect_pdf(temp_path, output_path, options.result_password)
        finally:
            os.remove(temp_path)
    else:
        _draw_images(image_paths, output_path, progress_callback, cancelled)

    if progress_callback:
        progress_callback(total + 1, total + 1, "Done")

    return output_path
