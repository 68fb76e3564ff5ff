"""
Legacy console mode.

    pdf-utils extract-images book.pdf out/ --from 2 --to 4 --prefix page_
    pdf-utils extract-pdf book.pdf out/ --name chapter --pages 1,3,5-7
    pdf-utils images-to-pdf out/ --name scans --folder scans/ --prefix img_

The old mode names (--EXTRACT_TO_IMAGES, --EXTRACT_TO_PDF, --IMAGES_TO_PDF)
are accepted in place of the sub-command.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from PyPDF2.errors import PyPdfError

from pdfutils.errors import PdfUtilsError
from pdfutils.extract_images import DEFAULT_DPI, DEFAULT_IMAGE_PREFIX, ExtractImagesOptions, extract_to_images
from pdfutils.extract_pdf import ExtractPdfOptions, extract_to_pdf
from pdfutils.file_manager import collect_folder_images, pdf_page_count
from pdfutils.images_to_pdf import ImagesToPdfOptions, images_to_pdf
from pdfutils.page_ops import page_range_to_indices, parse_page_bounds, parse_page_list

logger = logging.getLogger(__name__)

LEGACY_MODES = {
    "--EXTRACT_TO_IMAGES": "extract-images",
    "--EXTRACT_TO_PDF": "extract-pdf",
    "--IMAGES_TO_PDF": "images-to-pdf",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-utils",
        description="Extract PDF pages to images or a new PDF, or combine images into a PDF. "
                    "Run without arguments to open the graphical interface.",
    )
    sub = parser.add_subparsers(dest="mode", required=True)

    p = sub.add_parser("extract-images", help="Render a page range to PNG images")
    p.add_argument("source", help="Source PDF file")
    p.add_argument("destination", help="Folder for the images")
    p.add_argument("--from", dest="from_page", required=True, help="First page (1-based)")
    p.add_argument("--to", dest="to_page", required=True, help="Last page (inclusive)")
    p.add_argument("--prefix", default=DEFAULT_IMAGE_PREFIX, help="Image name prefix (default: %(default)s)")
    p.add_argument("--dpi", type=int, default=DEFAULT_DPI, help="Render resolution (default: %(default)s)")
    p.add_argument("--password", default="", help="Password of the source PDF")

    p = sub.add_parser("extract-pdf", help="Copy pages into a new PDF")
    p.add_argument("source", help="Source PDF file")
    p.add_argument("destination", help="Folder for the new PDF")
    p.add_argument("--name", required=True, help="Name of the new PDF ('.pdf' is optional)")
    p.add_argument("--from", dest="from_page", help="First page (1-based)")
    p.add_argument("--to", dest="to_page", help="Last page (inclusive)")
    p.add_argument("--pages", help="Individual pages, e.g. 1,3,5-7")
    p.add_argument("--password", default="", help="Password of the source PDF")
    p.add_argument("--result-password", default="", help="Protect the new PDF with this password")

    p = sub.add_parser("images-to-pdf", help="Combine images into one PDF")
    p.add_argument("destination", help="Folder for the new PDF")
    p.add_argument("images", nargs="*", help="Image files, in page order")
    p.add_argument("--name", required=True, help="Name of the new PDF ('.pdf' is optional)")
    p.add_argument("--folder", help="Combine the images of this folder, sorted by name")
    p.add_argument("--prefix", help="With --folder, only images whose name starts with this")
    p.add_argument("--result-password", default="", help="Protect the new PDF with this password")

    return parser


def _print_progress(done: int, total: int, message: str) -> None:
    print(f"[{done}/{total}] {message}")


def _run_extract_images(args) -> None:
    total_pages = pdf_page_count(args.source, args.password)
    from_page, to_page = parse_page_bounds(args.from_page, args.to_page, total_pages)
    options = ExtractImagesOptions(image_prefix=args.prefix, dpi=args.dpi, password=args.password)
    written = extract_to_images(args.source, args.destination, from_page, to_page, options,
                                progress_callback=_print_progress)
    print(f"{len(written)} image(s) written to {args.destination}")


def _run_extract_pdf(args, parser: argparse.ArgumentParser) -> None:
    if args.pages and (args.from_page or args.to_page):
        parser.error("use either --pages or --from/--to")
    if not args.pages and not (args.from_page and args.to_page):
        parser.error("either --pages or both --from and --to are required")

    total_pages = pdf_page_count(args.source, args.password)
    if args.pages:
        indices = parse_page_list(args.pages, total_pages)
    else:
        indices = page_range_to_indices(*parse_page_bounds(args.from_page, args.to_page, total_pages))

    options = ExtractPdfOptions(name=args.name, password=args.password,
                                result_password=args.result_password)
    output = extract_to_pdf(args.source, args.destination, indices, options,
                            progress_callback=_print_progress)
    print(f"Pages extracted to {output}")


def _run_images_to_pdf(args, parser: argparse.ArgumentParser) -> None:
    if args.folder and args.images:
        parser.error("use either --folder or a list of images")
    if args.folder:
        images = collect_folder_images(args.folder, args.prefix)
    elif args.images:
        images = list(args.images)
    else:
        parser.error("give --folder or at least one image")

    options = ImagesToPdfOptions(name=args.name, result_password=args.result_password)
    output = images_to_pdf(images, args.destination, options, progress_callback=_print_progress)
    print(f"{len(images)} image(s) combined into {output}")


def translate_legacy(argv: List[str]) -> List[str]:
    if argv and argv[0] in LEGACY_MODES:
        return [LEGACY_MODES[argv[0]]] + list(argv[1:])
    return list(argv)


def run(argv: Optional[List[str]] = None) -> int:
    """Run one operation on the main thread and return the exit status."""
    argv = translate_legacy(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.mode == "extract-images":
            _run_extract_images(args)
        elif args.mode == "extract-pdf":
            _run_extract_pdf(args, parser)
        else:
            _run_images_to_pdf(args, parser)
    except (PdfUtilsError, OSError, PyPdfError, RuntimeError) as e:
        # PyMuPDF reports broken documents as RuntimeError subclasses
        logger.debug("Console operation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
