# pdfutils/file_manager.py

import os
import re
from pathlib import Path
from typing import List, Optional, Tuple

import PyPDF2
from PyPDF2.errors import PyPdfError

from pdfutils.encryption import unlock_reader
from pdfutils.errors import InvalidInputError

IMAGE_EXTS = (
    '.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tiff', '.tif'
)

RESERVED_NAMES = {
    'con', 'prn', 'aux', 'nul', 'com1', 'com2', 'com3', 'com4', 'com5',
    'com6', 'com7', 'com8', 'com9', 'lpt1', 'lpt2', 'lpt3', 'lpt4', 'lpt5',
    'lpt6', 'lpt7', 'lpt8', 'lpt9'
}


def is_image_file(path: str) -> bool:
    return path.lower().endswith(IMAGE_EXTS)


def is_pdf_readable(path: str) -> Tuple[bool, Optional[str]]:
    """Return (True, None) if readable, (False, error_message) if not."""
    try:
        with open(path, "rb") as f:
            reader = PyPDF2.PdfReader(f)
            if reader.is_encrypted:
                return False, "Encrypted PDF"
            len(reader.pages)
        return True, None
    except OSError as e:
        return False, str(e)
    except PyPdfError as e:
        return False, str(e)


def pdf_page_count(path: str, password: Optional[str] = None) -> int:
    with open(path, "rb") as f:
        reader = unlock_reader(PyPDF2.PdfReader(f), password, path)
        return len(reader.pages)


def add_images_to_list(
    image_list: List[str],
    paths: List[str]
) -> Tuple[int, int, List[str], int, List[str]]:
    """
    Add multiple images and return:
    (added_count, duplicate_count, duplicate_names, unsupported_count, unsupported_names)
    """
    added_count = 0
    duplicates = []
    unsupported_files = []

    existing_paths = set(image_list)

    for file in paths:
        if not is_image_file(file):
            unsupported_files.append(Path(file).name)
            continue

        if file in existing_paths:
            duplicates.append(Path(file).name)
            continue

        image_list.append(file)
        existing_paths.add(file)
        added_count += 1

    return added_count, len(duplicates), duplicates, len(unsupported_files), unsupported_files


def collect_folder_images(folder: str, prefix: Optional[str] = None) -> List[str]:
    """
    Supported images of a folder sorted by file name. Only names starting
    with prefix are kept when one is given.
    """
    if not os.path.isdir(folder):
        raise InvalidInputError("Source path must be a directory where the images are!")

    images = []
    for entry in os.scandir(folder):
        if not entry.is_file() or not is_image_file(entry.name):
            continue
        if prefix and not entry.name.startswith(prefix):
            continue
        images.append(entry.path)

    return sorted(images, key=lambda p: Path(p).name)


def describe_selection(image_list: List[str], max_names: int = 3) -> str:
    if not image_list:
        return "No images selected..."
    names = [Path(p).name for p in image_list[:max_names]]
    text = f"{len(image_list)} image{'s' if len(image_list) != 1 else ''} selected: " + ", ".join(names)
    if len(image_list) > max_names:
        text += f" and {len(image_list) - max_names} more"
    return text


def validate_output_name(name: str) -> Tuple[bool, str, str]:
    """Validate an output file name and return (is_valid, error_message, corrected_name)"""
    original_name = name or ""

    has_pdf_ext = original_name.lower().endswith('.pdf')
    base_name = original_name[:-4] if has_pdf_ext else original_name

    if not base_name.strip():
        return False, "Please enter a name (cannot be empty or just whitespace).", original_name

    invalid_chars_pattern = r'[<>:"/|?*\\]'
    corrected_base = re.sub(invalid_chars_pattern, '_', base_name)
    if corrected_base != base_name:
        corrected_name = corrected_base + ('.pdf' if has_pdf_ext else '')
        return False, "Name contains invalid characters: < > : \" / | ? * \\\nThese will be replaced with underscores.", corrected_name

    if len(corrected_base) > 240:
        return False, "Name is too long (max 240 characters).", original_name

    if corrected_base.strip().lower() in RESERVED_NAMES:
        return False, f"'{corrected_base}' is a reserved file name. Please choose a different name.", original_name

    return True, "", original_name


def ensure_pdf_name(name: str) -> str:
    """Strip the name and add the .pdf extension unless it is already there."""
    name = (name or "").strip()
    is_valid, error_message, _ = validate_output_name(name)
    if not is_valid:
        raise InvalidInputError(error_message)
    if not name.lower().endswith(".pdf"):
        name += ".pdf"
    return name


def require_directory(path: str, what: str = "Destination") -> str:
    if not path or not os.path.isdir(path):
        raise InvalidInputError(f"{what} folder does not exist: {path or '[EMPTY]'}")
    return path
