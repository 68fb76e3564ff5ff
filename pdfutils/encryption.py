from __future__ import annotations

# pdfutils/encryption.py

import logging
import os
from typing import Optional

import fitz  # PyMuPDF
from PyPDF2 import PdfReader

from pdfutils.errors import InvalidInputError, InvalidPasswordError

logger = logging.getLogger(__name__)

PERMISSIONS = (
    fitz.PDF_PERM_ACCESSIBILITY
    | fitz.PDF_PERM_PRINT
    | fitz.PDF_PERM_COPY
    | fitz.PDF_PERM_ANNOTATE
)


def _check_exists(path: str) -> None:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"File not found: {path}")


def open_pdf(path: str, password: Optional[str] = None) -> fitz.Document:
    """
    Open a PDF with PyMuPDF, authenticating when it is protected.
    The caller owns the returned document and must close it.
    """
    _check_exists(path)
    doc = fitz.open(path)
    if doc.needs_pass:
        if not password or not doc.authenticate(password):
            doc.close()
            raise InvalidPasswordError(path)
    return doc


def unlock_reader(reader: PdfReader, password: Optional[str], path: str = "") -> PdfReader:
    """Decrypt a PyPDF2 reader in place, empty password first."""
    if reader.is_encrypted:
        # decrypt() returns PasswordType.NOT_DECRYPTED (0) on failure
        if not reader.decrypt(password or ""):
            raise InvalidPasswordError(path)
    return reader


def protect_pdf(source_path: str, output_path: str, password: str) -> None:
    """
    Save source_path as output_path with AES-256 encryption. The password is
    used both as user and owner password.
    """
    doc = fitz.open(source_path)
    try:
        doc.save(output_path, encryption=fitz.PDF_ENCRYPT_AES_256,
                 owner_pw=password, user_pw=password,
                 permissions=PERMISSIONS)
    finally:
        doc.close()
    logger.info("Saved password protected PDF to %s", output_path)


def check_result_password(password: str, confirmation: str) -> str:
    """Return password when it may be used to protect a result PDF."""
    if password != confirmation:
        raise InvalidInputError("Password and confirmation do not match!")
    if not password:
        raise InvalidInputError("Enter a password or turn encryption off.")
    return password
