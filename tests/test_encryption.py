import fitz  # PyMuPDF
import pytest

from pdfutils.encryption import check_result_password, open_pdf, protect_pdf
from pdfutils.errors import InvalidInputError, InvalidPasswordError


def test_protect_and_open(sample_pdf, tmp_path):
    target = str(tmp_path / "locked.pdf")
    protect_pdf(sample_pdf, target, "letmein")

    with pytest.raises(InvalidPasswordError):
        open_pdf(target)
    with pytest.raises(InvalidPasswordError):
        open_pdf(target, "wrong")

    doc = open_pdf(target, "letmein")
    assert len(doc) == 5
    assert doc.metadata["encryption"]
    doc.close()


def test_open_plain_pdf_ignores_password(sample_pdf):
    doc = open_pdf(sample_pdf, "unused")
    assert isinstance(doc, fitz.Document)
    doc.close()


def test_open_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        open_pdf(str(tmp_path / "missing.pdf"))


def test_result_password_must_match_confirmation():
    assert check_result_password("pw", "pw") == "pw"
    with pytest.raises(InvalidInputError, match="Password and confirmation do not match!"):
        check_result_password("pw", "pW")
    with pytest.raises(InvalidInputError, match="turn encryption off"):
        check_result_password("", "")
