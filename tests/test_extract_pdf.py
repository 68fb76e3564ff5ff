import os

import fitz  # PyMuPDF
import pytest

from pdfutils.errors import InvalidInputError, InvalidPasswordError, OperationCancelled
from pdfutils.extract_pdf import ExtractPdfOptions, extract_to_pdf


def page_texts(path, password=None):
    doc = fitz.open(path)
    if password:
        assert doc.authenticate(password)
    texts = [page.get_text().strip() for page in doc]
    doc.close()
    return texts


def test_extracts_pages_in_order(sample_pdf, out_dir):
    output = extract_to_pdf(sample_pdf, out_dir, [1, 2, 3], ExtractPdfOptions(name="chapter"))

    assert output == os.path.join(out_dir, "chapter.pdf")
    assert page_texts(output) == ["Page 2", "Page 3", "Page 4"]


def test_individual_pages(sample_pdf, out_dir):
    output = extract_to_pdf(sample_pdf, out_dir, [0, 4], ExtractPdfOptions(name="picked"))
    assert page_texts(output) == ["Page 1", "Page 5"]


def test_pdf_extension_is_not_doubled(sample_pdf, out_dir):
    output = extract_to_pdf(sample_pdf, out_dir, [0], ExtractPdfOptions(name="report.pdf"))
    assert os.path.basename(output) == "report.pdf"


def test_result_password(sample_pdf, out_dir):
    output = extract_to_pdf(sample_pdf, out_dir, [0, 1],
                            ExtractPdfOptions(name="locked", result_password="pw123"))

    doc = fitz.open(output)
    assert doc.needs_pass
    doc.close()
    assert page_texts(output, "pw123") == ["Page 1", "Page 2"]


def test_protected_source(protected_pdf, out_dir):
    output = extract_to_pdf(protected_pdf, out_dir, [2],
                            ExtractPdfOptions(name="open", password="secret"))
    assert page_texts(output) == ["Page 3"]

    with pytest.raises(InvalidPasswordError):
        extract_to_pdf(protected_pdf, out_dir, [0], ExtractPdfOptions(name="x", password="nope"))


def test_page_outside_document(sample_pdf, out_dir):
    with pytest.raises(InvalidInputError, match="file has 5 pages"):
        extract_to_pdf(sample_pdf, out_dir, [0, 5], ExtractPdfOptions(name="x"))
    assert not os.path.exists(os.path.join(out_dir, "x.pdf"))


@pytest.mark.parametrize("name", ["", "   ", ".pdf", "con"])
def test_bad_names(sample_pdf, out_dir, name):
    with pytest.raises(InvalidInputError):
        extract_to_pdf(sample_pdf, out_dir, [0], ExtractPdfOptions(name=name))


def test_no_pages(sample_pdf, out_dir):
    with pytest.raises(InvalidInputError):
        extract_to_pdf(sample_pdf, out_dir, [], ExtractPdfOptions(name="x"))


def test_cancelled(sample_pdf, out_dir):
    with pytest.raises(OperationCancelled):
        extract_to_pdf(sample_pdf, out_dir, [0, 1], ExtractPdfOptions(name="x"),
                       cancel_callback=lambda: True)
    assert not os.path.exists(os.path.join(out_dir, "x.pdf"))


def test_progress_reaches_total(sample_pdf, out_dir):
    calls = []
    extract_to_pdf(sample_pdf, out_dir, [0, 1, 2], ExtractPdfOptions(name="x"),
                   progress_callback=lambda d, t, m: calls.append((d, t)))
    assert calls[-1] == (4, 4)
    assert [d for d, _ in calls] == sorted(d for d, _ in calls)
