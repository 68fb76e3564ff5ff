import os

import fitz  # PyMuPDF
import pytest
from PIL import Image

from pdfutils.cli import run, translate_legacy


def test_extract_images(sample_pdf, out_dir, capsys):
    status = run(["extract-images", sample_pdf, out_dir, "--from", "2", "--to", "3", "--dpi", "20"])

    assert status == 0
    assert sorted(os.listdir(out_dir)) == ["img_1.png", "img_2.png"]
    assert "2 image(s) written" in capsys.readouterr().out


def test_legacy_mode_name(sample_pdf, out_dir):
    status = run(["--EXTRACT_TO_PDF", sample_pdf, out_dir, "--name", "part", "--pages", "1,3"])

    assert status == 0
    doc = fitz.open(os.path.join(out_dir, "part.pdf"))
    assert len(doc) == 2
    doc.close()


def test_extract_pdf_range_with_result_password(sample_pdf, out_dir):
    status = run(["extract-pdf", sample_pdf, out_dir, "--name", "locked",
                  "--from", "1", "--to", "4", "--result-password", "pw"])

    assert status == 0
    doc = fitz.open(os.path.join(out_dir, "locked.pdf"))
    assert doc.needs_pass
    assert doc.authenticate("pw")
    assert len(doc) == 4
    doc.close()


def test_images_to_pdf_from_folder(image_dir, out_dir):
    status = run(["images-to-pdf", out_dir, "--name", "combined", "--folder", image_dir, "--prefix", "img_"])

    assert status == 0
    doc = fitz.open(os.path.join(out_dir, "combined.pdf"))
    assert len(doc) == 2
    doc.close()


def test_images_to_pdf_from_list(image_dir, out_dir):
    images = [os.path.join(image_dir, "a.jpg"), os.path.join(image_dir, "img_2.png")]
    assert run(["images-to-pdf", out_dir, *images, "--name", "two"]) == 0
    assert os.path.exists(os.path.join(out_dir, "two.pdf"))


def test_images_to_pdf_single_jpeg(tmp_path, out_dir):
    photo = str(tmp_path / "photo.jpg")
    Image.new("RGB", (40, 40)).save(photo)

    assert run(["images-to-pdf", out_dir, photo, "--name", "photo"]) == 0
    doc = fitz.open(os.path.join(out_dir, "photo.pdf"))
    assert len(doc) == 1
    doc.close()


def test_pages_are_checked_against_the_document(sample_pdf, out_dir, capsys):
    status = run(["extract-pdf", sample_pdf, out_dir, "--name", "x", "--pages", "2,9"])

    assert status == 1
    assert "file has 5 pages" in capsys.readouterr().err
    assert not os.listdir(out_dir)


def test_range_is_checked_against_the_document(sample_pdf, out_dir, capsys):
    status = run(["extract-images", sample_pdf, out_dir, "--from", "4", "--to", "6"])

    assert status == 1
    assert "Page range exceeds total pages, file has 5 pages" in capsys.readouterr().err


def test_wrong_password_is_reported(protected_pdf, out_dir, capsys):
    status = run(["extract-images", protected_pdf, out_dir, "--from", "1", "--to", "1", "--password", "bad"])

    assert status == 1
    assert "Incorrect password" in capsys.readouterr().err


def test_invalid_range_is_reported(sample_pdf, out_dir, capsys):
    status = run(["extract-images", sample_pdf, out_dir, "--from", "x", "--to", "2"])

    assert status == 1
    assert "not a valid range of pages" in capsys.readouterr().err


def test_extract_pdf_needs_pages(sample_pdf, out_dir):
    with pytest.raises(SystemExit) as exc:
        run(["extract-pdf", sample_pdf, out_dir, "--name", "x"])
    assert exc.value.code == 2


def test_translate_legacy():
    assert translate_legacy(["--IMAGES_TO_PDF", "out"]) == ["images-to-pdf", "out"]
    assert translate_legacy(["extract-pdf"]) == ["extract-pdf"]
    assert translate_legacy([]) == []
