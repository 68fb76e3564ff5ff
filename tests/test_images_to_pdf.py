import os

import fitz  # PyMuPDF
import pytest
from PIL import Image

from pdfutils.errors import InvalidInputError, OperationCancelled
from pdfutils.file_manager import collect_folder_images
from pdfutils.images_to_pdf import ImagesToPdfOptions, images_to_pdf, load_flat_image


def test_collect_folder_images_sorted_by_name(image_dir):
    names = [os.path.basename(p) for p in collect_folder_images(image_dir)]
    assert names == ["a.jpg", "b.png", "img_1.png", "img_2.png"]


def test_collect_folder_images_with_prefix(image_dir):
    names = [os.path.basename(p) for p in collect_folder_images(image_dir, "img_")]
    assert names == ["img_1.png", "img_2.png"]


def test_collect_folder_images_needs_a_directory(image_dir):
    with pytest.raises(InvalidInputError):
        collect_folder_images(os.path.join(image_dir, "a.jpg"))


def test_one_page_per_image(image_dir, out_dir):
    images = collect_folder_images(image_dir, "img_")
    output = images_to_pdf(images, out_dir, ImagesToPdfOptions(name="scans"))

    assert output == os.path.join(out_dir, "scans.pdf")
    doc = fitz.open(output)
    assert len(doc) == 2
    # img_1.png is 96x192 px, img_2.png 192x96 px, at 96 dpi
    assert doc[0].rect.width == pytest.approx(72)
    assert doc[0].rect.height == pytest.approx(144)
    assert doc[1].rect.width == pytest.approx(144)
    assert doc[1].rect.height == pytest.approx(72)
    assert all(page.get_image_info() for page in doc)
    doc.close()


def test_palette_and_jpeg_images(image_dir, out_dir):
    images = [os.path.join(image_dir, "b.png"), os.path.join(image_dir, "a.jpg")]
    output = images_to_pdf(images, out_dir, ImagesToPdfOptions(name="mixed.pdf"))
    doc = fitz.open(output)
    assert len(doc) == 2
    doc.close()


def test_single_rgb_jpeg(tmp_path, out_dir):
    photo = str(tmp_path / "photo.jpg")
    Image.new("RGB", (96, 48), (10, 120, 200)).save(photo)

    output = images_to_pdf([photo], out_dir, ImagesToPdfOptions(name="photo"))

    doc = fitz.open(output)
    assert len(doc) == 1
    assert doc[0].rect.width == pytest.approx(72)
    assert doc[0].rect.height == pytest.approx(36)
    assert doc[0].get_image_info()
    doc.close()


def test_load_flat_image_is_detached_from_file(tmp_path):
    photo = str(tmp_path / "photo.jpg")
    Image.new("RGB", (20, 20)).save(photo)

    img = load_flat_image(photo)
    assert img.mode == "RGB"
    assert img.format is None


def test_result_password(image_dir, out_dir):
    images = collect_folder_images(image_dir)
    output = images_to_pdf(images, out_dir, ImagesToPdfOptions(name="locked", result_password="pw"))

    doc = fitz.open(output)
    assert doc.needs_pass
    assert doc.authenticate("pw")
    assert len(doc) == 4
    doc.close()


def test_requires_images(out_dir):
    with pytest.raises(InvalidInputError):
        images_to_pdf([], out_dir, ImagesToPdfOptions(name="empty"))


def test_rejects_non_images(image_dir, out_dir):
    with pytest.raises(InvalidInputError):
        images_to_pdf([os.path.join(image_dir, "notes.txt")], out_dir, ImagesToPdfOptions(name="x"))


def test_cancelled(image_dir, out_dir):
    images = collect_folder_images(image_dir)
    with pytest.raises(OperationCancelled):
        images_to_pdf(images, out_dir, ImagesToPdfOptions(name="x"), cancel_callback=lambda: True)
