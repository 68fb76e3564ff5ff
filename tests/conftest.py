import fitz  # PyMuPDF
import pytest
from PIL import Image


def make_pdf(path, pages=5, password=None):
    doc = fitz.open()
    for number in range(1, pages + 1):
        page = doc.new_page(width=200, height=300)
        page.insert_text((40, 60), f"Page {number}", fontsize=20)
    if password:
        doc.save(str(path), encryption=fitz.PDF_ENCRYPT_AES_256,
                 owner_pw=password, user_pw=password)
    else:
        doc.save(str(path))
    doc.close()
    return str(path)


@pytest.fixture
def sample_pdf(tmp_path):
    return make_pdf(tmp_path / "sample.pdf", pages=5)


@pytest.fixture
def protected_pdf(tmp_path):
    return make_pdf(tmp_path / "protected.pdf", pages=3, password="secret")


@pytest.fixture
def out_dir(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    return str(path)


@pytest.fixture
def image_dir(tmp_path):
    folder = tmp_path / "images"
    folder.mkdir()
    Image.new("RGB", (192, 96), (200, 30, 30)).save(folder / "img_2.png")
    Image.new("RGBA", (96, 192), (0, 0, 255, 128)).save(folder / "img_1.png")
    Image.new("P", (50, 50)).save(folder / "b.png")
    Image.new("RGB", (40, 40), (0, 255, 0)).save(folder / "a.jpg")
    (folder / "notes.txt").write_text("not an image")
    return str(folder)
