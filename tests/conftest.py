from io import BytesIO
from pathlib import Path

import fitz
import pytest
from PIL import Image
from PyPDF2 import PdfWriter
from reportlab.pdfgen import canvas


def write_pdf(path: Path, pages: int, size=(612, 792)) -> Path:
    c = canvas.Canvas(str(path), pagesize=size)
    for number in range(1, pages + 1):
        c.setFont("Helvetica", 14)
        c.drawString(72, size[1] - 100, f"{path.stem} page {number}")
        c.showPage()
    c.save()
    return path


def write_png(path: Path, width: int, height: int, mode: str = "RGB") -> Path:
    color = (200, 10, 10, 128) if mode == "RGBA" else (200, 10, 10)
    Image.new(mode, (width, height), color=color).save(path)
    return path


def write_docx(path: Path, heading: str, paragraphs) -> Path:
    import docx

    document = docx.Document()
    document.add_heading(heading, level=1)
    for text in paragraphs:
        document.add_paragraph(text)
    document.save(str(path))
    return path


@pytest.fixture
def make_pdf(tmp_path):
    def _make(name: str, pages: int = 1, size=(612, 792)) -> Path:
        return write_pdf(tmp_path / name, pages, size)
    return _make


@pytest.fixture
def make_png(tmp_path):
    def _make(name: str, width: int = 400, height: int = 200, mode: str = "RGB") -> Path:
        return write_png(tmp_path / name, width, height, mode)
    return _make


@pytest.fixture
def make_text(tmp_path):
    def _make(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _make


@pytest.fixture
def make_docx(tmp_path):
    def _make(name: str, heading: str = "Heading", paragraphs=("Body text.",)) -> Path:
        return write_docx(tmp_path / name, heading, paragraphs)
    return _make


@pytest.fixture
def page_text():
    """Text of one PyPDF2 page as PyMuPDF extracts it."""
    def _text(page) -> str:
        writer = PdfWriter()
        writer.add_page(page)
        buffer = BytesIO()
        writer.write(buffer)
        with fitz.open(stream=buffer.getvalue(), filetype="pdf") as doc:
            return doc[0].get_text()
    return _text
