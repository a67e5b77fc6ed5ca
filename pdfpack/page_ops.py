from __future__ import annotations

# pdfpack/page_ops.py

from typing import Callable, List
import io

import fitz  # PyMuPDF
from PyPDF2 import PdfReader
from PyPDF2.generic import NameObject, NumberObject
from reportlab.pdfgen import canvas

from pdfpack.geometry import PAGE_WIDTH, PAGE_HEIGHT


# ---------------------------------------------------------------------------
# Generated pages
# ---------------------------------------------------------------------------

def normalize_generated_page(page) -> None:
    """Force a generated page upright; /Rotate is otherwise left to the writer."""
    page[NameObject("/Rotate")] = NumberObject(0)


def pages_from_pdf_bytes(data: bytes) -> List:
    """Open an in-memory PDF and return its pages, each normalized."""
    reader = PdfReader(io.BytesIO(data))
    pages = list(reader.pages)
    for page in pages:
        normalize_generated_page(page)
    return pages


def render_pages(draw: Callable[[canvas.Canvas], None]) -> List:
    """
    Run draw() against a Letter-sized reportlab canvas and return the
    resulting pages. draw() ends every page it starts with showPage();
    the last one may be left open.
    """
    packet = io.BytesIO()
    c = canvas.Canvas(packet, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
    c.setPageRotation(0)

    draw(c)

    c.save()
    packet.seek(0)
    return pages_from_pdf_bytes(packet.getvalue())


def render_fitz_pages(draw: Callable[[fitz.Document], None]) -> List:
    """
    Run draw() against an empty PyMuPDF document and return its pages.
    draw() adds Letter pages itself with new_page().
    """
    doc = fitz.open()
    try:
        draw(doc)
        data = doc.tobytes(garbage=3, deflate=True)
    finally:
        doc.close()
    return pages_from_pdf_bytes(data)
