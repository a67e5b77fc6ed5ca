from __future__ import annotations

# pdfpack/sections.py

import logging
from pathlib import Path
from typing import List

from PyPDF2 import PdfReader

from pdfpack.errors import UnsupportedFile
from pdfpack.image_tools import load_image, make_image_page
from pdfpack.models import Item, ItemKind, Section
from pdfpack.text_flow import paragraphs_from_text, render_text_pages
from pdfpack.word_loader import load_word_paragraphs

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Source readers
# ---------------------------------------------------------------------------

def read_pdf_pages(path) -> List:
    """
    Open a PDF and return its pages for verbatim copying.
    Raises UnsupportedFile for unreadable, locked or empty files.
    """
    name = Path(path).name
    try:
        reader = PdfReader(str(path))
        if reader.is_encrypted and not reader.decrypt(""):
            raise UnsupportedFile(f"{name} is password protected")
        pages = list(reader.pages)
    except UnsupportedFile:
        raise
    except Exception as e:
        raise UnsupportedFile(f"{name} is not a readable PDF: {e}") from e

    if not pages:
        raise UnsupportedFile(f"{name} contains no pages")
    return pages


def read_text(path) -> str:
    """Read a text file; a missing or unreadable file counts as empty."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        logger.warning("Could not read %s, treating it as empty: %s", path, e)
        return ""
    return data.decode("utf-8-sig", errors="replace")


# ---------------------------------------------------------------------------
# Section builder
# ---------------------------------------------------------------------------

def build_section(item: Item) -> Section:
    """
    Convert one item into its output pages plus one header label per page.
    """
    header_text = item.header_text
    kind = item.kind

    if kind is ItemKind.PDF:
        pages = read_pdf_pages(item.source)

    elif kind is ItemKind.IMAGE:
        pages = [make_image_page(load_image(item.source))]

    elif kind is ItemKind.TEXT:
        pages = render_text_pages(paragraphs_from_text(read_text(item.source)))

    elif kind is ItemKind.WORD:
        pages = render_text_pages(load_word_paragraphs(item.source))

    else:
        raise UnsupportedFile(f"{Path(item.source).name} is not a supported file type")

    return Section(pages=pages, headers=[header_text] * len(pages))
