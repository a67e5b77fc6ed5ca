from __future__ import annotations

# pdfpack/word_loader.py

import logging
import re
from pathlib import Path
from typing import List, Optional

import docx
from docx.table import Table
from striprtf.striprtf import rtf_to_text

from pdfpack.fonts import BOLD, VARIANTS
from pdfpack.logging_utils import log_event
from pdfpack.text_flow import BODY_STYLE, StyledParagraph, TextStyle, paragraphs_from_text

logger = logging.getLogger(__name__)

WORD_PLACEHOLDER = "(Unable to load Word document.)"

TITLE_STYLE = TextStyle(BOLD, 18.0)
HEADING_SIZES = {1: 16.0, 2: 14.0}

RTF_MAGIC = b"{\\rtf"


def _paragraph_style(paragraph) -> TextStyle:
    """Map a python-docx paragraph onto the body font family."""
    style_name = paragraph.style.name if paragraph.style is not None else ""
    style_name = style_name or ""

    if style_name == "Title":
        return TITLE_STYLE

    heading = re.match(r"Heading (\d+)", style_name)
    if heading:
        size = HEADING_SIZES.get(int(heading.group(1)), 12.0)
        return TextStyle(BOLD, size)

    runs = [run for run in paragraph.runs if run.text.strip()]
    bold = bool(runs) and all(run.bold for run in runs)
    italic = bool(runs) and all(run.italic for run in runs)
    if not bold and not italic:
        return BODY_STYLE
    return TextStyle(VARIANTS[(bold, italic)], BODY_STYLE.font_size)


def _table_paragraphs(table: Table) -> List[StyledParagraph]:
    rows = []
    for row in table.rows:
        cells = [cell.text.strip() for cell in row.cells]
        rows.append(StyledParagraph(" | ".join(cells).expandtabs(4)))
    return rows


def load_docx_paragraphs(path) -> List[StyledParagraph]:
    """Read an Office Open XML document into styled paragraphs, tables flattened row by row."""
    document = docx.Document(str(path))
    paragraphs: List[StyledParagraph] = []

    for block in document.iter_inner_content():
        if isinstance(block, Table):
            paragraphs.extend(_table_paragraphs(block))
        else:
            paragraphs.append(StyledParagraph(block.text.expandtabs(4), _paragraph_style(block)))

    return paragraphs or [StyledParagraph("")]


def decode_legacy_text(data: bytes) -> Optional[str]:
    """
    Text of a legacy Word file saved as RTF or plain UTF-8.
    Returns None for binary content.
    """
    if data.lstrip().startswith(RTF_MAGIC):
        # RTF is 7-bit; \'xx escapes are resolved by striprtf
        return rtf_to_text(data.decode("latin-1"), errors="ignore")
    if b"\x00" in data:
        return None
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return None


def load_plain_paragraphs(path) -> Optional[List[StyledParagraph]]:
    """
    Fallback for legacy files that are really RTF or plain text.
    Returns None when nothing readable comes out, empty files included.
    """
    text = decode_legacy_text(Path(path).read_bytes())
    if text is None or not text.strip():
        return None
    return paragraphs_from_text(text)


def load_word_paragraphs(path) -> List[StyledParagraph]:
    """
    Decode a Word document without ever raising.
    Tries python-docx first, then RTF or plain text, then a placeholder line.
    """
    try:
        return load_docx_paragraphs(path)
    except Exception as e:
        logger.debug("python-docx could not read %s: %s", path, e)

    try:
        paragraphs = load_plain_paragraphs(path)
    except OSError as e:
        logger.debug("Could not read %s as text: %s", path, e)
        paragraphs = None

    if paragraphs is not None:
        log_event("word_fallback", path=str(path), decoder="legacy_text")
        return paragraphs

    logger.warning("Unable to load Word document %s, using placeholder text", path)
    log_event("word_fallback", path=str(path), decoder="placeholder")
    return [StyledParagraph(WORD_PLACEHOLDER)]
