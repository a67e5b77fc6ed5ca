from __future__ import annotations

# pdfpack/toc.py

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

import fitz  # PyMuPDF

from pdfpack.fonts import BOLD, REGULAR, FontBook
from pdfpack.geometry import (
    PAGE_WIDTH,
    PAGE_HEIGHT,
    MARGIN,
    TOC_HEADER_HEIGHT,
    TOC_LINE_HEIGHT,
)
from pdfpack.logging_utils import log_event
from pdfpack.models import TocEntry, TocLink

logger = logging.getLogger(__name__)

TITLE_TEXT = "Table of Contents"
TITLE_FONT_SIZE = 20
ENTRY_FONT_SIZE = 11
PAGE_COLUMN_WIDTH = 50
COLUMN_GAP = 10


@dataclass
class TocResult:
    document: Optional[fitz.Document]
    links: List[TocLink] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.document) if self.document is not None else 0


# ---------------------------------------------------------------------------
# Sizing pass
# ---------------------------------------------------------------------------

def lines_per_page() -> int:
    """Entries that fit below the title on one TOC page."""
    available_height = PAGE_HEIGHT - MARGIN * 2 - TOC_HEADER_HEIGHT
    return max(1, int(available_height / TOC_LINE_HEIGHT))


def toc_page_count(entry_count: int) -> int:
    """Pages the TOC needs for entry_count entries; never less than one."""
    return max(1, math.ceil(entry_count / lines_per_page()))


def chunk_entries(entries: List[TocEntry]) -> List[List[TocEntry]]:
    """Break entries into per-page chunks; an empty TOC still gets one page."""
    per_page = lines_per_page()
    chunks = [
        entries[i:i + per_page]
        for i in range(0, len(entries), per_page)
    ]
    return chunks or [[]]


# ---------------------------------------------------------------------------
# Layout pass
# ---------------------------------------------------------------------------

def fit_label(
    text: str,
    max_width: float,
    fontsize: float = ENTRY_FONT_SIZE,
    fonts: Optional[FontBook] = None,
) -> str:
    """Truncate text with "..." until it fits max_width."""
    fonts = fonts or FontBook()

    def measure(s: str) -> float:
        return fonts.text_length(s, REGULAR, fontsize)

    if measure(text) <= max_width:
        return text

    ellipsis = "..."
    while text and measure(text + ellipsis) > max_width:
        text = text[:-1]
    return text.rstrip() + ellipsis


def make_table_of_contents(entries: List[TocEntry], page_offset: int) -> TocResult:
    """
    Draw the TOC pages. page_offset is the TOC's own page count from the
    sizing pass; every entry's page number is shifted by it, and each
    link's target is that final number converted to a 0-based index.
    """
    try:
        doc = fitz.open()
    except RuntimeError as e:
        logger.error("Could not create TOC document: %s", e)
        return TocResult(document=None)

    fonts = FontBook()
    regular = fonts.get(REGULAR)
    links: List[TocLink] = []

    label_left = MARGIN
    label_width = PAGE_WIDTH - MARGIN * 2 - PAGE_COLUMN_WIDTH - COLUMN_GAP
    number_right = PAGE_WIDTH - MARGIN

    for toc_page_index, chunk in enumerate(chunk_entries(entries)):
        toc_page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)

        # Title
        title_writer = fitz.TextWriter(toc_page.rect)
        title_writer.append(
            (MARGIN, MARGIN + TITLE_FONT_SIZE),
            TITLE_TEXT,
            font=fonts.get(BOLD),
            fontsize=TITLE_FONT_SIZE,
        )
        title_writer.write_text(toc_page, color=(0, 0, 0))

        # Divider line
        line_y = MARGIN + TOC_HEADER_HEIGHT - 4
        toc_page.draw_line(
            (MARGIN, line_y),
            (PAGE_WIDTH - MARGIN, line_y),
            color=(0, 0, 0),
            width=1
        )

        if not chunk:
            continue

        label_writer = fitz.TextWriter(toc_page.rect)
        number_writer = fitz.TextWriter(toc_page.rect)
        current_y = MARGIN + TOC_HEADER_HEIGHT
        baseline_offset = TOC_LINE_HEIGHT - 4

        for entry in chunk:
            page_number = entry.page + page_offset
            label = fit_label(entry.label, label_width, fonts=fonts)
            label_length = regular.text_length(label, fontsize=ENTRY_FONT_SIZE)

            label_writer.append(
                (label_left, current_y + baseline_offset),
                label,
                font=regular,
                fontsize=ENTRY_FONT_SIZE,
            )

            page_text = str(page_number)
            page_text_length = regular.text_length(page_text, fontsize=ENTRY_FONT_SIZE)
            number_writer.append(
                (number_right - page_text_length, current_y + baseline_offset),
                page_text,
                font=regular,
                fontsize=ENTRY_FONT_SIZE,
            )

            links.append(TocLink(
                toc_page_index=toc_page_index,
                rect=(label_left, current_y, label_left + label_length, current_y + TOC_LINE_HEIGHT),
                target_page_index=page_number - 1,
            ))

            current_y += TOC_LINE_HEIGHT

        label_writer.write_text(toc_page, color=(0, 0, 1))
        number_writer.write_text(toc_page, color=(0.3, 0.3, 0.3))

    log_event("toc_built", pages=len(doc), entries=len(entries), links=len(links))
    return TocResult(document=doc, links=links)
