from __future__ import annotations

# pdfpack/finisher.py

import logging
from typing import List

import fitz  # PyMuPDF

from pdfpack.errors import ExportFailed
from pdfpack.fonts import FontBook
from pdfpack.geometry import MARGIN
from pdfpack.models import TocLink
from pdfpack.toc import TocResult, fit_label

logger = logging.getLogger(__name__)

OVERLAY_FONT_SIZE = 9
OVERLAY_ROW_HEIGHT = 16
PAGE_NUMBER_WIDTH = 40
SEPARATOR_GAP = 8
SEPARATOR_COLOR = (0.75, 0.75, 0.75)


# ---------------------------------------------------------------------------
# Annotation helpers
# ---------------------------------------------------------------------------

def add_free_text(page, text: str, rect: fitz.Rect, align: int):
    """Borderless, unfilled text overlay."""
    annot = page.add_freetext_annot(
        rect,
        text,
        fontsize=OVERLAY_FONT_SIZE,
        fontname="helv",
        text_color=(0, 0, 0),
        fill_color=None,
        align=align,
    )
    annot.set_border(width=0)
    annot.update()
    return annot


def add_separator(page, start: fitz.Point, end: fitz.Point):
    annot = page.add_line_annot(start, end)
    annot.set_border(width=0.5)
    annot.set_colors(stroke=SEPARATOR_COLOR)
    annot.update()
    return annot


# ---------------------------------------------------------------------------
# Finishing steps
# ---------------------------------------------------------------------------

def add_toc_links(document: fitz.Document, links: List[TocLink]) -> int:
    """
    Attach one go-to link per TOC line, landing just inside the target
    page's top margin. Returns the number of links added.
    """
    added = 0
    for link in links:
        if not (0 <= link.toc_page_index < len(document)
                and 0 <= link.target_page_index < len(document)):
            logger.warning(
                "Skipping TOC link from page %d to missing page %d",
                link.toc_page_index, link.target_page_index
            )
            continue

        document[link.toc_page_index].insert_link({
            "kind": fitz.LINK_GOTO,
            "from": fitz.Rect(*link.rect),
            "page": link.target_page_index,
            "to": fitz.Point(MARGIN, MARGIN),
            "zoom": 0
        })
        added += 1
    return added


def add_headers_and_footers(document: fitz.Document, headers: List[str], toc_pages: int) -> None:
    """
    Overlay the page number on every page and the item header on content
    pages, sized from each page's own bounds.
    """
    fonts = FontBook()
    for index, page in enumerate(document):
        bounds = page.rect
        page_margin = max(36, min(MARGIN, bounds.width * 0.1))
        header_inset = max(12, min(20, bounds.height * 0.03))

        row_top = bounds.y0 + header_inset
        header_rect = fitz.Rect(
            bounds.x0 + page_margin,
            row_top,
            bounds.x1 - page_margin - PAGE_NUMBER_WIDTH,
            row_top + OVERLAY_ROW_HEIGHT
        )
        page_number_rect = fitz.Rect(
            bounds.x1 - page_margin - PAGE_NUMBER_WIDTH,
            row_top,
            bounds.x1 - page_margin,
            row_top + OVERLAY_ROW_HEIGHT
        )

        if index >= toc_pages:
            header_text = headers[index - toc_pages]
            if header_text and header_rect.width > 0:
                add_free_text(
                    page,
                    fit_label(header_text, header_rect.width - 4, OVERLAY_FONT_SIZE, fonts),
                    header_rect,
                    fitz.TEXT_ALIGN_LEFT
                )

        add_free_text(page, str(index + 1), page_number_rect, fitz.TEXT_ALIGN_RIGHT)

        line_y = header_rect.y1 + SEPARATOR_GAP
        add_separator(
            page,
            fitz.Point(bounds.x0 + page_margin, line_y),
            fitz.Point(bounds.x1 - page_margin, line_y)
        )


def finish(toc: TocResult, content: fitz.Document, headers: List[str]) -> fitz.Document:
    """
    TOC pages followed by content pages, with links and overlays applied.
    """
    if toc.page_count == 0:
        raise ExportFailed("The table of contents could not be generated")
    if len(headers) != len(content):
        raise ExportFailed(
            f"{len(content)} content pages but {len(headers)} header labels"
        )

    final_doc = fitz.open()
    final_doc.insert_pdf(toc.document)
    if len(content):
        final_doc.insert_pdf(content)

    add_toc_links(final_doc, toc.links)
    add_headers_and_footers(final_doc, headers, toc.page_count)
    return final_doc
