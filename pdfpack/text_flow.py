"""
Flow styled paragraphs onto Letter pages.

Character offsets used here count every paragraph's text plus one
terminator per paragraph, so each wrapped line consumes at least one
character and the read cursor always moves forward.
"""
from __future__ import annotations

# pdfpack/text_flow.py

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple
import re

import fitz  # PyMuPDF

from pdfpack.errors import PaginationError
from pdfpack.fonts import REGULAR, FontBook
from pdfpack.geometry import PAGE_WIDTH, PAGE_HEIGHT, MARGIN, HEADER_GAP
from pdfpack.page_ops import render_fitz_pages

EMPTY_TEXT_PLACEHOLDER = "(Empty text file)"

_TOKEN_RE = re.compile(r"\s*\S+")


@dataclass(frozen=True)
class TextStyle:
    font_name: str = REGULAR
    font_size: float = 11.0
    line_spacing: float = 1.25

    @property
    def leading(self) -> float:
        return self.font_size * self.line_spacing


BODY_STYLE = TextStyle()


@dataclass(frozen=True)
class StyledParagraph:
    text: str
    style: TextStyle = BODY_STYLE


@dataclass(frozen=True)
class TextLine:
    text: str
    style: TextStyle
    start: int
    end: int


@dataclass(frozen=True)
class TextPage:
    lines: Tuple[TextLine, ...]

    @property
    def start(self) -> int:
        return self.lines[0].start

    @property
    def end(self) -> int:
        return self.lines[-1].end


def text_frame() -> Tuple[float, float, float, float]:
    """(x, top, width, height) of the text area below the header gap, top-left origin."""
    return (
        MARGIN,
        MARGIN + HEADER_GAP,
        PAGE_WIDTH - MARGIN * 2,
        PAGE_HEIGHT - MARGIN * 2 - HEADER_GAP,
    )


def paragraphs_from_text(text: str, style: TextStyle = BODY_STYLE) -> List[StyledParagraph]:
    """Split plain text into one paragraph per source line."""
    content = text if text else EMPTY_TEXT_PLACEHOLDER
    return [
        StyledParagraph(line.expandtabs(4), style)
        for line in content.splitlines()
    ] or [StyledParagraph("", style)]


# ---------------------------------------------------------------------------
# Line wrapping
# ---------------------------------------------------------------------------

def _visible(text: str, start: int, end: int) -> str:
    # Indentation survives only on a paragraph's first line
    if start == 0:
        return text[start:end].rstrip()
    return text[start:end].strip()


def _fit_prefix(text: str, start: int, stop: int, width: float, measure: Callable[[str], float]) -> int:
    """Largest end in (start, stop] whose visible text fits; at least start + 1."""
    low, high = start + 1, stop
    while low < high:
        mid = (low + high + 1) // 2
        if measure(_visible(text, start, mid)) <= width:
            low = mid
        else:
            high = mid - 1
    return low


def wrap_paragraph(
    paragraph: StyledParagraph,
    width: float,
    offset: int = 0,
    fonts: Optional[FontBook] = None,
) -> List[TextLine]:
    """
    Break a paragraph into lines no wider than width.
    Words wider than a whole line are broken between characters.
    """
    style = paragraph.style
    text = paragraph.text
    fonts = fonts or FontBook()

    def measure(s: str) -> float:
        return fonts.text_length(s, style.font_name, style.font_size)

    spans: List[Tuple[int, int]] = []
    line_start = line_end = 0

    for match in _TOKEN_RE.finditer(text):
        tok_start, tok_end = match.span()

        if line_end > line_start:
            if measure(_visible(text, line_start, tok_end)) <= width:
                line_end = tok_end
                continue
            spans.append((line_start, line_end))
            line_start = line_end = tok_start

        # Token starts a fresh line; hard-break it while it is too wide
        while measure(_visible(text, line_start, tok_end)) > width:
            cut = _fit_prefix(text, line_start, tok_end, width, measure)
            spans.append((line_start, cut))
            line_start = cut
        line_end = tok_end

    spans.append((line_start, len(text)))

    lines = []
    for i, (start, end) in enumerate(spans):
        is_last = i == len(spans) - 1
        lines.append(TextLine(
            text=_visible(text, start, end),
            style=style,
            start=offset + start,
            end=offset + end + (1 if is_last else 0),
        ))
    return lines


def layout_lines(
    paragraphs: Iterable[StyledParagraph],
    width: float,
    fonts: Optional[FontBook] = None,
) -> List[TextLine]:
    fonts = fonts or FontBook()
    lines: List[TextLine] = []
    offset = 0
    for paragraph in paragraphs:
        lines.extend(wrap_paragraph(paragraph, width, offset, fonts))
        offset += len(paragraph.text) + 1
    return lines


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

def paginate_lines(lines: List[TextLine], frame_height: float) -> List[TextPage]:
    """
    Pack lines into pages by leading. Raises PaginationError when a fresh
    page cannot take a single line, so the loop always terminates.
    """
    pages: List[TextPage] = []
    cursor = 0
    index = 0

    while index < len(lines):
        used = 0.0
        page_lines = []
        while index < len(lines) and used + lines[index].style.leading <= frame_height:
            page_lines.append(lines[index])
            used += lines[index].style.leading
            index += 1

        if not page_lines or page_lines[-1].end <= cursor:
            raise PaginationError(
                f"Text at offset {cursor} does not fit in a {frame_height:.0f}pt frame"
            )

        cursor = page_lines[-1].end
        pages.append(TextPage(tuple(page_lines)))

    return pages


def flow_paragraphs(
    paragraphs: Iterable[StyledParagraph],
    fonts: Optional[FontBook] = None,
) -> List[TextPage]:
    _, _, width, height = text_frame()
    return paginate_lines(layout_lines(paragraphs, width, fonts), height)


def render_text_pages(paragraphs: Iterable[StyledParagraph]) -> List:
    """
    Flow paragraphs and draw every page with PyMuPDF. Lines are measured
    and drawn with the same fonts, so wrapping matches what lands on
    the page for any script.
    """
    fonts = FontBook()
    text_pages = flow_paragraphs(paragraphs, fonts)
    x, top, _, _ = text_frame()

    def draw(doc):
        for text_page in text_pages:
            page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            writer = fitz.TextWriter(page.rect)
            line_top = top
            drawn = False
            for line in text_page.lines:
                if line.text:
                    drawn = True
                    writer.append(
                        fitz.Point(x, line_top + line.style.font_size),
                        line.text,
                        font=fonts.get(line.style.font_name),
                        fontsize=line.style.font_size,
                    )
                line_top += line.style.leading
            if drawn:
                writer.write_text(page, color=(0, 0, 0))

    return render_fitz_pages(draw)
