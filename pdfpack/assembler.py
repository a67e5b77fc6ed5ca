# pdfpack/assembler.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

import io
import logging

import fitz  # PyMuPDF
from PyPDF2 import PdfWriter

from pdfpack.document import AssembledDocument
from pdfpack.errors import PackError
from pdfpack.finisher import finish
from pdfpack.logging_utils import log_event
from pdfpack.models import Item, TocEntry
from pdfpack.sections import build_section
from pdfpack.toc import make_table_of_contents, toc_page_count

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class PackOptions:
    compress: bool = True

    metadata_enabled: bool = False
    pdf_title: str = ""
    pdf_author: str = ""
    pdf_subject: str = ""
    pdf_keywords: str = ""

    def metadata(self) -> Dict[str, str]:
        if not self.metadata_enabled:
            return {}

        metadata = {"creator": "pdfpack", "producer": "pdfpack"}
        if self.pdf_title.strip():
            metadata["title"] = self.pdf_title
        if self.pdf_author.strip():
            metadata["author"] = self.pdf_author
        if self.pdf_subject.strip():
            metadata["subject"] = self.pdf_subject
        if self.pdf_keywords.strip():
            metadata["keywords"] = self.pdf_keywords
        return metadata


# ---------------------------------------------------------------------------
# Content concatenation
# ---------------------------------------------------------------------------

@dataclass
class ContentResult:
    pdf_bytes: bytes
    page_count: int
    headers: List[str] = field(default_factory=list)
    entries: List[TocEntry] = field(default_factory=list)

    def open_document(self) -> fitz.Document:
        if self.page_count == 0:
            return fitz.open()
        return fitz.open(stream=self.pdf_bytes, filetype="pdf")


def concatenate(
    items: List[Item],
    progress_callback: Optional[ProgressCallback] = None,
) -> ContentResult:
    """
    Build every item's section in order and append it to one content PDF.
    The first failing item aborts the run; its error names the item.
    """
    pdf_writer = PdfWriter()
    toc_entries: List[TocEntry] = []
    headers: List[str] = []
    current_page_num = 0

    for i, item in enumerate(items):
        if progress_callback:
            progress_callback(i, len(items), f"Adding {item.kind.display_name}: {item.display_title}")

        toc_entries.append(
            TocEntry(
                title=item.display_title,
                description=item.description,
                page=current_page_num + 1,
            )
        )

        try:
            section = build_section(item)
        except PackError as e:
            e.with_item(i, item.display_title)
            logger.error("Assembly stopped: %s", e)
            raise

        for page in section.pages:
            pdf_writer.add_page(page)
        headers.extend(section.headers)
        current_page_num += len(section)

        log_event(
            "section_built",
            index=i,
            title=item.display_title,
            kind=item.kind.value,
            pages=len(section),
        )

    buffer = io.BytesIO()
    if current_page_num:
        pdf_writer.write(buffer)

    return ContentResult(
        pdf_bytes=buffer.getvalue(),
        page_count=current_page_num,
        headers=headers,
        entries=toc_entries,
    )


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

def assemble(
    items: Iterable[Item],
    options: Optional[PackOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> AssembledDocument:
    """
    Turn an ordered list of items into one PDF: table of contents first,
    then every item's pages, with TOC links and running headers.
    Raises a PackError subclass and produces nothing if any item fails.
    """
    options = options or PackOptions()
    items = list(items)

    content = concatenate(items, progress_callback)

    if progress_callback:
        progress_callback(len(items), len(items), "Building table of contents...")

    toc_pages = toc_page_count(len(content.entries))
    toc = make_table_of_contents(content.entries, page_offset=toc_pages)
    content_doc = content.open_document()

    try:
        final_doc = finish(toc, content_doc, content.headers)
    finally:
        content_doc.close()
        if toc.document is not None:
            toc.document.close()

    result = AssembledDocument(
        document=final_doc,
        toc_page_count=toc_pages,
        links=toc.links,
        headers=content.headers,
        compress=options.compress,
    )
    result.set_metadata(options.metadata())

    log_event(
        "assembly_finished",
        items=len(items),
        toc_pages=toc_pages,
        pages=result.page_count,
    )
    return result
