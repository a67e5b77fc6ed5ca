"""Assemble PDFs, images, text and Word files into one PDF with a linked table of contents."""

from pdfpack.assembler import PackOptions, assemble, concatenate
from pdfpack.document import AssembledDocument
from pdfpack.errors import (
    ExportFailed,
    InvalidImage,
    PackError,
    PaginationError,
    UnsupportedFile,
)
from pdfpack.file_manager import detect_kind, item_from_path
from pdfpack.models import Item, ItemKind, Section, TocEntry, TocLink

__version__ = "0.1.0"

__all__ = [
    "AssembledDocument",
    "ExportFailed",
    "InvalidImage",
    "Item",
    "ItemKind",
    "PackError",
    "PackOptions",
    "PaginationError",
    "Section",
    "TocEntry",
    "TocLink",
    "UnsupportedFile",
    "assemble",
    "concatenate",
    "detect_kind",
    "item_from_path",
]
