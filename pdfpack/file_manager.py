# pdfpack/file_manager.py

from pathlib import Path
from typing import List, Optional, Tuple

from pdfpack.models import Item, ItemKind

PDF_EXTS = ('.pdf',)
IMAGE_EXTS = (
    '.jpg', '.jpeg', '.png', '.bmp', '.gif', '.tiff', '.tif', '.webp'
)
TEXT_EXTS = ('.txt', '.text', '.md', '.csv', '.log')
WORD_EXTS = ('.doc', '.docx')

SUPPORTED_EXTS = PDF_EXTS + IMAGE_EXTS + TEXT_EXTS + WORD_EXTS


def detect_kind(path) -> ItemKind:
    """Classify a source file by its extension."""
    lower = str(path).lower()

    if lower.endswith(PDF_EXTS):
        return ItemKind.PDF
    if lower.endswith(IMAGE_EXTS):
        return ItemKind.IMAGE
    if lower.endswith(TEXT_EXTS):
        return ItemKind.TEXT
    if lower.endswith(WORD_EXTS):
        return ItemKind.WORD
    return ItemKind.UNKNOWN


def item_from_path(path, title: Optional[str] = None, description: str = "") -> Item:
    """
    Build an Item for a file on disk.
    The title defaults to the file name without its extension.
    """
    path = Path(path)
    if title is None:
        title = path.stem

    return Item(
        source=path,
        title=title,
        description=description,
        kind=detect_kind(path),
    )


def items_from_paths(paths: List[str]) -> Tuple[List[Item], List[str]]:
    """
    Build items for every path, in order.
    Returns (items, unsupported_names). Unsupported files are still included
    as UNKNOWN items so the assembly rejects them by name.
    """
    items = []
    unsupported_files = []

    for file in paths:
        item = item_from_path(file)
        if item.kind is ItemKind.UNKNOWN:
            unsupported_files.append(Path(file).name)
        items.append(item)

    return items, unsupported_files
