from __future__ import annotations

# pdfpack/models.py

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple


class ItemKind(str, enum.Enum):
    PDF = "pdf"
    IMAGE = "image"
    TEXT = "text"
    WORD = "word"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        if self is ItemKind.PDF:
            return "PDF"
        return self.value.capitalize()


# ---------------------------------------------------------------------------
# Data structures for caller → core communication
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Item:
    source: Path
    title: str = ""
    description: str = ""
    kind: ItemKind = ItemKind.UNKNOWN

    @property
    def display_title(self) -> str:
        return self.title or Path(self.source).name

    @property
    def header_text(self) -> str:
        """Running header label: title, plus " — description" when present."""
        if not self.description:
            return self.display_title
        return f"{self.display_title} — {self.description}"


@dataclass
class Section:
    pages: list = field(default_factory=list)
    headers: List[str] = field(default_factory=list)

    def __post_init__(self):
        if len(self.pages) != len(self.headers):
            raise ValueError(
                f"Section has {len(self.pages)} pages but {len(self.headers)} headers"
            )

    def __len__(self) -> int:
        return len(self.pages)


@dataclass(frozen=True)
class TocEntry:
    title: str
    description: str
    page: int  # 1-based, within the content pages

    @property
    def label(self) -> str:
        if not self.description:
            return self.title
        return f"{self.title} - {self.description}"


@dataclass(frozen=True)
class TocLink:
    toc_page_index: int
    rect: Tuple[float, float, float, float]  # x0, y0, x1, y1, top-left origin
    target_page_index: int
