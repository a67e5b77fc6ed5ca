from __future__ import annotations

# pdfpack/errors.py

from typing import Optional


class PackError(Exception):
    """
    Base class for every failure that aborts an assembly run.

    The concatenator attaches the index and title of the item that failed so
    callers can show which file needs attention.
    """

    def __init__(self, message: str = "", *, item_index: Optional[int] = None, item_title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.item_index = item_index
        self.item_title = item_title

    def with_item(self, index: int, title: str) -> "PackError":
        self.item_index = index
        self.item_title = title
        return self

    def __str__(self) -> str:
        if self.item_index is None:
            return self.message
        return f"Item {self.item_index + 1} ({self.item_title}): {self.message}"


class InvalidImage(PackError):
    """An image item could not be decoded."""


class UnsupportedFile(PackError):
    """A PDF item is not a readable page collection, or the kind is unknown."""


class ExportFailed(PackError):
    """The finished document could not be serialized."""


class PaginationError(PackError):
    """Text flow could not place any text on a fresh page."""
