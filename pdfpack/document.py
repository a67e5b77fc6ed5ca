from __future__ import annotations

# pdfpack/document.py

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import fitz  # PyMuPDF

from pdfpack.errors import ExportFailed
from pdfpack.models import TocLink

logger = logging.getLogger(__name__)


@dataclass
class AssembledDocument:
    """
    The finished pack: TOC pages followed by content pages.
    Owned by the caller once assemble() returns.
    """

    document: fitz.Document
    toc_page_count: int
    links: List[TocLink] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)
    compress: bool = True

    @property
    def page_count(self) -> int:
        return len(self.document)

    @property
    def content_page_count(self) -> int:
        return self.page_count - self.toc_page_count

    def set_metadata(self, metadata: Dict[str, str]) -> None:
        if metadata:
            merged = dict(self.document.metadata or {})
            merged.update(metadata)
            self.document.set_metadata(merged)

    def _save_kwargs(self) -> dict:
        if self.compress:
            return {"garbage": 4, "deflate": True}
        return {}

    def to_bytes(self) -> bytes:
        """Serialize the document; raises ExportFailed on any writer error."""
        try:
            return self.document.tobytes(**self._save_kwargs())
        except (RuntimeError, ValueError) as e:
            raise ExportFailed(f"Could not serialize the PDF: {e}") from e

    def save(self, output_path) -> Path:
        """
        Write the PDF next to output_path first and move it into place, so a
        failed export never leaves a partial file behind.
        """
        output_path = Path(output_path)
        data = self.to_bytes()

        try:
            fd, temp_path = tempfile.mkstemp(suffix=".pdf", dir=output_path.parent)
        except OSError as e:
            raise ExportFailed(f"Could not write {output_path}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as out_file:
                out_file.write(data)
            os.replace(temp_path, output_path)
        except OSError as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise ExportFailed(f"Could not write {output_path}: {e}") from e

        logger.info("Saved %d pages to %s", self.page_count, output_path)
        return output_path

    def close(self) -> None:
        self.document.close()
