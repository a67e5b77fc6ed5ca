"""
PyMuPDF fonts for generated text.

The built-in Helvetica family (Nimbus Sans) carries Latin, Greek and
Cyrillic glyphs. Characters it lacks, such as CJK, are drawn and measured
with MuPDF's bundled fallback fonts, so text is never replaced by junk
glyphs.
"""
from __future__ import annotations

# pdfpack/fonts.py

from typing import Dict

import fitz  # PyMuPDF

REGULAR = "helv"
BOLD = "hebo"
ITALIC = "heit"
BOLD_ITALIC = "hebi"

VARIANTS = {
    (False, False): REGULAR,
    (True, False): BOLD,
    (False, True): ITALIC,
    (True, True): BOLD_ITALIC,
}


class FontBook:
    """Fonts loaded once per drawing job, keyed by built-in name."""

    def __init__(self):
        self._fonts: Dict[str, fitz.Font] = {}

    def get(self, name: str) -> fitz.Font:
        font = self._fonts.get(name)
        if font is None:
            font = fitz.Font(name)
            self._fonts[name] = font
        return font

    def text_length(self, text: str, name: str, fontsize: float) -> float:
        return self.get(name).text_length(text, fontsize=fontsize)
