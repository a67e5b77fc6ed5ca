from __future__ import annotations

# pdfpack/geometry.py

# Standard Letter size, shared by every generated page
PAGE_WIDTH = 612.0
PAGE_HEIGHT = 792.0

MARGIN = 54.0
HEADER_GAP = 40.0

TOC_LINE_HEIGHT = 16.0
TOC_HEADER_HEIGHT = 30.0


def content_box() -> tuple[float, float, float, float]:
    """Return (x, y, width, height) of the area inside the margins, bottom-left origin."""
    return (
        MARGIN,
        MARGIN,
        PAGE_WIDTH - MARGIN * 2,
        PAGE_HEIGHT - MARGIN * 2,
    )


def fit_centered(
    image_width: float,
    image_height: float,
    box: tuple[float, float, float, float],
) -> tuple[float, float, float, float]:
    """
    Largest rectangle with the image's aspect ratio that fits inside box,
    centred in it. Degenerate image sizes get the whole box.
    """
    x, y, width, height = box
    if image_width <= 0 or image_height <= 0:
        return box

    scale = min(width / image_width, height / image_height)
    new_width = image_width * scale
    new_height = image_height * scale

    return (
        x + (width - new_width) / 2,
        y + (height - new_height) / 2,
        new_width,
        new_height,
    )
