from __future__ import annotations
# pdfpack/image_tools.py

from PIL import Image, ImageOps
from reportlab.lib.utils import ImageReader as RLImageReader

from pdfpack.errors import InvalidImage
from pdfpack.geometry import content_box, fit_centered
from pdfpack.page_ops import render_pages


def load_image(image_path) -> Image.Image:
    """
    Decode an image file (JPG, PNG, TIFF, etc.) into an RGB Pillow image.
    Raises InvalidImage when the file cannot be decoded.
    """
    try:
        img = Image.open(image_path)
        img.load()  # Ensure image is fully loaded before use
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise InvalidImage(f"Failed to open image file '{image_path}': {e}")

    img = ImageOps.exif_transpose(img)

    # Flatten transparency onto white
    if img.mode in ("RGBA", "LA", "P"):
        background = Image.new("RGB", img.size, (255, 255, 255))
        if img.mode == "P":
            img = img.convert("RGBA")
        background.paste(
            img,
            mask=img.split()[-1] if img.mode in ("RGBA", "LA") else None
        )
        img = background
    elif img.mode != "RGB":
        img = img.convert("RGB")

    if img.width <= 0 or img.height <= 0:
        raise InvalidImage(f"Image file '{image_path}' has no pixels")

    return img


def make_image_page(img: Image.Image):
    """
    Render a single Letter page with the image scaled to the largest
    aspect-preserving rectangle inside the margins, centred.
    """
    x, y, width, height = fit_centered(img.width, img.height, content_box())

    def draw(c):
        c.drawImage(RLImageReader(img), x, y, width=width, height=height)
        c.showPage()

    return render_pages(draw)[0]
