"""
Glyph image import and preview rendering using Pillow.

Images are converted to packed bitmaps in the same layout the codecs read:
row-major, pixels packed most significant field first, every row padded to
a whole byte.
"""

import os
from typing import List, Sequence, Union

import numpy as np
from PIL import Image

from glyph_rle.modes import BitWidth


def image_to_chunk(
    image: Union[str, os.PathLike, Image.Image], bpp: int, invert: bool = False
) -> List[int]:
    """
    Convert an image into one packed glyph chunk.

    Args:
        image: Path to an image file or an already opened PIL image
        bpp: Target bits per pixel
        invert: Make dark pixels high values (ink on light background)

    Returns:
        Packed bytes as a list of ints
    """
    bpp = BitWidth(bpp)
    if not isinstance(image, Image.Image):
        with Image.open(image) as img:
            gray = np.asarray(img.convert("L"), dtype=np.uint8)
    else:
        gray = np.asarray(image.convert("L"), dtype=np.uint8)

    if invert:
        gray = 255 - gray

    # Keep the top bits of each 8-bit gray level.
    values = gray >> (8 - bpp)
    height, width = values.shape

    per_byte = bpp.pixels_per_byte
    padded_width = -(-width // per_byte) * per_byte
    rows = np.zeros((height, padded_width), dtype=np.uint8)
    rows[:, :width] = values

    groups = rows.reshape(height, padded_width // per_byte, per_byte)
    shifts = np.array(range(8 - bpp, -1, -bpp), dtype=np.uint8)
    packed = np.bitwise_or.reduce(groups << shifts, axis=2)
    return packed.ravel().tolist()


def pixels_to_image(pixels: Sequence[int], width: int, bpp: int) -> Image.Image:
    """
    Render a pixel stream as a grayscale image.

    Values 0..2^bpp-1 are stretched to 0..255. A short last row is padded
    with black.

    Raises:
        ValueError: If width is not positive
    """
    if width <= 0:
        raise ValueError(f"Glyph width must be positive, got {width}")

    max_value = BitWidth(bpp).max_value
    values = np.asarray(pixels, dtype=np.uint32)
    height = max(1, -(-len(values) // width))

    padded = np.zeros(height * width, dtype=np.uint32)
    padded[:len(values)] = values
    gray = (padded * 255 // max_value).astype(np.uint8).reshape(height, width)
    return Image.fromarray(gray)


def save_preview(
    glyphs: Sequence[Sequence[int]], width: int, bpp: int, output_path: str
) -> Image.Image:
    """
    Stack decoded glyphs vertically into one image and save it.

    Args:
        glyphs: One pixel stream per glyph
        width: Row width in pixels, shared by all glyphs
        bpp: Value range of the pixel streams
        output_path: Where to write the image (format from the extension)

    Returns:
        The saved image
    """
    if width <= 0:
        raise ValueError(f"Glyph width must be positive, got {width}")

    images = [pixels_to_image(pixels, width, bpp) for pixels in glyphs]
    total_height = sum(img.height for img in images) or 1

    sheet = Image.new("L", (width, total_height))
    y = 0
    for img in images:
        sheet.paste(img, (0, y))
        y += img.height

    sheet.save(output_path)
    return sheet
