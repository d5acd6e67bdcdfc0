"""
Pixel unpacking and per-pixel transforms applied before run-length encoding.
"""

from typing import List, Sequence, Union

import numpy as np

from glyph_rle.modes import BitWidth


def unpack_pixels(data: Union[bytes, Sequence[int]], bpp: int) -> List[int]:
    """
    Expand packed bytes into one value per pixel.

    Pixels are taken most significant field first: a 4 bpp byte yields its
    high nibble then its low nibble, a 1 bpp byte yields bit 7 down to bit 0.

    Args:
        data: Packed bitmap bytes (values 0-255)
        bpp: Source bits per pixel (1, 2, 4 or 8)

    Returns:
        len(data) * (8 // bpp) pixel values
    """
    bpp = BitWidth(bpp)
    raw = np.frombuffer(bytes(data), dtype=np.uint8)
    if bpp == BitWidth.BPP_8:
        return raw.tolist()

    shifts = np.array(range(8 - bpp, -1, -bpp), dtype=np.uint8)
    pixels = (raw[:, np.newaxis] >> shifts) & np.uint8(bpp.max_value)
    return pixels.ravel().tolist()


def quantize_pixels(pixels: Sequence[int], bpp: int) -> List[int]:
    """
    Reduce pixels to the 0-15 range of the packed value-run mode.

    8 bpp sources keep their top four bits (lossy). Narrower sources already
    fit and are only masked.
    """
    if BitWidth(bpp) == BitWidth.BPP_8:
        return [(p >> 4) & 0x0F for p in pixels]
    return [p & 0x0F for p in pixels]


def threshold_pixels(pixels: Sequence[int]) -> List[int]:
    """Map every pixel to 0 (zero) or 1 (anything else)."""
    return [1 if p > 0 else 0 for p in pixels]
