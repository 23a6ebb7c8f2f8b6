# image_quantizer/quantizer.py
from __future__ import annotations

"""
Per-pixel palette quantization.

Every pixel is replaced by its nearest palette entry (see palette_match for
the tie-break). Pixels are independent, so any rectangle can be processed on
its own.
"""

from typing import Optional

import numpy as np

from .core_types import InvalidArgument, Palette, U8Image, assert_u8_image_rgb
from .palette_match import PaletteLike, nearest_palette_indices


def quantize_region(
    src: U8Image,
    dst: U8Image,
    palette: PaletteLike,
    y0: int,
    y1: int,
    x0: int = 0,
    x1: Optional[int] = None,
) -> None:
    """Quantize src[y0:y1, x0:x1] into the same rectangle of dst, exclusive of the bottom and right edges."""
    palette = Palette.of(palette)
    height, width = src.shape[0], src.shape[1]
    if x1 is None:
        x1 = width
    if not (0 <= y0 <= y1 <= height and 0 <= x0 <= x1 <= width):
        raise InvalidArgument(
            f"region y=[{y0},{y1}) x=[{x0},{x1}) outside {width}x{height} image"
        )
    if y0 == y1 or x0 == x1:
        return
    block = src[y0:y1, x0:x1]
    idx = nearest_palette_indices(block, palette.rgb)
    dst[y0:y1, x0:x1] = palette.rgb[idx].reshape(block.shape)


def quantize(rgb: U8Image, palette: PaletteLike) -> U8Image:
    """Return a copy of rgb quantized to palette."""
    src = assert_u8_image_rgb(np.asarray(rgb), "input image")
    out = np.empty_like(src)
    quantize_region(src, out, palette, 0, src.shape[0])
    return out


__all__ = ["quantize_region", "quantize"]
