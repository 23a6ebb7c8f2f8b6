# image_quantizer/palette_match.py
from __future__ import annotations

"""
Nearest palette entry lookup.

Tie-break contract: when several palette entries are equally close, the one
that appears first in the palette wins. The scalar scan uses a strict `<`
(switching to `<=` would pick the last one instead), and the bulk path relies
on np.argmin returning the first minimal index.
"""

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .colour_distance import colour_distance, squared_distances
from .core_types import InvalidArgument, Palette, RGBTuple, coerce_to_rgb_tuple

PaletteLike = Union[Palette, Sequence[RGBTuple]]

# Rows per argmin batch; keeps the [N,P] distance matrix small.
_BATCH_ROWS = 1 << 16


def _palette_colours(palette: PaletteLike) -> Sequence[RGBTuple]:
    if isinstance(palette, Palette):
        return palette.colours
    colours = [coerce_to_rgb_tuple(c) for c in palette]
    if not colours:
        raise InvalidArgument("palette must have 1+ colours")
    return colours


def closest_colour(to_match: RGBTuple, palette: PaletteLike) -> RGBTuple:
    """
    Best match for to_match in palette.

    Linear scan, no early exit. Raises InvalidArgument for an empty palette.
    """
    colours = _palette_colours(palette)
    closest_index = 0
    closest_value = colour_distance(to_match, colours[0])
    for i in range(1, len(colours)):
        d = colour_distance(to_match, colours[i])
        if d < closest_value:
            closest_index = i
            closest_value = d
    return colours[closest_index]


def nearest_palette_indices(pixels: np.ndarray, palette_rgb: np.ndarray) -> NDArray[np.intp]:
    """For each [N,3] pixel row, index of the nearest [P,3] palette row (first minimal wins)."""
    pal = np.asarray(palette_rgb)
    if pal.size == 0:
        raise InvalidArgument("palette must have 1+ colours")
    flat = np.asarray(pixels).reshape(-1, 3)
    out = np.empty(flat.shape[0], dtype=np.intp)
    for start in range(0, flat.shape[0], _BATCH_ROWS):
        stop = start + _BATCH_ROWS
        out[start:stop] = np.argmin(squared_distances(flat[start:stop], pal), axis=1)
    return out


__all__ = ["PaletteLike", "closest_colour", "nearest_palette_indices"]
