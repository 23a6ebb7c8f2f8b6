# image_quantizer/colour_distance.py
from __future__ import annotations

"""
RGB colour distance.

Each channel is treated as one axis of a 3D space and colours are compared by
plain Euclidean distance. No perceptual weighting.

Exports:
  colour_distance(a, b)           -> float   scalar metric
  squared_distances(pixels, pal)  -> int64 [N, P]
"""

import math

import numpy as np
from numpy.typing import NDArray

from .core_types import RGBTuple, coerce_to_rgb_tuple


def colour_distance(a: RGBTuple, b: RGBTuple) -> float:
    """Euclidean distance between two RGB triples. Computed on Python ints, so no uint8 wrap."""
    r1, g1, b1 = coerce_to_rgb_tuple(a)
    r2, g2, b2 = coerce_to_rgb_tuple(b)
    return math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)


def squared_distances(pixels: np.ndarray, palette_rgb: np.ndarray) -> NDArray[np.int64]:
    """
    Squared RGB distance from every pixel row to every palette row.

    Args:
      pixels: [N,3] any integer dtype
      palette_rgb: [P,3] any integer dtype
    Returns:
      int64 array [N,P]

    Integer arithmetic keeps ordering exact, so argmin over this matches a scan
    over colour_distance() including ties.
    """
    src = np.asarray(pixels, dtype=np.int64).reshape(-1, 3)
    pal = np.asarray(palette_rgb, dtype=np.int64).reshape(-1, 3)
    diff = src[:, None, :] - pal[None, :, :]
    return np.einsum("npc,npc->np", diff, diff)


__all__ = ["colour_distance", "squared_distances"]
