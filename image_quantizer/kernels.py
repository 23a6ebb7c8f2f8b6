# image_quantizer/kernels.py
from __future__ import annotations

"""
Blur kernel construction.

Exports:
  KernelShape               : BOX | DISC
  Kernel                    : radius, shape, read-only float64 weights [2r+1, 2r+1]
  build_kernel(radius, shape) -> Kernel
  box_kernel(radius), disc_kernel(radius)

Notes:
  Weights always sum to 1.0, so blurring a flat colour leaves it unchanged.
  A disc keeps cells with sqrt(dx^2 + dy^2) < radius. Radius 0 keeps no cell
  and is rejected; radius 1 keeps only the centre (identity).
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np
from numpy.typing import NDArray

from .core_types import InvalidArgument


class KernelShape(str, Enum):
    BOX = "box"
    DISC = "disc"

    @classmethod
    def parse(cls, value: Union[str, "KernelShape"]) -> "KernelShape":
        """Accept a KernelShape or its name, case-insensitive."""
        if isinstance(value, KernelShape):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise InvalidArgument(
                f"unknown kernel shape {value!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class Kernel:
    """Square weight grid of side 2*radius+1."""

    radius: int
    shape: KernelShape
    weights: NDArray[np.float64]

    @property
    def size(self) -> int:
        return 2 * self.radius + 1


def _check_radius(radius: int) -> int:
    if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)):
        raise InvalidArgument(f"radius must be an integer, got {radius!r}")
    radius = int(radius)
    if radius < 0:
        raise InvalidArgument(f"radius must be >= 0, got {radius}")
    return radius


def _freeze(weights: np.ndarray) -> NDArray[np.float64]:
    weights.setflags(write=False)
    return weights


def box_kernel(radius: int) -> Kernel:
    """Uniform average over a (2r+1)^2 square. Radius 0 gives the 1x1 identity."""
    radius = _check_radius(radius)
    size = radius * 2 + 1
    weights = np.full((size, size), 1.0 / float(size * size), dtype=np.float64)
    return Kernel(radius, KernelShape.BOX, _freeze(weights))


def disc_kernel(radius: int) -> Kernel:
    """Uniform average over the cells strictly inside a circle of the given radius."""
    radius = _check_radius(radius)
    size = radius * 2 + 1
    mask = np.zeros((size, size), dtype=bool)
    for y in range(size):
        for x in range(size):
            dx, dy = x - radius, y - radius
            mask[y, x] = math.sqrt(dx * dx + dy * dy) < radius

    filled = int(mask.sum())
    if filled == 0:
        raise InvalidArgument(
            f"disc kernel with radius {radius} covers no cells (radius must be >= 1)"
        )
    weights = np.where(mask, 1.0 / float(filled), 0.0).astype(np.float64)
    return Kernel(radius, KernelShape.DISC, _freeze(weights))


def build_kernel(radius: int, shape: Union[str, KernelShape] = KernelShape.BOX) -> Kernel:
    """Build a kernel of the requested shape."""
    shape = KernelShape.parse(shape)
    if shape is KernelShape.DISC:
        return disc_kernel(radius)
    return box_kernel(radius)


__all__ = ["KernelShape", "Kernel", "box_kernel", "disc_kernel", "build_kernel"]
