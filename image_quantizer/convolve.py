# image_quantizer/convolve.py
from __future__ import annotations

"""
Apply a blur kernel to an RGB image.

Exports:
  EdgeMode                       : EXTEND | NO_OP
  convolve(rgb, kernel, edge)    -> uint8 [H,W,3], fresh buffer

Edge handling:
  EXTEND : the input is padded by repeating its outermost pixels, so every
           output pixel is fully convolved.
  NO_OP  : pixels closer than `radius` to any edge are copied from the input
           unchanged. Images no larger than the kernel come back as a copy.

Each output channel is sum(weight * source) over the kernel footprint,
rounded half-up and clamped to [0, 255].
"""

from enum import Enum
from typing import Union

import numpy as np

from .core_types import InvalidArgument, U8Image, assert_u8_image_rgb
from .kernels import Kernel


class EdgeMode(str, Enum):
    EXTEND = "extend"
    NO_OP = "no-op"

    @classmethod
    def parse(cls, value: Union[str, "EdgeMode"]) -> "EdgeMode":
        """Accept an EdgeMode or its name ('no_op' and 'noop' also work)."""
        if isinstance(value, EdgeMode):
            return value
        name = str(value).strip().lower().replace("_", "-")
        if name == "noop":
            name = "no-op"
        try:
            return cls(name)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise InvalidArgument(
                f"unknown edge mode {value!r} (expected one of: {choices})"
            ) from None


def _accumulate(padded: np.ndarray, weights: np.ndarray, height: int, width: int) -> np.ndarray:
    """Weighted sum of shifted views of padded; result is float64 [height, width, 3]."""
    acc = np.zeros((height, width, 3), dtype=np.float64)
    ks = weights.shape[0]
    for ky in range(ks):
        for kx in range(ks):
            w = float(weights[ky, kx])
            if w == 0.0:
                continue
            acc += w * padded[ky : ky + height, kx : kx + width]
    return acc


def _to_u8(acc: np.ndarray) -> U8Image:
    return np.clip(np.floor(acc + 0.5), 0, 255).astype(np.uint8)


def convolve(
    rgb: U8Image, kernel: Kernel, edge: Union[str, EdgeMode] = EdgeMode.EXTEND
) -> U8Image:
    """Return a blurred copy of rgb. The input is never modified."""
    src = assert_u8_image_rgb(np.asarray(rgb), "input image")
    edge = EdgeMode.parse(edge)
    radius = kernel.radius
    height, width = src.shape[0], src.shape[1]

    if src.size == 0:
        return src.copy()
    if radius == 0:
        return _to_u8(src.astype(np.float64) * float(kernel.weights[0, 0]))

    src_f = src.astype(np.float64)
    if edge is EdgeMode.EXTEND:
        padded = np.pad(src_f, ((radius, radius), (radius, radius), (0, 0)), mode="edge")
        return _to_u8(_accumulate(padded, kernel.weights, height, width))

    out = src.copy()
    inner_h = height - 2 * radius
    inner_w = width - 2 * radius
    if inner_h <= 0 or inner_w <= 0:
        return out
    out[radius : height - radius, radius : width - radius] = _to_u8(
        _accumulate(src_f, kernel.weights, inner_h, inner_w)
    )
    return out


__all__ = ["EdgeMode", "convolve"]
