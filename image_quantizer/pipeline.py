# image_quantizer/pipeline.py
from __future__ import annotations

"""
Blur, then quantize.

Exports:
- PipelineSettings: radius, kernel shape, edge mode, palette, workers
- blur_and_quantize(rgb, radius, shape, palette, workers=None, edge=EXTEND) -> uint8 [H,W,3]
- run_pipeline(rgb, settings) -> uint8 [H,W,3]

Notes:
- The blur suppresses noise so flat areas don't speckle between palette entries.
- Nothing is hardcoded here: radius, shape, palette and workers come from the caller.
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .constants import DEFAULT_EDGE, DEFAULT_KERNEL, DEFAULT_RADIUS
from .convolve import EdgeMode, convolve
from .core_types import InvalidArgument, Palette, U8Image, assert_u8_image_rgb
from .kernels import KernelShape, build_kernel
from .palette_match import PaletteLike
from .scheduler import quantize_parallel


@dataclass(frozen=True)
class PipelineSettings:
    """Blur + quantize parameters."""

    palette: Palette
    radius: int = DEFAULT_RADIUS
    shape: KernelShape = KernelShape(DEFAULT_KERNEL)
    edge: EdgeMode = EdgeMode(DEFAULT_EDGE)
    workers: Optional[int] = None  # None => hardware parallelism

    def __post_init__(self):
        object.__setattr__(self, "palette", Palette.of(self.palette))
        object.__setattr__(self, "shape", KernelShape.parse(self.shape))
        object.__setattr__(self, "edge", EdgeMode.parse(self.edge))
        if self.workers is not None and self.workers < 1:
            raise InvalidArgument(f"workers must be >= 1, got {self.workers}")
        # Fails early for radii the chosen shape can't use.
        build_kernel(self.radius, self.shape)


def blur_and_quantize(
    rgb: U8Image,
    radius: int,
    shape: Union[str, KernelShape],
    palette: PaletteLike,
    workers: Optional[int] = None,
    edge: Union[str, EdgeMode] = EdgeMode.EXTEND,
) -> U8Image:
    """Blur rgb with a `shape` kernel of `radius`, then map every pixel to its nearest palette colour."""
    palette = Palette.of(palette)
    src = assert_u8_image_rgb(np.asarray(rgb), "input image")
    kernel = build_kernel(radius, shape)
    blurred = convolve(src, kernel, edge)
    out = np.empty_like(blurred)
    quantize_parallel(blurred, out, palette, workers)
    return out


def run_pipeline(rgb: U8Image, settings: PipelineSettings) -> U8Image:
    return blur_and_quantize(
        rgb,
        settings.radius,
        settings.shape,
        settings.palette,
        workers=settings.workers,
        edge=settings.edge,
    )


__all__ = ["PipelineSettings", "blur_and_quantize", "run_pipeline"]
