"""
image_quantizer package.

Purpose:
  Blur an image, then snap every pixel to the nearest colour of a fixed
  palette. See quantize_image.py for the CLI.

Public API:
  blur_and_quantize : blur + quantize entry point.
  run_pipeline      : same, driven by a PipelineSettings object.
  kernels           : box / disc blur kernels (build_kernel, KernelShape).
  convolve          : kernel application with EXTEND / NO_OP edges.
  palette_match     : closest_colour and the bulk nearest-index lookup.
  quantizer         : per-pixel quantization of an image or a rectangle.
  scheduler         : row-sliced threaded quantization (quantize_parallel).
  palette_data      : built-in palettes and palette builders.
  core_types        : shared aliases, Palette, InvalidArgument.

Quick start:
  from image_quantizer import blur_and_quantize, named_palette
  out = blur_and_quantize(rgb, 2, "box", named_palette("monokai"))
"""

__version__ = "0.1.0"

from . import colour_distance
from . import core_types
from . import kernels
from . import convolve
from . import palette_match
from . import quantizer
from . import scheduler
from . import palette_data
from . import utils

from .core_types import InvalidArgument, Palette  # noqa: E402,F401
from .kernels import KernelShape, build_kernel  # noqa: E402,F401
from .convolve import EdgeMode  # noqa: E402,F401
from .palette_data import construct_palette, named_palette  # noqa: E402,F401
from .pipeline import PipelineSettings, blur_and_quantize, run_pipeline  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_distance",
    "core_types",
    "kernels",
    "convolve",
    "palette_match",
    "quantizer",
    "scheduler",
    "palette_data",
    "utils",
    "InvalidArgument",
    "Palette",
    "KernelShape",
    "build_kernel",
    "EdgeMode",
    "construct_palette",
    "named_palette",
    "PipelineSettings",
    "blur_and_quantize",
    "run_pipeline",
]
