# image_quantizer/scheduler.py
from __future__ import annotations

"""
Row-sliced parallel quantization.

The image is cut into horizontal bands, one per worker, and each band is
quantized on a thread of a per-call ThreadPoolExecutor. Workers only read
the source and palette and only write their own rows of the destination, so
nothing is locked. The call returns once every band is written.
"""

import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import List, Optional

import numpy as np

from .core_types import InvalidArgument, Palette, TileRange, U8Image, assert_u8_image_rgb
from .palette_match import PaletteLike
from .quantizer import quantize_region


def default_workers() -> int:
    """Hardware parallelism as reported by the OS (at least 1)."""
    return max(1, os.cpu_count() or 1)


def split_rows(height: int, workers: int) -> List[TileRange]:
    """
    Partition [0, height) into `workers` contiguous [start, end) row spans.

    Every span is height // workers rows tall except the last, which runs to
    height and absorbs the remainder. Spans may be empty when height < workers.
    """
    if workers < 1:
        raise InvalidArgument(f"workers must be >= 1, got {workers}")
    if height < 0:
        raise InvalidArgument(f"height must be >= 0, got {height}")
    slice_height = height // workers
    ranges: List[TileRange] = []
    for i in range(workers):
        start = i * slice_height
        end = height if i == workers - 1 else start + slice_height
        ranges.append((start, end))
    return ranges


def quantize_parallel(
    src: U8Image,
    dst: U8Image,
    palette: PaletteLike,
    workers: Optional[int] = None,
) -> None:
    """
    Quantize src into dst (same shape) using `workers` threads.

    Args:
      src: uint8 [H,W,3], read only
      dst: uint8 [H,W,3], fully overwritten
      palette: Palette or sequence of RGB tuples, non-empty
      workers: thread count; None => default_workers(), 1 => single pass on the calling thread
    Raises:
      InvalidArgument for bad buffers, palette or worker count. Any exception
      raised by a worker is re-raised here after pending bands are cancelled.
    """
    palette = Palette.of(palette)
    src = assert_u8_image_rgb(np.asarray(src), "source image")
    assert_u8_image_rgb(dst, "destination image")
    if dst.shape != src.shape:
        raise InvalidArgument(f"destination shape {dst.shape} != source shape {src.shape}")
    if not dst.flags.writeable:
        raise InvalidArgument("destination image is read-only")

    if workers is None:
        workers = default_workers()
    if workers < 1:
        raise InvalidArgument(f"workers must be >= 1, got {workers}")

    height = int(src.shape[0])
    if workers == 1 or height < 2:
        quantize_region(src, dst, palette, 0, height)
        return

    chunks = [(s, e) for s, e in split_rows(height, workers) if e > s]
    with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
        futures = [pool.submit(quantize_region, src, dst, palette, s, e) for s, e in chunks]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for f in pending:
            f.cancel()
        for f in futures:
            if f in done:
                f.result()
        # Anything still running after a failure is joined by the pool on exit.


__all__ = ["default_workers", "split_rows", "quantize_parallel"]
