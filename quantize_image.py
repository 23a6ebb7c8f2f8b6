#!/usr/bin/env python3
"""
quantize_image.py
Blur an image to suppress noise, then recolour it to a fixed palette.

Usage:
  python quantize_image.py INPUT [OUTPUT] --radius R --kernel [box|disc] --edge [extend|no-op]
                           --palette [monokai|monochrome] --colours HEX [HEX ...] --workers N --debug

Input:
  Any Pillow-readable image, or a folder of them. Alpha is kept as-is.

Output:
  PNG. If OUTPUT is omitted, writes <stem>_quantized.png next to INPUT. If OUTPUT
  is a directory (always the case for a folder INPUT), <stem>_quantized.png is
  written inside it.

Notes:
  --colours overrides --palette; the given order decides ties between equally
  close colours. Quantization runs on --workers threads (default: CPU count).
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

import numpy as np

from image_quantizer.constants import (
    DEFAULT_EDGE,
    DEFAULT_KERNEL,
    DEFAULT_PALETTE,
    DEFAULT_RADIUS,
    IMAGE_EXTENSIONS,
    OUTPUT_SUFFIX,
)
from image_quantizer.core_types import InvalidArgument, rgb_to_hex
from image_quantizer.image_io import is_image_file, load_image_rgba, save_image_rgba
from image_quantizer.palette_data import PALETTES, named_palette, palette_from_hex_list
from image_quantizer.pipeline import PipelineSettings, run_pipeline
from image_quantizer.scheduler import default_workers
from image_quantizer.utils import (
    colour_usage_report,
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)


# CLI args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quantize_image",
        description="Blur an image, then recolour it to a fixed palette.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "dst",
        type=Path,
        nargs="?",
        default=None,
        help="Output image (or directory for folder input). Optional.",
    )
    parser.add_argument(
        "--radius", type=int, default=DEFAULT_RADIUS, help="Blur radius in pixels."
    )
    parser.add_argument(
        "--kernel",
        choices=["box", "disc"],
        default=DEFAULT_KERNEL,
        help="Blur kernel shape.",
    )
    parser.add_argument(
        "--edge",
        choices=["extend", "no-op"],
        default=DEFAULT_EDGE,
        help='Edge handling. "extend" repeats border pixels, "no-op" leaves the border unblurred.',
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default=DEFAULT_PALETTE,
        help="Built-in palette.",
    )
    parser.add_argument(
        "--colours",
        nargs="+",
        metavar="HEX",
        default=None,
        help="Custom palette as hex codes, e.g. '#1e1f1c' EAE9E1. Overrides --palette.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=default_workers(),
        help="Quantization threads (1 = single pass).",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> PipelineSettings:
    """Build validated PipelineSettings from parsed CLI args."""
    if args.colours:
        palette = palette_from_hex_list(args.colours)
    else:
        palette = named_palette(args.palette)
    return PipelineSettings(
        palette=palette,
        radius=args.radius,
        shape=args.kernel,
        edge=args.edge,
        workers=args.workers,
    )


def _collect_inputs(src: Path) -> List[Path]:
    if not src.is_dir():
        return [src]
    files = [
        p
        for p in src.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTENSIONS
        and not p.stem.endswith(OUTPUT_SUFFIX)
        and is_image_file(p)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


def _output_path(src_path: Path, dst: Optional[Path], folder_mode: bool) -> Path:
    if dst is None:
        return src_path.with_name(f"{src_path.stem}{OUTPUT_SUFFIX}.png")
    if folder_mode or dst.is_dir():
        return dst / f"{src_path.stem}{OUTPUT_SUFFIX}.png"
    return dst


# Per-file processing


def process_image(
    src_path: Path, out_path: Path, settings: PipelineSettings, debug: bool
) -> Path:
    """Load -> blur + quantize -> save -> report. Returns the path written."""
    t_start = time.perf_counter()
    print_banner(src_path.name)

    rgb_in, alpha = load_image_rgba(src_path)
    height, width = rgb_in.shape[0], rgb_in.shape[1]
    t_loaded = time.perf_counter()
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{width}x{height}"),
                    ("Alpha=0", int(np.count_nonzero(alpha == 0))),
                ]
            )
        )

    mapped = run_pipeline(rgb_in, settings)
    t_mapped = time.perf_counter()

    written = save_image_rgba(out_path, mapped, alpha)
    t_saved = time.perf_counter()

    log(
        f"Wrote {written.name} | size={width}x{height} | palette_size={len(settings.palette)}"
    )
    log("Colours used:")
    for hex_code, name, count in colour_usage_report(mapped, alpha, settings.palette):
        label = "" if name == hex_code else f"  {name}"
        log(f"  {hex_code}{label}: {count:,}")

    if debug:
        map_secs = t_mapped - t_loaded
        if map_secs > 0:
            rate_mpx_s = (width * height / map_secs) / 1e6
            debug_log(f"throughput {rate_mpx_s:.2f} MPx/s")
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"map={format_seconds_compact(map_secs)}, "
            f"save={format_seconds_compact(t_saved - t_mapped)})"
        )
    else:
        log(f"Total time {format_total_duration_compact(t_saved - t_start)}")
    return written


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src: Path = args.src
    if not src.exists():
        error(f"image {src.resolve()} does not exist")
        return 1

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        error(str(e))
        return 2

    print_config_line(
        "run",
        [("CPU cores", os.cpu_count() or 1), ("Workers", settings.workers)],
        debug=False,
    )
    print_config_line(
        "blur",
        [
            ("Radius", settings.radius),
            ("Kernel", settings.shape.value),
            ("Edges", settings.edge.value),
        ],
        debug=False,
    )
    if args.debug:
        debug_log(
            "palette: " + " ".join(rgb_to_hex(c) for c in settings.palette.colours)
        )

    folder_mode = src.is_dir()
    files = _collect_inputs(src)
    if folder_mode:
        if not files:
            warn(f"no images found in {src}")
        if args.dst is not None:
            args.dst.mkdir(parents=True, exist_ok=True)
        if args.debug:
            debug_log(key_value_pairs_to_string([("Images", len(files))]))

    for path in files:
        try:
            process_image(path, _output_path(path, args.dst, folder_mode), settings, args.debug)
        except InvalidArgument as e:
            error(f"{path.name}: {e}")
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
