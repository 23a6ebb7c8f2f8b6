# image_quantizer/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Palettes are plain (hex, name) data. They are turned into Palette objects at
startup and handed to the pipeline explicitly.

Exports:
  MONOKAI, MONOCHROME: list[tuple[str, str]]   # [(hex, name), ...]
  PALETTES: dict[str, list[tuple[str, str]]]
  construct_palette(hex_name_pairs=MONOKAI) -> Palette
  palette_from_hex_list(hex_list)            -> Palette
  named_palette(name)                        -> Palette
"""

from typing import Dict, List, Sequence, Tuple

from .core_types import InvalidArgument, Palette, hex_to_rgb

# A "head canon" Monokai rather than the original editor theme.
MONOKAI: List[Tuple[str, str]] = [
    ("#1e1f1c", "Background Dark"),
    ("#eae9e1", "Paper"),
    ("#272822", "Background"),
    ("#f92672", "Pink"),
    ("#a6e22e", "Green"),
    ("#e6db74", "Yellow"),
    ("#6a7ec8", "Blue"),
    ("#ae81ff", "Purple"),
    ("#66d9ef", "Cyan"),
    ("#f8f8f2", "Foreground"),
    ("#414339", "Line Highlight"),
    ("#ceccc0", "Comment Light"),
]

MONOCHROME: List[Tuple[str, str]] = [
    ("#000000", "Black"),
    ("#ffffff", "White"),
]

PALETTES: Dict[str, List[Tuple[str, str]]] = {
    "monokai": MONOKAI,
    "monochrome": MONOCHROME,
}


def construct_palette(
    hex_name_pairs: Sequence[Tuple[str, str]] = MONOKAI,
) -> Palette:
    """Build a Palette from (hex, name) pairs, keeping their order."""
    colours = tuple(hex_to_rgb(hx) for hx, _name in hex_name_pairs)
    names = tuple(name for _hx, name in hex_name_pairs)
    return Palette(colours, names)


def palette_from_hex_list(hex_list: Sequence[str]) -> Palette:
    """Build an unnamed Palette from hex strings such as '#1e1f1c' or 'EAE9E1'."""
    return Palette(tuple(hex_to_rgb(hx) for hx in hex_list))


def named_palette(name: str) -> Palette:
    """Look up a built-in palette by (case-insensitive) name."""
    key = name.strip().lower()
    if key not in PALETTES:
        raise InvalidArgument(
            f"unknown palette {name!r} (expected one of: {', '.join(sorted(PALETTES))})"
        )
    return construct_palette(PALETTES[key])


__all__ = [
    "MONOKAI",
    "MONOCHROME",
    "PALETTES",
    "construct_palette",
    "palette_from_hex_list",
    "named_palette",
]
