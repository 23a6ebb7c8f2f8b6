# image_quantizer/constants.py
"""
Defaults and tunables used across the project.

- Blur defaults (DEFAULT_RADIUS, DEFAULT_KERNEL, DEFAULT_EDGE)
- Palette default (DEFAULT_PALETTE, a key of palette_data.PALETTES)
- File handling (OUTPUT_SUFFIX, IMAGE_EXTENSIONS)
"""
from __future__ import annotations

from typing import FrozenSet

# =========================
# Blur
# =========================
DEFAULT_RADIUS: int = 2
DEFAULT_KERNEL: str = "box"  # "box" | "disc"
DEFAULT_EDGE: str = "extend"  # "extend" | "no-op"

# =========================
# Palette
# =========================
DEFAULT_PALETTE: str = "monokai"

# =========================
# Files
# =========================
OUTPUT_SUFFIX: str = "_quantized"
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({".png", ".jpg", ".jpeg", ".webp"})

__all__ = [
    "DEFAULT_RADIUS",
    "DEFAULT_KERNEL",
    "DEFAULT_EDGE",
    "DEFAULT_PALETTE",
    "OUTPUT_SUFFIX",
    "IMAGE_EXTENSIONS",
]
