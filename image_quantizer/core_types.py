# image_quantizer/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str
TileRange = Tuple[int, int]  # half-open [start_y, end_y)

U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Mask = NDArray[np.uint8]  # (H, W)


# Errors


class InvalidArgument(ValueError):
    """Raised for arguments the core cannot work with (empty palette, bad radius, ...)."""


# Value objects


@dataclass(frozen=True)
class Palette:
    """
    Ordered, non-empty set of reference colours.

    Order matters: nearest-colour ties resolve to the earliest entry.
    """

    colours: Tuple[RGBTuple, ...]
    names: Tuple[str, ...] = ()
    rgb: NDArray[np.uint8] = field(init=False, repr=False, compare=False)  # (P, 3)

    def __post_init__(self) -> None:
        colours = tuple(coerce_to_rgb_tuple(c) for c in self.colours)
        if not colours:
            raise InvalidArgument("palette must have 1+ colours")
        for c in colours:
            if not all(0 <= v <= 255 for v in c):
                raise InvalidArgument(f"palette colour out of range: {c}")
        names = tuple(self.names)
        if names and len(names) != len(colours):
            raise InvalidArgument("palette names must match colours one-to-one")
        arr = np.array(colours, dtype=np.uint8).reshape(-1, 3)
        arr.setflags(write=False)
        object.__setattr__(self, "colours", colours)
        object.__setattr__(self, "names", names)
        object.__setattr__(self, "rgb", arr)

    @classmethod
    def of(cls, value: Union["Palette", Sequence[RGBTuple]]) -> "Palette":
        """Pass a Palette through; wrap any other sequence of colours."""
        if isinstance(value, Palette):
            return value
        return cls(tuple(value))

    def __len__(self) -> int:
        return len(self.colours)

    def __iter__(self):
        return iter(self.colours)

    def name_of(self, rgb: RGBTuple) -> str:
        """Name of the first entry equal to rgb, or its hex code."""
        rgb = coerce_to_rgb_tuple(rgb)
        if self.names:
            for c, n in zip(self.colours, self.names):
                if c == rgb:
                    return n
        return rgb_to_hex(rgb)


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb', '#rrggbb' or 'rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        s = f"#{s}"
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex code must be in the form '#Abc123', '1aB2C3' or '#abc'")
    try:
        return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))
    except ValueError:
        raise ValueError(
            f"hex code must be in the form '#Abc123', '1aB2C3' or '#abc', got {hex_str!r}"
        ) from None


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise InvalidArgument("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:  # type: ignore[arg-type]
        raise InvalidArgument("sequence too small for RGB")
    v = value  # type: ignore[assignment]
    return (int(v[0]), int(v[1]), int(v[2]))


def assert_u8_image_rgb(image: np.ndarray, name: Optional[str] = None) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 3:
        label = name or "image"
        raise InvalidArgument(f"expected uint8 (H,W,3) {label}, got {image.dtype} {image.shape}")
    return image  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "TileRange",
    "U8Image",
    "U8Mask",
    # errors
    "InvalidArgument",
    # value objects
    "Palette",
    # helpers
    "rgb_to_hex",
    "hex_to_rgb",
    "coerce_to_rgb_tuple",
    "assert_u8_image_rgb",
]
