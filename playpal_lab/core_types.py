# playpal_lab/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
XYZTuple = Tuple[float, float, float]
LabTuple = Tuple[float, float, float]
HexStr = str

U8Entries = NDArray[np.uint8]  # (256, 3) palette rows
U8Colormap = NDArray[np.uint8]  # (NUMCOLORMAPS, 256) shaded indices
XYZ = NDArray[np.float64]  # (..., 3) CIE XYZ, 0..100 scale


# Errors


class PaletteError(Exception):
    """Base error for palette handling."""


class PaletteFormatError(PaletteError, ValueError):
    """Lump bytes are too short or otherwise unusable."""


class PaletteNotFoundError(PaletteError, LookupError):
    """A palette lump required by the caller is absent."""


# Value objects


@dataclass(frozen=True)
class LightnessAdjustment:
    """
    Recipe applied to CIE L*: L' = (L + add) ** gamma / div.
    a* and b* are left untouched.
    """

    add: float = 0.0
    gamma: float = 1.0
    div: float = 1.0

    def apply(self, lightness: float) -> float:
        """
        Adjusted L*, with C pow / IEEE division results where Python would raise:
        NaN for a negative base with fractional gamma, +-inf on overflow or
        division by zero.
        """
        base = lightness + self.add
        gamma = self.gamma
        odd_power = float(gamma).is_integer() and int(gamma) % 2 == 1
        try:
            shifted = math.pow(base, gamma)
        except OverflowError:
            shifted = -math.inf if (base < 0 and odd_power) else math.inf
        except ValueError:
            if base == 0:
                # pow(+-0, negative)
                shifted = math.copysign(math.inf, base) if odd_power else math.inf
            else:
                shifted = math.nan
        if self.div == 0:
            if shifted == 0 or math.isnan(shifted):
                return math.nan
            return math.copysign(math.inf, shifted) * math.copysign(1.0, self.div)
        return shifted / self.div


IDENTITY_ADJUSTMENT = LightnessAdjustment()


@dataclass(frozen=True)
class Palette:
    """256 sRGB entries of one palette lump, read-only once built."""

    name: str
    slot: int
    entries: U8Entries = field(repr=False)

    def __post_init__(self) -> None:
        arr = np.array(self.entries, dtype=np.uint8).reshape(-1, 3)
        arr.setflags(write=False)
        object.__setattr__(self, "entries", arr)

    def __len__(self) -> int:
        return int(self.entries.shape[0])

    def rgb(self, index: int) -> RGBTuple:
        return coerce_to_rgb_tuple(self.entries[index])


@dataclass(frozen=True)
class PaletteMetadata:
    """Derived facts about a palette. duplicate_index is None when no pair exists."""

    transparent_index: int
    duplicate_index: Optional[int]
    black_index: int
    white_index: int

    @property
    def has_duplicate(self) -> bool:
        return self.duplicate_index is not None


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if len(value) < 3:  # type: ignore[arg-type]
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


__all__ = [
    # aliases / types
    "RGBTuple",
    "XYZTuple",
    "LabTuple",
    "HexStr",
    "U8Entries",
    "U8Colormap",
    "XYZ",
    # errors
    "PaletteError",
    "PaletteFormatError",
    "PaletteNotFoundError",
    # value objects
    "LightnessAdjustment",
    "IDENTITY_ADJUSTMENT",
    "Palette",
    "PaletteMetadata",
    # helpers
    "rgb_to_hex",
    "coerce_to_rgb_tuple",
]
