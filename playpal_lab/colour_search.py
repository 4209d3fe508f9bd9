# playpal_lab/colour_search.py
from __future__ import annotations

"""
Nearest-colour search for lightened / darkened palette entries.

Functions:
  palette_colour_xyz(entries, i) -> (X, Y, Z)
  palette_colour_lab(entries, i) -> (L, a, b)
  shift_lightness(lab, adjustment) -> (L', a, b)
  find_nearest_xyz_colour(entries, xyz, *, palette_xyz=None) -> index or -1
  find_shifted_colour(palette, source_index, adjustment) -> index
  build_shift_table(palette, adjustment) -> uint8 [256]

An arbitrary Lab point is rarely a palette colour, so the shifted target is
mapped back to the palette entry with the smallest squared XYZ distance.
"""

from typing import Optional, Sequence

import numpy as np

from .colour_convert import lab_to_xyz, palette_to_xyz, rgb_to_lab, rgb_to_xyz
from .core_types import (
    LabTuple,
    LightnessAdjustment,
    Palette,
    U8Entries,
    XYZ,
    XYZTuple,
)

# Running-minimum start value; anything not below it is "no match".
MAX_DISTANCE: float = 1e307


def palette_colour_xyz(entries: U8Entries, i: int) -> XYZTuple:
    """XYZ of palette entry i (full matrix)."""
    return rgb_to_xyz(np.asarray(entries, dtype=np.uint8)[i].tolist())


def palette_colour_lab(entries: U8Entries, i: int) -> LabTuple:
    """Lab of palette entry i (full matrix)."""
    return rgb_to_lab(np.asarray(entries, dtype=np.uint8)[i].tolist())


def shift_lightness(lab: Sequence[float], adjustment: LightnessAdjustment) -> LabTuple:
    """Apply the adjustment to L only."""
    return (adjustment.apply(lab[0]), float(lab[1]), float(lab[2]))


def find_nearest_xyz_colour(
    entries: U8Entries,
    xyz: Sequence[float],
    *,
    palette_xyz: Optional[XYZ] = None,
) -> int:
    """
    Index of the palette entry closest to xyz, or -1 if nothing qualifies
    (empty palette, or a non-finite target).
    Ties go to the lowest index.
    """
    if palette_xyz is None:
        palette_xyz = palette_to_xyz(entries)
    if palette_xyz.shape[0] == 0:
        return -1

    target = np.asarray(xyz, dtype=np.float64)
    with np.errstate(invalid="ignore", over="ignore"):
        diff = target[None, :] - palette_xyz
        dist = diff[:, 0] * diff[:, 0] + diff[:, 1] * diff[:, 1] + diff[:, 2] * diff[:, 2]

    # argmin keeps the first minimum; NaN/inf rows never beat MAX_DISTANCE.
    nearest = int(np.argmin(dist))
    if not dist[nearest] < MAX_DISTANCE:
        return -1
    return nearest


def find_shifted_colour(
    palette: Palette,
    source_index: int,
    adjustment: LightnessAdjustment,
    *,
    palette_xyz: Optional[XYZ] = None,
) -> int:
    """
    Palette index nearest to entry source_index after a lightness shift.

    Args:
      palette: Palette to search
      source_index: entry to shift (0..255, not validated)
      adjustment: (add, gamma, div) recipe for L*
      palette_xyz: optional precomputed palette_to_xyz(palette.entries)
    Returns:
      nearest index, or source_index when no entry qualifies
    """
    if len(palette) == 0:
        return source_index
    lab = palette_colour_lab(palette.entries, source_index)
    target = lab_to_xyz(*shift_lightness(lab, adjustment))
    nearest = find_nearest_xyz_colour(
        palette.entries, target, palette_xyz=palette_xyz
    )
    if nearest >= 0:
        return nearest
    return source_index


def build_shift_table(palette: Palette, adjustment: LightnessAdjustment) -> np.ndarray:
    """Shifted index for every palette entry, as a uint8 lookup table."""
    pal_xyz = palette_to_xyz(palette.entries)
    table = np.empty((len(palette),), dtype=np.uint8)
    for i in range(len(palette)):
        table[i] = find_shifted_colour(palette, i, adjustment, palette_xyz=pal_xyz)
    return table


__all__ = [
    "MAX_DISTANCE",
    "palette_colour_xyz",
    "palette_colour_lab",
    "shift_lightness",
    "find_nearest_xyz_colour",
    "find_shifted_colour",
    "build_shift_table",
]
