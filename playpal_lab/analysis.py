# playpal_lab/analysis.py
from __future__ import annotations

"""
Per-palette analysis: transparency/duplicate pair and brightness extremes.

Exports:
  is_duplicate_entry(entries, colormap, i, j) -> bool
  find_duplicate_pair(entries, colormap) -> (transparent, duplicate | None)
  brightness_extremes(entries) -> (black, white)
  analyze_palette(palette, colormap, *, duplicate_pair=None, debug=False) -> PaletteMetadata

Notes:
  Indexed renderers reserve one palette slot for "no pixel". When the palette
  holds a genuine duplicate (same RGB, same index in every colormap row) the
  lower index becomes the transparency slot and drawing substitutes the higher
  one, so no unique colour is lost. Otherwise slot 255 is used as before.
"""

from typing import Optional, Tuple

import numpy as np

from .colour_convert import entry_lightness
from .constants import DARKEST_SENTINEL, DEFAULT_TRANSPARENT_INDEX, LIGHTEST_SENTINEL
from .core_types import Palette, PaletteMetadata, U8Colormap, U8Entries
from .utils import debug_log

DuplicatePair = Tuple[int, Optional[int]]


def _as_colormap(colormap: np.ndarray) -> U8Colormap:
    cm = np.asarray(colormap, dtype=np.uint8)
    if cm.ndim == 1:
        cm = cm.reshape(-1, 256)
    return cm


# Duplicate detection


def is_duplicate_entry(
    entries: U8Entries, colormap: np.ndarray, i: int, j: int
) -> bool:
    """True if entries i and j share RGB bytes and every colormap row shades them alike."""
    pal = np.asarray(entries, dtype=np.uint8)
    if not np.array_equal(pal[i], pal[j]):
        return False
    cm = _as_colormap(colormap)
    return bool(np.array_equal(cm[:, i], cm[:, j]))


def find_duplicate_pair(entries: U8Entries, colormap: np.ndarray) -> DuplicatePair:
    """
    First duplicate pair (i, j), i < j, in ascending i then ascending j order.
    Returns (DEFAULT_TRANSPARENT_INDEX, None) when the palette has none.
    """
    pal = np.asarray(entries, dtype=np.uint8)
    cm = _as_colormap(colormap)
    n = pal.shape[0]

    # One key row per palette index: RGB followed by its shade in every row.
    keys = np.concatenate([pal, cm[:, :n].T], axis=1)
    for i in range(n - 1):
        same = np.all(keys[i + 1 :] == keys[i], axis=1)
        hits = np.flatnonzero(same)
        if hits.size:
            return i, i + 1 + int(hits[0])
    return DEFAULT_TRANSPARENT_INDEX, None


# Brightness extremes


def brightness_extremes(entries: U8Entries) -> Tuple[int, int]:
    """
    (black_index, white_index) by luminance-path L*.
    Strict comparisons against out-of-range sentinels keep the first index on ties.
    """
    darkest = DARKEST_SENTINEL
    lightest = LIGHTEST_SENTINEL
    black = white = 0
    for i, row in enumerate(np.asarray(entries, dtype=np.uint8).tolist()):
        lightness = entry_lightness(row)
        if lightness < darkest:
            darkest = lightness
            black = i
        if lightness > lightest:
            lightest = lightness
            white = i
    return black, white


# Entry point


def analyze_palette(
    palette: Palette,
    colormap: np.ndarray,
    *,
    duplicate_pair: Optional[DuplicatePair] = None,
    debug: bool = False,
) -> PaletteMetadata:
    """
    Derive PaletteMetadata for one palette.

    Args:
      palette: Palette with (256,3) uint8 entries
      colormap: uint8 [NUMCOLORMAPS,256] shading table (read only)
      duplicate_pair: reuse an earlier (transparent, duplicate) result instead of rescanning
      debug: emit a one-line summary
    """
    if duplicate_pair is None:
        duplicate_pair = find_duplicate_pair(palette.entries, colormap)
    transparent, duplicate = duplicate_pair
    black, white = brightness_extremes(palette.entries)

    meta = PaletteMetadata(
        transparent_index=transparent,
        duplicate_index=duplicate,
        black_index=black,
        white_index=white,
    )
    if debug:
        debug_log(
            f"{palette.name}: transparent={transparent} duplicate={duplicate} "
            f"black={black} white={white}"
        )
    return meta


__all__ = [
    "DuplicatePair",
    "is_duplicate_entry",
    "find_duplicate_pair",
    "brightness_extremes",
    "analyze_palette",
]
