# playpal_lab/constants.py
"""
Palette slots and tunables used across the project.

- PALETTE_SLOTS, DEFAULT_SLOT, LAST_CYCLE_SLOT
- Lump sizes (PALETTE_SIZE, PALETTE_BYTES, NUMCOLORMAPS)
- Colour science coefficients (sRGB gamma, XYZ matrices, Lab thresholds)
"""
from __future__ import annotations

from typing import List, Tuple

# ==============
# Palette slots
# ==============
PALETTE_SLOTS: List[Tuple[int, str]] = [
    (0, "PLAYPAL"),
    (1, "PLAYPAL1"),
    (2, "PLAYPAL2"),
    (3, "PLAYPAL3"),
    (4, "PLAYPAL4"),
    (5, "PLAYPAL5"),
    (6, "PLAYPAL6"),
    (7, "PLAYPAL7"),
    (8, "PLAYPAL8"),
    (9, "PLAYPAL9"),
    (10, "E2PAL"),
]

DEFAULT_SLOT: int = 0
# Cycling wraps after this slot; E2PAL is only reached through set_active().
LAST_CYCLE_SLOT: int = 9

# ===========
# Lump sizes
# ===========
PALETTE_SIZE: int = 256
PALETTE_BYTES: int = PALETTE_SIZE * 3
NUMCOLORMAPS: int = 32
COLORMAP_BYTES: int = NUMCOLORMAPS * PALETTE_SIZE

# Used when a palette has no duplicate pair.
DEFAULT_TRANSPARENT_INDEX: int = 255

# ===============
# Colour science
# ===============
SRGB_THRESHOLD: float = 0.04045
SRGB_OFFSET: float = 0.055
SRGB_SCALE: float = 1.055
SRGB_GAMMA: float = 2.4
SRGB_LINEAR_DIV: float = 12.92

XYZ_MATRIX: Tuple[Tuple[float, float, float], ...] = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9505),
)
# Y row used for the lightness-only path; intentionally not the XYZ_MATRIX row.
LUMINANCE_ROW: Tuple[float, float, float] = (0.2126729, 0.7151522, 0.0721750)

LAB_EPSILON: float = 0.008856
LAB_KAPPA: float = 7.787
LAB_OFFSET: float = 4.0 / 29
LAB_INV_OFFSET: float = 16.0 / 116.0

# Sentinels for the brightness scan; every L* lies in [0, 100].
DARKEST_SENTINEL: float = 101.0
LIGHTEST_SENTINEL: float = -1.0

__all__ = [
    "PALETTE_SLOTS",
    "DEFAULT_SLOT",
    "LAST_CYCLE_SLOT",
    "PALETTE_SIZE",
    "PALETTE_BYTES",
    "NUMCOLORMAPS",
    "COLORMAP_BYTES",
    "DEFAULT_TRANSPARENT_INDEX",
    "SRGB_THRESHOLD",
    "SRGB_OFFSET",
    "SRGB_SCALE",
    "SRGB_GAMMA",
    "SRGB_LINEAR_DIV",
    "XYZ_MATRIX",
    "LUMINANCE_ROW",
    "LAB_EPSILON",
    "LAB_KAPPA",
    "LAB_OFFSET",
    "LAB_INV_OFFSET",
    "DARKEST_SENTINEL",
    "LIGHTEST_SENTINEL",
]
