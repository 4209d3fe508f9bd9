# playpal_lab/colour_convert.py
from __future__ import annotations

"""
Colour conversions and metrics (sRGB, XYZ on a 0..100 scale, CIE Lab).

Exports:
  srgb_to_linear(channel)
  linear_to_xyz(r, g, b)
  linear_to_luminance(r, g, b)
  xyz_to_lab(x, y, z)
  lab_to_xyz(L, a, b)
  xyz_distance_squared(p1, p2)
  rgb_to_xyz(rgb)
  rgb_to_lab(rgb)
  luminance_to_lightness(y)
  entry_lightness(rgb)
  palette_to_xyz(entries)
  palette_lightness(entries)

The per-entry maths is scalar on purpose: derived palette indices depend on
exact tie-breaking, so every value goes through the same double-precision pow
calls. Whole-palette helpers stack the scalar results into float64 arrays.
"""

import math
from typing import Sequence

import numpy as np

from .constants import (
    LAB_EPSILON,
    LAB_INV_OFFSET,
    LAB_KAPPA,
    LAB_OFFSET,
    LUMINANCE_ROW,
    SRGB_GAMMA,
    SRGB_LINEAR_DIV,
    SRGB_OFFSET,
    SRGB_SCALE,
    SRGB_THRESHOLD,
    XYZ_MATRIX,
)
from .core_types import LabTuple, U8Entries, XYZ, XYZTuple


# sRGB to linear


def srgb_to_linear(channel: int) -> float:
    """Convert one 0..255 sRGB channel to linear light in 0..1."""
    c = int(channel) / 255.0
    if c > SRGB_THRESHOLD:
        return ((c + SRGB_OFFSET) / SRGB_SCALE) ** SRGB_GAMMA
    return c / SRGB_LINEAR_DIV


# Linear RGB to XYZ


def linear_to_xyz(r: float, g: float, b: float) -> XYZTuple:
    """Linear RGB (0..1) to XYZ (0..100) with the four-digit sRGB matrix."""
    r *= 100
    g *= 100
    b *= 100
    (xr, xg, xb), (yr, yg, yb), (zr, zg, zb) = XYZ_MATRIX
    x = xr * r + xg * g + xb * b
    y = yr * r + yg * g + yb * b
    z = zr * r + zg * g + zb * b
    return (x, y, z)


def linear_to_luminance(r: float, g: float, b: float) -> float:
    """Y only, using the seven-digit luminance row."""
    r *= 100
    g *= 100
    b *= 100
    yr, yg, yb = LUMINANCE_ROW
    return yr * r + yg * g + yb * b


# XYZ <-> Lab


def _lab_f(t: float) -> float:
    return t ** (1.0 / 3) if t > LAB_EPSILON else LAB_KAPPA * t + LAB_OFFSET


def _lab_f_inv(t: float) -> float:
    try:
        t3 = t**3.0
    except OverflowError:
        t3 = math.copysign(math.inf, t)
    return t3 if t3 > LAB_EPSILON else (t - LAB_INV_OFFSET) / LAB_KAPPA


def xyz_to_lab(x: float, y: float, z: float) -> LabTuple:
    """XYZ (0..100) to CIE Lab. The white point is implicitly (100, 100, 100)."""
    fx = _lab_f(x / 100.0)
    fy = _lab_f(y / 100.0)
    fz = _lab_f(z / 100.0)
    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


def lab_to_xyz(lightness: float, a: float, b: float) -> XYZTuple:
    """Inverse of xyz_to_lab."""
    fy = (lightness + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0
    return (_lab_f_inv(fx) * 100.0, _lab_f_inv(fy) * 100.0, _lab_f_inv(fz) * 100.0)


def luminance_to_lightness(y: float) -> float:
    """L* from Y alone."""
    return 116 * _lab_f(y / 100.0) - 16


# Metrics


def xyz_distance_squared(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Squared Euclidean distance in XYZ. Only relative ordering matters."""
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    dz = p2[2] - p1[2]
    return dx * dx + dy * dy + dz * dz


# Compositions


def rgb_to_xyz(rgb: Sequence[int]) -> XYZTuple:
    """sRGB bytes to XYZ via the full matrix."""
    return linear_to_xyz(
        srgb_to_linear(rgb[0]), srgb_to_linear(rgb[1]), srgb_to_linear(rgb[2])
    )


def rgb_to_lab(rgb: Sequence[int]) -> LabTuple:
    """sRGB bytes to CIE Lab via the full matrix."""
    return xyz_to_lab(*rgb_to_xyz(rgb))


def entry_lightness(rgb: Sequence[int]) -> float:
    """L* of one sRGB triple via the luminance-only path."""
    y = linear_to_luminance(
        srgb_to_linear(rgb[0]), srgb_to_linear(rgb[1]), srgb_to_linear(rgb[2])
    )
    return luminance_to_lightness(y)


# Whole-palette helpers


def palette_to_xyz(entries: U8Entries) -> XYZ:
    """
    XYZ rows for every palette entry.
    Args:
      entries: uint8 array [N,3]
    Returns:
      float64 array [N,3]
    """
    rows = [rgb_to_xyz(row) for row in np.asarray(entries, dtype=np.uint8).tolist()]
    return np.array(rows, dtype=np.float64).reshape(-1, 3)


def palette_lightness(entries: U8Entries) -> np.ndarray:
    """Luminance-path L* for every palette entry. float64 array [N]."""
    values = [entry_lightness(row) for row in np.asarray(entries, dtype=np.uint8).tolist()]
    return np.array(values, dtype=np.float64)


__all__ = [
    "srgb_to_linear",
    "linear_to_xyz",
    "linear_to_luminance",
    "xyz_to_lab",
    "lab_to_xyz",
    "luminance_to_lightness",
    "xyz_distance_squared",
    "rgb_to_xyz",
    "rgb_to_lab",
    "entry_lightness",
    "palette_to_xyz",
    "palette_lightness",
]
