from __future__ import annotations

import math
import random

import numpy as np
import pytest

from playpal_lab.colour_convert import rgb_to_lab
from playpal_lab.colour_search import (
    build_shift_table,
    find_nearest_xyz_colour,
    find_shifted_colour,
    palette_colour_lab,
    palette_colour_xyz,
    shift_lightness,
)
from playpal_lab.core_types import IDENTITY_ADJUSTMENT, LightnessAdjustment, Palette

from conftest import unique_entries


def test_identity_adjustment_returns_source(unique_palette):
    for i in (0, 1, 77, 128, 254, 255):
        assert find_shifted_colour(unique_palette, i, IDENTITY_ADJUSTMENT) == i


def test_identity_table_is_arange(unique_palette):
    table = build_shift_table(unique_palette, LightnessAdjustment(0, 1, 1))
    assert table.dtype == np.uint8
    np.testing.assert_array_equal(table, np.arange(256, dtype=np.uint8))


def test_ties_go_to_first_index():
    entries = unique_entries()
    entries[7] = entries[3]
    pal = Palette("PLAYPAL", 0, entries)
    assert find_shifted_colour(pal, 7, IDENTITY_ADJUSTMENT) == 3
    assert find_shifted_colour(pal, 3, IDENTITY_ADJUSTMENT) == 3


def test_halving_white_lands_near_mid_grey(grey_palette):
    idx = find_shifted_colour(grey_palette, 255, LightnessAdjustment(add=0, gamma=1, div=2))
    L = rgb_to_lab(grey_palette.rgb(idx))[0]
    assert idx < 255
    assert L == pytest.approx(50.0, abs=1.0)


def test_lightening_black_moves_up(grey_palette):
    idx = find_shifted_colour(grey_palette, 0, LightnessAdjustment(add=10, gamma=1, div=1))
    assert idx > 0
    assert rgb_to_lab(grey_palette.rgb(idx))[0] == pytest.approx(10.0, abs=1.0)


def test_darkening_is_monotonic_on_grey_ramp(grey_palette):
    darker = build_shift_table(grey_palette, LightnessAdjustment(add=0, gamma=1, div=1.5))
    assert np.all(darker[1:] >= darker[:-1])
    assert np.all(darker <= np.arange(256))


def test_non_finite_target_keeps_source(grey_palette):
    adj = LightnessAdjustment(add=-200, gamma=0.5, div=1)
    assert np.isnan(adj.apply(50.0))
    assert find_shifted_colour(grey_palette, 42, adj) == 42


def test_division_by_zero_keeps_source(grey_palette):
    adj = LightnessAdjustment(add=0, gamma=1, div=0)
    assert find_shifted_colour(grey_palette, 99, adj) == 99


def test_apply_matches_libm_pow():
    rng = random.Random(0)
    for _ in range(2000):
        lightness = rng.uniform(0.0, 100.0)
        add = rng.uniform(-10.0, 10.0)
        gamma = rng.uniform(0.5, 2.5)
        div = rng.uniform(0.5, 3.0)
        base = lightness + add
        if base <= 0:
            continue
        adj = LightnessAdjustment(add=add, gamma=gamma, div=div)
        assert adj.apply(lightness) == math.pow(base, gamma) / div


def test_apply_non_finite_results():
    assert math.isnan(LightnessAdjustment(add=-60, gamma=0.5, div=1).apply(50.0))
    assert LightnessAdjustment(add=0, gamma=1, div=0).apply(50.0) == math.inf
    assert LightnessAdjustment(add=0, gamma=1, div=-0.0).apply(50.0) == -math.inf
    assert math.isnan(LightnessAdjustment(add=-50, gamma=1, div=0).apply(50.0))
    assert LightnessAdjustment(add=0, gamma=400, div=1).apply(1e3) == math.inf
    assert LightnessAdjustment(add=-50, gamma=-1, div=1).apply(50.0) == math.inf


def test_empty_palette_returns_source():
    pal = Palette("EMPTY", 0, np.zeros((0, 3), dtype=np.uint8))
    assert len(pal) == 0
    assert find_shifted_colour(pal, 12, IDENTITY_ADJUSTMENT) == 12
    assert find_nearest_xyz_colour(pal.entries, (0.0, 0.0, 0.0)) == -1


def test_nearest_xyz_exact_hit(unique_palette):
    target = palette_colour_xyz(unique_palette.entries, 100)
    assert find_nearest_xyz_colour(unique_palette.entries, target) == 100


def test_shift_lightness_touches_only_L():
    lab = (40.0, 12.5, -7.25)
    L, a, b = shift_lightness(lab, LightnessAdjustment(add=2, gamma=2, div=4))
    assert L == pytest.approx(42.0**2 / 4)
    assert (a, b) == (12.5, -7.25)


def test_palette_colour_lab_matches_converter(unique_palette):
    assert palette_colour_lab(unique_palette.entries, 5) == rgb_to_lab(unique_palette.rgb(5))
