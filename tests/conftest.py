from __future__ import annotations

import numpy as np
import pytest

from playpal_lab.constants import NUMCOLORMAPS, PALETTE_BYTES
from playpal_lab.core_types import Palette
from playpal_lab.palette_data import identity_colormap


def unique_entries() -> np.ndarray:
    """256 pairwise-distinct colours (red channel is the index)."""
    idx = np.arange(256, dtype=np.int64)
    return np.stack([idx, (idx * 37 + 11) % 256, (255 - idx * 3) % 256], axis=1).astype(
        np.uint8
    )


def grey_ramp_entries() -> np.ndarray:
    idx = np.arange(256, dtype=np.uint8)
    return np.stack([idx, idx, idx], axis=1)


@pytest.fixture
def unique_palette() -> Palette:
    return Palette(name="PLAYPAL", slot=0, entries=unique_entries())


@pytest.fixture
def grey_palette() -> Palette:
    return Palette(name="PLAYPAL", slot=0, entries=grey_ramp_entries())


@pytest.fixture
def colormap() -> np.ndarray:
    return identity_colormap()


def palette_lump(entries: np.ndarray, extra_palettes: int = 0) -> bytes:
    data = np.asarray(entries, dtype=np.uint8).tobytes()
    assert len(data) == PALETTE_BYTES
    return data + bytes(PALETTE_BYTES * extra_palettes)


def colormap_lump(table: np.ndarray, extra_rows: int = 2) -> bytes:
    assert table.shape == (NUMCOLORMAPS, 256)
    return table.astype(np.uint8).tobytes() + bytes(256 * extra_rows)
