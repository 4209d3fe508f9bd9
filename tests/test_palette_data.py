from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from playpal_lab.analysis import analyze_palette
from playpal_lab.core_types import Palette, PaletteFormatError, rgb_to_hex
from playpal_lab.palette_data import (
    DirectoryResourceStore,
    MappingResourceStore,
    colormap_from_bytes,
    palette_colours,
    palette_from_bytes,
    save_palette_swatch,
)

from conftest import colormap_lump, palette_lump, unique_entries


def test_palette_uses_first_of_several(unique_palette):
    data = palette_lump(unique_entries(), extra_palettes=13)
    pal = palette_from_bytes("PLAYPAL", 0, data)
    np.testing.assert_array_equal(pal.entries, unique_palette.entries)
    assert pal.entries.dtype == np.uint8


def test_high_bytes_stay_unsigned():
    data = bytes([255, 200, 128]) * 256
    pal = palette_from_bytes("PLAYPAL", 0, data)
    assert pal.rgb(0) == (255, 200, 128)


def test_palette_entries_are_read_only(unique_palette):
    with pytest.raises(ValueError):
        unique_palette.entries[0, 0] = 1


def test_short_palette_lump_raises():
    with pytest.raises(PaletteFormatError):
        palette_from_bytes("PLAYPAL", 0, bytes(767))
    # PaletteFormatError is also a ValueError.
    with pytest.raises(ValueError):
        palette_from_bytes("PLAYPAL", 0, b"")


def test_colormap_decoding(colormap):
    table = colormap_from_bytes(colormap_lump(colormap))
    assert table.shape == (32, 256)
    np.testing.assert_array_equal(table, colormap)
    with pytest.raises(PaletteFormatError):
        colormap_from_bytes(bytes(100))


def test_mapping_store_is_case_insensitive():
    store = MappingResourceStore({"playpal": b"abc"})
    assert store.has_lump("PLAYPAL")
    assert store.read_lump("PlayPal") == b"abc"
    assert store.read_lump("PLAYPAL1") is None


def test_directory_store(tmp_path):
    (tmp_path / "PLAYPAL.lmp").write_bytes(b"upper")
    (tmp_path / "e2pal.lmp").write_bytes(b"lower")
    store = DirectoryResourceStore(tmp_path)
    assert store.read_lump("playpal") == b"upper"
    assert store.read_lump("E2PAL") == b"lower"
    assert not store.has_lump("PLAYPAL1")
    assert store.read_lump("PLAYPAL1") is None


def test_palette_colours(unique_palette):
    colours = palette_colours(unique_palette)
    assert len(colours) == 256
    assert colours[3] == unique_palette.rgb(3)
    assert all(isinstance(c, int) for c in colours[3])


def test_rgb_to_hex():
    assert rgb_to_hex((255, 0, 16)) == "#ff0010"
    assert rgb_to_hex((0, 0, 0)) == "#000000"


def test_swatch_png(tmp_path, unique_palette, colormap):
    meta = analyze_palette(unique_palette, colormap)
    out = save_palette_swatch(tmp_path / "swatch.bmp", unique_palette, meta, cell=4)
    assert out.suffix == ".png"
    with Image.open(out) as im:
        assert im.size == (64, 64)
        # Untouched interior pixel of cell 17 (row 1, col 1).
        assert im.getpixel((6, 6)) == unique_palette.rgb(17)


def test_swatch_without_metadata(tmp_path):
    pal = Palette("E2PAL", 10, np.full((256, 3), 9, dtype=np.uint8))
    out = save_palette_swatch(tmp_path / "plain.png", pal)
    with Image.open(out) as im:
        assert im.size == (256, 256)
        assert im.getpixel((0, 0)) == (9, 9, 9)
