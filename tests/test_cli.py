from __future__ import annotations

import pytest

from playpal_inspect import parse_cli_args, run
from playpal_lab.core_types import PaletteNotFoundError

from conftest import colormap_lump, grey_ramp_entries, palette_lump, unique_entries


@pytest.fixture
def lump_dir(tmp_path, colormap):
    (tmp_path / "PLAYPAL.lmp").write_bytes(palette_lump(unique_entries(), extra_palettes=13))
    (tmp_path / "PLAYPAL2.lmp").write_bytes(palette_lump(grey_ramp_entries()))
    (tmp_path / "COLORMAP.lmp").write_bytes(colormap_lump(colormap))
    return tmp_path


def test_summary_and_shift(lump_dir, capsys):
    args = parse_cli_args(
        [str(lump_dir), "--cycle", "1", "--shift", "255", "0", "1", "2", "--workers", "2"]
    )
    assert run(args) == 0
    out = capsys.readouterr().out
    assert "PLAYPAL   transparent: 255  duplicate: -" in out
    assert "PLAYPAL2  transparent: 255  duplicate: -  black: 0  white: 255" in out
    assert "[active] Slot: 2  Lump: PLAYPAL2" in out
    assert "255 #ffffff ->" in out


def test_table_and_swatch(lump_dir, tmp_path, capsys):
    swatch = tmp_path / "out.png"
    args = parse_cli_args([str(lump_dir), "--table", "0", "1", "1", "--swatch", str(swatch)])
    assert run(args) == 0
    out = capsys.readouterr().out
    assert "  0   1   2   3" in out
    assert swatch.exists()


def test_missing_colormap_raises(tmp_path):
    (tmp_path / "PLAYPAL.lmp").write_bytes(palette_lump(unique_entries()))
    with pytest.raises(PaletteNotFoundError):
        run(parse_cli_args([str(tmp_path)]))


def test_missing_directory_exit_code(tmp_path, capsys):
    assert run(parse_cli_args([str(tmp_path / "nope")])) == 2
    assert "[error] not a directory" in capsys.readouterr().err


@pytest.mark.parametrize("index", ["300", "-1", "2.5"])
def test_shift_index_out_of_range_exit_code(lump_dir, capsys, index):
    args = parse_cli_args([str(lump_dir), "--shift", index, "0", "1", "1"])
    assert run(args) == 2
    err = capsys.readouterr().err
    assert "[error] shift index out of range" in err
