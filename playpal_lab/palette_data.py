# playpal_lab/palette_data.py
from __future__ import annotations

"""
Palette lumps: decoding, resource stores, and swatch output.

Exports:
  ResourceStore            : protocol (has_lump, read_lump)
  MappingResourceStore     : in-memory lumps keyed by name
  DirectoryResourceStore   : <dir>/<NAME>.lmp files
  palette_from_bytes(name, slot, data) -> Palette
  colormap_from_bytes(data) -> uint8 [NUMCOLORMAPS,256]
  palette_colours(palette) -> list[RGBTuple]
  save_palette_swatch(path, palette, metadata=None, cell=16) -> Path
"""

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol

import numpy as np
from PIL import Image, ImageDraw

from .constants import COLORMAP_BYTES, NUMCOLORMAPS, PALETTE_BYTES, PALETTE_SIZE
from .core_types import (
    Palette,
    PaletteFormatError,
    PaletteMetadata,
    RGBTuple,
    U8Colormap,
    coerce_to_rgb_tuple,
)


# Resource stores


class ResourceStore(Protocol):
    def has_lump(self, name: str) -> bool: ...

    def read_lump(self, name: str) -> Optional[bytes]: ...


class MappingResourceStore:
    """Lumps held in memory. Names are case-insensitive."""

    def __init__(self, lumps: Optional[Mapping[str, bytes]] = None) -> None:
        self._lumps: Dict[str, bytes] = {}
        for name, data in (lumps or {}).items():
            self.add(name, data)

    def add(self, name: str, data: bytes) -> None:
        self._lumps[name.upper()] = bytes(data)

    def has_lump(self, name: str) -> bool:
        return name.upper() in self._lumps

    def read_lump(self, name: str) -> Optional[bytes]:
        return self._lumps.get(name.upper())


class DirectoryResourceStore:
    """Lumps extracted to a directory as NAME.lmp (upper or lower case)."""

    def __init__(self, root: Path, suffix: str = ".lmp") -> None:
        self.root = Path(root)
        self.suffix = suffix

    def _path_for(self, name: str) -> Optional[Path]:
        for stem in (name.upper(), name.lower()):
            path = self.root / f"{stem}{self.suffix}"
            if path.is_file():
                return path
        return None

    def has_lump(self, name: str) -> bool:
        return self._path_for(name) is not None

    def read_lump(self, name: str) -> Optional[bytes]:
        path = self._path_for(name)
        if path is None:
            return None
        return path.read_bytes()


# Decoding


def palette_from_bytes(name: str, slot: int, data: bytes) -> Palette:
    """
    Build a Palette from the first 768 bytes of a lump.
    PLAYPAL lumps usually carry several palettes back to back; only the first is used.
    """
    if len(data) < PALETTE_BYTES:
        raise PaletteFormatError(
            f"{name}: lump is {len(data)} bytes, need at least {PALETTE_BYTES}"
        )
    entries = np.frombuffer(data, dtype=np.uint8, count=PALETTE_BYTES)
    return Palette(name=name, slot=slot, entries=entries.reshape(PALETTE_SIZE, 3))


def colormap_from_bytes(data: bytes) -> U8Colormap:
    """First NUMCOLORMAPS rows of a COLORMAP lump as a uint8 [NUMCOLORMAPS,256] table."""
    if len(data) < COLORMAP_BYTES:
        raise PaletteFormatError(
            f"COLORMAP: lump is {len(data)} bytes, need at least {COLORMAP_BYTES}"
        )
    table = np.frombuffer(data, dtype=np.uint8, count=COLORMAP_BYTES)
    return table.reshape(NUMCOLORMAPS, PALETTE_SIZE).copy()


def identity_colormap(rows: int = NUMCOLORMAPS) -> U8Colormap:
    """Colormap where every row maps each index to itself."""
    return np.tile(np.arange(PALETTE_SIZE, dtype=np.uint8), (rows, 1))


def palette_colours(palette: Palette) -> List[RGBTuple]:
    """RGB tuples in palette order, e.g. for handing to a display layer."""
    return [coerce_to_rgb_tuple(row) for row in palette.entries.tolist()]


# Swatch output


def save_palette_swatch(
    path: Path,
    palette: Palette,
    metadata: Optional[PaletteMetadata] = None,
    cell: int = 16,
) -> Path:
    """
    Save a 16x16 grid PNG of the palette. With metadata, the transparent cell is
    crossed out and the black / white cells are outlined.
    """
    path = Path(path)
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")

    cols = 16
    rows = max(1, (len(palette) + cols - 1) // cols)
    grid = np.zeros((rows * cols, 3), dtype=np.uint8)
    grid[: len(palette)] = palette.entries
    grid = grid.reshape(rows, cols, 3)
    im = Image.fromarray(grid).resize(
        (cols * cell, rows * cell), resample=Image.Resampling.NEAREST
    )

    if metadata is not None:
        draw = ImageDraw.Draw(im)

        def box(i: int):
            y, x = divmod(i, cols)
            return (x * cell, y * cell, (x + 1) * cell - 1, (y + 1) * cell - 1)

        x0, y0, x1, y1 = box(metadata.transparent_index)
        draw.line((x0, y0, x1, y1), fill=(255, 0, 255))
        draw.line((x0, y1, x1, y0), fill=(255, 0, 255))
        draw.rectangle(box(metadata.black_index), outline=(255, 255, 255))
        draw.rectangle(box(metadata.white_index), outline=(0, 0, 0))

    im.save(path)
    return path


__all__ = [
    "ResourceStore",
    "MappingResourceStore",
    "DirectoryResourceStore",
    "palette_from_bytes",
    "colormap_from_bytes",
    "identity_colormap",
    "palette_colours",
    "save_palette_swatch",
]
