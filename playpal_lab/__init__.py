# playpal_lab/__init__.py
"""
playpal_lab package.

Purpose:
  Colour science for 256-entry indexed palettes (PLAYPAL lumps). See
  playpal_inspect.py for the CLI.

Public API:
  analyze_palette     : transparency/duplicate pair and darkest/lightest indices.
  find_shifted_colour : nearest palette index after a CIE L* shift.
  PaletteRegistry     : named palette slots, active selection, cycling.
  colour_convert      : sRGB / XYZ / Lab transforms and the XYZ distance.
  core_types          : Palette, PaletteMetadata, LightnessAdjustment, errors.
  palette_data        : lump decoding, resource stores, swatch output.
  utils               : tidy logging helpers.

Quick start:
  from playpal_lab import PaletteRegistry, MappingResourceStore
  reg = PaletteRegistry(MappingResourceStore({"PLAYPAL": data}), colormap)
  pal, meta = reg.active_palette()
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import palette_data
from . import utils

from .analysis import analyze_palette, brightness_extremes, find_duplicate_pair
from .colour_search import build_shift_table, find_shifted_colour
from .core_types import (
    IDENTITY_ADJUSTMENT,
    LightnessAdjustment,
    Palette,
    PaletteError,
    PaletteFormatError,
    PaletteMetadata,
    PaletteNotFoundError,
)
from .palette_data import (
    DirectoryResourceStore,
    MappingResourceStore,
    colormap_from_bytes,
    palette_from_bytes,
)
from .registry import PaletteRegistry

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "palette_data",
    "utils",
    "analyze_palette",
    "brightness_extremes",
    "find_duplicate_pair",
    "build_shift_table",
    "find_shifted_colour",
    "IDENTITY_ADJUSTMENT",
    "LightnessAdjustment",
    "Palette",
    "PaletteError",
    "PaletteFormatError",
    "PaletteMetadata",
    "PaletteNotFoundError",
    "DirectoryResourceStore",
    "MappingResourceStore",
    "colormap_from_bytes",
    "palette_from_bytes",
    "PaletteRegistry",
]
