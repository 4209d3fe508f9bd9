#!/usr/bin/env python3
"""
playpal_inspect.py
Analyse the PLAYPAL-style palettes in a directory of extracted lumps.

Usage:
  python playpal_inspect.py LUMPS [--colormap NAME] [--slot N] [--cycle N]
      [--shift INDEX ADD GAMMA DIV] [--table ADD GAMMA DIV] [--swatch PATH]
      [--workers N] [--debug]

Input:
  LUMPS is a folder holding PLAYPAL.lmp, PLAYPAL1.lmp .. PLAYPAL9.lmp, E2PAL.lmp
  (any subset) and a COLORMAP lump.

Output:
  One summary line per present palette (transparent / duplicate / black / white),
  then the requested shift lookups for the active palette. --swatch writes a
  16x16 PNG grid of the active palette with the derived indices marked.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List

from playpal_lab.colour_search import build_shift_table, find_shifted_colour
from playpal_lab.core_types import LightnessAdjustment, PaletteError, PaletteNotFoundError, rgb_to_hex
from playpal_lab.palette_data import DirectoryResourceStore, colormap_from_bytes, save_palette_swatch
from playpal_lab.registry import PaletteRegistry
from playpal_lab.utils import (
    debug_log,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
)

# CLI args


def _default_workers() -> int:
    """One worker per core, capped at the number of palette slots."""
    return max(1, min(os.cpu_count() or 1, 11))


def parse_cli_args(argv: List[str] | None = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        lumps: Path to the lump folder
        colormap: colormap lump name
        slot: active slot before cycling
        cycle: number of cycle_next() steps
        shift: list of [index, add, gamma, div] lookups
        table: optional [add, gamma, div] for a full shift table
        swatch: optional PNG output path
        workers: analysis threads
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="playpal_inspect",
        description="Derive transparency, duplicate and brightness indices for indexed palettes.",
    )
    parser.add_argument("lumps", type=Path, help="Folder of extracted lumps")
    parser.add_argument(
        "--colormap", default="COLORMAP", help="Colormap lump name (default: COLORMAP)"
    )
    parser.add_argument("--slot", type=int, default=0, help="Active palette slot")
    parser.add_argument(
        "--cycle", type=int, default=0, help="Cycle to the next present palette N times"
    )
    parser.add_argument(
        "--shift",
        nargs=4,
        type=float,
        action="append",
        default=[],
        metavar=("INDEX", "ADD", "GAMMA", "DIV"),
        help="Nearest palette index after L' = (L + ADD) ** GAMMA / DIV. Repeatable.",
    )
    parser.add_argument(
        "--table",
        nargs=3,
        type=float,
        default=None,
        metavar=("ADD", "GAMMA", "DIV"),
        help="Print the shifted index for every entry of the active palette.",
    )
    parser.add_argument("--swatch", type=Path, default=None, help="Write a PNG swatch")
    parser.add_argument(
        "--workers", type=int, default=_default_workers(), help="Analysis threads"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose details")
    return parser.parse_args(argv)


def _print_table(table) -> None:
    for row in range(0, len(table), 16):
        log(" ".join(f"{int(v):3d}" for v in table[row : row + 16]))


# Entry point


def run(args: argparse.Namespace) -> int:
    """Run the inspection; returns a process exit code."""
    if not args.lumps.is_dir():
        error(f"not a directory: {args.lumps}")
        return 2

    store = DirectoryResourceStore(args.lumps)
    colormap_data = store.read_lump(args.colormap)
    if colormap_data is None:
        raise PaletteNotFoundError(f"colormap lump {args.colormap} not found")

    registry = PaletteRegistry(store, colormap_from_bytes(colormap_data), debug=args.debug)

    t0 = time.perf_counter()
    found = registry.initialise(workers=args.workers)
    if not found:
        raise PaletteNotFoundError(f"no palette lumps in {args.lumps}")

    print_banner("Palettes")
    for slot, meta in found.items():
        pal = registry.palette(slot)
        log(
            f"{pal.name:<9} "
            + key_value_pairs_to_string(
                [
                    ("transparent", meta.transparent_index),
                    ("duplicate", "-" if meta.duplicate_index is None else meta.duplicate_index),
                    ("black", meta.black_index),
                    ("white", meta.white_index),
                ]
            )
        )
    if args.debug:
        debug_log(f"analysis took {format_seconds_compact(time.perf_counter() - t0)}")

    registry.set_active(args.slot)
    for _ in range(max(0, args.cycle)):
        registry.cycle_next()
    pal, meta = registry.active_palette()
    print_config_line("active", [("Slot", registry.active_slot), ("Lump", pal.name)], debug=False)

    for index, _add, _gamma, _div in args.shift:
        if not float(index).is_integer() or not 0 <= index < len(pal):
            error(f"shift index out of range 0..{len(pal) - 1}: {index:g}")
            return 2

    if args.shift:
        print_banner("Shifts")
    for index, add, gamma, div in args.shift:
        src = int(index)
        adj = LightnessAdjustment(add=add, gamma=gamma, div=div)
        dst = find_shifted_colour(pal, src, adj)
        log(f"{src:3d} {rgb_to_hex(pal.rgb(src))} -> {dst:3d} {rgb_to_hex(pal.rgb(dst))}")

    if args.table is not None:
        add, gamma, div = args.table
        print_banner(f"Shift table (add={add:g} gamma={gamma:g} div={div:g})")
        _print_table(build_shift_table(pal, LightnessAdjustment(add, gamma, div)))

    if args.swatch is not None:
        out = save_palette_swatch(args.swatch, pal, meta)
        log(f"swatch -> {out}")
    return 0


def main() -> None:
    """CLI entry point."""
    args = parse_cli_args()
    try:
        code = run(args)
    except PaletteError as exc:
        error(str(exc))
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
