# playpal_lab/registry.py
from __future__ import annotations

"""
Registry of named palette slots and the active selection.

The registry owns the per-slot Palette / PaletteMetadata cache. Nothing is
process-global: whoever owns the resource store owns the registry.

Exports:
  PaletteRegistry
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .analysis import analyze_palette, DuplicatePair
from .constants import DEFAULT_SLOT, LAST_CYCLE_SLOT, PALETTE_SLOTS
from .core_types import (
    Palette,
    PaletteError,
    PaletteMetadata,
    PaletteNotFoundError,
    U8Colormap,
)
from .palette_data import ResourceStore, palette_from_bytes
from .utils import debug_log, print_config_line


class PaletteRegistry:
    """
    Ordered palette slots backed by a ResourceStore.

    Args:
      store: lump source; a slot is "present" when store.has_lump(name) is true
      colormap: uint8 [NUMCOLORMAPS,256] table used for duplicate detection
      slots: (index, lump_name) pairs in cycling order
      default_slot: slot used at start and for out-of-range set_active()
      last_cycle_slot: cycling wraps to default_slot after this slot
      debug: verbose logging
    """

    def __init__(
        self,
        store: ResourceStore,
        colormap: Optional[U8Colormap] = None,
        *,
        slots: Sequence[Tuple[int, str]] = PALETTE_SLOTS,
        default_slot: int = DEFAULT_SLOT,
        last_cycle_slot: int = LAST_CYCLE_SLOT,
        debug: bool = False,
    ) -> None:
        self.store = store
        self.colormap = None if colormap is None else np.asarray(colormap, dtype=np.uint8)
        self.slots: List[Tuple[int, str]] = list(slots)
        self.default_slot = default_slot
        self.last_cycle_slot = min(last_cycle_slot, len(self.slots) - 1)
        self.debug = debug
        self._active = default_slot
        self._palettes: Dict[int, Palette] = {}
        self._metadata: Dict[int, PaletteMetadata] = {}

    # Slot queries

    @property
    def active_slot(self) -> int:
        return self._active

    def lump_name(self, slot: int) -> str:
        return self.slots[slot][1]

    def is_present(self, slot: int) -> bool:
        return self.store.has_lump(self.lump_name(slot))

    def present_slots(self) -> List[int]:
        return [i for i in range(len(self.slots)) if self.is_present(i)]

    # Selection

    def set_active(self, index: int) -> int:
        """Select a slot; out-of-range indices fall back to the default slot."""
        if index < 0 or index >= len(self.slots):
            index = self.default_slot
        self._active = index
        return self._active

    def cycle_next(self) -> int:
        """
        Advance to the next present slot, wrapping after last_cycle_slot.
        Absent slots are skipped. If the walk finds nothing before coming back
        round, the active slot is left as it was.
        """
        start = self._active
        candidate = start
        # Bounded so a start slot beyond the cycling range cannot loop forever.
        for _ in range(self.last_cycle_slot + 1):
            candidate += 1
            if candidate > self.last_cycle_slot:
                candidate = self.default_slot
            if candidate == start:
                break
            if self.is_present(candidate):
                self._active = candidate
                if self.debug:
                    debug_log(f"palette cycled to {self.lump_name(candidate)}")
                return self._active
            if self.debug:
                debug_log(f"skipping absent palette {self.lump_name(candidate)}")
        return self._active

    # Loading / analysis

    def palette(self, slot: int) -> Palette:
        """Palette for a slot, loaded on first use."""
        cached = self._palettes.get(slot)
        if cached is not None:
            return cached
        name = self.lump_name(slot)
        data = self.store.read_lump(name)
        if data is None:
            raise PaletteNotFoundError(f"palette lump {name} not found")
        pal = palette_from_bytes(name, slot, data)
        self._palettes[slot] = pal
        return pal

    def _analyse(
        self, slot: int, colormap: U8Colormap, keep: Optional[DuplicatePair]
    ) -> Tuple[int, PaletteMetadata]:
        meta = analyze_palette(
            self.palette(slot), colormap, duplicate_pair=keep, debug=self.debug
        )
        return slot, meta

    def _require_colormap(self) -> U8Colormap:
        if self.colormap is None:
            raise PaletteError("no colormap table supplied for palette analysis")
        return self.colormap

    def metadata(self, slot: int) -> PaletteMetadata:
        """PaletteMetadata for a slot, computed once and cached."""
        cached = self._metadata.get(slot)
        if cached is not None:
            return cached
        _slot, meta = self._analyse(slot, self._require_colormap(), None)
        self._metadata[slot] = meta
        return meta

    def initialise(
        self, colormap: Optional[U8Colormap] = None, workers: int = 1
    ) -> Dict[int, PaletteMetadata]:
        """
        Load and analyse every present slot. Absent slots are skipped.
        A transparency pair found by an earlier run is kept; brightness
        extremes are always recomputed.

        Returns:
          slot -> PaletteMetadata for the present slots
        """
        if colormap is not None:
            self.colormap = np.asarray(colormap, dtype=np.uint8)
        cm = self._require_colormap()

        present = self.present_slots()
        jobs = []
        for slot in present:
            old = self._metadata.get(slot)
            keep = None if old is None else (old.transparent_index, old.duplicate_index)
            jobs.append((slot, keep))

        if self.debug:
            print_config_line(
                "registry",
                [("Slots", len(self.slots)), ("Present", len(present)), ("Workers", workers)],
                True,
            )

        if workers <= 1 or len(jobs) <= 1:
            results = [self._analyse(slot, cm, keep) for slot, keep in jobs]
        else:
            # Load serially so the palette cache is not written from worker threads.
            for slot, _keep in jobs:
                self.palette(slot)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(self._analyse, slot, cm, keep) for slot, keep in jobs]
                results = [f.result() for f in futures]

        for slot, meta in results:
            self._metadata[slot] = meta
        return {slot: self._metadata[slot] for slot in present}

    def active_palette(self) -> Tuple[Palette, PaletteMetadata]:
        """(Palette, PaletteMetadata) of the active slot."""
        return self.palette(self._active), self.metadata(self._active)

    def free(self) -> None:
        """Drop cached palettes and metadata; the next query reloads."""
        self._palettes.clear()
        self._metadata.clear()


__all__ = ["PaletteRegistry"]
