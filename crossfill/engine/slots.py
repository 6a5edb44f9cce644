"""Slot and crossing graph construction."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from ..core.constants import WILDCARD, Direction
from ..core.models import Crossing, Slot
from ..data.dictionary import WordIndex
from ..utils.logger import get_logger
from .grid import CrosswordGrid

LOGGER = get_logger(__name__)


def crossing_key(slot_a: int, slot_b: int, cell_a: int, cell_b: int) -> str:
    """Return the id shared by both mirror records of one crossing."""

    if slot_a > slot_b:
        slot_a, slot_b, cell_a, cell_b = slot_b, slot_a, cell_b, cell_a
    return f"{slot_a}-{slot_b}-{cell_a}-{cell_b}"


def find_crossing(slot: Slot, other: Slot) -> Optional[Crossing]:
    """Return the first cell ``slot`` shares with ``other``, if any."""

    for i, coord in enumerate(slot.cells):
        for j, other_coord in enumerate(other.cells):
            if coord == other_coord:
                return Crossing(
                    other_slot_id=other.id,
                    this_cell=i,
                    other_cell=j,
                    crossing_id=crossing_key(slot.id, other.id, i, j),
                )
    return None


def link_crossings(slots: List[Slot]) -> None:
    for slot in slots:
        slot.crossings = []
        for other in slots:
            if other.id == slot.id:
                continue
            crossing = find_crossing(slot, other)
            if crossing:
                slot.crossings.append(crossing)


class SlotGraph:
    """Slots needing letters, their crossings, and the letters given up front.

    Shape (cells, patterns, options, crossings) is fixed for the lifetime of
    one fill invocation; only per-slot search state changes.
    """

    def __init__(self, slots: List[Slot], given_cells: FrozenSet[Tuple[int, int]] = frozenset()) -> None:
        self.slots = slots
        self.given_cells = given_cells
        self._by_id: Dict[int, Slot] = {slot.id: slot for slot in slots}

    @classmethod
    def build(cls, grid: CrosswordGrid, index: WordIndex) -> "SlotGraph":
        slots: List[Slot] = []
        for direction in (Direction.ACROSS, Direction.DOWN):
            for word in grid.words(direction):
                pattern = grid.pattern(word)
                if WILDCARD not in pattern:
                    continue
                options = index.options_for(pattern)
                slot = Slot(
                    id=len(slots),
                    direction=direction,
                    pattern=pattern,
                    cells=list(word.cells),
                    options=options,
                )
                LOGGER.debug(
                    "Slot %d %s at (%d,%d) pattern=%s options=%d",
                    slot.id, direction.value, word.start_row, word.start_col, pattern, len(options),
                )
                slots.append(slot)
        link_crossings(slots)
        graph = cls(slots, frozenset(grid.lettered_cells()))
        LOGGER.info("Built %d slots with %d crossings", len(slots), graph.crossing_count())
        return graph

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots)

    def get(self, slot_id: int) -> Slot:
        return self._by_id[slot_id]

    def crossing_count(self) -> int:
        return sum(len(slot.crossings) for slot in self.slots) // 2

    def unsatisfiable(self) -> List[Slot]:
        return [slot for slot in self.slots if not slot.options]

    def fixed_slots(self) -> List[Slot]:
        return [slot for slot in self.slots if slot.is_fixed]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        for slot in self.slots:
            slot.reset()
