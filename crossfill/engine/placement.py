"""Placing and undoing words for one fill attempt."""

from __future__ import annotations

from typing import List, Set

from ..core.models import Choice, Slot, WordOption
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .slots import SlotGraph

LOGGER = get_logger(__name__)


class PlacementBoard:
    """Owns the choice stack and placed-word set of a single attempt.

    The stack length always equals the number of fixed slots, and
    ``placed_words`` is exactly the set of words on the stack. Build a new
    board per attempt instead of clearing an old one.
    """

    def __init__(self, grid: CrosswordGrid, graph: SlotGraph) -> None:
        self.grid = grid
        self.graph = graph
        self.choices: List[Choice] = []
        self.placed_words: Set[str] = set()

    def conflicts(self, slot: Slot, word: str) -> bool:
        for (row, col), letter in zip(slot.cells, word):
            existing = self.grid.letter(row, col)
            if existing and existing != letter:
                return True
        return False

    def is_duplicate(self, word: str) -> bool:
        return word in self.placed_words

    def try_place(self, slot: Slot, option: WordOption) -> bool:
        """Write ``option`` into ``slot`` unless it clashes or repeats."""

        word = option.word
        if len(word) != slot.length or self.conflicts(slot, word):
            return False
        if self.is_duplicate(word):
            LOGGER.debug("Skipping duplicate word %s for slot %d", word, slot.id)
            return False
        for (row, col), letter in zip(slot.cells, word):
            self.grid.set_letter(row, col, letter)
        slot.fix(word)
        self.choices.append(Choice(slot_id=slot.id, option=option))
        self.placed_words.add(word)
        return True

    def undo_last(self) -> Choice:
        """Pop the newest choice and erase the letters nobody else relies on."""

        choice = self.choices.pop()
        slot = self.graph.get(choice.slot_id)
        for row, col in slot.cells:
            if not self.is_cell_locked(row, col, slot):
                self.grid.clear_letter(row, col)
        slot.unfix()
        self.placed_words.discard(choice.word)
        return choice

    def is_cell_locked(self, row: int, col: int, slot: Slot) -> bool:
        """A cell stays lettered if it was given, or its crossing word is complete."""

        if (row, col) in self.graph.given_cells:
            return True
        crossing_word = self.grid.word_at(row, col, slot.direction.crossing)
        return crossing_word is not None and self.grid.is_word_complete(crossing_word)
