"""Single-pass greedy fill tried before the full search."""

from __future__ import annotations

from typing import List, Optional

from ..core.models import Choice
from ..utils.logger import get_logger
from .config import FillConfig
from .grid import CrosswordGrid
from .placement import PlacementBoard
from .slots import SlotGraph

LOGGER = get_logger(__name__)


class GreedyFill:
    """Most-constrained-first placement with no backtracking.

    Cheap enough to run on every invocation; catches sparse or loosely
    constrained grids before the weighted search is needed.
    """

    def __init__(self, grid: CrosswordGrid, graph: SlotGraph, config: Optional[FillConfig] = None) -> None:
        self.grid = grid
        self.graph = graph
        self.config = config or FillConfig()
        self.choices: List[Choice] = []

    def run(self) -> bool:
        board = PlacementBoard(self.grid, self.graph)
        self.choices = board.choices
        ordered = sorted(self.graph, key=lambda slot: len(slot.options))
        for slot in ordered:
            if slot.is_fixed:
                continue
            available = slot.available_options()
            if not available:
                LOGGER.debug("Greedy fill: no options for slot %d (%s)", slot.id, slot.pattern)
                return False
            tried = available[: self.config.fallback_option_limit]
            if not any(board.try_place(slot, option) for option in tried):
                LOGGER.debug("Greedy fill: could not place any of %d words in slot %d", len(tried), slot.id)
                return False
        LOGGER.info("Greedy fill placed %d words", len(board.choices))
        return True
