"""Auto-fill orchestration: greedy fallback first, then seeded search retries."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable, List, Optional

from ..core.constants import (MESSAGE_ALREADY_COMPLETE, MESSAGE_EXHAUSTED, MESSAGE_FILLED,
                              MESSAGE_NO_DICTIONARY)
from ..core.exceptions import AllRetriesExhausted, FillError, NoDictionaryLoaded, ValidationError
from ..core.models import Choice, FillResult, FillStatistics, GridStats
from ..data.dictionary import DictionaryConfig, WordIndex, load_dictionary_file
from ..utils.logger import get_logger
from .config import FillConfig
from .fallback import GreedyFill
from .grid import CrosswordGrid, GridSnapshot
from .search import SearchAttempt
from .slots import SlotGraph
from .validator import FillValidator

LOGGER = get_logger(__name__)


class AutoFill:
    """Fills every open word of a grid from a scored word list.

    The grid is mutated in place. On failure its letters are put back
    exactly as they were before ``auto_fill_grid`` was called.
    """

    def __init__(
        self,
        grid: CrosswordGrid,
        config: Optional[FillConfig] = None,
        index: Optional[WordIndex] = None,
    ) -> None:
        self.grid = grid
        self.config = config or FillConfig()
        self.index = index or WordIndex()
        self.validator = FillValidator()
        self.statistics = FillStatistics()
        self.graph: Optional[SlotGraph] = None

    # ------------------------------------------------------------------
    # Word list
    # ------------------------------------------------------------------
    def set_word_list(self, entries: Iterable[str]) -> None:
        self.index.load(entries)
        LOGGER.info("Word list set: %d entries", len(self.index))

    def load_dictionary(self, config: DictionaryConfig | Path | str) -> None:
        self.set_word_list(load_dictionary_file(config))

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def auto_fill_grid(self) -> FillResult:
        if len(self.index) == 0:
            raise NoDictionaryLoaded(MESSAGE_NO_DICTIONARY)

        self.statistics = FillStatistics()
        started = time.perf_counter()
        try:
            return self._fill()
        finally:
            self.statistics.total_time = time.perf_counter() - started
            LOGGER.info("Auto-fill finished: %s", self.statistics.as_dict())

    def get_grid_stats(self) -> GridStats:
        words = self.grid.all_words()
        total = len(words)
        filled = sum(1 for word in words if self.grid.is_word_complete(word))
        if total == 0:
            percentage = 100
        else:
            # integer half-up rounding
            percentage = (filled * 200 + total) // (2 * total)
        return GridStats(
            total_words=total,
            filled_words=filled,
            empty_words=total - filled,
            completion_percentage=percentage,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _fill(self) -> FillResult:
        graph = SlotGraph.build(self.grid, self.index)
        self.graph = graph
        if len(graph) == 0:
            LOGGER.info(MESSAGE_ALREADY_COMPLETE)
            return FillResult(success=True, message=MESSAGE_ALREADY_COMPLETE)

        for slot in graph.unsatisfiable():
            LOGGER.warning("No dictionary words match slot %d (%s)", slot.id, slot.pattern)

        snapshot = self.grid.snapshot()
        fallback = GreedyFill(self.grid, graph, self.config)
        if fallback.run() and self._accept(graph, fallback.choices):
            LOGGER.info("Greedy fill succeeded")
            return FillResult(success=True, message=MESSAGE_FILLED, choices=list(fallback.choices))

        try:
            choices = self._search(graph, snapshot)
        except AllRetriesExhausted as exc:
            LOGGER.warning("%s", exc)
            self.grid.restore(snapshot)
            graph.reset()
            return FillResult(success=False, message=MESSAGE_EXHAUSTED)
        return FillResult(success=True, message=MESSAGE_FILLED, choices=choices)

    def _search(self, graph: SlotGraph, snapshot: GridSnapshot) -> List[Choice]:
        max_backtracks = self.config.max_backtracks
        failure_streak = 0
        for seed in range(self.config.retry_limit):
            self.grid.restore(snapshot)
            graph.reset()
            self.statistics.retries = seed
            LOGGER.info(
                "Search attempt %d/%d (max backtracks %d)", seed + 1, self.config.retry_limit, max_backtracks,
            )
            attempt = SearchAttempt(
                self.grid,
                graph,
                seed=seed,
                max_backtracks=max_backtracks,
                config=self.config,
                statistics=self.statistics,
                failure_streak=failure_streak,
            )
            try:
                choices = attempt.run()
                if not self._accept(graph, choices):
                    raise ValidationError("Filled grid failed validation")
                LOGGER.info("Search attempt %d succeeded with %d words", seed + 1, len(choices))
                return choices
            except FillError as exc:
                LOGGER.warning("Search attempt %d failed: %s", seed + 1, exc)
                failure_streak = attempt.failure_streak
                max_backtracks = self.config.next_backtrack_budget(max_backtracks)
                continue
        raise AllRetriesExhausted(f"No fill found after {self.config.retry_limit} attempts")

    def _accept(self, graph: SlotGraph, choices: List[Choice]) -> bool:
        if not self.config.validate:
            return True
        return self.validator.validate(self.grid, graph, choices).ok
