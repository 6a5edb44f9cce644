"""Backtracking search over slots, expressed as an explicit state machine.

One :class:`SearchAttempt` is a single seeded run with a fixed backtrack
budget. ``step()`` advances exactly one transition so a host loop can
interleave other work between steps; ``run()`` simply steps to the end::

    SELECT -> TRY_WORD -> PLACED -> SELECT
                       -> ELIMINATED -> TRY_WORD | BACKTRACK | FAILED
    BACKTRACK -> SELECT | FAILED
    SELECT -> DONE | FAILED
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from ..core.exceptions import (BacktrackLimitExceeded, FillError, SearchExhausted,
                               SlotUnsatisfiable)
from ..core.models import Choice, FillStatistics, Slot
from ..utils.logger import get_logger
from .config import FillConfig
from .grid import CrosswordGrid
from .placement import PlacementBoard
from .sampling import LinearCongruentialRNG, UniformSource, WeightedSampler
from .selector import CrossingWeights, Selector
from .slots import SlotGraph

LOGGER = get_logger(__name__)


class SearchState(str, Enum):
    SELECT = "SELECT"
    TRY_WORD = "TRY_WORD"
    PLACED = "PLACED"
    ELIMINATED = "ELIMINATED"
    BACKTRACK = "BACKTRACK"
    DONE = "DONE"
    FAILED = "FAILED"


TERMINAL_STATES = frozenset({SearchState.DONE, SearchState.FAILED})


class SearchAttempt:
    """A single seeded attempt at filling every slot of ``graph``."""

    def __init__(
        self,
        grid: CrosswordGrid,
        graph: SlotGraph,
        seed: int,
        max_backtracks: int,
        config: Optional[FillConfig] = None,
        statistics: Optional[FillStatistics] = None,
        failure_streak: int = 0,
        rng: Optional[UniformSource] = None,
    ) -> None:
        self.grid = grid
        self.graph = graph
        self.seed = seed
        self.max_backtracks = max_backtracks
        self.config = config or FillConfig()
        self.statistics = statistics if statistics is not None else FillStatistics()
        self.failure_streak = failure_streak

        self.board = PlacementBoard(grid, graph)
        self.weights = CrossingWeights()
        self.selector = Selector(
            graph,
            self.weights,
            WeightedSampler(rng or LinearCongruentialRNG(seed)),
            self.config,
            self.statistics,
        )

        self.state = SearchState.SELECT
        self.backtracks = 0
        self.failure: Optional[FillError] = None
        self.last_slot_id: Optional[int] = None
        self._slot: Optional[Slot] = None
        self._word_attempts = 0
        self._word_limit = 0

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    @property
    def choices(self) -> List[Choice]:
        return self.board.choices

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def run(self) -> List[Choice]:
        """Step until DONE (returning the choices) or FAILED (raising)."""

        while not self.finished:
            self.step()
        if self.state == SearchState.FAILED:
            assert self.failure is not None
            raise self.failure
        return list(self.board.choices)

    def step(self) -> SearchState:
        handlers = {
            SearchState.SELECT: self._select,
            SearchState.TRY_WORD: self._try_word,
            SearchState.PLACED: self._placed,
            SearchState.ELIMINATED: self._eliminated,
            SearchState.BACKTRACK: self._backtrack,
        }
        handler = handlers.get(self.state)
        if handler is not None:
            self.state = handler()
        return self.state

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------
    def _select(self) -> SearchState:
        self.statistics.states += 1
        for slot in self.graph:
            if not slot.is_fixed and slot.remaining_option_count <= 0:
                return self._fail(SlotUnsatisfiable(f"Slot {slot.id} ({slot.pattern}) has no words left"))

        slot = self.selector.choose_slot(self.last_slot_id)
        if slot is None:
            LOGGER.debug("Seed %d: all %d slots filled", self.seed, len(self.graph))
            return SearchState.DONE

        available = slot.available_options()
        if not available:
            return self._fail(SlotUnsatisfiable(f"No options available for slot {slot.id} ({slot.pattern})"))
        self._slot = slot
        self._word_attempts = 0
        self._word_limit = min(len(available), self.config.max_word_attempts)
        return SearchState.TRY_WORD

    def _try_word(self) -> SearchState:
        slot = self._current_slot()
        if self._word_attempts >= self._word_limit:
            return self._slot_failed(slot)
        option = self.selector.choose_word(slot)
        if option is None:
            return self._slot_failed(slot)

        self.last_slot_id = slot.id
        self._word_attempts += 1
        if self.board.try_place(slot, option):
            LOGGER.debug("Placed %s in slot %d (score %d)", option.word, slot.id, option.score)
            return SearchState.PLACED
        slot.eliminate(option.word)
        LOGGER.debug("Eliminated %s for slot %d", option.word, slot.id)
        return SearchState.ELIMINATED

    def _placed(self) -> SearchState:
        self._slot = None
        return SearchState.SELECT

    def _eliminated(self) -> SearchState:
        slot = self._current_slot()
        if self._word_attempts >= self._word_limit or not slot.available_options():
            return self._slot_failed(slot)
        return SearchState.TRY_WORD

    def _slot_failed(self, slot: Slot) -> SearchState:
        self.failure_streak += 1
        self._slot = None
        if self.config.conflict_weight_increment:
            for crossing in slot.crossings:
                self.weights.bump(crossing.crossing_id, self.config.conflict_weight_increment)
        LOGGER.debug(
            "Slot %d failed after %d words (streak %d)", slot.id, self._word_attempts, self.failure_streak,
        )
        if self.failure_streak >= self.config.failure_streak_threshold:
            return SearchState.BACKTRACK
        return self._fail(SlotUnsatisfiable(f"Could not place any word in slot {slot.id} ({slot.pattern})"))

    def _backtrack(self) -> SearchState:
        target: Optional[Choice] = None
        while True:
            self.backtracks += 1
            self.statistics.backtracks += 1
            if self.backtracks > self.max_backtracks:
                return self._fail(BacktrackLimitExceeded(
                    f"Exceeded backtrack limit of {self.max_backtracks}"
                ))

            if target is not None:
                slot = self.graph.get(target.slot_id)
                slot.eliminate(target.word)
                if slot.available_options():
                    self.last_slot_id = slot.id
                    self.failure_streak = 0
                    return SearchState.SELECT

            if not self.board.choices:
                return self._fail(SearchExhausted("No more choices to backtrack"))
            target = self.board.undo_last()
            LOGGER.debug("Undid %s from slot %d", target.word, target.slot_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _current_slot(self) -> Slot:
        assert self._slot is not None, "no slot selected"
        return self._slot

    def _fail(self, error: FillError) -> SearchState:
        self.failure = error
        LOGGER.debug("Seed %d failed: %s", self.seed, error)
        return SearchState.FAILED
