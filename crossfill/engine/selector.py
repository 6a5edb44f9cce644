"""Slot ordering (dom/wdeg style) and weighted word choice."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..core.constants import DEFAULT_CROSSING_WEIGHT, MIN_SLOT_WEIGHT
from ..core.models import FillStatistics, Slot, WordOption
from ..utils.logger import get_logger
from .config import FillConfig
from .sampling import WeightedSampler, ladder_weights
from .slots import SlotGraph

LOGGER = get_logger(__name__)


class CrossingWeights:
    """Per-attempt weight of each crossing, keyed by crossing id."""

    def __init__(self, default: float = DEFAULT_CROSSING_WEIGHT) -> None:
        self.default = default
        self._weights: Dict[str, float] = {}

    def weight(self, crossing_id: str) -> float:
        return self._weights.get(crossing_id, self.default)

    def bump(self, crossing_id: str, amount: float) -> None:
        self._weights[crossing_id] = self.weight(crossing_id) + amount


class Selector:
    """Chooses which slot to fill next and which word to try in it."""

    def __init__(
        self,
        graph: SlotGraph,
        weights: CrossingWeights,
        sampler: WeightedSampler,
        config: Optional[FillConfig] = None,
        statistics: Optional[FillStatistics] = None,
    ) -> None:
        self.graph = graph
        self.weights = weights
        self.sampler = sampler
        self.config = config or FillConfig()
        self.statistics = statistics if statistics is not None else FillStatistics()

    # ------------------------------------------------------------------
    # Variable ordering
    # ------------------------------------------------------------------
    def slot_weight(self, slot: Slot) -> float:
        """Sum of crossing weights towards neighbours that are still open."""

        total = 0.0
        for crossing in slot.crossings:
            other = self.graph.get(crossing.other_slot_id)
            if other.remaining_option_count > 1:
                total += self.weights.weight(crossing.crossing_id)
        return max(total, MIN_SLOT_WEIGHT)

    def priority(self, slot: Slot) -> float:
        return slot.remaining_option_count / self.slot_weight(slot)

    @staticmethod
    def is_eligible(slot: Slot) -> bool:
        return not slot.is_fixed and slot.remaining_option_count > 0

    def choose_slot(self, last_slot_id: Optional[int] = None) -> Optional[Slot]:
        eligible = [slot for slot in self.graph if self.is_eligible(slot)]
        if not eligible:
            return None

        ranked = sorted(((self.priority(slot), slot) for slot in eligible), key=lambda item: item[0])
        best_priority = ranked[0][0]

        if last_slot_id is not None:
            last = self.graph.get(last_slot_id)
            if self.is_eligible(last):
                last_priority = self.priority(last)
                if last_priority - best_priority < self.config.adaptive_branching_threshold:
                    self.statistics.restricted_branchings += 1
                    LOGGER.debug("Staying on slot %d (priority %.2f, best %.2f)", last.id, last_priority, best_priority)
                    return last

        band = [slot for priority, slot in ranked if priority <= best_priority * self.config.top_band_factor]
        weights = ladder_weights(len(band), self.config.slot_weights)
        return self.sampler.choose(band, weights)

    # ------------------------------------------------------------------
    # Value ordering
    # ------------------------------------------------------------------
    def word_weights(self, options: Sequence[WordOption]) -> List[float]:
        base = ladder_weights(len(options), self.config.word_weights)
        return [
            weight * max(1.0, option.score / self.config.score_boost_divisor)
            for weight, option in zip(base, options)
        ]

    def choose_word(self, slot: Slot) -> Optional[WordOption]:
        available = slot.available_options()
        if not available:
            return None
        ranked = sorted(available, key=lambda option: option.score, reverse=True)
        top = ranked[: len(self.config.word_weights)]
        return self.sampler.choose(top, self.word_weights(top))
