"""Tuning knobs for the fill search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core import constants


@dataclass
class FillConfig:
    """Configuration values driving fallback, search and retries."""

    max_backtracks: int = constants.MAX_BACKTRACKS
    retry_limit: int = constants.RETRY_LIMIT
    retry_growth_factor: float = constants.RETRY_GROWTH_FACTOR
    retry_min_increment: int = constants.RETRY_MIN_INCREMENT
    adaptive_branching_threshold: float = constants.ADAPTIVE_BRANCHING_THRESHOLD
    top_band_factor: float = constants.TOP_BAND_FACTOR
    slot_weights: Tuple[int, ...] = constants.RANDOM_SLOT_WEIGHTS
    word_weights: Tuple[int, ...] = constants.RANDOM_WORD_WEIGHTS
    score_boost_divisor: float = constants.SCORE_BOOST_DIVISOR
    max_word_attempts: int = constants.MAX_WORD_ATTEMPTS
    failure_streak_threshold: int = constants.FAILURE_STREAK_THRESHOLD
    fallback_option_limit: int = constants.FALLBACK_OPTION_LIMIT
    # 0.0 keeps crossing weights static at 1.0
    conflict_weight_increment: float = 0.0
    validate: bool = True

    def next_backtrack_budget(self, current: int) -> int:
        return max(current + self.retry_min_increment, int(current * self.retry_growth_factor))
