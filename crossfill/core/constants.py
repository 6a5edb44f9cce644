"""Shared constants and enumerations for the auto-fill engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def crossing(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


WILDCARD = "?"
BLACK_SYMBOL = "#"
EMPTY_SYMBOLS = frozenset({".", "?", "_", " "})

# Search tuning
ADAPTIVE_BRANCHING_THRESHOLD = 0.2
TOP_BAND_FACTOR = 2.0
RANDOM_SLOT_WEIGHTS: Tuple[int, ...] = (5, 3, 2, 1)
RANDOM_WORD_WEIGHTS: Tuple[int, ...] = (5, 3, 2, 1)
SCORE_BOOST_DIVISOR = 50.0
MIN_SLOT_WEIGHT = 0.1
DEFAULT_CROSSING_WEIGHT = 1.0
MAX_WORD_ATTEMPTS = 10
FAILURE_STREAK_THRESHOLD = 3
FALLBACK_OPTION_LIMIT = 5

# Retry escalation
RETRY_LIMIT = 5
MAX_BACKTRACKS = 1000
RETRY_GROWTH_FACTOR = 1.2
RETRY_MIN_INCREMENT = 100

# Dictionary files
DEFAULT_FILE_SCORE = 50
MAX_PARSE_ERRORS = 100

MESSAGE_ALREADY_COMPLETE = "Grid is already complete!"
MESSAGE_FILLED = "Grid filled successfully!"
MESSAGE_EXHAUSTED = "Could not find a valid solution. Try adding more words to your dictionary."
MESSAGE_NO_DICTIONARY = "No word list loaded. Please load a dictionary first."


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
