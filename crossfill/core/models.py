"""Data models supporting the auto-fill engine."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .constants import Direction


@dataclass
class Cell:
    """Represents a grid cell: black, or an optional single letter."""

    black: bool = False
    letter: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.black and not self.letter


@dataclass
class GridWord:
    """A maximal across or down run of at least two open cells."""

    start_row: int
    start_col: int
    direction: Direction
    length: int
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            dr, dc = self.direction.step
            self._cells = [
                (self.start_row + dr * i, self.start_col + dc * i) for i in range(self.length)
            ]
        return self._cells


@dataclass(frozen=True)
class WordOption:
    """A dictionary word that fits a slot."""

    word: str
    score: int
    entry: str


@dataclass(frozen=True)
class Crossing:
    """One side of the shared cell between two slots."""

    other_slot_id: int
    this_cell: int
    other_cell: int
    crossing_id: str


@dataclass(frozen=True)
class Choice:
    """A committed (slot, word) pair on the backtracking trail."""

    slot_id: int
    option: WordOption

    @property
    def word(self) -> str:
        return self.option.word


@dataclass
class Slot:
    """A grid word that still needs letters, with its candidate words.

    ``remaining_option_count`` is kept in step with ``eliminations`` by the
    mutating helpers below; never assign it directly.
    """

    id: int
    direction: Direction
    pattern: str
    cells: List[Tuple[int, int]]
    options: List[WordOption]
    crossings: List[Crossing] = field(default_factory=list)
    eliminations: Set[str] = field(default_factory=set)
    fixed_word: Optional[str] = None
    remaining_option_count: int = 0
    _word_counts: Dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._word_counts = dict(Counter(option.word for option in self.options))
        self.remaining_option_count = self._unfixed_count()

    @property
    def length(self) -> int:
        return len(self.cells)

    @property
    def is_fixed(self) -> bool:
        return self.fixed_word is not None

    def available_options(self) -> List[WordOption]:
        return [option for option in self.options if option.word not in self.eliminations]

    def eliminate(self, word: str) -> None:
        if word in self.eliminations:
            return
        self.eliminations.add(word)
        if not self.is_fixed:
            self.remaining_option_count -= self._word_counts.get(word, 0)

    def fix(self, word: str) -> None:
        self.fixed_word = word
        self.remaining_option_count = 1

    def unfix(self) -> None:
        self.fixed_word = None
        self.remaining_option_count = self._unfixed_count()

    def reset(self) -> None:
        self.eliminations = set()
        self.fixed_word = None
        self.remaining_option_count = len(self.options)

    def _unfixed_count(self) -> int:
        eliminated = sum(self._word_counts.get(word, 0) for word in self.eliminations)
        return len(self.options) - eliminated


@dataclass
class FillStatistics:
    """Counters describing one fill invocation."""

    states: int = 0
    backtracks: int = 0
    restricted_branchings: int = 0
    retries: int = 0
    total_time: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "states": self.states,
            "backtracks": self.backtracks,
            "restricted_branchings": self.restricted_branchings,
            "retries": self.retries,
            "total_time": self.total_time,
        }


@dataclass
class FillResult:
    success: bool
    message: str
    choices: List[Choice] = field(default_factory=list)


@dataclass
class GridStats:
    total_words: int
    filled_words: int
    empty_words: int
    completion_percentage: int
