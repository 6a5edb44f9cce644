"""Grid representation and helper utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import BLACK_SYMBOL, EMPTY_SYMBOLS, WILDCARD, Bounds, Direction
from ..core.exceptions import GridFormatError
from ..core.models import Cell, GridWord
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

GridSnapshot = List[List[Optional[str]]]


class CrosswordGrid:
    """A rectangular crossword grid with a fixed black-square mask.

    Word boundaries come purely from black-square adjacency, so the across
    and down words are derived once at construction and never change; only
    cell letters are mutable.
    """

    def __init__(self, cells: List[List[Cell]]) -> None:
        if not cells or not cells[0]:
            raise GridFormatError("Grid must contain at least one cell")
        width = len(cells[0])
        if any(len(row) != width for row in cells):
            raise GridFormatError("Grid rows must all have the same width")
        self.cells = cells
        self.bounds = Bounds(rows=len(cells), cols=width)
        self._words: Dict[Direction, List[GridWord]] = {
            direction: self._collect_words(direction) for direction in Direction
        }
        self._word_index: Dict[Tuple[Direction, int, int], GridWord] = {}
        for direction, words in self._words.items():
            for word in words:
                for row, col in word.cells:
                    self._word_index[(direction, row, col)] = word

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "CrosswordGrid":
        """Build a grid from text rows: ``#`` black, ``.`` empty, letters filled."""

        cells: List[List[Cell]] = []
        for r, row in enumerate(rows):
            parsed: List[Cell] = []
            for c, char in enumerate(row):
                if char == BLACK_SYMBOL:
                    parsed.append(Cell(black=True))
                elif char in EMPTY_SYMBOLS:
                    parsed.append(Cell())
                elif char.isascii() and char.isalpha():
                    parsed.append(Cell(letter=char.upper()))
                else:
                    raise GridFormatError(f"Unexpected character {char!r} at ({r},{c})")
            cells.append(parsed)
        return cls(cells)

    @classmethod
    def from_text(cls, text: str) -> "CrosswordGrid":
        rows = [line for line in text.splitlines() if line.strip()]
        return cls.from_rows(rows)

    @classmethod
    def from_file(cls, path: Path | str) -> "CrosswordGrid":
        source = Path(path)
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise GridFormatError(f"Unable to read grid file {source}: {exc}") from exc
        grid = cls.from_text(text)
        LOGGER.debug("Loaded %dx%d grid from %s", grid.bounds.rows, grid.bounds.cols, source.name)
        return grid

    def _collect_words(self, direction: Direction) -> List[GridWord]:
        words: List[GridWord] = []
        dr, dc = direction.step
        outer = self.bounds.rows if direction == Direction.ACROSS else self.bounds.cols
        inner = self.bounds.cols if direction == Direction.ACROSS else self.bounds.rows
        for a in range(outer):
            b = 0
            while b < inner:
                row, col = (a, b) if direction == Direction.ACROSS else (b, a)
                if self.cells[row][col].black:
                    b += 1
                    continue
                length = 0
                r, c = row, col
                while self.bounds.contains(r, c) and not self.cells[r][c].black:
                    length += 1
                    r += dr
                    c += dc
                if length >= 2:
                    words.append(GridWord(start_row=row, start_col=col, direction=direction, length=length))
                b += length
        return words

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def letter(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col].letter

    def set_letter(self, row: int, col: int, letter: str) -> None:
        cell = self.cells[row][col]
        if cell.black:
            raise GridFormatError(f"Cannot write a letter into black cell ({row},{col})")
        cell.letter = letter.upper()

    def clear_letter(self, row: int, col: int) -> None:
        self.cells[row][col].letter = None

    # ------------------------------------------------------------------
    # Word queries
    # ------------------------------------------------------------------
    def words(self, direction: Direction) -> List[GridWord]:
        return list(self._words[direction])

    def all_words(self) -> List[GridWord]:
        return self.words(Direction.ACROSS) + self.words(Direction.DOWN)

    def word_at(self, row: int, col: int, direction: Direction) -> Optional[GridWord]:
        """Return the word running through ``(row, col)`` in ``direction``."""

        return self._word_index.get((direction, row, col))

    def pattern(self, word: GridWord) -> str:
        return "".join(self.letter(row, col) or WILDCARD for row, col in word.cells)

    def is_word_complete(self, word: GridWord) -> bool:
        return not any(self.cells[row][col].is_empty() for row, col in word.cells)

    def lettered_cells(self) -> List[Tuple[int, int]]:
        return [
            (r, c)
            for r in range(self.bounds.rows)
            for c in range(self.bounds.cols)
            if self.cells[r][c].letter
        ]

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def snapshot(self) -> GridSnapshot:
        return [[cell.letter for cell in row] for row in self.cells]

    def restore(self, snapshot: GridSnapshot) -> None:
        for row, letters in zip(self.cells, snapshot):
            for cell, letter in zip(row, letters):
                cell.letter = letter

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_rows(self, empty: str = ".") -> List[str]:
        return [
            "".join(BLACK_SYMBOL if cell.black else (cell.letter or empty) for cell in row)
            for row in self.cells
        ]

    def to_jsonable(self) -> List[List[dict]]:
        return [
            [{"black": cell.black, "letter": cell.letter} for cell in row]
            for row in self.cells
        ]
