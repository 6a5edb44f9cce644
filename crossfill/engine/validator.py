"""Deterministic checks over a completed fill."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set

from ..core.exceptions import ValidationError
from ..core.models import Choice
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .slots import SlotGraph

LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class FillValidator:
    """Runs deterministic validation over a filled grid."""

    def validate(self, grid: CrosswordGrid, graph: SlotGraph, choices: Sequence[Choice]) -> ValidationResult:
        try:
            self._check_all_fixed(graph, choices)
            self._check_patterns(graph)
            self._check_letters(grid, graph)
            self._check_no_duplicate_words(choices)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_all_fixed(self, graph: SlotGraph, choices: Sequence[Choice]) -> None:
        for slot in graph:
            if not slot.is_fixed:
                raise ValidationError(f"Slot {slot.id} ({slot.pattern}) was left unfilled")
        fixed = len(graph.fixed_slots())
        if len(choices) != fixed:
            raise ValidationError(f"Expected {fixed} choices, found {len(choices)}")

    def _check_patterns(self, graph: SlotGraph) -> None:
        for slot in graph:
            word = slot.fixed_word or ""
            for position, (expected, actual) in enumerate(zip(slot.pattern, word)):
                if expected.isalpha() and expected != actual:
                    raise ValidationError(
                        f"Slot {slot.id} word {word} breaks pattern {slot.pattern} at {position}"
                    )

    def _check_letters(self, grid: CrosswordGrid, graph: SlotGraph) -> None:
        for slot in graph:
            written = "".join(grid.letter(row, col) or "" for row, col in slot.cells)
            if written != slot.fixed_word:
                raise ValidationError(
                    f"Slot {slot.id} reads {written!r} in the grid but holds {slot.fixed_word}"
                )

    def _check_no_duplicate_words(self, choices: Sequence[Choice]) -> None:
        seen: Set[str] = set()
        for choice in choices:
            if choice.word in seen:
                raise ValidationError(f"Duplicate word '{choice.word}' in slot {choice.slot_id}")
            seen.add(choice.word)
