"""Scored word list loading and pattern retrieval."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Pattern, Set

from ..core.constants import DEFAULT_FILE_SCORE, MAX_PARSE_ERRORS
from ..core.exceptions import DictionaryLoadError
from ..core.models import WordOption
from ..utils.logger import get_logger
from .normalization import parse_entry, parse_score

LOGGER = get_logger(__name__)

_DICT_WORD_RE = re.compile(r"^[A-Z]+$")


@dataclass
class DictionaryConfig:
    """Configuration for reading ``.dict`` word list files."""

    path: Path | str
    default_score: int = DEFAULT_FILE_SCORE
    max_errors: int = MAX_PARSE_ERRORS
    encoding: str = "utf-8"


def parse_dictionary_text(
    text: str,
    default_score: int = DEFAULT_FILE_SCORE,
    max_errors: int = MAX_PARSE_ERRORS,
) -> List[str]:
    """Parse ``WORD;score`` lines into normalized index entries.

    Lines whose word is not plain A-Z count as errors; parsing gives up once
    more than ``max_errors`` of them have been seen.
    """

    entries: List[str] = []
    errors = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        if errors > max_errors:
            LOGGER.warning("Stopped parsing after %d invalid lines", errors)
            break
        parts = line.split(";")
        word = parts[0].strip().upper()
        # a zero score counts as missing; negative scores pass through
        score = parse_score(parts[1], clamp=False) if len(parts) >= 2 else 0
        score = score or default_score
        if not _DICT_WORD_RE.match(word):
            errors += 1
            continue
        entries.append(f"{word};{score}")
    LOGGER.debug("Parsed %d valid words, %d errors", len(entries), errors)
    return entries


def load_dictionary_file(config: DictionaryConfig | Path | str) -> List[str]:
    """Read a word list file and return its parsed entries."""

    if not isinstance(config, DictionaryConfig):
        config = DictionaryConfig(path=config)
    source = Path(config.path)
    if not source.exists():
        raise DictionaryLoadError(f"Missing dictionary file: {source}")
    try:
        text = source.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(f"Unable to read {source}: {exc}") from exc
    entries = parse_dictionary_text(text, config.default_score, config.max_errors)
    LOGGER.info("Loaded %d words from %s", len(entries), source.name)
    return entries


class WordIndex:
    """Answers "words of length N matching pattern P" queries."""

    def __init__(self, entries: Optional[Iterable[str]] = None) -> None:
        self._entries_by_length: Dict[int, List[WordOption]] = defaultdict(list)
        self._words: Set[str] = set()
        self._size = 0
        if entries:
            self.load(entries)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self, entries: Iterable[str]) -> None:
        """Replace the indexed entries."""

        self._entries_by_length = defaultdict(list)
        self._words = set()
        self._size = 0
        skipped = 0
        for entry in entries:
            word, score = parse_entry(entry)
            if not word:
                skipped += 1
                continue
            self._entries_by_length[len(word)].append(WordOption(word=word, score=score, entry=entry))
            self._words.add(word)
            self._size += 1
        if skipped:
            LOGGER.debug("Skipped %d entries without letters", skipped)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self._size

    def contains(self, word: str) -> bool:
        return word.upper() in self._words

    def options_for(self, pattern: str) -> List[WordOption]:
        """Return entries matching ``pattern``, best score first.

        ``pattern`` uses ``?`` (or any non-letter) for open positions. Ties
        keep dictionary order.
        """

        matcher = self.compile_pattern(pattern)
        candidates = self._entries_by_length.get(len(pattern), [])
        matches = [option for option in candidates if matcher.fullmatch(option.word)]
        return sorted(matches, key=lambda option: option.score, reverse=True)

    @staticmethod
    def compile_pattern(pattern: str) -> Pattern[str]:
        parts = []
        for char in pattern.upper():
            if "A" <= char <= "Z":
                parts.append(char)
            else:
                parts.append("[A-Z]")
        return re.compile("".join(parts), re.IGNORECASE)


__all__ = [
    "DictionaryConfig",
    "WordIndex",
    "load_dictionary_file",
    "parse_dictionary_text",
]
