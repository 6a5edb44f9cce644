"""Shared helpers for dictionary word normalization."""

from __future__ import annotations

import re
import unicodedata
from typing import Tuple

WORD_RE = re.compile(r"[^A-Z]")
SCORE_RE = re.compile(r"\s*([+-]?\d+)")
ENTRY_SEPARATORS = (";", ":")


def clean_word(text: str) -> str:
    """Return an uppercase A-Z representation of ``text``.

    Accented letters are folded to their base letter; anything else that is
    not a letter is dropped.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return WORD_RE.sub("", stripped.upper())


def parse_score(text: str, default: int = 0, clamp: bool = True) -> int:
    """Parse the leading integer of ``text`` the way a lenient parser would.

    Negative values are clamped to zero unless ``clamp`` is false.
    """

    match = SCORE_RE.match(text or "")
    if not match:
        return default
    value = int(match.group(1))
    return max(0, value) if clamp else value


def split_entry(entry: str) -> Tuple[str, str]:
    """Split ``WORD;score`` or ``WORD:score`` into raw word and score text.

    The semicolon wins when both separators appear.
    """

    for separator in ENTRY_SEPARATORS:
        index = entry.find(separator)
        if index != -1:
            return entry[:index], entry[index + 1:]
    return entry, ""


def parse_entry(entry: str) -> Tuple[str, int]:
    """Return the normalized word and score of a dictionary entry."""

    raw_word, raw_score = split_entry(entry)
    return clean_word(raw_word), parse_score(raw_score)


__all__ = ["clean_word", "parse_entry", "parse_score", "split_entry"]
