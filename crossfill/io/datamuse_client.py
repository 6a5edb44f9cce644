"""Lightweight HTTP client for Datamuse spelled-like lookups."""

from __future__ import annotations

from typing import Any, Dict, List

import requests

from ..core.constants import DEFAULT_FILE_SCORE
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class DatamuseAPIError(RuntimeError):
    """Raised when the Datamuse API cannot be reached or answers badly."""


class DatamuseClient:
    """Suggests words for a partially lettered pattern such as ``C?T``."""

    API_URL = "https://api.datamuse.com/words"

    def __init__(self, timeout_seconds: float = 10.0, max_results: int = 500) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_results = max_results

    def search(self, pattern: str) -> List[str]:
        """Return uppercase words of ``len(pattern)`` matching ``pattern``."""
        query = "".join(char if char.isalpha() else "?" for char in pattern.lower())
        try:
            response = requests.get(
                self.API_URL,
                params={"sp": query, "max": self.max_results},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise DatamuseAPIError(f"Datamuse request failed: {exc}") from exc
        except ValueError as exc:
            raise DatamuseAPIError("Datamuse returned invalid JSON") from exc

        words = self._extract_words(payload, len(pattern))
        LOGGER.debug("Datamuse returned %d words for %s", len(words), pattern)
        return words

    def word_list(self, pattern: str, score: int = DEFAULT_FILE_SCORE) -> List[str]:
        return [f"{word};{score}" for word in self.search(pattern)]

    @staticmethod
    def _extract_words(payload: Any, length: int) -> List[str]:
        if not isinstance(payload, list):
            raise DatamuseAPIError("Datamuse response is not a list")
        words: List[str] = []
        for item in payload:
            entry: Dict[str, Any] = item if isinstance(item, dict) else {}
            word = str(entry.get("word") or "")
            if len(word) == length and word.isascii() and word.isalpha():
                words.append(word.upper())
        return words
