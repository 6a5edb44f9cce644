"""Crossword auto-fill engine.

This package exposes the public API surface via:

- ``crossfill.engine.autofill.AutoFill``: fills every open word of a grid.
- ``crossfill.engine.grid.CrosswordGrid``: the grid model and its parsers.
- ``crossfill.data.dictionary.WordIndex``: scored word list with pattern queries.
"""

from .engine.autofill import AutoFill
from .engine.config import FillConfig
from .engine.grid import CrosswordGrid
from .data.dictionary import DictionaryConfig, WordIndex

__all__ = [
    "AutoFill",
    "CrosswordGrid",
    "DictionaryConfig",
    "FillConfig",
    "WordIndex",
]

__version__ = "0.1.0"
