"""Custom exception hierarchy for grid auto-filling."""


class FillError(Exception):
    """Base exception for auto-fill failures."""


class DictionaryLoadError(FillError):
    """Raised when a dictionary file cannot be read."""


class GridFormatError(FillError):
    """Raised when a grid description cannot be parsed."""


class NoDictionaryLoaded(FillError):
    """Raised before any search when the word list is empty."""


class SlotUnsatisfiable(FillError):
    """Raised when a slot has no word left that fits."""


class BacktrackLimitExceeded(FillError):
    """Raised when an attempt spends its backtrack budget."""


class SearchExhausted(FillError):
    """Raised when backtracking runs out of choices to undo."""


class AllRetriesExhausted(FillError):
    """Raised when every seeded attempt has failed."""


class ValidationError(FillError):
    """Raised when a completed fill breaks the grid invariants."""
