"""Custom exception hierarchy for crossword generation."""


class CrosswordError(Exception):
    """Base exception for generator failures."""


class PackLoadError(CrosswordError):
    """Raised when a pack JSON document cannot be parsed."""


class WordBankError(CrosswordError):
    """Raised when a theme cannot supply enough usable candidate words."""


class GridShapeError(CrosswordError):
    """Raised when a grid handed to the model builder is not rectangular."""


class PlacementError(CrosswordError):
    """Raised when an attempt places too few Across or Down entries."""


class ValidationError(CrosswordError):
    """Raised when the quality guard rejects a finished grid."""


class GenerationExhaustedError(CrosswordError):
    """Raised when every attempt within the budget was rejected."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


class PuzzleUnavailableError(CrosswordError):
    """Raised when neither generation nor a static puzzle yields a playable grid."""
