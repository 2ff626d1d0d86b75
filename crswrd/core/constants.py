"""Shared constants and enumerations for the crossword generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


BLOCK = "#"
MIN_ENTRY_LENGTH = 3
EVERYTHING_PACK_ID = "everything"
DEFAULT_PACK_ID = "general"
DEFAULT_CLUE = "(Generated clue)"
MISSING_CLUE = "(Clue missing)"


class Difficulty(str, Enum):
    """Difficulty only biases word-length weighting."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)


class Tone(str, Enum):
    """Clue flavour. ``RANDOM`` resolves to one of the others once per puzzle."""

    SERIOUS = "serious"
    FUNNY = "funny"
    RANDOM = "random"


class SizeClass(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


SIZE_BY_CLASS: Dict[SizeClass, int] = {
    SizeClass.SMALL: 11,
    SizeClass.MEDIUM: 13,
    SizeClass.LARGE: 15,
}

MIN_DOWN_BY_CLASS: Dict[SizeClass, int] = {
    SizeClass.SMALL: 3,
    SizeClass.MEDIUM: 4,
    SizeClass.LARGE: 5,
}


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols


def start_key(row: int, col: int) -> str:
    """Textual identity of an entry start, shared with the clue maps."""

    return f"r{row}c{col}"


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
