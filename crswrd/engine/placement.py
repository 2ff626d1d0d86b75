"""Across scaffolding and Down crossing placement.

Across words are laid on spaced-out rows first; Down words are then
threaded vertically through existing letters. Neither engine backtracks: a
shortfall abandons the whole attempt.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence, Set, Tuple

from ..core.constants import BLOCK, Direction
from ..core.models import PlacedWord, WordEntry
from ..utils.logger import get_logger
from .grid import WorkingGrid


LOGGER = get_logger(__name__)


@dataclass
class AcrossPlacer:
    """Places at most one word per active row, at a random start column."""

    rng: random.Random = field(default_factory=random.Random)
    row_step_threshold: int = 11

    def row_step(self, size: int) -> int:
        return 2 if size >= self.row_step_threshold else 1

    def place(self, grid: WorkingGrid, words: Sequence[WordEntry]) -> List[PlacedWord]:
        size = grid.size
        step = self.row_step(size)
        shuffled = list(words)
        self.rng.shuffle(shuffled)

        placed: List[PlacedWord] = []
        row = 0
        for entry in shuffled:
            if row >= size:
                break
            word = entry.word
            if not word or len(word) > size:
                continue

            start_col = self.rng.randint(0, size - len(word))
            if start_col > 0:
                grid.set(row, start_col - 1, BLOCK)
            for offset, letter in enumerate(word):
                grid.set(row, start_col + offset, letter)
            after = start_col + len(word)
            if after < size:
                grid.set(row, after, BLOCK)

            placed.append(PlacedWord.from_entry(entry, Direction.ACROSS, row, start_col))
            LOGGER.debug("Across %s at r%dc%d", word, row, start_col)
            row += step
        return placed


def try_place_down(grid: WorkingGrid, word: str, start_row: int, start_col: int) -> bool:
    """Write ``word`` downwards from the given start if every rule holds.

    The word must stay in bounds, be capped by blocks (or the edge) above and
    below, cross at least one matching letter, and only carve blocks that are
    horizontally isolated so no stray Across fragment appears.
    """

    end_row = start_row + len(word) - 1
    if not grid.in_bounds(start_row, start_col) or not grid.in_bounds(end_row, start_col):
        return False
    if not grid.is_block_or_edge(start_row - 1, start_col):
        return False
    if not grid.is_block_or_edge(end_row + 1, start_col):
        return False

    crosses_existing = False
    for offset, letter in enumerate(word):
        row = start_row + offset
        existing = grid.get(row, start_col)
        if existing == BLOCK:
            if not grid.is_horizontally_isolated(row, start_col):
                return False
        elif existing == letter:
            crosses_existing = True
        else:
            return False
    if not crosses_existing:
        return False

    for offset, letter in enumerate(word):
        grid.set(start_row + offset, start_col, letter)
    return True


@dataclass
class DownPlacer:
    """Crosses candidates through existing letters, longest words first."""

    rng: random.Random = field(default_factory=random.Random)
    max_down: int = 12

    def crossing_starts(self, grid: WorkingGrid, word: str) -> List[Tuple[int, int]]:
        index = grid.letter_index()
        starts: List[Tuple[int, int]] = []
        for offset, letter in enumerate(word):
            for row, col in index.get(letter, ()):
                starts.append((row - offset, col))
        self.rng.shuffle(starts)
        return starts

    def place(
        self,
        grid: WorkingGrid,
        candidates: Sequence[WordEntry],
        already_placed: Sequence[PlacedWord],
    ) -> List[PlacedWord]:
        used: Set[str] = {placed.word for placed in already_placed}
        used_columns: Set[int] = set()
        ordered = sorted(
            (entry for entry in candidates if entry.word and entry.word not in used),
            key=lambda entry: len(entry.word),
            reverse=True,
        )

        placed: List[PlacedWord] = []
        for entry in ordered:
            if len(placed) >= self.max_down:
                break
            word = entry.word
            if word in used or len(word) > grid.size:
                continue

            starts = self.crossing_starts(grid, word)
            accepted = None
            # Pass 1 keeps Down starts out of used and neighbouring columns;
            # pass 2 drops that preference.
            for spaced in (True, False):
                for start_row, start_col in starts:
                    if spaced and used_columns & {start_col - 1, start_col, start_col + 1}:
                        continue
                    if try_place_down(grid, word, start_row, start_col):
                        accepted = (start_row, start_col)
                        break
                if accepted:
                    break
            if accepted is None:
                continue

            start_row, start_col = accepted
            placed.append(PlacedWord.from_entry(entry, Direction.DOWN, start_row, start_col))
            used_columns.add(start_col)
            used.add(word)
            LOGGER.debug("Down %s at r%dc%d", word, start_row, start_col)
        return placed
