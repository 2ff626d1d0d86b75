"""Clue derivation for frozen grids."""

from __future__ import annotations

from typing import Dict, Iterable, Protocol

from ..core.constants import MIN_ENTRY_LENGTH, Tone
from ..core.models import ClueMap, PlacedWord
from ..engine.grid import Run, iter_runs
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class ClueFormatter(Protocol):
    def placeholder(self, run: Run, tone: Tone) -> str:
        """Return clue text for a run that no placed word accounts for."""


class DefaultClueFormatter:
    """Plain placeholder text for incidental runs."""

    def placeholder(self, run: Run, tone: Tone) -> str:
        if tone == Tone.FUNNY:
            return f"Generated {run.direction.value}: {run.text}"
        return f"Generated {run.direction.value} entry ({run.length})"


def placed_clue_lookup(placed_words: Iterable[PlacedWord], tone: Tone) -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for placed in placed_words:
        lookup.setdefault(placed.word, placed.clue(tone))
    return lookup


def derive_clues(
    rows: Iterable[str],
    placed_words: Iterable[PlacedWord],
    tone: Tone,
    formatter: ClueFormatter | None = None,
    min_length: int = MIN_ENTRY_LENGTH,
) -> ClueMap:
    """Re-scan ``rows`` and produce one clue per entry, keyed by start key.

    Runs that spell a placed word take that word's tone-selected clue;
    anything else gets a formatter placeholder.
    """

    rows = list(rows)
    formatter = formatter or DefaultClueFormatter()
    lookup = placed_clue_lookup(placed_words, tone)
    clues = ClueMap()
    placeholders = 0
    for run in iter_runs(rows):
        if run.length < min_length:
            continue
        text = lookup.get(run.text)
        if text is None:
            text = formatter.placeholder(run, tone)
            placeholders += 1
        clues.for_direction(run.direction)[run.start_key] = text
    if placeholders:
        LOGGER.debug("Derived %d placeholder clue(s)", placeholders)
    return clues
