"""Main crossword generator orchestration.

One attempt runs: select candidates, place Across scaffolding, cross Down
words through it, run the quality guard. Any shortfall throws the attempt
away and starts over on a fresh grid; there is no backtracking. A finished
grid gets its clues derived and its words remembered for the theme.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import (
    DEFAULT_PACK_ID,
    MIN_DOWN_BY_CLASS,
    MIN_ENTRY_LENGTH,
    SIZE_BY_CLASS,
    Difficulty,
    SizeClass,
    Tone,
    clamp,
)
from ..core.exceptions import GenerationExhaustedError, PlacementError, ValidationError, WordBankError
from ..core.models import PlacedWord, Puzzle, PuzzleMeta, WordEntry
from ..data.word_bank import Pack, WordBankStore, merge_word_banks
from ..io.clues import ClueFormatter, DefaultClueFormatter, derive_clues
from ..utils.logger import get_logger
from .grid import WorkingGrid
from .placement import AcrossPlacer, DownPlacer
from .recency import RecencyMemory
from .selector import DEFAULT_LENGTH_WEIGHTS, CandidateSelector, LengthWeights
from .validator import QualityGuard


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    attempt_limit: int = 30
    min_entry_length: int = MIN_ENTRY_LENGTH
    min_bank_size: int = 6
    min_candidates: int = 6
    min_across: int = 5
    across_ratio: float = 0.75
    across_bounds: Tuple[int, int] = (6, 12)
    down_ratio: float = 0.9
    down_bounds: Tuple[int, int] = (5, 12)
    min_down: Dict[SizeClass, int] = field(default_factory=lambda: dict(MIN_DOWN_BY_CLASS))
    row_step_threshold: int = 11
    sizes: Dict[SizeClass, int] = field(default_factory=lambda: dict(SIZE_BY_CLASS))
    length_weights: Mapping[Difficulty, LengthWeights] = field(
        default_factory=lambda: dict(DEFAULT_LENGTH_WEIGHTS)
    )
    seed: Optional[int] = None

    def grid_size(self, size_class: SizeClass) -> int:
        return self.sizes[SizeClass(size_class)]

    def across_target(self, size: int) -> int:
        return clamp(int(size * self.across_ratio), *self.across_bounds)

    def down_cap(self, size: int) -> int:
        return clamp(int(size * self.down_ratio), *self.down_bounds)

    def min_down_for(self, size_class: SizeClass) -> int:
        return self.min_down[SizeClass(size_class)]


class CrosswordGenerator:
    """Retrying layout generator over a word bank store.

    ``memory`` is shared state: pass the same :class:`RecencyMemory` to every
    generator that should avoid repeating a theme's recent words.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        store: Optional[WordBankStore] = None,
        memory: Optional[RecencyMemory] = None,
        clue_formatter: Optional[ClueFormatter] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.store = store or WordBankStore()
        self.memory = memory or RecencyMemory()
        self.clue_formatter = clue_formatter or DefaultClueFormatter()
        self.selector = CandidateSelector(
            memory=self.memory,
            rng=self.rng,
            tables=self.config.length_weights,
        )
        self.guard = QualityGuard(min_length=self.config.min_entry_length)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(
        self,
        pack_id: str = DEFAULT_PACK_ID,
        tone: Tone = Tone.SERIOUS,
        difficulty: Difficulty = Difficulty.MEDIUM,
        size_class: SizeClass = SizeClass.MEDIUM,
    ) -> Puzzle:
        tone = self.resolve_tone(tone)
        difficulty = Difficulty(difficulty)
        size_class = SizeClass(size_class)
        size = self.config.grid_size(size_class)

        pack = self.store.get(pack_id)
        candidates = self.candidates(pack, size)
        limit = self.config.attempt_limit

        for attempt in range(1, limit + 1):
            LOGGER.info(
                "Generation attempt %s/%s for '%s' (%s, %dx%d)",
                attempt,
                limit,
                pack.id,
                difficulty.value,
                size,
                size,
            )
            try:
                rows, placed = self._attempt(pack.id, candidates, difficulty, size, size_class)
            except (PlacementError, ValidationError) as exc:
                LOGGER.warning("Generation attempt %s failed: %s", attempt, exc)
                continue

            clues = derive_clues(
                rows,
                placed,
                tone,
                formatter=self.clue_formatter,
                min_length=self.config.min_entry_length,
            )
            self.memory.remember(pack.id, [word.word for word in placed])
            LOGGER.info(
                "Crossword generation completed with %s words after %s attempt(s)",
                len(placed),
                attempt,
            )
            return Puzzle(
                grid=rows,
                clues=clues,
                meta=PuzzleMeta(
                    pack_id=pack.id,
                    puzzle_id=f"gen-{pack.id}-{int(time.time() * 1000)}",
                    title=f"Generated ({pack.name})",
                    difficulty=difficulty.value,
                    tone=tone.value,
                    size=size,
                    attempts=attempt,
                    seed=self.config.seed,
                ),
                placed_words=placed,
            )

        LOGGER.warning("Unable to generate a '%s' crossword after %s attempts", pack.id, limit)
        raise GenerationExhaustedError(
            f"Unable to generate crossword for '{pack.id}' after {limit} attempts",
            attempts=limit,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def resolve_tone(self, tone: Tone) -> Tone:
        tone = Tone(tone)
        if tone == Tone.RANDOM:
            return self.rng.choice([Tone.SERIOUS, Tone.FUNNY])
        return tone

    def candidates(self, pack: Pack, size: int) -> List[WordEntry]:
        """Usable words for a ``size`` grid; raises :class:`WordBankError` when too few."""

        if len(pack.word_bank) < self.config.min_bank_size:
            raise WordBankError(
                f"Word bank '{pack.id}' has {len(pack.word_bank)} entries, "
                f"needs at least {self.config.min_bank_size}"
            )
        usable = [
            entry
            for entry in merge_word_banks([pack])
            if self.config.min_entry_length <= len(entry.word) <= size
        ]
        if len(usable) < self.config.min_candidates:
            raise WordBankError(
                f"Word bank '{pack.id}' has {len(usable)} usable candidates for a "
                f"{size}x{size} grid, needs at least {self.config.min_candidates}"
            )
        return usable

    def _attempt(
        self,
        theme: str,
        candidates: Sequence[WordEntry],
        difficulty: Difficulty,
        size: int,
        size_class: SizeClass,
    ) -> Tuple[List[str], List[PlacedWord]]:
        grid = WorkingGrid(size)

        selected = self.selector.select(theme, candidates, difficulty, self.config.across_target(size))
        across = AcrossPlacer(rng=self.rng, row_step_threshold=self.config.row_step_threshold).place(
            grid, selected
        )
        if len(across) < self.config.min_across:
            raise PlacementError(f"Placed {len(across)} across words, need {self.config.min_across}")

        down = DownPlacer(rng=self.rng, max_down=self.config.down_cap(size)).place(grid, candidates, across)
        min_down = self.config.min_down_for(size_class)
        if len(down) < min_down:
            raise PlacementError(f"Placed {len(down)} down words, need {min_down}")

        rows = grid.to_rows()
        self.guard.ensure(rows)
        return rows, across + down


def generate(
    pack_id: str = DEFAULT_PACK_ID,
    tone: Tone = Tone.SERIOUS,
    difficulty: Difficulty = Difficulty.MEDIUM,
    size_class: SizeClass = SizeClass.MEDIUM,
    **kwargs,
) -> Puzzle:
    """One-shot generation; ``kwargs`` are passed to :class:`CrosswordGenerator`."""

    return CrosswordGenerator(**kwargs).generate(pack_id, tone, difficulty, size_class)
