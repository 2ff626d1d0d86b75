"""Puzzle loading with static fallback, producing a model and a fresh play state."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_PACK_ID, Difficulty, SizeClass, Tone
from ..core.exceptions import CrosswordError, GridShapeError, PuzzleUnavailableError, WordBankError
from ..core.models import Puzzle, PuzzleModel, PuzzleState
from ..data.word_bank import WordBankStore
from ..io.clues import ClueFormatter
from ..utils.logger import get_logger
from .generator import CrosswordGenerator, GeneratorConfig
from .model_builder import build_model
from .recency import RecencyMemory


LOGGER = get_logger(__name__)

SOURCE_GENERATED = "generated"
SOURCE_STATIC = "static"


@dataclass
class LoadedPuzzle:
    source: str
    puzzle: Puzzle
    model: PuzzleModel
    state: PuzzleState


class PuzzleService:
    """Owns the store, recency memory and RNG shared by every load."""

    def __init__(
        self,
        store: Optional[WordBankStore] = None,
        memory: Optional[RecencyMemory] = None,
        config: Optional[GeneratorConfig] = None,
        rng: Optional[random.Random] = None,
        clue_formatter: Optional[ClueFormatter] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.store = store or WordBankStore()
        self.memory = memory or RecencyMemory()
        self.generator = CrosswordGenerator(
            config=self.config,
            store=self.store,
            memory=self.memory,
            clue_formatter=clue_formatter,
            rng=self.rng,
        )

    def load(
        self,
        pack_id: str = DEFAULT_PACK_ID,
        tone: Tone = Tone.RANDOM,
        difficulty: Difficulty = Difficulty.MEDIUM,
        size_class: SizeClass = SizeClass.MEDIUM,
    ) -> LoadedPuzzle:
        # Both the generated and the static path must see the same tone.
        tone = self.generator.resolve_tone(tone)
        difficulty = Difficulty(difficulty)

        try:
            puzzle = self.generator.generate(pack_id, tone, difficulty, size_class)
            model = build_model(puzzle.grid, puzzle.clues)
        except CrosswordError as exc:
            LOGGER.warning("Generation failed for '%s', using a static puzzle: %s", pack_id, exc)
        else:
            return LoadedPuzzle(SOURCE_GENERATED, puzzle, model, PuzzleState.for_model(model))

        return self.load_static(pack_id, tone, difficulty)

    def load_static(
        self,
        pack_id: str = DEFAULT_PACK_ID,
        tone: Tone = Tone.SERIOUS,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> LoadedPuzzle:
        tone = self.generator.resolve_tone(tone)
        try:
            puzzle = self.store.pick_static_puzzle(pack_id, tone, difficulty, self.rng)
        except PuzzleUnavailableError:
            LOGGER.error("No static puzzle available for '%s'", pack_id)
            raise
        except WordBankError as exc:
            LOGGER.error("No static puzzle available for '%s': %s", pack_id, exc)
            raise PuzzleUnavailableError(str(exc)) from exc
        try:
            model = build_model(puzzle.grid, puzzle.clues)
        except GridShapeError as exc:
            LOGGER.error("Static puzzle %s is invalid: %s", puzzle.meta.puzzle_id, exc)
            raise PuzzleUnavailableError(
                f"Static puzzle {puzzle.meta.puzzle_id} for '{pack_id}' is invalid: {exc}"
            ) from exc
        return LoadedPuzzle(SOURCE_STATIC, puzzle, model, PuzzleState.for_model(model))
