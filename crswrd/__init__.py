"""Themed crossword layout generator and puzzle model builder.

This package exposes the public API surface via:

- ``crswrd.engine.generator.CrosswordGenerator``: retrying layout generation.
- ``crswrd.engine.model_builder.build_model``: numbered model for any grid.
- ``crswrd.engine.session.PuzzleService``: generation with static fallback.
- ``crswrd.data.word_bank.WordBankStore``: themed word banks and static puzzles.
"""

from .core.constants import Difficulty, Direction, SizeClass, Tone
from .core.exceptions import CrosswordError, GenerationExhaustedError, GridShapeError, WordBankError
from .data.word_bank import WordBankStore
from .engine.generator import CrosswordGenerator, GeneratorConfig, generate
from .engine.model_builder import build_model
from .engine.recency import RecencyMemory
from .engine.session import LoadedPuzzle, PuzzleService

__all__ = [
    "CrosswordError",
    "CrosswordGenerator",
    "Difficulty",
    "Direction",
    "GenerationExhaustedError",
    "GeneratorConfig",
    "GridShapeError",
    "LoadedPuzzle",
    "PuzzleService",
    "RecencyMemory",
    "SizeClass",
    "Tone",
    "WordBankError",
    "WordBankStore",
    "build_model",
    "generate",
]

__version__ = "0.1.0"
