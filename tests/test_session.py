import random
import unittest
from unittest.mock import patch

from crswrd.core.constants import Difficulty, SizeClass, Tone
from crswrd.core.exceptions import PuzzleUnavailableError
from crswrd.core.models import ClueMap, Puzzle, PuzzleMeta, WordEntry
from crswrd.data.word_bank import Pack, StaticPuzzle, WordBankStore
from crswrd.engine.generator import GeneratorConfig
from crswrd.engine.session import SOURCE_GENERATED, SOURCE_STATIC, PuzzleService


MINIMAL = ["CAT#DOG", "A#O#A#O", "TAR#RAT", "###A###", "OWL#EMU"]


def static_puzzle(grid=MINIMAL, difficulty="easy") -> StaticPuzzle:
    return StaticPuzzle(
        id="tiny-001",
        title="Tiny",
        difficulty=difficulty,
        grid=list(grid),
        clues={
            "serious": ClueMap(across={"r0c0": "Feline"}, down={"r0c0": "Kitty"}),
            "funny": ClueMap(across={"r0c0": "Internet royalty"}),
        },
    )


def tiny_store(puzzles) -> WordBankStore:
    words = [WordEntry(word, "clue") for word in ("ERA", "ORE", "EMU")]
    return WordBankStore(packs=[Pack(id="general", name="General", word_bank=words, puzzles=puzzles)])


class PuzzleServiceTests(unittest.TestCase):
    def test_generated_puzzle_comes_with_model_and_state(self) -> None:
        service = PuzzleService(config=GeneratorConfig(attempt_limit=100, seed=12))
        loaded = service.load("animals", Tone.SERIOUS, Difficulty.EASY, SizeClass.SMALL)

        self.assertEqual(loaded.source, SOURCE_GENERATED)
        self.assertEqual(loaded.model.rows, 11)
        self.assertFalse(loaded.model.cell(*loaded.state.active).is_block)
        self.assertEqual(loaded.state.filled, {})
        self.assertEqual(service.memory.snapshot("animals")[0], [w.word for w in loaded.puzzle.placed_words])

    def test_generation_failure_falls_back_to_static(self) -> None:
        service = PuzzleService(store=tiny_store([static_puzzle()]), rng=random.Random(1))
        with self.assertLogs("crswrd.engine.session", level="WARNING"):
            loaded = service.load("general", Tone.FUNNY, Difficulty.HARD, SizeClass.SMALL)

        self.assertEqual(loaded.source, SOURCE_STATIC)
        self.assertEqual(loaded.puzzle.meta.puzzle_id, "tiny-001")
        self.assertEqual(loaded.puzzle.meta.tone, "funny")
        self.assertEqual(loaded.model.across_entries[0].clue, "Internet royalty")
        self.assertEqual(loaded.state.active, (0, 0))

    def test_random_tone_is_resolved_once(self) -> None:
        service = PuzzleService(store=tiny_store([static_puzzle()]), rng=random.Random(3))
        loaded = service.load("general", Tone.RANDOM, Difficulty.EASY, SizeClass.SMALL)
        self.assertIn(loaded.puzzle.meta.tone, ("serious", "funny"))

    def test_unbuildable_generated_grid_falls_back(self) -> None:
        service = PuzzleService(store=tiny_store([static_puzzle()]))
        ragged = Puzzle(
            grid=["CAT", "DOGS"],
            clues=ClueMap(),
            meta=PuzzleMeta(pack_id="general", puzzle_id="gen-general-1", title="Generated (General)", difficulty="easy"),
        )
        with patch.object(service.generator, "generate", return_value=ragged):
            loaded = service.load("general", Tone.SERIOUS, Difficulty.EASY, SizeClass.SMALL)
        self.assertEqual(loaded.source, SOURCE_STATIC)

    def test_invalid_static_puzzle_is_unavailable(self) -> None:
        service = PuzzleService(store=tiny_store([static_puzzle(grid=["CAT#DOGS", "A#O#A#O"])]))
        with self.assertRaises(PuzzleUnavailableError):
            service.load("general", Tone.SERIOUS, Difficulty.EASY, SizeClass.SMALL)

    def test_missing_static_puzzle_is_unavailable(self) -> None:
        service = PuzzleService(store=tiny_store([]))
        with self.assertLogs("crswrd.engine.session", level="ERROR"):
            with self.assertRaises(PuzzleUnavailableError):
                service.load("general", Tone.SERIOUS, Difficulty.EASY, SizeClass.SMALL)

    def test_load_static_from_shipped_packs(self) -> None:
        service = PuzzleService(rng=random.Random(0))
        loaded = service.load_static("holidays", Tone.SERIOUS, Difficulty.EASY)
        self.assertEqual(loaded.source, SOURCE_STATIC)
        self.assertEqual(loaded.puzzle.meta.pack_id, "holidays")
        self.assertEqual(loaded.model.rows, 5)

    def test_shipped_ragged_puzzle_is_unavailable(self) -> None:
        service = PuzzleService(rng=random.Random(0))
        with self.assertRaises(PuzzleUnavailableError):
            service.load_static("general", Tone.SERIOUS, Difficulty.MEDIUM)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
