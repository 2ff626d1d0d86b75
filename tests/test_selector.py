import random
import unittest

from crswrd.core.constants import Difficulty
from crswrd.core.models import WordEntry
from crswrd.engine.recency import RecencyMemory
from crswrd.engine.selector import (
    DEFAULT_LENGTH_WEIGHTS,
    CandidateSelector,
    LengthWeights,
    length_weight,
    weighted_sample,
)


class LengthWeightTests(unittest.TestCase):
    def test_easy_favours_short_words(self) -> None:
        self.assertGreater(length_weight(4, Difficulty.EASY), length_weight(8, Difficulty.EASY))
        self.assertGreater(length_weight(3, Difficulty.EASY), length_weight(12, Difficulty.EASY))

    def test_hard_favours_long_words(self) -> None:
        self.assertGreater(length_weight(9, Difficulty.HARD), length_weight(3, Difficulty.HARD))
        self.assertGreater(length_weight(12, Difficulty.HARD), length_weight(5, Difficulty.HARD))

    def test_edges_of_table(self) -> None:
        self.assertEqual(length_weight(0, Difficulty.MEDIUM), 0.0)
        self.assertEqual(length_weight(-3, Difficulty.MEDIUM), 0.0)
        self.assertEqual(length_weight(2, Difficulty.MEDIUM), 0.05)
        self.assertEqual(length_weight(14, Difficulty.MEDIUM), 1.4)
        self.assertEqual(length_weight(10, Difficulty.EASY), 0.4)

    def test_accepts_plain_difficulty_strings(self) -> None:
        self.assertEqual(length_weight(6, "medium"), 6.0)

    def test_tables_are_replaceable(self) -> None:
        flat = {d: LengthWeights(table={3: 1.0}, tail=1.0) for d in Difficulty}
        self.assertEqual(length_weight(9, Difficulty.HARD, flat), 1.0)
        self.assertEqual(DEFAULT_LENGTH_WEIGHTS[Difficulty.HARD].weight(9), 7.0)


class WeightedSampleTests(unittest.TestCase):
    def test_returns_distinct_items_up_to_available(self) -> None:
        items = list("ABCDEFG")
        picked = weighted_sample(items, [1.0] * len(items), 4, random.Random(3))
        self.assertEqual(len(picked), 4)
        self.assertEqual(len(set(picked)), 4)

        everything = weighted_sample(items, [1.0] * len(items), 20, random.Random(3))
        self.assertEqual(sorted(everything), items)

    def test_invalid_requests_yield_nothing(self) -> None:
        self.assertEqual(weighted_sample(["A", "B"], [1.0], 1), [])
        self.assertEqual(weighted_sample(["A", "B"], [1.0, 1.0], 0), [])
        self.assertEqual(weighted_sample(["A", "B"], [1.0, 1.0], -2), [])

    def test_zero_weight_items_wait_for_positive_ones(self) -> None:
        for seed in range(25):
            picked = weighted_sample(["A", "B", "C", "D"], [0.0, 1.0, 0.0, 1.0], 2, random.Random(seed))
            self.assertEqual(sorted(picked), ["B", "D"])

    def test_negative_weights_count_as_zero(self) -> None:
        for seed in range(10):
            picked = weighted_sample(["A", "B"], [-5.0, 1.0], 1, random.Random(seed))
            self.assertEqual(picked, ["B"])

    def test_all_zero_weights_fall_back_to_uniform(self) -> None:
        picked = weighted_sample(["A", "B", "C"], [0.0, 0.0, 0.0], 3, random.Random(1))
        self.assertEqual(sorted(picked), ["A", "B", "C"])

    def test_seeded_samples_are_reproducible(self) -> None:
        items = list("ABCDEFGHIJ")
        weights = [float(i + 1) for i in range(len(items))]
        first = weighted_sample(items, weights, 5, random.Random(42))
        second = weighted_sample(items, weights, 5, random.Random(42))
        self.assertEqual(first, second)


class CandidateSelectorTests(unittest.TestCase):
    def test_recent_words_are_penalised(self) -> None:
        memory = RecencyMemory()
        selector = CandidateSelector(memory=memory, rng=random.Random(0))
        entries = [WordEntry("CAT", "Feline"), WordEntry("DOG", "Canine")]

        before = selector.weights("animals", entries, Difficulty.EASY)
        self.assertEqual(before[0], before[1])

        memory.remember("animals", ["CAT"])
        after = selector.weights("animals", entries, Difficulty.EASY)
        self.assertLess(after[0], after[1])
        self.assertAlmostEqual(after[0], before[0] * 0.1)

    def test_select_honours_target(self) -> None:
        selector = CandidateSelector(memory=RecencyMemory(), rng=random.Random(5))
        entries = [WordEntry(word, "clue") for word in ("ERA", "ORE", "EMU", "ADO", "EKE", "ALOE", "TAPIR")]
        chosen = selector.select("general", entries, Difficulty.MEDIUM, 4)
        self.assertEqual(len(chosen), 4)
        self.assertEqual(len({entry.word for entry in chosen}), 4)


if __name__ == "__main__":
    unittest.main()
