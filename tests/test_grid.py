import unittest

from crswrd.core.constants import BLOCK, Direction
from crswrd.engine.grid import WorkingGrid, iter_runs, starts_entry
from crswrd.utils.pretty import format_grid


MINIMAL = ["CAT#DOG", "A#O#A#O", "TAR#RAT", "###A###", "OWL#EMU"]


class WorkingGridTests(unittest.TestCase):
    def test_starts_all_blocks(self) -> None:
        grid = WorkingGrid(3)
        self.assertEqual(grid.to_rows(), [BLOCK * 3] * 3)
        self.assertEqual(grid.letter_index(), {})

    def test_edges_count_as_blocks(self) -> None:
        grid = WorkingGrid.from_rows(["AB#", "###", "#C#"])
        self.assertTrue(grid.is_block_or_edge(-1, 0))
        self.assertTrue(grid.is_block_or_edge(0, 3))
        self.assertFalse(grid.is_block_or_edge(0, 1))
        self.assertFalse(grid.is_horizontally_isolated(0, 2))
        self.assertTrue(grid.is_horizontally_isolated(2, 1))

    def test_letter_index(self) -> None:
        grid = WorkingGrid.from_rows(["ABA", "###", "#C#"])
        self.assertEqual(grid.letter_index(), {"A": [(0, 0), (0, 2)], "B": [(0, 1)], "C": [(2, 1)]})

    def test_from_rows_requires_square(self) -> None:
        with self.assertRaises(ValueError):
            WorkingGrid.from_rows(["ABC", "DEF"])


class RunScanTests(unittest.TestCase):
    def test_start_rule(self) -> None:
        self.assertTrue(starts_entry(MINIMAL, 0, 0, Direction.ACROSS))
        self.assertTrue(starts_entry(MINIMAL, 0, 0, Direction.DOWN))
        self.assertFalse(starts_entry(MINIMAL, 0, 1, Direction.ACROSS))
        self.assertFalse(starts_entry(MINIMAL, 0, 1, Direction.DOWN))
        self.assertFalse(starts_entry(MINIMAL, 3, 3, Direction.DOWN))
        self.assertFalse(starts_entry(MINIMAL, 0, 3, Direction.ACROSS))

    def test_iter_runs_order(self) -> None:
        runs = list(iter_runs(MINIMAL))
        self.assertEqual(
            [(run.direction, run.start_key, run.text) for run in runs],
            [
                (Direction.ACROSS, "r0c0", "CAT"),
                (Direction.ACROSS, "r0c4", "DOG"),
                (Direction.ACROSS, "r2c0", "TAR"),
                (Direction.ACROSS, "r2c4", "RAT"),
                (Direction.ACROSS, "r4c0", "OWL"),
                (Direction.ACROSS, "r4c4", "EMU"),
                (Direction.DOWN, "r0c0", "CAT"),
                (Direction.DOWN, "r0c2", "TOR"),
                (Direction.DOWN, "r0c4", "DAR"),
                (Direction.DOWN, "r0c6", "GOT"),
            ],
        )

    def test_single_direction(self) -> None:
        self.assertEqual(len(list(iter_runs(MINIMAL, Direction.DOWN))), 4)
        self.assertEqual(list(iter_runs([])), [])


class PrettyTests(unittest.TestCase):
    def test_format_grid(self) -> None:
        lines = format_grid(["AB#", "#C#"]).splitlines()
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[2], " 0 |  A  B  .")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
