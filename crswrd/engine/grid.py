"""Grid representation and the entry-detection rule shared by every scanner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import BLOCK, Bounds, Direction, start_key
from ..core.models import Coord


class WorkingGrid:
    """Square grid mutated in place while an attempt carves words into it."""

    def __init__(self, size: int) -> None:
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[str]] = [[BLOCK] * size for _ in range(size)]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "WorkingGrid":
        grid = cls(len(rows))
        for r, line in enumerate(rows):
            if len(line) != grid.size:
                raise ValueError("WorkingGrid requires a square grid")
            grid.cells[r] = list(line)
        return grid

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def is_block(self, row: int, col: int) -> bool:
        return self.cells[row][col] == BLOCK

    def get(self, row: int, col: int) -> str:
        return self.cells[row][col]

    def set(self, row: int, col: int, value: str) -> None:
        self.cells[row][col] = value

    def is_block_or_edge(self, row: int, col: int) -> bool:
        return not self.in_bounds(row, col) or self.is_block(row, col)

    def is_horizontally_isolated(self, row: int, col: int) -> bool:
        """True when both horizontal neighbours are blocks or the grid edge."""

        return self.is_block_or_edge(row, col - 1) and self.is_block_or_edge(row, col + 1)

    def letter_index(self) -> Dict[str, List[Coord]]:
        index: Dict[str, List[Coord]] = {}
        for r, line in enumerate(self.cells):
            for c, ch in enumerate(line):
                if ch == BLOCK:
                    continue
                index.setdefault(ch, []).append((r, c))
        return index

    def to_rows(self) -> List[str]:
        return ["".join(line) for line in self.cells]


# ----------------------------------------------------------------------
# Frozen-grid scanning
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Run:
    """A maximal run of open cells that starts an entry."""

    direction: Direction
    row: int
    col: int
    cells: Tuple[Coord, ...]
    text: str

    @property
    def length(self) -> int:
        return len(self.cells)

    @property
    def start_key(self) -> str:
        return start_key(self.row, self.col)


def _open(rows: Sequence[str], row: int, col: int) -> bool:
    return 0 <= row < len(rows) and 0 <= col < len(rows[0]) and rows[row][col] != BLOCK


def starts_entry(rows: Sequence[str], row: int, col: int, direction: Direction) -> bool:
    """A cell starts an entry when it is open, the previous cell is a block or
    edge, and the next cell is open."""

    if not _open(rows, row, col):
        return False
    dr, dc = direction.step
    return not _open(rows, row - dr, col - dc) and _open(rows, row + dr, col + dc)


def read_run(rows: Sequence[str], row: int, col: int, direction: Direction) -> Run:
    dr, dc = direction.step
    cells: List[Coord] = []
    r, c = row, col
    while _open(rows, r, c):
        cells.append((r, c))
        r += dr
        c += dc
    return Run(
        direction=direction,
        row=row,
        col=col,
        cells=tuple(cells),
        text="".join(rows[cr][cc] for cr, cc in cells),
    )


def iter_runs(rows: Sequence[str], direction: Optional[Direction] = None) -> Iterator[Run]:
    """Yield every entry run; Across in row-major order, then Down column by column."""

    if not rows:
        return
    height, width = len(rows), len(rows[0])
    if direction in (None, Direction.ACROSS):
        for r in range(height):
            for c in range(width):
                if starts_entry(rows, r, c, Direction.ACROSS):
                    yield read_run(rows, r, c, Direction.ACROSS)
    if direction in (None, Direction.DOWN):
        for c in range(width):
            for r in range(height):
                if starts_entry(rows, r, c, Direction.DOWN):
                    yield read_run(rows, r, c, Direction.DOWN)
