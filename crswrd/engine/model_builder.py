"""Turn grid rows plus clue maps into a numbered, queryable puzzle model."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Union

from ..core.constants import BLOCK, MISSING_CLUE, Direction, start_key
from ..core.exceptions import GridShapeError
from ..core.models import CellInfo, ClueMap, Coord, Entry, PuzzleModel
from ..utils.logger import get_logger
from .grid import read_run, starts_entry


LOGGER = get_logger(__name__)


def check_shape(grid: Sequence[str]) -> int:
    """Return the common row width, or raise :class:`GridShapeError`."""

    if not grid:
        raise GridShapeError("Grid has no rows")
    width = len(grid[0])
    if width == 0:
        raise GridShapeError("Grid has empty rows")
    for r, line in enumerate(grid):
        if len(line) != width:
            raise GridShapeError(f"Grid is not rectangular: row {r} has length {len(line)}, expected {width}")
    return width


def build_model(
    grid: Sequence[str],
    clues: Union[ClueMap, Mapping[str, Mapping[str, str]], None] = None,
) -> PuzzleModel:
    """Build a :class:`PuzzleModel`.

    Pure: the same rows and clues always yield an equal model. Numbers are
    assigned row-major to every cell that starts an Across or Down entry;
    entries without clue text get ``MISSING_CLUE``. ``clues`` may also be a
    plain ``{"across": {...}, "down": {...}}`` mapping, as written by the CLI.
    """

    rows = [str(line) for line in grid]
    width = check_shape(rows)
    height = len(rows)
    if not isinstance(clues, ClueMap):
        clues = ClueMap.from_dict(clues)

    cells: List[CellInfo] = []
    number_at: Dict[Coord, int] = {}
    across: List[Entry] = []
    down: List[Entry] = []
    next_number = 1

    for r in range(height):
        for c in range(width):
            ch = rows[r][c]
            is_block = ch == BLOCK
            cells.append(CellInfo(row=r, col=c, is_block=is_block, solution=None if is_block else ch))
            if is_block:
                continue

            starts = [
                direction
                for direction in (Direction.ACROSS, Direction.DOWN)
                if starts_entry(rows, r, c, direction)
            ]
            if not starts:
                continue
            number_at[(r, c)] = next_number
            key = start_key(r, c)
            for direction in starts:
                run = read_run(rows, r, c, direction)
                entry = Entry(
                    direction=direction,
                    number=next_number,
                    start_row=r,
                    start_col=c,
                    cells=list(run.cells),
                    clue=clues.for_direction(direction).get(key) or MISSING_CLUE,
                    start_key=key,
                )
                (across if direction == Direction.ACROSS else down).append(entry)
            next_number += 1

    across_by_cell = {cell: entry for entry in across for cell in entry.cells}
    down_by_cell = {cell: entry for entry in down for cell in entry.cells}

    LOGGER.debug(
        "Built %dx%d model with %d across and %d down entries",
        height,
        width,
        len(across),
        len(down),
    )
    return PuzzleModel(
        rows=height,
        cols=width,
        cells=cells,
        number_at=number_at,
        across_entries=across,
        down_entries=down,
        across_by_cell=across_by_cell,
        down_by_cell=down_by_cell,
    )
