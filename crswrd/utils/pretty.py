"""Pretty-print helpers for crossword grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Sequence

from ..core.constants import BLOCK

if TYPE_CHECKING:
    from ..core.models import Puzzle, PuzzleModel


def format_grid(rows: Sequence[str]) -> str:
    width = len(rows[0]) if rows else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, line in enumerate(rows):
        row_render = " ".join(f"{'.' if ch == BLOCK else ch:>2}" for ch in line)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def print_puzzle_stats(puzzle: Puzzle, model: PuzzleModel, *, source: str = "", stream=None) -> None:
    """Print grid, clues and summary stats for a loaded puzzle."""

    stream = stream or sys.stdout
    meta = puzzle.meta
    print(f"{meta.title} [{meta.puzzle_id}]" + (f" ({source})" if source else ""), file=stream)
    print(format_grid(puzzle.grid), file=stream)

    # --- Grid geometry ---
    total_cells = model.rows * model.cols
    letter_cells = sum(1 for cell in model.cells if not cell.is_block)
    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {model.rows} x {model.cols} ({total_cells} cells)", file=stream)
    print(f"  Letters:       {letter_cells} ({letter_cells / total_cells * 100:.0f}%)", file=stream)
    print(f"  Blocks:        {total_cells - letter_cells}", file=stream)

    # --- Entries ---
    entries = model.across_entries + model.down_entries
    lengths = [entry.length for entry in entries]
    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Across:        {len(model.across_entries)}", file=stream)
    print(f"  Down:          {len(model.down_entries)}", file=stream)
    if lengths:
        print(f"  Length range:  {min(lengths)}-{max(lengths)} (avg {sum(lengths) / len(lengths):.1f})", file=stream)
        dist_parts = [f"{l}:{c}" for l, c in sorted(Counter(lengths).items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    for heading, group in (("Across", model.across_entries), ("Down", model.down_entries)):
        print(file=stream)
        print(f"--- {heading} ---", file=stream)
        for entry in group:
            print(f"  {entry.number:>3}. {entry.clue} ({entry.length})", file=stream)

    if meta.attempts is not None:
        print(file=stream)
        print(f"Attempts: {meta.attempts}", file=stream)
    if meta.seed is not None:
        print(f"Seed: {meta.seed}", file=stream)
