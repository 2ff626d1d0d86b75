"""CLI entrypoint for the themed crossword generator."""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any, Dict, List

from .core.constants import DEFAULT_PACK_ID, Difficulty, SizeClass, Tone
from .core.exceptions import CrosswordError
from .core.models import Puzzle, PuzzleModel
from .data.word_bank import DEFAULT_PACKS_DIR, WordBankStore
from .engine.generator import CrosswordGenerator, GeneratorConfig
from .engine.model_builder import build_model
from .engine.session import SOURCE_GENERATED, PuzzleService
from .utils.logger import configure_logging, get_logger
from .utils.pretty import print_puzzle_stats
from .utils.report import check_word_bank, pack_counts


LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate themed crosswords from word bank packs",
    )
    parser.add_argument("--pack", type=str, default=DEFAULT_PACK_ID, help="Pack id, or 'everything'")
    parser.add_argument(
        "--tone",
        type=str,
        choices=[t.value for t in Tone],
        default=Tone.RANDOM.value,
        help="Clue tone",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="Biases word lengths (easy favours short words, hard long ones)",
    )
    parser.add_argument(
        "--size",
        type=str,
        choices=[s.value for s in SizeClass],
        default=SizeClass.MEDIUM.value,
        help="Grid size class (small 11x11, medium 13x13, large 15x15)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--attempts", type=int, default=30, help="Generation attempt budget")
    parser.add_argument(
        "--packs-dir",
        type=Path,
        default=DEFAULT_PACKS_DIR,
        help="Directory of pack JSON files",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument("--pretty", action="store_true", help="Print the grid and stats instead of JSON")
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Fail instead of falling back to a static puzzle",
    )
    parser.add_argument("--pack-counts", action="store_true", help="Print word and puzzle counts per pack")
    parser.add_argument(
        "--check-pack",
        nargs="+",
        metavar="PACK",
        help="Run word bank sanity checks for the given pack ids",
    )
    return parser


def build_payload(source: str, puzzle: Puzzle, model: PuzzleModel) -> Dict[str, Any]:
    meta = puzzle.meta
    return {
        "source": source,
        "grid": list(puzzle.grid),
        "clues": puzzle.clues.to_dict(),
        "meta": {
            "pack_id": meta.pack_id,
            "puzzle_id": meta.puzzle_id,
            "title": meta.title,
            "difficulty": meta.difficulty,
            "tone": meta.tone,
            "size": meta.size,
            "attempts": meta.attempts,
            "seed": meta.seed,
        },
        "entries": model.to_jsonable(),
    }


def report_lines(store: WordBankStore, args: argparse.Namespace) -> List[str]:
    lines: List[str] = []
    if args.pack_counts:
        lines.append(pack_counts(store).to_string(index=False))
    for pack_id in args.check_pack or []:
        lines.extend(check_word_bank(store.get(pack_id)).lines())
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.attempts < 1:
        parser.error("--attempts must be at least 1")

    try:
        store = WordBankStore(args.packs_dir)
        if args.pack_counts or args.check_pack:
            print("\n".join(report_lines(store, args)))
            return 0

        config = GeneratorConfig(attempt_limit=args.attempts, seed=args.seed)
        rng = random.Random(args.seed)
        if args.no_fallback:
            puzzle = CrosswordGenerator(config, store=store, rng=rng).generate(
                args.pack, args.tone, args.difficulty, args.size
            )
            source, model = SOURCE_GENERATED, build_model(puzzle.grid, puzzle.clues)
        else:
            loaded = PuzzleService(store=store, config=config, rng=rng).load(
                args.pack, args.tone, args.difficulty, args.size
            )
            source, puzzle, model = loaded.source, loaded.puzzle, loaded.model
    except CrosswordError as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.pretty:
        print_puzzle_stats(puzzle, model, source=source)
        return 0

    output_text = json.dumps(build_payload(source, puzzle, model), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
