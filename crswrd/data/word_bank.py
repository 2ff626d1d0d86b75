"""Themed word banks and hand-authored static puzzles.

Each pack lives in ``packs/<id>.json``::

    {
      "id": "general",
      "name": "General",
      "order": 0,
      "word_bank": [{"word": "ERA", "serious": "...", "funny": "..."}],
      "puzzles": [{"id": "gen-001", "title": "...", "difficulty": "easy",
                   "grid": ["CAT#DOG", ...],
                   "clues": {"serious": {"across": {...}, "down": {...}},
                             "funny": {...}}}]
    }

The ``everything`` pack is virtual: its word bank merges every installed
pack, keeping the first occurrence of each normalized word.
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.constants import DEFAULT_PACK_ID, EVERYTHING_PACK_ID, Difficulty, Tone
from ..core.exceptions import PackLoadError, PuzzleUnavailableError, WordBankError
from ..core.models import ClueMap, Puzzle, PuzzleMeta, WordEntry
from ..utils.logger import get_logger
from .normalization import normalize_word


LOGGER = get_logger(__name__)

DEFAULT_PACKS_DIR = Path(__file__).with_name("packs")


@dataclass
class StaticPuzzle:
    id: str
    title: str
    difficulty: str
    grid: List[str]
    clues: Dict[str, ClueMap] = field(default_factory=dict)

    def clue_set(self, tone: Tone) -> ClueMap:
        serious = self.clues.get(Tone.SERIOUS.value) or ClueMap()
        if tone == Tone.FUNNY:
            return self.clues.get(Tone.FUNNY.value) or serious
        return serious


@dataclass
class Pack:
    id: str
    name: str
    word_bank: List[WordEntry] = field(default_factory=list)
    puzzles: List[StaticPuzzle] = field(default_factory=list)
    order: int = 0


def parse_word_entry(raw: Mapping[str, object]) -> Optional[WordEntry]:
    """Build a :class:`WordEntry`; entries whose word normalizes to nothing are dropped."""

    word = normalize_word(raw.get("word"))
    if not word:
        return None
    return WordEntry(
        word=word,
        clue_serious=str(raw.get("serious") or "").strip(),
        clue_funny=str(raw.get("funny") or "").strip(),
    )


def parse_pack(doc: Mapping[str, object]) -> Pack:
    pack_id = str(doc.get("id") or "").strip()
    if not pack_id:
        raise PackLoadError("Pack document is missing an 'id'")

    entries: List[WordEntry] = []
    for raw in doc.get("word_bank") or []:
        entry = parse_word_entry(raw)
        if entry is not None:
            entries.append(entry)

    puzzles: List[StaticPuzzle] = []
    for raw in doc.get("puzzles") or []:
        clues = {
            tone: ClueMap.from_dict(clue_set)
            for tone, clue_set in (raw.get("clues") or {}).items()
        }
        puzzles.append(
            StaticPuzzle(
                id=str(raw.get("id") or ""),
                title=str(raw.get("title") or ""),
                difficulty=str(raw.get("difficulty") or "unknown"),
                grid=[str(line) for line in raw.get("grid") or []],
                clues=clues,
            )
        )

    return Pack(
        id=pack_id,
        name=str(doc.get("name") or pack_id),
        word_bank=entries,
        puzzles=puzzles,
        order=int(doc.get("order") or 0),
    )


def load_pack(path: Path | str) -> Pack:
    location = Path(path)
    try:
        doc = json.loads(location.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PackLoadError(f"Unable to read pack {location}: {exc}") from exc
    if not isinstance(doc, dict):
        raise PackLoadError(f"Pack {location} is not a JSON object")
    return parse_pack(doc)


def merge_word_banks(packs: Iterable[Pack]) -> List[WordEntry]:
    """Merge word banks, de-duplicating by normalized word (first one seen wins)."""

    by_word: Dict[str, WordEntry] = {}
    for pack in packs:
        for entry in pack.word_bank:
            if entry.word not in by_word:
                by_word[entry.word] = entry
    return list(by_word.values())


class WordBankStore:
    """Loads installed packs and resolves pack ids, including ``everything``."""

    def __init__(
        self,
        packs_dir: Path | str = DEFAULT_PACKS_DIR,
        packs: Optional[Iterable[Pack]] = None,
    ) -> None:
        if packs is None:
            packs = self._load_dir(Path(packs_dir))
        ordered = sorted(packs, key=lambda pack: (pack.order, pack.id))
        self._packs: Dict[str, Pack] = {
            pack.id: pack for pack in ordered if pack.id != EVERYTHING_PACK_ID
        }
        LOGGER.debug("Loaded %d packs: %s", len(self._packs), ", ".join(self._packs))

    @staticmethod
    def _load_dir(directory: Path) -> List[Pack]:
        if not directory.is_dir():
            raise PackLoadError(f"Missing packs directory: {directory}")
        return [load_pack(path) for path in sorted(directory.glob("*.json"))]

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def installed_packs(self) -> List[Pack]:
        return list(self._packs.values())

    def pack_ids(self) -> List[str]:
        return [*self._packs, EVERYTHING_PACK_ID]

    def get(self, pack_id: str) -> Pack:
        if pack_id == EVERYTHING_PACK_ID:
            return Pack(
                id=EVERYTHING_PACK_ID,
                name="Everything",
                word_bank=merge_word_banks(self._packs.values()),
            )
        pack = self._packs.get(pack_id)
        if pack is not None:
            return pack
        fallback = self._packs.get(DEFAULT_PACK_ID)
        if fallback is None:
            raise WordBankError(f"Unknown pack '{pack_id}' and no '{DEFAULT_PACK_ID}' pack installed")
        LOGGER.warning("Unknown pack '%s'; using '%s'", pack_id, DEFAULT_PACK_ID)
        return fallback

    # ------------------------------------------------------------------
    # Static puzzles
    # ------------------------------------------------------------------
    def pick_static_puzzle(
        self,
        pack_id: str,
        tone: Tone,
        difficulty: Difficulty,
        rng: Optional[random.Random] = None,
    ) -> Puzzle:
        """Choose a hand-authored puzzle, preferring the requested difficulty."""

        rng = rng or random.Random()
        if pack_id == EVERYTHING_PACK_ID:
            pool: List[Tuple[Pack, StaticPuzzle]] = [
                (pack, puzzle) for pack in self._packs.values() for puzzle in pack.puzzles
            ]
            if not pool:
                return self.pick_static_puzzle(DEFAULT_PACK_ID, tone, difficulty, rng)
        else:
            pack = self.get(pack_id)
            pool = [(pack, puzzle) for puzzle in pack.puzzles]
            if not pool:
                raise PuzzleUnavailableError(f"No puzzles found for pack '{pack_id}'")

        matching = [item for item in pool if item[1].difficulty == Difficulty(difficulty).value]
        pack, puzzle = rng.choice(matching or pool)
        return Puzzle(
            grid=list(puzzle.grid),
            clues=puzzle.clue_set(tone),
            meta=PuzzleMeta(
                pack_id=pack.id,
                puzzle_id=puzzle.id,
                title=puzzle.title,
                difficulty=puzzle.difficulty or "unknown",
                tone=Tone(tone).value,
            ),
        )


__all__ = [
    "DEFAULT_PACKS_DIR",
    "Pack",
    "StaticPuzzle",
    "WordBankStore",
    "load_pack",
    "merge_word_banks",
    "parse_pack",
    "parse_word_entry",
]
