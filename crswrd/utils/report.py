"""Word bank sanity reports backed by pandas tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import pandas as pd

from ..core.constants import MIN_ENTRY_LENGTH
from ..data.normalization import normalize_word
from ..data.word_bank import Pack, WordBankStore
from .logger import get_logger


LOGGER = get_logger(__name__)

LENGTH_BUCKETS = ("3", "4", "5", "6", "7+")
MIN_CLUE_LENGTH = 2


def pack_counts(store: WordBankStore) -> pd.DataFrame:
    """One row per installed pack, largest word bank first."""

    frame = pd.DataFrame(
        [
            {
                "id": pack.id,
                "name": pack.name,
                "words": len(pack.word_bank),
                "puzzles": len(pack.puzzles),
            }
            for pack in store.installed_packs()
        ],
        columns=["id", "name", "words", "puzzles"],
    )
    return frame.sort_values("words", ascending=False, kind="stable").reset_index(drop=True)


def word_bank_frame(pack: Pack) -> pd.DataFrame:
    frame = pd.DataFrame(
        [
            {"word": entry.word, "serious": entry.clue_serious, "funny": entry.clue_funny}
            for entry in pack.word_bank
        ],
        columns=["word", "serious", "funny"],
    )
    frame["length"] = frame["word"].str.len().astype(int)
    return frame


def _bucket(length: int) -> str:
    if length < MIN_ENTRY_LENGTH:
        return f"<{MIN_ENTRY_LENGTH}"
    return str(length) if length <= 6 else "7+"


@dataclass
class WordBankReport:
    pack_id: str
    name: str
    total: int
    unique: int
    duplicates: List[str] = field(default_factory=list)
    length_buckets: Dict[str, int] = field(default_factory=dict)
    missing_required: List[str] = field(default_factory=list)
    bad_entries: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.duplicates or self.missing_required or self.bad_entries)

    def lines(self) -> List[str]:
        buckets = " ".join(f"{key}:{value}" for key, value in self.length_buckets.items())
        lines = [
            f"Pack: {self.pack_id} ({self.name})",
            f"  Words: {self.total} | Unique: {self.unique}",
            f"  Length buckets: {buckets}",
        ]
        if self.duplicates:
            lines.append(f"  Duplicates: {', '.join(self.duplicates)}")
        if self.missing_required:
            lines.append(f"  Missing required: {', '.join(self.missing_required)}")
        if self.bad_entries:
            lines.append(f"  Bad entries ({len(self.bad_entries)}): {', '.join(self.bad_entries)}")
        else:
            lines.append("  All entries have word + serious + funny.")
        return lines


def check_word_bank(pack: Pack, required_words: Iterable[str] = ()) -> WordBankReport:
    """Count, bucket and sanity-check one pack's word bank."""

    frame = word_bank_frame(pack)
    words = set(frame["word"])

    duplicates = list(dict.fromkeys(frame.loc[frame["word"].duplicated(), "word"]))
    buckets = {key: 0 for key in LENGTH_BUCKETS}
    for key, count in frame["length"].map(_bucket).value_counts().items():
        buckets[key] = int(count)

    missing = [word for word in (normalize_word(raw) for raw in required_words) if word not in words]

    bad_mask = (
        (frame["length"] < MIN_ENTRY_LENGTH)
        | (frame["serious"].str.strip().str.len() < MIN_CLUE_LENGTH)
        | (frame["funny"].str.strip().str.len() < MIN_CLUE_LENGTH)
    )
    bad = frame.loc[bad_mask, "word"].tolist()

    report = WordBankReport(
        pack_id=pack.id,
        name=pack.name,
        total=len(frame),
        unique=len(words),
        duplicates=duplicates,
        length_buckets=buckets,
        missing_required=missing,
        bad_entries=bad,
    )
    if not report.ok:
        LOGGER.warning(
            "Pack '%s': %d duplicate(s), %d missing required, %d bad entr(y/ies)",
            pack.id,
            len(duplicates),
            len(missing),
            len(bad),
        )
    return report
