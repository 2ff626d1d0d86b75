"""Length-biased, recency-penalized candidate selection."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, TypeVar

from ..core.constants import Difficulty
from ..core.models import WordEntry
from ..utils.logger import get_logger
from .recency import RecencyMemory


LOGGER = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LengthWeights:
    """Piecewise weight table over word length.

    ``table`` covers explicit lengths; anything shorter than the table (but
    positive) gets ``short``; anything longer gets ``tail``.
    """

    table: Mapping[int, float]
    tail: float
    short: float = 0.05

    def weight(self, length: int) -> float:
        if length <= 0:
            return 0.0
        if length in self.table:
            return self.table[length]
        if length < min(self.table):
            return self.short
        return self.tail


# Easy favours short words, hard favours long ones.
DEFAULT_LENGTH_WEIGHTS: Dict[Difficulty, LengthWeights] = {
    Difficulty.EASY: LengthWeights(
        table={3: 6.0, 4: 7.0, 5: 6.5, 6: 3.0, 7: 1.8, 8: 0.9},
        tail=0.4,
    ),
    Difficulty.MEDIUM: LengthWeights(
        table={3: 2.5, 4: 4.0, 5: 5.5, 6: 6.0, 7: 5.5, 8: 3.8, 9: 2.2},
        tail=1.4,
    ),
    Difficulty.HARD: LengthWeights(
        table={3: 0.7, 4: 1.0, 5: 1.8, 6: 2.8, 7: 5.0, 8: 6.5, 9: 7.0},
        tail=7.5,
    ),
}


def length_weight(
    length: int,
    difficulty: Difficulty,
    tables: Mapping[Difficulty, LengthWeights] = DEFAULT_LENGTH_WEIGHTS,
) -> float:
    return tables[Difficulty(difficulty)].weight(length)


def weighted_sample(
    items: Sequence[T],
    weights: Sequence[float],
    n: int,
    rng: Optional[random.Random] = None,
) -> List[T]:
    """Sample up to ``n`` items without replacement, proportionally to ``weights``.

    Negative weights count as zero. When every remaining weight is zero the
    pick falls back to a uniform choice so selection never stalls.
    """

    if len(items) != len(weights) or n <= 0:
        return []
    rng = rng or random.Random()
    pool_items = list(items)
    pool_weights = [max(0.0, w) for w in weights]
    out: List[T] = []

    while pool_items and len(out) < n:
        total = sum(pool_weights)
        if total <= 0:
            idx = rng.randrange(len(pool_items))
        else:
            roll = rng.random() * total
            idx = 0
            for i, w in enumerate(pool_weights):
                roll -= w
                if w > 0 and roll <= 0:
                    idx = i
                    break
            else:
                # Float drift left a sliver of roll; take the last weighted item.
                idx = max(i for i, w in enumerate(pool_weights) if w > 0)
        out.append(pool_items.pop(idx))
        pool_weights.pop(idx)
    return out


@dataclass
class CandidateSelector:
    """Turns a theme's candidates into one attempt's weighted sample."""

    memory: RecencyMemory
    rng: random.Random = field(default_factory=random.Random)
    tables: Mapping[Difficulty, LengthWeights] = field(
        default_factory=lambda: dict(DEFAULT_LENGTH_WEIGHTS)
    )

    def weights(self, theme: str, candidates: Sequence[WordEntry], difficulty: Difficulty) -> List[float]:
        return [
            length_weight(len(entry.word), difficulty, self.tables)
            * self.memory.penalty(theme, entry.word)
            for entry in candidates
        ]

    def select(
        self,
        theme: str,
        candidates: Sequence[WordEntry],
        difficulty: Difficulty,
        target: int,
    ) -> List[WordEntry]:
        weights = self.weights(theme, candidates, difficulty)
        chosen = weighted_sample(candidates, weights, target, self.rng)
        LOGGER.debug(
            "Selected %d/%d candidates for '%s' (%s): %s",
            len(chosen),
            len(candidates),
            theme,
            Difficulty(difficulty).value,
            ", ".join(entry.word for entry in chosen),
        )
        return chosen
