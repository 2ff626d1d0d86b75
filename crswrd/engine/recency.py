"""Short-term per-theme memory of recently generated puzzles' words."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, Iterable, List, Sequence, Tuple

from ..data.normalization import normalize_word
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_WINDOW = 4
# Newest puzzle first.
DEFAULT_PENALTIES: Tuple[float, ...] = (0.1, 0.3, 0.5, 0.7)
DEFAULT_BEYOND_PENALTY = 0.75


class RecencyMemory:
    """Per-theme ring buffer of the last ``window`` puzzles' word lists.

    The memory lives for the lifetime of the owning service and is never
    persisted. Each theme has its own lock, so one instance can be shared by
    concurrent generation calls.
    """

    def __init__(
        self,
        window: int = DEFAULT_WINDOW,
        penalties: Sequence[float] = DEFAULT_PENALTIES,
        beyond_penalty: float = DEFAULT_BEYOND_PENALTY,
    ) -> None:
        if window <= 0:
            raise ValueError("window must be positive")
        self.window = window
        self.penalties = tuple(penalties)
        self.beyond_penalty = beyond_penalty
        self._puzzles: Dict[str, Deque[Tuple[str, ...]]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, theme: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(theme)
            if lock is None:
                lock = self._locks[theme] = threading.Lock()
                self._puzzles[theme] = deque(maxlen=self.window)
            return lock

    def penalty(self, theme: str, word: str) -> float:
        """Multiplier in ``(0, 1]``; lower for words used more recently."""

        with self._lock_for(theme):
            puzzles = list(self._puzzles[theme])
        for back, used in enumerate(reversed(puzzles)):
            if word in used:
                if back < len(self.penalties):
                    return self.penalties[back]
                return self.beyond_penalty
        return 1.0

    def remember(self, theme: str, words: Iterable[str]) -> None:
        unique: List[str] = []
        for raw in words:
            word = normalize_word(raw)
            if word and word not in unique:
                unique.append(word)
        with self._lock_for(theme):
            self._puzzles[theme].append(tuple(unique))
            depth = len(self._puzzles[theme])
        LOGGER.debug("Remembered %d words for '%s' (window %d/%d)", len(unique), theme, depth, self.window)

    def snapshot(self, theme: str) -> List[List[str]]:
        """Oldest-first copy of the remembered word lists for ``theme``."""

        with self._lock_for(theme):
            return [list(words) for words in self._puzzles[theme]]

    def clear(self, theme: str | None = None) -> None:
        with self._registry_lock:
            themes = [theme] if theme is not None else list(self._puzzles)
        for name in themes:
            with self._lock_for(name):
                self._puzzles[name].clear()
