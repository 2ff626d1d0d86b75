"""Deterministic quality checks run on every carved grid before it is accepted."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..core.constants import BLOCK, MIN_ENTRY_LENGTH
from ..core.exceptions import ValidationError
from ..utils.logger import get_logger
from .grid import iter_runs


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)


class QualityGuard:
    """Rejects grids that would produce malformed or unusable entries."""

    def __init__(self, min_length: int = MIN_ENTRY_LENGTH, size: Optional[int] = None) -> None:
        self.min_length = min_length
        self.size = size

    def validate(self, rows: Sequence[str]) -> ValidationResult:
        try:
            self._check_shape(rows)
            self._check_letters_valid(rows)
            self._check_short_runs(rows)
        except ValidationError as exc:
            LOGGER.debug("Quality guard rejected grid: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True)

    def ensure(self, rows: Sequence[str]) -> None:
        """Raise :class:`ValidationError` unless ``rows`` passes every check."""

        result = self.validate(rows)
        if not result.ok:
            raise ValidationError("; ".join(result.messages))

    def _check_shape(self, rows: Sequence[str]) -> None:
        if not rows:
            raise ValidationError("Grid has no rows")
        width = len(rows[0])
        for r, line in enumerate(rows):
            if len(line) != width:
                raise ValidationError(f"Row {r} has length {len(line)}, expected {width}")
        if self.size is not None and (len(rows) != self.size or width != self.size):
            raise ValidationError(f"Grid is {len(rows)}x{width}, expected {self.size}x{self.size}")

    def _check_letters_valid(self, rows: Sequence[str]) -> None:
        for r, line in enumerate(rows):
            for c, ch in enumerate(line):
                if ch == BLOCK:
                    continue
                if not ("A" <= ch <= "Z"):
                    raise ValidationError(f"Invalid letter '{ch}' at ({r},{c})")

    def _check_short_runs(self, rows: Sequence[str]) -> None:
        for run in iter_runs(rows):
            if run.length < self.min_length:
                raise ValidationError(
                    f"{run.direction.value.title()} run '{run.text}' at ({run.row},{run.col}) "
                    f"is shorter than {self.min_length}"
                )
