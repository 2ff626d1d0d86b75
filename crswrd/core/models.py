"""Data models supporting the crossword generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .constants import DEFAULT_CLUE, Direction, Tone, start_key


Coord = Tuple[int, int]


def pick_clue(serious: str, funny: str, tone: Tone) -> str:
    """Tone-select a clue; a missing funny clue falls back to the serious one."""

    if tone == Tone.FUNNY and funny:
        return funny
    return serious or DEFAULT_CLUE


@dataclass(frozen=True)
class WordEntry:
    """A normalized word bank item with both clue variants."""

    word: str
    clue_serious: str
    clue_funny: str = ""

    def clue(self, tone: Tone) -> str:
        return pick_clue(self.clue_serious, self.clue_funny, tone)


@dataclass
class PlacedWord:
    """A word written into the grid during one generation attempt."""

    direction: Direction
    word: str
    row: int
    col: int
    clue_serious: str
    clue_funny: str = ""

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Coord]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.word))]

    @property
    def start_key(self) -> str:
        return start_key(self.row, self.col)

    def clue(self, tone: Tone) -> str:
        return pick_clue(self.clue_serious, self.clue_funny, tone)

    @classmethod
    def from_entry(cls, entry: WordEntry, direction: Direction, row: int, col: int) -> "PlacedWord":
        return cls(
            direction=direction,
            word=entry.word,
            row=row,
            col=col,
            clue_serious=entry.clue_serious,
            clue_funny=entry.clue_funny,
        )


@dataclass
class ClueMap:
    """Start-key indexed clue text for both directions."""

    across: Dict[str, str] = field(default_factory=dict)
    down: Dict[str, str] = field(default_factory=dict)

    def for_direction(self, direction: Direction) -> Dict[str, str]:
        return self.across if direction == Direction.ACROSS else self.down

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {"across": dict(self.across), "down": dict(self.down)}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Mapping[str, str]]]) -> "ClueMap":
        data = data or {}
        return cls(
            across=dict(data.get("across") or {}),
            down=dict(data.get("down") or {}),
        )


@dataclass
class PuzzleMeta:
    pack_id: str
    puzzle_id: str
    title: str
    difficulty: str
    tone: Optional[str] = None
    size: Optional[int] = None
    attempts: Optional[int] = None
    seed: Optional[int] = None


@dataclass
class Puzzle:
    """Grid rows plus clue maps, shared by generated and static puzzles."""

    grid: List[str]
    clues: ClueMap
    meta: PuzzleMeta
    placed_words: List[PlacedWord] = field(default_factory=list)


@dataclass(frozen=True)
class CellInfo:
    row: int
    col: int
    is_block: bool
    solution: Optional[str]


@dataclass
class Entry:
    """A numbered Across or Down answer discovered in a grid."""

    direction: Direction
    number: int
    start_row: int
    start_col: int
    cells: List[Coord]
    clue: str
    start_key: str

    @property
    def length(self) -> int:
        return len(self.cells)


@dataclass
class PuzzleModel:
    rows: int
    cols: int
    cells: List[CellInfo]
    number_at: Dict[Coord, int]
    across_entries: List[Entry]
    down_entries: List[Entry]
    across_by_cell: Dict[Coord, Entry]
    down_by_cell: Dict[Coord, Entry]

    def cell(self, row: int, col: int) -> CellInfo:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row},{col}) is outside the {self.rows}x{self.cols} grid")
        return self.cells[row * self.cols + col]

    def entries(self, direction: Direction) -> List[Entry]:
        return self.across_entries if direction == Direction.ACROSS else self.down_entries

    def entry_at(self, row: int, col: int, direction: Direction) -> Optional[Entry]:
        index = self.across_by_cell if direction == Direction.ACROSS else self.down_by_cell
        return index.get((row, col))

    def entry_by_start_key(self, direction: Direction, key: str) -> Optional[Entry]:
        for entry in self.entries(direction):
            if entry.start_key == key:
                return entry
        return None

    def answer(self, entry: Entry) -> str:
        return "".join(self.cell(r, c).solution or "" for r, c in entry.cells)

    def to_jsonable(self) -> Dict[str, List[dict]]:
        def _serialize(entry: Entry) -> dict:
            return {
                "number": entry.number,
                "start": [entry.start_row, entry.start_col],
                "start_key": entry.start_key,
                "length": entry.length,
                "answer": self.answer(entry),
                "clue": entry.clue,
            }

        return {
            "across": [_serialize(entry) for entry in self.across_entries],
            "down": [_serialize(entry) for entry in self.down_entries],
        }


@dataclass
class PuzzleState:
    """Mutable play session for one loaded puzzle."""

    active: Coord = (0, 0)
    direction: Direction = Direction.ACROSS
    filled: Dict[Coord, str] = field(default_factory=dict)
    marks: Dict[Coord, str] = field(default_factory=dict)
    is_solved: bool = False

    @classmethod
    def for_model(cls, model: PuzzleModel) -> "PuzzleState":
        state = cls()
        first = next((cell for cell in model.cells if not cell.is_block), None)
        if first is not None:
            state.active = (first.row, first.col)
        return state

    def set_active(self, row: int, col: int, direction: Direction) -> None:
        self.active = (row, col)
        self.direction = direction

    def set_letter(self, model: PuzzleModel, row: int, col: int, value: str) -> None:
        """Fill (or clear, for a blank ``value``) a cell and re-evaluate solved state."""

        if model.cell(row, col).is_block:
            raise ValueError(f"Cannot fill block cell at ({row},{col})")
        letter = (value or "").strip().upper()[:1]
        if letter:
            self.filled[(row, col)] = letter
        else:
            self.filled.pop((row, col), None)
        # Editing a cell clears its prior check feedback.
        self.marks.pop((row, col), None)
        self.refresh_solved(model)

    def check_cell(self, model: PuzzleModel, row: int, col: int) -> Optional[bool]:
        """Mark a filled cell correct/incorrect; ``None`` when nothing to check."""

        cell = model.cell(row, col)
        entered = self.filled.get((row, col), "")
        if cell.is_block or not entered:
            self.marks.pop((row, col), None)
            return None
        ok = entered == (cell.solution or "").upper()
        self.marks[(row, col)] = "correct" if ok else "incorrect"
        return ok

    def solved(self, model: PuzzleModel) -> bool:
        for cell in model.cells:
            if cell.is_block:
                continue
            entered = self.filled.get((cell.row, cell.col), "")
            if not entered or entered != (cell.solution or "").upper():
                return False
        return True

    def refresh_solved(self, model: PuzzleModel) -> bool:
        self.is_solved = self.solved(model)
        return self.is_solved

    def reset(self) -> None:
        self.filled.clear()
        self.marks.clear()
        self.is_solved = False
