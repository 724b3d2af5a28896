"""Data models supporting the crossword builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .constants import MIN_WORD_LENGTH, CellType, Direction
from .exceptions import WordBankError


@dataclass(frozen=True)
class WordEntry:
    """A word from the bank and the clue shown for it."""

    word: str
    clue: str = ""

    def __post_init__(self) -> None:
        if len(self.word) < MIN_WORD_LENGTH:
            raise WordBankError(
                f"Word '{self.word}' is shorter than {MIN_WORD_LENGTH} letters"
            )
        if not (self.word.isascii() and self.word.isalpha() and self.word.isupper()):
            raise WordBankError(f"Word '{self.word}' must be uppercase A-Z only")

    def __len__(self) -> int:
        return len(self.word)


@dataclass
class Cell:
    """Represents a grid cell: either empty or holding one letter."""

    type: CellType = CellType.EMPTY
    letter: Optional[str] = None

    def is_empty(self) -> bool:
        return self.type == CellType.EMPTY

    def fill(self, letter: str) -> None:
        self.type = CellType.LETTER
        self.letter = letter

    def clear(self) -> None:
        self.type = CellType.EMPTY
        self.letter = None


@dataclass(frozen=True)
class Placement:
    """A word placed on the grid."""

    entry: WordEntry
    start_row: int
    start_col: int
    direction: Direction
    cells: Tuple[Tuple[int, int], ...] = field(default=(), compare=False)

    @property
    def word(self) -> str:
        return self.entry.word

    @property
    def clue(self) -> str:
        return self.entry.clue

    @property
    def start(self) -> Tuple[int, int]:
        return self.start_row, self.start_col

    @property
    def length(self) -> int:
        return len(self.entry.word)


@dataclass(frozen=True)
class NumberedPlacement(Placement):
    """A placement annotated with the clue number of its start cell."""

    number: int = 0

    @classmethod
    def from_placement(cls, placement: Placement, number: int) -> "NumberedPlacement":
        return cls(
            entry=placement.entry,
            start_row=placement.start_row,
            start_col=placement.start_col,
            direction=placement.direction,
            cells=placement.cells,
            number=number,
        )
