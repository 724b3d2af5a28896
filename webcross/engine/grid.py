"""Grid representation and the placement executor."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import Bounds, CellType, Direction
from ..core.exceptions import SlotPlacementError
from ..core.models import Cell
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Coord = Tuple[int, int]


class CrosswordGrid:
    """Fixed-size square grid of cells with bounds-checked access."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[Cell]] = [[Cell() for _ in range(size)] for _ in range(size)]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def center(self) -> int:
        return self.size // 2

    def contains(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def cell(self, row: int, col: int) -> Cell:
        if not self.bounds.contains(row, col):
            raise IndexError(f"Cell {(row, col)} outside {self.size}x{self.size} grid")
        return self.cells[row][col]

    def letter_at(self, row: int, col: int) -> Optional[str]:
        """Return the letter at ``(row, col)``; out-of-bounds reads as empty."""

        if not self.bounds.contains(row, col):
            return None
        return self.cells[row][col].letter

    def is_empty(self, row: int, col: int) -> bool:
        """True for empty cells and for positions outside the grid."""

        if not self.bounds.contains(row, col):
            return True
        return self.cells[row][col].is_empty()

    @staticmethod
    def span(length: int, row: int, col: int, direction: Direction) -> List[Coord]:
        dr, dc = direction.step
        return [(row + dr * i, col + dc * i) for i in range(length)]

    def letters(self) -> Iterator[Tuple[int, int, str]]:
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell.type == CellType.LETTER:
                    yield r, c, cell.letter or ""

    @property
    def filled_count(self) -> int:
        return sum(1 for _ in self.letters())

    # ------------------------------------------------------------------
    # Placement executor
    # ------------------------------------------------------------------
    def place_word(self, word: str, row: int, col: int, direction: Direction) -> List[Coord]:
        """Write ``word`` starting at ``(row, col)`` and return the cells it filled.

        Only previously empty cells are returned; crossing cells already hold
        the same letter and are left as they were. Passing the returned list to
        :meth:`remove_cells` restores the grid exactly.
        """

        word = word.upper()
        coords = self.span(len(word), row, col, direction)
        for (r, c), letter in zip(coords, word):
            if not self.bounds.contains(r, c):
                raise SlotPlacementError(f"Word '{word}' extends outside grid at {(r, c)}")
            existing = self.cells[r][c].letter
            if existing is not None and existing != letter:
                raise SlotPlacementError(
                    f"Letter conflict at {(r, c)}: existing '{existing}' vs '{letter}'"
                )

        written: List[Coord] = []
        for (r, c), letter in zip(coords, word):
            cell = self.cells[r][c]
            if cell.is_empty():
                cell.fill(letter)
                written.append((r, c))
        LOGGER.debug("Placed %s at (%s,%s) %s", word, row, col, direction.value)
        return written

    def remove_cells(self, cells: Iterable[Coord]) -> None:
        """Reset every listed cell to empty; the inverse of :meth:`place_word`."""

        for r, c in cells:
            self.cell(r, c).clear()

    def clear(self) -> None:
        for row in self.cells:
            for cell in row:
                cell.clear()

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def rows(self) -> List[str]:
        """Return each row as a string, ``.`` marking empty cells."""

        return ["".join(cell.letter or "." for cell in row) for row in self.cells]

    def to_jsonable(self) -> List[List[Optional[str]]]:
        return [[cell.letter for cell in row] for row in self.cells]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "CrosswordGrid":
        """Build a grid from ``rows()``-style strings (tests and debugging)."""

        grid = cls(len(rows))
        for r, line in enumerate(rows):
            if len(line) != grid.size:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {grid.size}")
            for c, char in enumerate(line):
                if char != ".":
                    grid.cells[r][c].fill(char.upper())
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CrosswordGrid):
            return NotImplemented
        return self.size == other.size and self.rows() == other.rows()

    def __repr__(self) -> str:
        return f"CrosswordGrid(size={self.size}, filled={self.filled_count})"
