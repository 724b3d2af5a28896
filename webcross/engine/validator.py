"""Placement legality checks and deterministic validation of finished layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from ..core.constants import CellType, Direction
from ..core.exceptions import ValidationError
from ..core.models import Placement
from ..utils.logger import get_logger
from .grid import Coord, CrosswordGrid


LOGGER = get_logger(__name__)


def can_place(grid: CrosswordGrid, word: str, row: int, col: int, direction: Direction) -> bool:
    """Return True if ``word`` may be written at ``(row, col)`` in ``direction``.

    A legal placement stays inside the grid, agrees with every letter it
    crosses, has empty cells directly before and after it, and every new
    letter it supplies has empty perpendicular neighbours. Letters it shares
    with an existing word are exempt from the neighbour check. The grid is
    never modified.
    """

    if not word:
        return False
    dr, dc = direction.step
    length = len(word)

    end_row = row + dr * (length - 1)
    end_col = col + dc * (length - 1)
    if not (grid.contains(row, col) and grid.contains(end_row, end_col)):
        return False

    for index, letter in enumerate(word):
        existing = grid.letter_at(row + dr * index, col + dc * index)
        if existing is not None and existing != letter:
            return False

    if not grid.is_empty(row - dr, col - dc):
        return False
    if not grid.is_empty(end_row + dr, end_col + dc):
        return False

    # Perpendicular offsets: above/below for ACROSS, left/right for DOWN
    pr, pc = dc, dr
    for index in range(length):
        r = row + dr * index
        c = col + dc * index
        if not grid.is_empty(r, c):
            continue
        if not grid.is_empty(r + pr, c + pc) or not grid.is_empty(r - pr, c - pc):
            return False
    return True


def overlaps_parallel(
    cells: Iterable[Coord], direction: Direction, placements: Sequence[Placement]
) -> bool:
    """True if any of ``cells`` already belongs to a placement running the same way."""

    taken: Set[Coord] = set()
    for placement in placements:
        if placement.direction == direction:
            taken.update(placement.cells)
    return any(cell in taken for cell in cells)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LayoutValidator:
    """Runs deterministic validation over a finished grid and its placements."""

    def validate(self, grid: CrosswordGrid, placements: Sequence[Placement]) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_letters_valid(grid)
            self._check_placements_written(grid, placements)
            self._check_crossings(placements)
            self._check_runs_match_placements(grid, placements)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_letters_valid(self, grid: CrosswordGrid) -> None:
        for r, c, letter in grid.letters():
            if len(letter) != 1 or not letter.isascii() or not letter.isalpha() or not letter.isupper():
                raise ValidationError(f"Invalid letter '{letter}' at ({r},{c})")

    def _check_placements_written(self, grid: CrosswordGrid, placements: Sequence[Placement]) -> None:
        for placement in placements:
            for (r, c), letter in zip(placement.cells, placement.word):
                if grid.letter_at(r, c) != letter:
                    raise ValidationError(
                        f"'{placement.word}' expects '{letter}' at ({r},{c}), "
                        f"grid holds '{grid.letter_at(r, c)}'"
                    )

    def _check_crossings(self, placements: Sequence[Placement]) -> None:
        seen: Dict[Coord, Tuple[str, str]] = {}
        for placement in placements:
            for cell, letter in zip(placement.cells, placement.word):
                previous = seen.get(cell)
                if previous is not None and previous[0] != letter:
                    raise ValidationError(
                        f"Crossing conflict at {cell}: '{previous[1]}' has '{previous[0]}', "
                        f"'{placement.word}' has '{letter}'"
                    )
                seen[cell] = (letter, placement.word)

    def _check_runs_match_placements(self, grid: CrosswordGrid, placements: Sequence[Placement]) -> None:
        expected = {
            (p.start_row, p.start_col, p.direction, p.length) for p in placements
        }
        if len(expected) != len(placements):
            raise ValidationError("Two placements occupy the same span")
        runs = set(enumerate_runs(grid))
        for run in sorted(runs - expected, key=lambda item: (item[0], item[1], item[2].value)):
            raise ValidationError(
                f"Unintended {run[2].value.lower()} run of length {run[3]} at ({run[0]},{run[1]})"
            )
        for run in sorted(expected - runs, key=lambda item: (item[0], item[1], item[2].value)):
            raise ValidationError(
                f"Placed {run[2].value.lower()} word at ({run[0]},{run[1]}) "
                f"is not a standalone run"
            )


def run_length(grid: CrosswordGrid, row: int, col: int, direction: Direction) -> int:
    """Length of the letter run starting at ``(row, col)``, or 0 if it does not start one."""

    dr, dc = direction.step
    if grid.is_empty(row, col) or not grid.is_empty(row - dr, col - dc):
        return 0
    length = 0
    r, c = row, col
    while not grid.is_empty(r, c):
        length += 1
        r += dr
        c += dc
    return length


def enumerate_runs(grid: CrosswordGrid) -> List[Tuple[int, int, Direction, int]]:
    """All maximal runs of two or more letters as ``(row, col, direction, length)``."""

    runs: List[Tuple[int, int, Direction, int]] = []
    for r in range(grid.size):
        for c in range(grid.size):
            if grid.cell(r, c).type != CellType.LETTER:
                continue
            for direction in (Direction.ACROSS, Direction.DOWN):
                length = run_length(grid, r, c, direction)
                if length >= 2:
                    runs.append((r, c, direction, length))
    return runs
