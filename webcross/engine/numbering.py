"""Crossword-style clue numbering of start cells."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..core.constants import Direction
from ..core.exceptions import ValidationError
from ..core.models import NumberedPlacement, Placement
from .grid import Coord, CrosswordGrid
from .validator import run_length


def cell_numbers(grid: CrosswordGrid) -> Dict[Coord, int]:
    """Scan L→R, T→B and number every cell that starts an across or down run."""

    numbers: Dict[Coord, int] = {}
    counter = 1
    for r in range(grid.size):
        for c in range(grid.size):
            if grid.is_empty(r, c):
                continue
            if _starts_across(grid, r, c) or _starts_down(grid, r, c):
                numbers[(r, c)] = counter
                counter += 1
    return numbers


def number_placements(grid: CrosswordGrid, placements: Sequence[Placement]) -> List[NumberedPlacement]:
    """Attach to each placement the number of its start cell.

    The input placements are not modified, so calling this twice on the same
    grid yields identical numbers.
    """

    numbers = cell_numbers(grid)
    numbered: List[NumberedPlacement] = []
    for placement in placements:
        number = numbers.get(placement.start)
        if number is None:
            raise ValidationError(
                f"'{placement.word}' starts at {placement.start}, which is not a numbered cell"
            )
        numbered.append(NumberedPlacement.from_placement(placement, number))
    return numbered


def _starts_across(grid: CrosswordGrid, r: int, c: int) -> bool:
    return run_length(grid, r, c, Direction.ACROSS) >= 2


def _starts_down(grid: CrosswordGrid, r: int, c: int) -> bool:
    return run_length(grid, r, c, Direction.DOWN) >= 2
