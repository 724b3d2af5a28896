"""Word layout planning.

Three strategies share the same seed placement and candidate rules:

- :class:`BacktrackingPlanner` (default) searches depth-first and undoes
  placements on dead ends. It either places every word or raises
  :class:`PlanningFailed`.
- :class:`GreedyPlanner` is a single pass without backtracking. Best effort:
  a word with no legal crossing is skipped and reported in
  :attr:`PlanResult.skipped`.
- :class:`RandomTrialPlanner` tries a bounded number of random positions per
  word. Best effort as well; it also skips words.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Type

from ..core.constants import Direction
from ..core.exceptions import PlanningFailed
from ..core.models import Placement, WordEntry
from ..utils.logger import get_logger
from .grid import Coord, CrosswordGrid
from .validator import can_place, overlaps_parallel


LOGGER = get_logger(__name__)

Candidate = Tuple[int, int, Direction]


@dataclass
class PlanResult:
    placements: List[Placement]
    skipped: List[WordEntry] = field(default_factory=list)
    strategy: str = "backtracking"
    steps: int = 0

    @property
    def complete(self) -> bool:
        return not self.skipped


def order_entries(entries: Sequence[WordEntry]) -> List[WordEntry]:
    """Longest words first; ties keep their bank order."""

    return sorted(entries, key=lambda entry: len(entry.word), reverse=True)


def seed_position(grid: CrosswordGrid, word: str) -> Tuple[int, int]:
    """Start cell that centres ``word`` horizontally on the middle row."""

    return grid.center, grid.center - len(word) // 2


def candidate_positions(word: str, placements: Sequence[Placement]) -> Iterator[Candidate]:
    """Yield starts that put one of ``word``'s letters on a matching placed letter.

    Order: placements in placement order, their cells from the start cell on,
    then the letters of ``word`` left to right. The new word always runs
    perpendicular to the word it crosses.
    """

    seen = set()
    for placement in placements:
        direction = placement.direction.perpendicular
        dr, dc = direction.step
        for (row, col), letter in zip(placement.cells, placement.word):
            for offset, char in enumerate(word):
                if char != letter:
                    continue
                candidate = (row - dr * offset, col - dc * offset, direction)
                if candidate in seen:
                    continue
                seen.add(candidate)
                yield candidate


class LayoutPlanner(ABC):
    """Shared placement helpers; subclasses implement :meth:`plan`."""

    strategy = "base"

    def __init__(self, max_steps: Optional[int] = None) -> None:
        self.max_steps = max_steps
        self._steps = 0

    @abstractmethod
    def plan(self, grid: CrosswordGrid, entries: Sequence[WordEntry]) -> PlanResult:
        """Lay ``entries`` out on ``grid`` and describe the result."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _is_viable(
        self,
        grid: CrosswordGrid,
        word: str,
        row: int,
        col: int,
        direction: Direction,
        placements: Sequence[Placement],
    ) -> bool:
        if not can_place(grid, word, row, col, direction):
            return False
        cells = grid.span(len(word), row, col, direction)
        if not any(grid.is_empty(r, c) for r, c in cells):
            return False
        return not overlaps_parallel(cells, direction, placements)

    def _commit(
        self,
        grid: CrosswordGrid,
        entry: WordEntry,
        row: int,
        col: int,
        direction: Direction,
        placements: List[Placement],
    ) -> List[Coord]:
        self._steps += 1
        if self.max_steps is not None and self._steps > self.max_steps:
            raise PlanningFailed(f"Search budget of {self.max_steps} placements exhausted")
        written = grid.place_word(entry.word, row, col, direction)
        placements.append(
            Placement(
                entry=entry,
                start_row=row,
                start_col=col,
                direction=direction,
                cells=tuple(grid.span(len(entry.word), row, col, direction)),
            )
        )
        return written

    @staticmethod
    def _undo(grid: CrosswordGrid, written: List[Coord], placements: List[Placement]) -> None:
        grid.remove_cells(written)
        placements.pop()

    def _skip(self, entry: WordEntry, skipped: List[WordEntry]) -> None:
        LOGGER.warning("Failed to place word: %s (skipped by %s planner)", entry.word, self.strategy)
        skipped.append(entry)


class BacktrackingPlanner(LayoutPlanner):
    """Depth-first search that places every word or reports failure."""

    strategy = "backtracking"

    def plan(self, grid: CrosswordGrid, entries: Sequence[WordEntry]) -> PlanResult:
        self._steps = 0
        ordered = order_entries(entries)
        if not ordered:
            return PlanResult(placements=[], strategy=self.strategy)

        first = ordered[0]
        row, col = seed_position(grid, first.word)
        if not can_place(grid, first.word, row, col, Direction.ACROSS):
            raise PlanningFailed(
                f"Seed word '{first.word}' ({len(first.word)} letters) does not fit "
                f"a {grid.size}x{grid.size} grid"
            )

        placements: List[Placement] = []
        written = self._commit(grid, first, row, col, Direction.ACROSS, placements)
        try:
            solved = self._place_from(grid, ordered, 1, placements)
        except PlanningFailed:
            self._undo(grid, written, placements)
            raise
        if not solved:
            self._undo(grid, written, placements)
            raise PlanningFailed(
                f"No layout places all {len(ordered)} words on a {grid.size}x{grid.size} grid "
                f"({self._steps} placements tried)"
            )

        LOGGER.info(
            "Placed all %d words on %dx%d grid after %d placements",
            len(placements), grid.size, grid.size, self._steps,
        )
        return PlanResult(placements=list(placements), strategy=self.strategy, steps=self._steps)

    def _place_from(
        self,
        grid: CrosswordGrid,
        entries: Sequence[WordEntry],
        index: int,
        placements: List[Placement],
    ) -> bool:
        if index == len(entries):
            return True
        entry = entries[index]
        for row, col, direction in list(candidate_positions(entry.word, placements)):
            if not self._is_viable(grid, entry.word, row, col, direction, placements):
                continue
            written = self._commit(grid, entry, row, col, direction, placements)
            try:
                if self._place_from(grid, entries, index + 1, placements):
                    return True
            except PlanningFailed:
                self._undo(grid, written, placements)
                raise
            self._undo(grid, written, placements)
        LOGGER.debug("No candidate fits '%s' at depth %d; backtracking", entry.word, index)
        return False


class GreedyPlanner(LayoutPlanner):
    """Best-effort single pass: first legal crossing wins, misfits are skipped."""

    strategy = "greedy"

    def plan(self, grid: CrosswordGrid, entries: Sequence[WordEntry]) -> PlanResult:
        self._steps = 0
        placements: List[Placement] = []
        skipped: List[WordEntry] = []
        for entry in order_entries(entries):
            if not placements:
                row, col = seed_position(grid, entry.word)
                if can_place(grid, entry.word, row, col, Direction.ACROSS):
                    self._commit(grid, entry, row, col, Direction.ACROSS, placements)
                else:
                    self._skip(entry, skipped)
                continue
            for row, col, direction in list(candidate_positions(entry.word, placements)):
                if self._is_viable(grid, entry.word, row, col, direction, placements):
                    self._commit(grid, entry, row, col, direction, placements)
                    break
            else:
                self._skip(entry, skipped)

        LOGGER.info("Greedy pass placed %d words, skipped %d", len(placements), len(skipped))
        return PlanResult(placements=placements, skipped=skipped, strategy=self.strategy, steps=self._steps)


class RandomTrialPlanner(LayoutPlanner):
    """Best-effort random trials per word, in bank order; misfits are skipped.

    Placements need not cross an existing word, so the result may consist of
    several unconnected groups.
    """

    strategy = "random"

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = 100,
        max_steps: Optional[int] = None,
    ) -> None:
        super().__init__(max_steps=max_steps)
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def plan(self, grid: CrosswordGrid, entries: Sequence[WordEntry]) -> PlanResult:
        self._steps = 0
        placements: List[Placement] = []
        skipped: List[WordEntry] = []
        for entry in entries:
            for _ in range(self.max_attempts):
                row = self.rng.randrange(grid.size)
                col = self.rng.randrange(grid.size)
                direction = self.rng.choice((Direction.ACROSS, Direction.DOWN))
                if self._is_viable(grid, entry.word, row, col, direction, placements):
                    self._commit(grid, entry, row, col, direction, placements)
                    break
            else:
                self._skip(entry, skipped)

        LOGGER.info("Random trials placed %d words, skipped %d", len(placements), len(skipped))
        return PlanResult(placements=placements, skipped=skipped, strategy=self.strategy, steps=self._steps)


PLANNERS: Dict[str, Type[LayoutPlanner]] = {
    BacktrackingPlanner.strategy: BacktrackingPlanner,
    GreedyPlanner.strategy: GreedyPlanner,
    RandomTrialPlanner.strategy: RandomTrialPlanner,
}


def make_planner(
    strategy: str = "backtracking",
    rng: Optional[random.Random] = None,
    max_steps: Optional[int] = None,
    max_attempts: int = 100,
) -> LayoutPlanner:
    if strategy not in PLANNERS:
        raise ValueError(f"Unknown planning strategy '{strategy}' (known: {sorted(PLANNERS)})")
    if strategy == RandomTrialPlanner.strategy:
        return RandomTrialPlanner(rng=rng, max_attempts=max_attempts, max_steps=max_steps)
    return PLANNERS[strategy](max_steps=max_steps)
