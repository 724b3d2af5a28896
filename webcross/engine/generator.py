"""Main crossword generator orchestration.

One attempt runs: fresh grid → layout planning → layout validation →
numbering → clue lists. When planning fails the generator retries, first with
a reshuffled bank (if shuffling is on) and then on a larger grid.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.constants import DEFAULT_GRID_SIZE
from ..core.exceptions import PlanningFailed, ValidationError
from ..core.models import NumberedPlacement, WordEntry
from ..data.word_bank import WordBank
from ..io.clues import ClueLine, build_clue_lists
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .numbering import number_placements
from .planner import BacktrackingPlanner, PlanResult, make_planner
from .validator import LayoutValidator


LOGGER = get_logger(__name__)

DEFAULT_MAX_STEPS = 200_000


@dataclass
class GeneratorConfig:
    size: int = DEFAULT_GRID_SIZE
    max_size: Optional[int] = 15
    size_step: int = 5
    strategy: str = "backtracking"
    retry_limit: int = 3
    shuffle: bool = False
    seed: Optional[int] = None
    max_steps: Optional[int] = DEFAULT_MAX_STEPS
    max_attempts: int = 100

    def sizes(self) -> List[int]:
        """Grid sizes to try, smallest first."""

        if self.max_size is None or self.max_size <= self.size:
            return [self.size]
        step = max(1, self.size_step)
        sizes = list(range(self.size, self.max_size, step))
        sizes.append(self.max_size)
        return sizes


@dataclass
class CrosswordResult:
    grid: CrosswordGrid
    placements: List[NumberedPlacement]
    across: List[ClueLine]
    down: List[ClueLine]
    skipped: List[WordEntry] = field(default_factory=list)
    strategy: str = "backtracking"
    validation_messages: List[str] = field(default_factory=list)
    seed: Optional[int] = None

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def complete(self) -> bool:
        return not self.skipped

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "strategy": self.strategy,
            "seed": self.seed,
            "complete": self.complete,
            "grid": self.grid.rows(),
            "placements": [
                {
                    "number": placement.number,
                    "word": placement.word,
                    "clue": placement.clue,
                    "start": [placement.start_row, placement.start_col],
                    "direction": placement.direction.value,
                    "length": placement.length,
                }
                for placement in self.placements
            ],
            "across": [{"number": line.number, "clue": line.display_text} for line in self.across],
            "down": [{"number": line.number, "clue": line.display_text} for line in self.down],
            "skipped": [entry.word for entry in self.skipped],
            "validation": list(self.validation_messages),
        }


class CrosswordGenerator:
    """High-level orchestrator: bank → plan → validate → number → clue lists."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)
        self.validator = LayoutValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, bank: WordBank) -> CrosswordResult:
        attempts_per_size = self.config.retry_limit if self.config.shuffle else 1
        failures: List[str] = []
        sizes = self._sizes_for(bank)

        for size in sizes:
            for attempt in range(1, attempts_per_size + 1):
                LOGGER.info(
                    "Generation attempt %s/%s on %dx%d grid (%s, %d words)",
                    attempt, attempts_per_size, size, size, self.config.strategy, len(bank),
                )
                entries = bank.shuffled(self.rng) if self.config.shuffle else bank
                try:
                    return self._attempt(size, list(entries))
                except PlanningFailed as exc:
                    LOGGER.warning("Generation attempt failed: %s", exc)
                    failures.append(f"{size}x{size}: {exc}")

        raise PlanningFailed(
            "Could not generate puzzle after trying sizes "
            f"{', '.join(str(size) for size in sizes)}: {failures[-1] if failures else 'no attempts'}"
        )

    def _sizes_for(self, bank: WordBank) -> List[int]:
        """Configured sizes that can hold the bank's longest word."""

        sizes = self.config.sizes()
        fitting = [size for size in sizes if size >= bank.longest]
        if len(fitting) < len(sizes):
            LOGGER.info(
                "Skipping grid sizes smaller than the longest word (%d letters)", bank.longest
            )
        if fitting:
            return fitting
        if self.config.strategy == BacktrackingPlanner.strategy:
            raise PlanningFailed(
                f"Longest word ({bank.longest} letters) does not fit any grid size up to {sizes[-1]}"
            )
        # best-effort planners still lay out what fits and skip the rest
        return sizes[-1:]

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------
    def _attempt(self, size: int, entries: List[WordEntry]) -> CrosswordResult:
        grid = CrosswordGrid(size)
        planner = make_planner(
            self.config.strategy,
            rng=self.rng,
            max_steps=self.config.max_steps,
            max_attempts=self.config.max_attempts,
        )
        plan = planner.plan(grid, entries)
        return self._finish(grid, plan)

    def _finish(self, grid: CrosswordGrid, plan: PlanResult) -> CrosswordResult:
        validation = self.validator.validate(grid, plan.placements)
        if not validation.ok:
            raise ValidationError(f"Grid validation failed: {validation.messages}")

        numbered = number_placements(grid, plan.placements)
        across, down = build_clue_lists(numbered)
        if plan.skipped:
            LOGGER.warning(
                "Best-effort %s layout left out %d word(s): %s",
                plan.strategy, len(plan.skipped), ", ".join(entry.word for entry in plan.skipped),
            )
        LOGGER.info(
            "Crossword generation completed with %s words (%d across, %d down)",
            len(numbered), len(across), len(down),
        )
        return CrosswordResult(
            grid=grid,
            placements=numbered,
            across=across,
            down=down,
            skipped=list(plan.skipped),
            strategy=plan.strategy,
            validation_messages=validation.messages,
            seed=self.config.seed,
        )
