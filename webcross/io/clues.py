"""Across / Down clue lists for display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..core.constants import Direction
from ..core.models import NumberedPlacement

NO_CLUE_TEXT = "No clue given"


@dataclass(frozen=True)
class ClueLine:
    """One numbered clue as shown under the grid."""

    number: int
    clue: str
    word: str
    direction: Direction

    @property
    def label(self) -> str:
        return f"{self.number}. {self.display_text}"

    @property
    def display_text(self) -> str:
        return f"{self.clue or NO_CLUE_TEXT} ({len(self.word)})"


def build_clue_lists(
    numbered: Sequence[NumberedPlacement],
) -> Tuple[List[ClueLine], List[ClueLine]]:
    """Split placements by direction and sort each list ascending by number."""

    across: List[ClueLine] = []
    down: List[ClueLine] = []
    for placement in numbered:
        line = ClueLine(
            number=placement.number,
            clue=placement.clue,
            word=placement.word,
            direction=placement.direction,
        )
        if placement.direction == Direction.ACROSS:
            across.append(line)
        else:
            down.append(line)

    across.sort(key=lambda line: line.number)
    down.sort(key=lambda line: line.number)
    return across, down
