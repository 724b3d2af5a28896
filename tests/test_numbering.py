import unittest

from webcross.core.constants import Direction
from webcross.core.exceptions import ValidationError
from webcross.core.models import Placement, WordEntry
from webcross.engine.grid import CrosswordGrid
from webcross.engine.numbering import cell_numbers, number_placements

ROWS = [
    "AB....",
    "......",
    "...CAT",
    "...A..",
    "...R..",
    "......",
]


def _placement(word: str, row: int, col: int, direction: Direction) -> Placement:
    return Placement(
        entry=WordEntry(word, clue=f"Clue for {word}"),
        start_row=row,
        start_col=col,
        direction=direction,
        cells=tuple(CrosswordGrid.span(len(word), row, col, direction)),
    )


class NumberingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = CrosswordGrid.from_rows(ROWS)
        self.placements = [
            _placement("AB", 0, 0, Direction.ACROSS),
            _placement("CAT", 2, 3, Direction.ACROSS),
            _placement("CAR", 2, 3, Direction.DOWN),
        ]

    def test_cell_numbers_row_major(self) -> None:
        self.assertEqual(cell_numbers(self.grid), {(0, 0): 1, (2, 3): 2})

    def test_shared_start_gets_one_number(self) -> None:
        numbered = number_placements(self.grid, self.placements)
        self.assertEqual([p.number for p in numbered], [1, 2, 2])
        self.assertEqual([p.word for p in numbered], ["AB", "CAT", "CAR"])

    def test_numbering_is_idempotent(self) -> None:
        first = number_placements(self.grid, self.placements)
        second = number_placements(self.grid, self.placements)
        self.assertEqual([p.number for p in first], [p.number for p in second])
        self.assertFalse(hasattr(self.placements[0], "number"))

    def test_numbered_placement_keeps_entry(self) -> None:
        numbered = number_placements(self.grid, self.placements)
        self.assertEqual(numbered[1].clue, "Clue for CAT")
        self.assertEqual(numbered[1].cells, self.placements[1].cells)

    def test_placement_not_on_start_cell_raises(self) -> None:
        with self.assertRaises(ValidationError):
            number_placements(self.grid, [_placement("AT", 2, 4, Direction.ACROSS)])

    def test_single_letters_are_not_numbered(self) -> None:
        grid = CrosswordGrid.from_rows(["A..", "...", "..B"])
        self.assertEqual(cell_numbers(grid), {})


if __name__ == "__main__":
    unittest.main()
