import random
import unittest

from webcross.core.constants import Direction
from webcross.core.exceptions import PlanningFailed
from webcross.core.models import WordEntry
from webcross.data.word_bank import WordBank
from webcross.engine.grid import CrosswordGrid
from webcross.engine.planner import (
    BacktrackingPlanner,
    GreedyPlanner,
    LayoutPlanner,
    RandomTrialPlanner,
    candidate_positions,
    make_planner,
    order_entries,
    seed_position,
)
from webcross.engine.validator import LayoutValidator


def _entries(*words: str):
    return [WordEntry(word) for word in words]


def _layout(result):
    return [(p.word, p.start_row, p.start_col, p.direction) for p in result.placements]


class BacktrackingPlannerTests(unittest.TestCase):
    def test_three_crossing_words(self) -> None:
        grid = CrosswordGrid(10)
        result = BacktrackingPlanner().plan(grid, _entries("CAT", "CAR", "ART"))

        self.assertTrue(result.complete)
        self.assertEqual(
            _layout(result),
            [
                ("CAT", 5, 4, Direction.ACROSS),
                ("CAR", 5, 4, Direction.DOWN),
                ("ART", 3, 6, Direction.DOWN),
            ],
        )
        self.assertEqual(grid.filled_count, 7)
        self.assertTrue(LayoutValidator().validate(grid, result.placements).ok)

    def test_crossings_agree(self) -> None:
        grid = CrosswordGrid(10)
        result = BacktrackingPlanner().plan(grid, _entries("CAT", "CAR", "ART"))
        letters = {}
        for placement in result.placements:
            for cell, letter in zip(placement.cells, placement.word):
                self.assertEqual(letters.setdefault(cell, letter), letter)
                self.assertEqual(grid.letter_at(*cell), letter)

    def test_word_longer_than_grid_fails_cleanly(self) -> None:
        grid = CrosswordGrid(10)
        with self.assertRaises(PlanningFailed):
            BacktrackingPlanner().plan(grid, _entries("ABCDEFGHIJKLMNOPQRST"))
        self.assertEqual(grid, CrosswordGrid(10))

    def test_unconnectable_words_fail_and_restore_grid(self) -> None:
        grid = CrosswordGrid(10)
        with self.assertRaises(PlanningFailed):
            BacktrackingPlanner().plan(grid, _entries("AB", "CD"))
        self.assertEqual(grid.filled_count, 0)

    def test_step_budget(self) -> None:
        grid = CrosswordGrid(10)
        with self.assertRaises(PlanningFailed):
            BacktrackingPlanner(max_steps=1).plan(grid, _entries("CAT", "CAR", "ART"))
        self.assertEqual(grid.filled_count, 0)

    def test_empty_entries(self) -> None:
        result = BacktrackingPlanner().plan(CrosswordGrid(5), [])
        self.assertEqual(result.placements, [])
        self.assertTrue(result.complete)


class CandidateOrderTests(unittest.TestCase):
    def test_order_entries_is_stable(self) -> None:
        ordered = order_entries(_entries("AB", "CAT", "DOG", "EF"))
        self.assertEqual([e.word for e in ordered], ["CAT", "DOG", "AB", "EF"])

    def test_seed_is_centred_on_middle_row(self) -> None:
        self.assertEqual(seed_position(CrosswordGrid(10), "PYTHON"), (5, 2))

    def test_candidates_follow_placement_cells(self) -> None:
        grid = CrosswordGrid(10)
        result = BacktrackingPlanner().plan(grid, _entries("CAT"))
        self.assertEqual(
            list(candidate_positions("AT", result.placements)),
            [(5, 5, Direction.DOWN), (4, 6, Direction.DOWN)],
        )

    def test_duplicate_candidates_are_dropped(self) -> None:
        grid = CrosswordGrid(10)
        result = BacktrackingPlanner().plan(grid, _entries("AA"))
        candidates = list(candidate_positions("AA", result.placements))
        self.assertEqual(len(candidates), len(set(candidates)))


class FallbackPlannerTests(unittest.TestCase):
    def test_greedy_skips_unplaceable_word(self) -> None:
        grid = CrosswordGrid(10)
        result = GreedyPlanner().plan(grid, _entries("AB", "CD"))

        self.assertFalse(result.complete)
        self.assertEqual([e.word for e in result.skipped], ["CD"])
        self.assertEqual(result.strategy, "greedy")

    def test_greedy_default_bank_is_valid(self) -> None:
        grid = CrosswordGrid(10)
        bank = WordBank.default()
        result = GreedyPlanner().plan(grid, list(bank))

        self.assertEqual(len(result.placements) + len(result.skipped), len(bank))
        self.assertTrue(LayoutValidator().validate(grid, result.placements).ok)

    def test_random_trials_skip_word_that_never_fits(self) -> None:
        grid = CrosswordGrid(3)
        planner = RandomTrialPlanner(rng=random.Random(7))
        result = planner.plan(grid, _entries("ABCD", "AB"))

        self.assertEqual([e.word for e in result.skipped], ["ABCD"])
        self.assertEqual([p.word for p in result.placements], ["AB"])
        self.assertTrue(LayoutValidator().validate(grid, result.placements).ok)

    def test_random_trials_are_reproducible(self) -> None:
        layouts = []
        for _ in range(2):
            grid = CrosswordGrid(10)
            result = RandomTrialPlanner(rng=random.Random(3)).plan(grid, list(WordBank.default()))
            layouts.append(_layout(result))
        self.assertEqual(layouts[0], layouts[1])

    def test_base_planner_is_abstract(self) -> None:
        with self.assertRaises(TypeError):
            LayoutPlanner()

    def test_make_planner(self) -> None:
        self.assertIsInstance(make_planner("greedy"), GreedyPlanner)
        planner = make_planner("random", max_attempts=5)
        self.assertIsInstance(planner, RandomTrialPlanner)
        self.assertEqual(planner.max_attempts, 5)
        with self.assertRaises(ValueError):
            make_planner("annealing")


if __name__ == "__main__":
    unittest.main()
