import io
import unittest

from crossgrid.core.constants import Direction
from crossgrid.core.exceptions import LayoutUnderflowError
from crossgrid.core.models import BoundingBox, ClueEntry, CrosswordPuzzle, Entry
from crossgrid.engine.generator import CrosswordGenerator
from crossgrid.engine.grid import CrosswordGrid, GridConfig
from crossgrid.engine.numbering import PuzzleNormalizer, to_output
from crossgrid.engine.validator import PuzzleValidator
from crossgrid.utils.pretty import format_clues, format_grid, pretty_print_puzzle


def build_grid(*words) -> CrosswordGrid:
    grid = CrosswordGrid(GridConfig(size=12))
    for word, row, col, direction in words:
        grid.place(word, row, col, direction, word.lower(), grid.placed_count + 1)
    return grid


class NormalizerTests(unittest.TestCase):
    def test_shared_start_cell_shares_one_number(self) -> None:
        grid = build_grid(
            ("CAT", 3, 3, Direction.ACROSS),
            ("COW", 3, 3, Direction.DOWN),
            ("TEN", 3, 5, Direction.DOWN),
        )
        puzzle = to_output(grid)
        self.assertEqual((puzzle.width, puzzle.height), (3, 3))
        self.assertEqual(puzzle.grid, [["C", "A", "T"], ["O", "-", "E"], ["W", "-", "N"]])
        self.assertEqual(puzzle.across, [ClueEntry(1, "cat", "CAT", 1, 1)])
        self.assertEqual(
            puzzle.down,
            [ClueEntry(1, "cow", "COW", 1, 1), ClueEntry(2, "ten", "TEN", 3, 1)],
        )

    def test_numbers_follow_reading_order_not_insertion_order(self) -> None:
        grid = build_grid(
            ("NET", 5, 2, Direction.ACROSS),
            ("ONE", 3, 3, Direction.DOWN),
        )
        puzzle = to_output(grid)
        self.assertEqual(puzzle.down, [ClueEntry(1, "one", "ONE", 2, 1)])
        self.assertEqual(puzzle.across, [ClueEntry(2, "net", "NET", 1, 3)])
        self.assertEqual(puzzle.grid, [["-", "O", "-"], ["-", "N", "-"], ["N", "E", "T"]])

    def test_empty_grid_is_rejected(self) -> None:
        with self.assertRaises(LayoutUnderflowError):
            PuzzleNormalizer().to_output(CrosswordGrid(GridConfig(size=5)))

    def test_assign_numbers(self) -> None:
        grid = build_grid(
            ("NET", 5, 2, Direction.ACROSS),
            ("ONE", 3, 3, Direction.DOWN),
        )
        self.assertEqual(
            PuzzleNormalizer.assign_numbers(grid.placed_words),
            {(3, 3): 1, (5, 2): 2},
        )

    def test_normalizing_twice_is_idempotent(self) -> None:
        entries = [
            Entry("PYTHON", "lang"),
            Entry("TYPE", "kind"),
            Entry("ONION", "veg"),
            Entry("NET", "web"),
        ]
        puzzle = CrosswordGenerator().generate(entries)
        rebuilt = puzzle.to_grid()
        self.assertEqual(
            rebuilt.bounding_box(),
            BoundingBox(top=0, left=0, bottom=puzzle.height - 1, right=puzzle.width - 1),
        )
        again = to_output(rebuilt)
        self.assertEqual(again.grid, puzzle.grid)
        self.assertEqual(again.across, puzzle.across)
        self.assertEqual(again.down, puzzle.down)


class ValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        grid = build_grid(
            ("CAT", 3, 3, Direction.ACROSS),
            ("COW", 3, 3, Direction.DOWN),
            ("TEN", 3, 5, Direction.DOWN),
        )
        self.puzzle = to_output(grid)
        self.validator = PuzzleValidator()

    def test_normalized_puzzle_passes(self) -> None:
        result = self.validator.validate(self.puzzle)
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_letter_mismatch_fails(self) -> None:
        self.puzzle.grid[2][2] = "M"
        result = self.validator.validate(self.puzzle)
        self.assertFalse(result.ok)
        self.assertIn("expects 'N'", result.messages[0])

    def test_numbering_gap_fails(self) -> None:
        self.puzzle.down[1].number = 3
        result = self.validator.validate(self.puzzle)
        self.assertFalse(result.ok)
        self.assertIn("reading order", result.messages[0])

    def test_end_contact_fails(self) -> None:
        puzzle = CrosswordPuzzle(
            width=4,
            height=1,
            grid=[["A", "T", "O", "P"]],
            across=[ClueEntry(1, "on", "AT", 1, 1), ClueEntry(2, "peak", "OP", 3, 1)],
        )
        result = self.validator.validate(puzzle)
        self.assertFalse(result.ok)
        self.assertIn("touches", result.messages[0])


class PrettyTests(unittest.TestCase):
    def test_format_grid_and_clues(self) -> None:
        grid = build_grid(
            ("CAT", 3, 3, Direction.ACROSS),
            ("COW", 3, 3, Direction.DOWN),
        )
        puzzle = to_output(grid, title="Farm Crossword")
        rendered = format_grid(puzzle)
        self.assertIn(" 1 |  C  A  T", rendered)
        self.assertIn(" 2 |  O  .  .", rendered)
        clues = format_clues(puzzle)
        self.assertIn("--- Across ---", clues)
        self.assertIn("1. cow (3)  [COW]", clues)

        stream = io.StringIO()
        pretty_print_puzzle(puzzle, stream=stream)
        output = stream.getvalue()
        self.assertTrue(output.startswith("Farm Crossword"))
        self.assertIn("2 words", output)
        self.assertNotIn("Unplaced", output)

    def test_pretty_print_lists_unplaced_words(self) -> None:
        grid = build_grid(("CAT", 3, 3, Direction.ACROSS), ("COW", 3, 3, Direction.DOWN))
        grid.unplaced = ["ZZZ"]
        stream = io.StringIO()
        pretty_print_puzzle(to_output(grid), stream=stream)
        self.assertIn("Unplaced: ZZZ", stream.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
