"""Deterministic rule validation for finished puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Set, Tuple

from ..core.constants import EMPTY_CELL, Direction
from ..core.exceptions import ValidationError
from ..core.models import ClueEntry, CrosswordPuzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over the normalized puzzle."""

    def validate(self, puzzle: CrosswordPuzzle) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_dimensions(puzzle)
            self._check_letters_valid(puzzle)
            self._check_words_read_back(puzzle)
            self._check_no_end_contact(puzzle)
            self._check_numbering(puzzle)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_dimensions(self, puzzle: CrosswordPuzzle) -> None:
        if puzzle.width <= 0 or puzzle.height <= 0:
            raise ValidationError(f"Degenerate dimensions {puzzle.width}x{puzzle.height}")
        if len(puzzle.grid) != puzzle.height:
            raise ValidationError(f"Grid has {len(puzzle.grid)} rows, expected {puzzle.height}")
        for index, row in enumerate(puzzle.grid):
            if len(row) != puzzle.width:
                raise ValidationError(f"Row {index} has {len(row)} cells, expected {puzzle.width}")
        if puzzle.word_count == 0:
            raise ValidationError("Puzzle has no clues")

    def _check_letters_valid(self, puzzle: CrosswordPuzzle) -> None:
        for r, row in enumerate(puzzle.grid):
            for c, symbol in enumerate(row):
                if symbol == EMPTY_CELL:
                    continue
                if len(symbol) != 1 or not ("A" <= symbol <= "Z"):
                    raise ValidationError(f"Invalid letter '{symbol}' at ({r},{c})")

    def _check_words_read_back(self, puzzle: CrosswordPuzzle) -> None:
        covered: Set[Tuple[int, int]] = set()
        for direction, clue in puzzle.clues():
            cells = self._cells(clue, direction)
            for letter, (r, c) in zip(clue.answer, cells):
                if not (0 <= r < puzzle.height and 0 <= c < puzzle.width):
                    raise ValidationError(f"Clue {clue.number} {direction.value} leaves the grid")
                if puzzle.grid[r][c] != letter:
                    raise ValidationError(
                        f"Clue {clue.number} {direction.value} expects '{letter}' at ({r},{c}), "
                        f"grid holds '{puzzle.grid[r][c]}'"
                    )
                covered.add((r, c))
        for r, row in enumerate(puzzle.grid):
            for c, symbol in enumerate(row):
                if symbol != EMPTY_CELL and (r, c) not in covered:
                    raise ValidationError(f"Letter at ({r},{c}) belongs to no clue")

    def _check_no_end_contact(self, puzzle: CrosswordPuzzle) -> None:
        for direction, clue in puzzle.clues():
            dr, dc = direction.step
            start_r, start_c = clue.y - 1, clue.x - 1
            length = len(clue.answer)
            for r, c in ((start_r - dr, start_c - dc), (start_r + dr * length, start_c + dc * length)):
                if 0 <= r < puzzle.height and 0 <= c < puzzle.width and puzzle.grid[r][c] != EMPTY_CELL:
                    raise ValidationError(
                        f"Clue {clue.number} {direction.value} touches a letter at ({r},{c})"
                    )

    def _check_numbering(self, puzzle: CrosswordPuzzle) -> None:
        starts = {}
        for direction, clue in puzzle.clues():
            start = (clue.y, clue.x)
            if starts.setdefault(start, clue.number) != clue.number:
                raise ValidationError(f"Start cell {start} carries two numbers")
        ordered = sorted(starts.items())
        numbers = [number for _, number in ordered]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValidationError(f"Clue numbers out of reading order: {numbers}")
        for entries in (puzzle.across, puzzle.down):
            listed = [clue.number for clue in entries]
            if listed != sorted(listed) or len(set(listed)) != len(listed):
                raise ValidationError(f"Clue list not strictly ascending: {listed}")

    @staticmethod
    def _cells(clue: ClueEntry, direction: Direction) -> List[Tuple[int, int]]:
        dr, dc = direction.step
        return [(clue.y - 1 + dr * i, clue.x - 1 + dc * i) for i in range(len(clue.answer))]
