"""Grid representation and placement helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.constants import Direction
from ..core.models import BoundingBox, CandidatePlacement, PlacementRecord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Configuration values for the working canvas."""

    size: int = 50

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Grid size must be positive, got {self.size}")


class CrosswordGrid:
    """Square letter buffer with an append-only log of placed words.

    The canvas is larger than any expected puzzle; the normalizer crops it
    down to the letters actually used.
    """

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        self.config = config or GridConfig()
        self.size = self.config.size
        self.cells: List[List[Optional[str]]] = [
            [None for _ in range(self.size)] for _ in range(self.size)
        ]
        self.placed_words: List[PlacementRecord] = []
        self.unplaced: List[str] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def letter_at(self, row: int, col: int) -> Optional[str]:
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        """Out-of-bounds cells count as empty."""

        return self.letter_at(row, col) is None

    @property
    def placed_count(self) -> int:
        return len(self.placed_words)

    def word_at(self, row: int, col: int, direction: Direction, length: int) -> str:
        dr, dc = direction.step
        return "".join(
            self.letter_at(row + dr * i, col + dc * i) or "" for i in range(length)
        )

    def bounding_box(self) -> Optional[BoundingBox]:
        """Smallest rectangle containing every letter, or ``None`` when empty."""

        top = left = self.size
        bottom = right = -1
        for r, row in enumerate(self.cells):
            for c, letter in enumerate(row):
                if letter is None:
                    continue
                top = min(top, r)
                bottom = max(bottom, r)
                left = min(left, c)
                right = max(right, c)
        if bottom < 0:
            return None
        return BoundingBox(top=top, left=left, bottom=bottom, right=right)

    # ------------------------------------------------------------------
    # Feasibility
    # ------------------------------------------------------------------
    def can_place(self, word: str, row: int, col: int, direction: Direction) -> bool:
        """Return whether ``word`` fits at ``(row, col)`` without breaking layout rules."""

        if not word:
            return False
        dr, dc = direction.step
        length = len(word)
        end_row = row + dr * (length - 1)
        end_col = col + dc * (length - 1)
        if not (self.in_bounds(row, col) and self.in_bounds(end_row, end_col)):
            return False

        for index, letter in enumerate(word):
            r, c = row + dr * index, col + dc * index
            existing = self.cells[r][c]
            if existing is not None and existing != letter:
                return False

        # A filled perpendicular neighbour is tolerated only when the cell
        # just before this one along the word is empty.
        for index in range(length):
            r, c = row + dr * index, col + dc * index
            if self.cells[r][c] is not None:
                continue
            if self._has_perpendicular_neighbor(r, c, direction) and not self.is_empty(r - dr, c - dc):
                return False

        if not self.is_empty(row - dr, col - dc):
            return False
        if not self.is_empty(end_row + dr, end_col + dc):
            return False
        return True

    def covers_end_cap(self, word: str, row: int, col: int, direction: Direction) -> bool:
        """Whether the run would fill the cell just before or after a placed word."""

        dr, dc = direction.step
        run = {(row + dr * i, col + dc * i) for i in range(len(word))}
        return any(record.before in run or record.after in run for record in self.placed_words)

    def _has_perpendicular_neighbor(self, row: int, col: int, direction: Direction) -> bool:
        pr, pc = direction.perpendicular.step
        return not self.is_empty(row - pr, col - pc) or not self.is_empty(row + pr, col + pc)

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def place(
        self,
        word: str,
        row: int,
        col: int,
        direction: Direction,
        clue: str,
        number: int,
    ) -> None:
        """Commit ``word`` to the grid.

        Callers must check :meth:`can_place` first; nothing is re-validated
        here.
        """

        record = PlacementRecord(
            answer=word,
            clue=clue,
            row=row,
            col=col,
            direction=direction,
            number=number,
        )
        for letter, (r, c) in zip(word, record.cells):
            self.cells[r][c] = letter
        self.placed_words.append(record)
        LOGGER.debug("Placed %s %s at (%s,%s) as #%s", word, direction.value, row, col, number)

    def find_intersections(self, word: str) -> List[CandidatePlacement]:
        """Enumerate placements of ``word`` crossing an already placed word.

        The same coordinates may appear more than once when several letter
        pairs line up on them.
        """

        candidates: List[CandidatePlacement] = []
        for placed in self.placed_words:
            direction = placed.direction.perpendicular
            for i, letter in enumerate(word):
                for j, placed_letter in enumerate(placed.answer):
                    if letter != placed_letter:
                        continue
                    row, col = self._aligned_start(placed, i, j)
                    if row < 0 or col < 0:
                        continue
                    if self.can_place(word, row, col, direction):
                        candidates.append(CandidatePlacement(row=row, col=col, direction=direction))
        return candidates

    @staticmethod
    def _aligned_start(placed: PlacementRecord, i: int, j: int) -> Tuple[int, int]:
        """Start cell putting letter ``i`` of a crossing word on letter ``j`` of ``placed``."""

        if placed.direction == Direction.ACROSS:
            return placed.row - i, placed.col + j
        return placed.row + j, placed.col - i
