"""Crop a working grid to its letters and number the clues in reading order."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..core.constants import EMPTY_CELL, Direction
from ..core.exceptions import LayoutUnderflowError
from ..core.models import BoundingBox, ClueEntry, CrosswordPuzzle, PlacementRecord
from ..utils.logger import get_logger
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)


class PuzzleNormalizer:
    """Converts an oversized working grid into the external puzzle shape."""

    def to_output(
        self,
        grid: CrosswordGrid,
        title: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> CrosswordPuzzle:
        box = grid.bounding_box()
        if box is None or not grid.placed_words:
            raise LayoutUnderflowError("Cannot normalize a grid with no placed words")

        rows = self._slice(grid, box)
        numbers = self.assign_numbers(grid.placed_words)

        across: List[ClueEntry] = []
        down: List[ClueEntry] = []
        for record in grid.placed_words:
            clue = ClueEntry(
                number=numbers[(record.row, record.col)],
                clue=record.clue,
                answer=record.answer,
                x=record.col - box.left + 1,
                y=record.row - box.top + 1,
            )
            if record.direction == Direction.ACROSS:
                across.append(clue)
            else:
                down.append(clue)
        across.sort(key=lambda clue: clue.number)
        down.sort(key=lambda clue: clue.number)

        LOGGER.info(
            "Normalized puzzle to %sx%s with %s across and %s down clues",
            box.width,
            box.height,
            len(across),
            len(down),
        )
        return CrosswordPuzzle(
            width=box.width,
            height=box.height,
            grid=rows,
            across=across,
            down=down,
            title=title,
            difficulty=difficulty,
            unplaced=list(grid.unplaced),
        )

    @staticmethod
    def assign_numbers(records: List[PlacementRecord]) -> Dict[Tuple[int, int], int]:
        """Number every word start in row-major order; shared starts share a number."""

        starts = sorted({(record.row, record.col) for record in records})
        return {start: number for number, start in enumerate(starts, start=1)}

    @staticmethod
    def _slice(grid: CrosswordGrid, box: BoundingBox) -> List[List[str]]:
        return [
            [grid.cells[r][c] or EMPTY_CELL for c in range(box.left, box.right + 1)]
            for r in range(box.top, box.bottom + 1)
        ]


def to_output(
    grid: CrosswordGrid,
    title: Optional[str] = None,
    difficulty: Optional[str] = None,
) -> CrosswordPuzzle:
    return PuzzleNormalizer().to_output(grid, title=title, difficulty=difficulty)
