"""Greedy crossword layout orchestration.

Entries are placed longest first. The longest word anchors the grid; every
other word is dropped onto the legal intersection nearest to the centre of
the letters placed so far. Words that find no crossing are retried in later
passes and silently left out once the passes run out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.constants import Direction
from ..core.exceptions import InsufficientInputError, LayoutUnderflowError, ValidationError
from ..core.models import CandidatePlacement, CrosswordPuzzle, Entry
from ..utils.logger import get_logger
from .grid import CrosswordGrid, GridConfig
from .numbering import PuzzleNormalizer
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


@dataclass
class LayoutConfig:
    """Driver settings.

    Unset anchor coordinates sit a quarter of the way into the canvas; the
    column is pulled left when the anchor word would otherwise overrun it.
    """

    grid_size: int = 50
    anchor_row: Optional[int] = None
    anchor_col: Optional[int] = None
    max_passes: int = 3
    min_entries: int = 2
    min_placed_words: int = 3

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError(f"Grid size must be positive, got {self.grid_size}")
        for name in ("anchor_row", "anchor_col"):
            value = getattr(self, name)
            if value is not None and not 0 <= value < self.grid_size:
                raise ValueError(f"{name}={value} lies outside a {self.grid_size} grid")

    def to_grid_config(self) -> GridConfig:
        return GridConfig(size=self.grid_size)

    def anchor_for(self, word: str) -> Tuple[int, int]:
        offset = self.grid_size // 4
        row = self.anchor_row if self.anchor_row is not None else offset
        if self.anchor_col is not None:
            return row, self.anchor_col
        return row, max(0, min(offset, self.grid_size - len(word)))


class CrosswordGenerator:
    """High-level orchestrator: greedy layout, then normalization."""

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()
        self.normalizer = PuzzleNormalizer()
        self.validator = PuzzleValidator()

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(
        self,
        entries: Sequence[Entry],
        topic: Optional[str] = None,
        difficulty: Optional[str] = None,
        title: Optional[str] = None,
    ) -> CrosswordPuzzle:
        grid = self.generate_layout(entries)
        puzzle = self.normalizer.to_output(
            grid,
            title=title or puzzle_title(topic),
            difficulty=difficulty,
        )
        validation = self.validator.validate(puzzle)
        if not validation.ok:
            raise ValidationError(f"Puzzle validation failed: {validation.messages}")
        LOGGER.info("Crossword generation completed with %s words", puzzle.word_count)
        return puzzle

    def generate_layout(self, entries: Sequence[Entry]) -> CrosswordGrid:
        self._check_entries(entries)
        grid = CrosswordGrid(self.config.to_grid_config())
        ordered = sorted(entries, key=lambda entry: len(entry.answer), reverse=True)

        anchor, remaining = ordered[0], list(ordered[1:])
        anchor_row, anchor_col = self.config.anchor_for(anchor.answer)
        if grid.can_place(anchor.answer, anchor_row, anchor_col, Direction.ACROSS):
            grid.place(anchor.answer, anchor_row, anchor_col, Direction.ACROSS, anchor.clue, 1)
            LOGGER.info("Anchored %s across at (%s,%s)", anchor.answer, anchor_row, anchor_col)
        else:
            LOGGER.warning("Anchor word %s does not fit a %s grid", anchor.answer, grid.size)
            remaining.insert(0, anchor)

        for pass_index in range(1, self.config.max_passes + 1):
            if not remaining:
                break
            still_pending = self._placement_pass(grid, remaining)
            LOGGER.debug(
                "Pass %s/%s done: %s placed, %s pending",
                pass_index,
                self.config.max_passes,
                grid.placed_count,
                len(still_pending),
            )
            stalled = len(still_pending) == len(remaining)
            remaining = still_pending
            if stalled:
                break

        for entry in remaining:
            LOGGER.info("Dropping %s: no valid intersection", entry.answer)
        grid.unplaced = [entry.answer for entry in remaining]

        if grid.placed_count < self.config.min_placed_words:
            raise LayoutUnderflowError(
                f"Only {grid.placed_count} of {len(entries)} words could be connected "
                f"(need at least {self.config.min_placed_words})"
            )
        LOGGER.info("Placed %s of %s words", grid.placed_count, len(entries))
        return grid

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def _placement_pass(self, grid: CrosswordGrid, pending: List[Entry]) -> List[Entry]:
        """Try every pending entry once; return those still unplaced."""

        unplaced: List[Entry] = []
        for entry in pending:
            candidates = [
                candidate
                for candidate in grid.find_intersections(entry.answer)
                if not grid.covers_end_cap(entry.answer, candidate.row, candidate.col, candidate.direction)
            ]
            best = self._best_candidate(grid, candidates)
            if best is None:
                unplaced.append(entry)
                continue
            grid.place(
                entry.answer,
                best.row,
                best.col,
                best.direction,
                entry.clue,
                grid.placed_count + 1,
            )
        return unplaced

    @staticmethod
    def _best_candidate(
        grid: CrosswordGrid, candidates: List[CandidatePlacement]
    ) -> Optional[CandidatePlacement]:
        """Pick the candidate whose start lies closest to the centre of the letters."""

        if not candidates:
            return None
        box = grid.bounding_box()
        if box is None:
            return candidates[0]
        center_row, center_col = box.center
        best: Optional[CandidatePlacement] = None
        best_score = float("inf")
        for candidate in candidates:
            score = abs(candidate.row - center_row) + abs(candidate.col - center_col)
            if score < best_score:
                best, best_score = candidate, score
        return best

    def _check_entries(self, entries: Sequence[Entry]) -> None:
        if len(entries) < self.config.min_entries:
            raise InsufficientInputError(
                f"Need at least {self.config.min_entries} entries, got {len(entries)}"
            )
        for index, entry in enumerate(entries):
            if not entry.answer or not entry.clue:
                raise InsufficientInputError(f"Entry {index} has an empty answer or clue")


def puzzle_title(topic: Optional[str]) -> Optional[str]:
    """Display title for a topic, e.g. ``"space travel"`` -> ``"Space travel Crossword"``."""

    if not topic or not topic.strip():
        return None
    cleaned = topic.strip()
    return f"{cleaned[0].upper()}{cleaned[1:]} Crossword"


def generate_layout(entries: Sequence[Entry], config: Optional[LayoutConfig] = None) -> CrosswordGrid:
    return CrosswordGenerator(config).generate_layout(entries)
