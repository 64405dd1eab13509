"""Data models supporting the crossword layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .constants import Direction

if TYPE_CHECKING:
    from ..engine.grid import CrosswordGrid


@dataclass(frozen=True)
class Entry:
    """An answer/clue pair supplied to the layout driver."""

    answer: str
    clue: str


@dataclass
class PlacementRecord:
    """A word committed to the grid.

    ``number`` is the insertion order of the placement, not the clue number
    printed on the finished puzzle.
    """

    answer: str
    clue: str
    row: int
    col: int
    direction: Direction
    number: int
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def length(self) -> int:
        return len(self.answer)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            dr, dc = self.direction.step
            self._cells = [(self.row + dr * i, self.col + dc * i) for i in range(self.length)]
        return self._cells

    @property
    def before(self) -> Tuple[int, int]:
        dr, dc = self.direction.step
        return self.row - dr, self.col - dc

    @property
    def after(self) -> Tuple[int, int]:
        dr, dc = self.direction.step
        return self.row + dr * self.length, self.col + dc * self.length


@dataclass(frozen=True)
class CandidatePlacement:
    """One legal spot where an unplaced word crosses an existing word."""

    row: int
    col: int
    direction: Direction


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive rectangle enclosing every letter in a grid."""

    top: int
    left: int
    bottom: int
    right: int

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def center(self) -> Tuple[float, float]:
        return (self.top + self.bottom) / 2, (self.left + self.right) / 2


@dataclass
class ClueEntry:
    """A numbered clue with 1-based coordinates relative to the puzzle."""

    number: int
    clue: str
    answer: str
    x: int
    y: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "clue": self.clue,
            "answer": self.answer,
            "x": self.x,
            "y": self.y,
        }


@dataclass
class CrosswordPuzzle:
    """Normalized puzzle handed to renderers and serializers."""

    width: int
    height: int
    grid: List[List[str]]
    across: List[ClueEntry] = field(default_factory=list)
    down: List[ClueEntry] = field(default_factory=list)
    title: Optional[str] = None
    difficulty: Optional[str] = None
    unplaced: List[str] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.across) + len(self.down)

    def clues(self) -> List[Tuple[Direction, ClueEntry]]:
        """Return every clue tagged with its direction, ordered by number."""

        tagged = [(Direction.ACROSS, clue) for clue in self.across]
        tagged.extend((Direction.DOWN, clue) for clue in self.down)
        tagged.sort(key=lambda item: (item[1].number, item[0] is Direction.DOWN))
        return tagged

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.title:
            payload["meta"] = {"title": self.title}
        payload["dimensions"] = {"width": self.width, "height": self.height}
        payload["grid"] = [list(row) for row in self.grid]
        payload["clues"] = {
            "across": [clue.to_dict() for clue in self.across],
            "down": [clue.to_dict() for clue in self.down],
        }
        if self.difficulty:
            payload["difficulty"] = {"level": self.difficulty}
        if self.unplaced:
            payload["unplacedWords"] = list(self.unplaced)
        return payload

    def to_grid(self) -> "CrosswordGrid":
        """Rebuild a working grid holding this puzzle at the origin."""

        from ..engine.grid import CrosswordGrid, GridConfig

        grid = CrosswordGrid(GridConfig(size=max(self.width, self.height)))
        for direction, clue in self.clues():
            grid.place(clue.answer, clue.y - 1, clue.x - 1, direction, clue.clue, grid.placed_count + 1)
        return grid
