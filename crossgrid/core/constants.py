"""Shared constants and enumerations for the crossword layout engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


EMPTY_CELL = "-"
MAX_CLUE_LENGTH = 100
MIN_WORD_COUNT = 5
MAX_WORD_COUNT = 10


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def perpendicular(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class Difficulty(str, Enum):
    """Puzzle difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultyProfile:
    """Word shape and clue tone requested from the entry source."""

    word_length_min: int
    word_length_max: int
    clue_style: str
    word_type: str

    def accepts(self, answer: str) -> bool:
        return self.word_length_min <= len(answer) <= self.word_length_max


DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        word_length_min=3,
        word_length_max=7,
        clue_style="direct, simple definitions",
        word_type="common, everyday words",
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        word_length_min=4,
        word_length_max=10,
        clue_style="may use synonyms or indirect phrasing",
        word_type="mix of common and moderately difficult words",
    ),
    Difficulty.HARD: DifficultyProfile(
        word_length_min=6,
        word_length_max=12,
        clue_style="indirect, conceptual, or cryptic",
        word_type="domain-specific, technical, or rare terms",
    ),
}


def difficulty_profile(difficulty: Difficulty | str | None) -> DifficultyProfile:
    """Return the profile for ``difficulty``, defaulting to medium."""

    if isinstance(difficulty, Difficulty):
        return DIFFICULTY_PROFILES[difficulty]
    try:
        key = Difficulty((difficulty or Difficulty.MEDIUM.value).lower())
    except ValueError:
        key = Difficulty.MEDIUM
    return DIFFICULTY_PROFILES[key]
