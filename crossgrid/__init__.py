"""Crossword layout engine turning answer/clue lists into numbered grids.

This package exposes the public API surface via:

- ``crossgrid.engine.generator.CrosswordGenerator``: greedy layout and numbering.
- ``crossgrid.engine.grid.CrosswordGrid``: the working letter grid.
- ``crossgrid.io.entries`` helpers: user word lists and Gemini-backed entries.
"""

from .core.exceptions import (
    CrosswordError,
    InsufficientInputError,
    LayoutUnderflowError,
    ValidationError,
)
from .core.models import CrosswordPuzzle, Entry
from .engine.generator import CrosswordGenerator, LayoutConfig, generate_layout
from .engine.grid import CrosswordGrid, GridConfig
from .engine.numbering import PuzzleNormalizer, to_output

__all__ = [
    "CrosswordError",
    "CrosswordGenerator",
    "CrosswordGrid",
    "CrosswordPuzzle",
    "Entry",
    "GridConfig",
    "InsufficientInputError",
    "LayoutConfig",
    "LayoutUnderflowError",
    "PuzzleNormalizer",
    "ValidationError",
    "generate_layout",
    "to_output",
]

__version__ = "0.1.0"
