"""Pretty-print helpers for finished puzzles."""

from __future__ import annotations

import sys
from typing import List

from ..core.constants import EMPTY_CELL
from ..core.models import CrosswordPuzzle


EMPTY_SYMBOL = "."


def format_grid(puzzle: CrosswordPuzzle) -> str:
    width = puzzle.width
    header_cells = [f"{c:>2}" for c in range(1, width + 1)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(puzzle.grid, start=1):
        symbols = [EMPTY_SYMBOL if cell == EMPTY_CELL else cell for cell in row]
        row_render = " ".join(f"{symbol:>2}" for symbol in symbols)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_clues(puzzle: CrosswordPuzzle) -> str:
    lines: List[str] = []
    for heading, clues in (("Across", puzzle.across), ("Down", puzzle.down)):
        lines.append(f"--- {heading} ---")
        for clue in clues:
            lines.append(f"  {clue.number:>2}. {clue.clue} ({len(clue.answer)})  [{clue.answer}]")
    return "\n".join(lines)


def pretty_print_puzzle(puzzle: CrosswordPuzzle, *, stream=None) -> None:
    """Print the puzzle grid and clue lists in a human-friendly format."""

    stream = stream or sys.stdout
    if puzzle.title:
        print(puzzle.title, file=stream)
    print(format_grid(puzzle), file=stream)
    print(file=stream)
    print(format_clues(puzzle), file=stream)
    print(file=stream)
    print(f"Size: {puzzle.width} x {puzzle.height}, {puzzle.word_count} words", file=stream)
    if puzzle.unplaced:
        print(f"Unplaced: {', '.join(puzzle.unplaced)}", file=stream)
