"""CLI entrypoint for the crossword layout engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from crossgrid.core.constants import Difficulty
from crossgrid.core.exceptions import CrosswordError
from crossgrid.core.models import Entry
from crossgrid.engine.generator import CrosswordGenerator, LayoutConfig
from crossgrid.io.entries import (
    EntryGenerator,
    GeminiEntryGenerator,
    UserEntryListGenerator,
    clamp_word_count,
    parse_entries_file,
    sanitize_entries,
)
from crossgrid.io.gemini_client import GeminiAPIError, GeminiClient
from crossgrid.utils.logger import configure_logging, get_logger
from crossgrid.utils.pretty import pretty_print_puzzle


LOGGER = get_logger("crossgrid.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lay out answer/clue entries as a numbered crossword grid",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit entries (format: WORD or WORD:Clue)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one WORD or WORD:Clue entry per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--llm",
        action="store_true",
        help="Generate entries for --topic with Gemini (needs GEMINI_API_KEY)",
    )
    parser.add_argument("--topic", type=str, default="", help="Puzzle topic, also used for the title")
    parser.add_argument("--title", type=str, default=None, help="Explicit puzzle title")
    parser.add_argument(
        "--word-count",
        type=int,
        default=8,
        help="Number of entries to request from the LLM (clamped to 5-10)",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=None,
        help="Difficulty level; also filters entries by word length",
    )
    parser.add_argument("--grid-size", type=int, default=50, help="Working canvas size in cells")
    parser.add_argument("--passes", type=int, default=3, help="Placement passes over unplaced words")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--pretty", action="store_true", help="Print the grid and clues to stderr")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def collect_entries(args: argparse.Namespace, client: Optional[GeminiClient] = None) -> List[Entry]:
    raw_items: List[str] = []
    if args.words:
        raw_items.extend(args.words)
    if args.words_file:
        raw_items.extend(parse_entries_file(args.words_file))

    # A count of 0 keeps the whole user list.
    sources: List[Tuple[EntryGenerator, int]] = [(UserEntryListGenerator(raw_items), 0)]
    if client is not None:
        sources.append((GeminiEntryGenerator(client), clamp_word_count(args.word_count)))

    entries: List[Entry] = []
    for source, count in sources:
        entries.extend(
            source.generate(args.topic, count=count, difficulty=args.difficulty or Difficulty.MEDIUM)
        )
    return sanitize_entries(entries, args.difficulty)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.llm and not args.topic:
        parser.error("--llm requires --topic")
    if not (args.words or args.words_file or args.llm):
        parser.error("provide --words, --words-file or --llm")

    client: Optional[GeminiClient] = None
    if args.llm:
        try:
            client = GeminiClient()
        except RuntimeError as exc:
            parser.error(str(exc))

    try:
        config = LayoutConfig(grid_size=args.grid_size, max_passes=args.passes)
    except ValueError as exc:
        LOGGER.error("Invalid layout settings: %s", exc)
        return 1

    try:
        entries = collect_entries(args, client)
        puzzle = CrosswordGenerator(config).generate(
            entries,
            topic=args.topic or None,
            difficulty=args.difficulty,
            title=args.title,
        )
    except (CrosswordError, GeminiAPIError) as exc:
        LOGGER.error("Crossword generation failed: %s", exc)
        return 1

    if args.pretty:
        pretty_print_puzzle(puzzle, stream=sys.stderr)

    output_text = json.dumps(puzzle.to_dict(), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
