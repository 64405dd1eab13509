"""Entry sources feeding the layout engine."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol, Sequence

from ..core.constants import (
    MAX_CLUE_LENGTH,
    MAX_WORD_COUNT,
    MIN_WORD_COUNT,
    Difficulty,
    difficulty_profile,
)
from ..core.exceptions import EntryGenerationError
from ..core.models import Entry
from ..utils.logger import get_logger
from .gemini_client import GeminiClient


LOGGER = get_logger(__name__)

NON_LETTER_RE = re.compile(r"[^A-Z]")
JSON_ARRAY_RE = re.compile(r"\[[\s\S]*?\]")


class EntryGenerator(Protocol):
    """Protocol implemented by all entry providers."""

    def generate(
        self, topic: str, count: int = 8, difficulty: Difficulty | str = Difficulty.MEDIUM,
    ) -> List[Entry]:
        ...


class GeminiEntryGenerator:
    """Asks Gemini for answer/clue pairs on a topic."""

    PROMPT = (
        'Generate {count} crossword entries for topic "{topic}".\n'
        "Difficulty: {difficulty}\n"
        "\n"
        "Rules:\n"
        "- One-word answers only, uppercase A-Z letters\n"
        "- Word length: {length_min}-{length_max} letters\n"
        "- Word type: {word_type}\n"
        "- Clue style: {clue_style}\n"
        "- No duplicate answers\n"
        "- Output ONLY valid JSON array\n"
        "\n"
        "Format:\n"
        '[{{"a":"ANSWER","c":"Clue text"}}]'
    )

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    def generate(
        self, topic: str, count: int = 8, difficulty: Difficulty | str = Difficulty.MEDIUM,
    ) -> List[Entry]:
        prompt = self.render_prompt(topic, count, difficulty)
        response_text = self._client.generate_text(prompt)
        entries = sanitize_entries(self.parse_response(response_text), difficulty)
        LOGGER.info("Gemini produced %s usable entries for '%s'", len(entries), topic)
        return entries

    @classmethod
    def render_prompt(cls, topic: str, count: int, difficulty: Difficulty | str) -> str:
        profile = difficulty_profile(difficulty)
        level = difficulty.value if isinstance(difficulty, Difficulty) else str(difficulty)
        return cls.PROMPT.format(
            count=count,
            topic=topic,
            difficulty=level.upper(),
            length_min=profile.word_length_min,
            length_max=profile.word_length_max,
            word_type=profile.word_type,
            clue_style=profile.clue_style,
        )

    @staticmethod
    def parse_response(text: str) -> List[Entry]:
        """Pull the first JSON array out of ``text``; prose and code fences are ignored."""

        match = JSON_ARRAY_RE.search(text or "")
        if not match:
            raise EntryGenerationError("No JSON array found in LLM response")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise EntryGenerationError(f"LLM response is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise EntryGenerationError("LLM response is not an array")

        entries: List[Entry] = []
        for item in data:
            if not isinstance(item, dict):
                LOGGER.warning("Skipping invalid entry: %s", item)
                continue
            answer = _field(item, "a", "answer")
            clue = _field(item, "c", "clue")
            if not answer or not clue:
                LOGGER.warning("Skipping invalid entry: %s", item)
                continue
            entries.append(Entry(answer=answer, clue=clue))
        return entries


class UserEntryListGenerator:
    """Returns a user-supplied list of ``WORD`` or ``WORD:Clue`` items as entries."""

    def __init__(self, raw_items: Iterable[str]) -> None:
        self._entries: List[Entry] = []
        for item in raw_items:
            item = item.strip()
            if not item:
                continue
            word, _, clue = item.partition(":")
            word = word.strip().upper()
            clue = clue.strip() or f"{len(word)} letters"
            self._entries.append(Entry(answer=word, clue=clue))

    def generate(
        self, topic: str = "", count: int = 0, difficulty: Difficulty | str = Difficulty.MEDIUM,
    ) -> List[Entry]:
        entries = list(self._entries)
        return entries[:count] if count > 0 else entries


def _field(item: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value: Any = item.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def parse_entries_file(path: Path) -> List[str]:
    """Read entries from a file, one per line. Blank lines and # comments are skipped."""
    items: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        items.append(line)
    return items


def clean_answer(text: str) -> str:
    """Uppercase ``text`` and drop everything outside A-Z."""

    return NON_LETTER_RE.sub("", (text or "").upper())


def sanitize_entries(
    entries: Sequence[Entry], difficulty: Difficulty | str | None = None
) -> List[Entry]:
    """Normalize answers and clues, dropping empties, duplicates and off-length words.

    The length window only applies when ``difficulty`` is given.
    """

    profile = difficulty_profile(difficulty) if difficulty is not None else None
    cleaned: List[Entry] = []
    seen: set[str] = set()
    for entry in entries:
        answer = clean_answer(entry.answer)
        clue = (entry.clue or "").strip()[:MAX_CLUE_LENGTH]
        if not answer or not clue:
            LOGGER.debug("Dropping empty entry %r", entry)
            continue
        if answer in seen:
            LOGGER.debug("Dropping duplicate answer %s", answer)
            continue
        if profile is not None and not profile.accepts(answer):
            LOGGER.debug("Dropping %s: length %s outside difficulty window", answer, len(answer))
            continue
        seen.add(answer)
        cleaned.append(Entry(answer=answer, clue=clue))
    return cleaned


def clamp_word_count(count: int) -> int:
    return min(max(count, MIN_WORD_COUNT), MAX_WORD_COUNT)
