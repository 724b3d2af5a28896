"""Word bank loading, normalization and shuffling."""

from __future__ import annotations

import json
import random
import re
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

import requests

from ..core.constants import MIN_WORD_LENGTH
from ..core.exceptions import WordBankError
from ..core.models import WordEntry
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

WORD_RE = re.compile(r"[^A-Z]")

DEFAULT_WORD_BANK: Tuple[Tuple[str, str], ...] = (
    ("PYTHON", "Language named after a comedy troupe"),
    ("BROWSER", "Program that renders this puzzle"),
    ("GRID", "Rows and columns of squares"),
    ("CLUE", "Hint for an answer"),
    ("ACROSS", "Left-to-right direction"),
    ("DOWN", "Top-to-bottom direction"),
    ("LETTER", "One square's worth of an answer"),
    ("PUZZLE", "Brain teaser"),
    ("NUMBER", "Badge in a starting square"),
    ("ANSWER", "What the solver types in"),
    ("TABLE", "HTML element holding the squares"),
    ("INPUT", "Box that takes one character"),
)


def clean_word(text: str) -> str:
    """Return ``text`` uppercased with everything but A-Z removed."""

    if not text:
        return ""
    return WORD_RE.sub("", text.upper())


def parse_entry(item: str) -> Optional[Tuple[str, str]]:
    """Parse one ``WORD`` or ``WORD:Clue`` line; blank lines and ``#`` comments give None."""

    item = item.strip()
    if not item or item.startswith("#"):
        return None
    word, _, clue = item.partition(":")
    return word.strip(), clue.strip()


def parse_lines(lines: Iterable[str]) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for line in lines:
        parsed = parse_entry(line)
        if parsed is not None:
            pairs.append(parsed)
    return pairs


def parse_json(payload: Any) -> List[Tuple[str, str]]:
    """Accept ``[{"word": ..., "clue": ...}, ...]`` or ``[[word, clue], ...]``."""

    if isinstance(payload, dict) and "words" in payload:
        payload = payload["words"]
    if not isinstance(payload, list):
        raise WordBankError("Word bank JSON must be a list of entries")
    pairs: List[Tuple[str, str]] = []
    for item in payload:
        if isinstance(item, dict):
            pairs.append((str(item.get("word", "")), str(item.get("clue", ""))))
        elif isinstance(item, (list, tuple)) and item:
            clue = str(item[1]) if len(item) > 1 else ""
            pairs.append((str(item[0]), clue))
        elif isinstance(item, str):
            pairs.append((item, ""))
        else:
            raise WordBankError(f"Unsupported word bank entry: {item!r}")
    return pairs


class WordBank:
    """An ordered, immutable collection of cleaned and de-duplicated entries."""

    def __init__(self, entries: Iterable[WordEntry]) -> None:
        self._entries: Tuple[WordEntry, ...] = tuple(entries)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "WordBank":
        entries: List[WordEntry] = []
        seen: set[str] = set()
        for raw_word, clue in pairs:
            word = clean_word(raw_word)
            if len(word) < MIN_WORD_LENGTH:
                LOGGER.warning(
                    "Skipping '%s' (fewer than %d letters after cleaning)", raw_word, MIN_WORD_LENGTH
                )
                continue
            if word in seen:
                LOGGER.warning("Duplicate word '%s', skipping", word)
                continue
            seen.add(word)
            entries.append(WordEntry(word=word, clue=(clue or "").strip()))
        if not entries:
            raise WordBankError("No valid word bank entries after filtering")
        return cls(entries)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "WordBank":
        return cls.from_pairs(parse_lines(lines))

    @classmethod
    def default(cls) -> "WordBank":
        return cls.from_pairs(DEFAULT_WORD_BANK)

    @classmethod
    def from_file(cls, path: Path | str) -> "WordBank":
        path = Path(path)
        if not path.exists():
            raise WordBankError(f"File not found: {path}")
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            try:
                return cls.from_pairs(parse_json(json.loads(text)))
            except json.JSONDecodeError as exc:
                raise WordBankError(f"Invalid JSON in {path}: {exc}") from exc
        return cls.from_lines(text.splitlines())

    @classmethod
    def from_url(cls, url: str, timeout_seconds: float = 30.0) -> "WordBank":
        """Download a word bank; JSON when the response or URL says so, else text lines."""

        try:
            response = requests.get(url, timeout=timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise WordBankError(f"Word bank request failed: {exc}") from exc

        content_type = response.headers.get("Content-Type", "")
        LOGGER.info("Fetched word bank from %s (%s)", url, content_type or "no content type")
        if "json" in content_type or url.lower().split("?", 1)[0].endswith(".json"):
            try:
                return cls.from_pairs(parse_json(response.json()))
            except ValueError as exc:
                raise WordBankError(f"Invalid JSON word bank at {url}: {exc}") from exc
        return cls.from_lines(response.text.splitlines())

    # ------------------------------------------------------------------
    # Derived banks
    # ------------------------------------------------------------------
    def shuffled(self, rng: random.Random) -> "WordBank":
        entries = list(self._entries)
        rng.shuffle(entries)
        return WordBank(entries)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    @property
    def entries(self) -> Tuple[WordEntry, ...]:
        return self._entries

    @property
    def longest(self) -> int:
        return max((len(entry.word) for entry in self._entries), default=0)

    def words(self) -> List[str]:
        return [entry.word for entry in self._entries]

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> WordEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"WordBank({len(self._entries)} entries)"


def load_word_bank(
    words: Optional[Sequence[str]] = None,
    words_file: Optional[Path | str] = None,
    url: Optional[str] = None,
) -> WordBank:
    """Combine CLI-style sources into one bank, falling back to the built-in sample."""

    pairs: List[Tuple[str, str]] = []
    if words:
        pairs.extend(parse_lines(words))
    if words_file:
        pairs.extend((entry.word, entry.clue) for entry in WordBank.from_file(words_file))
    if url:
        pairs.extend((entry.word, entry.clue) for entry in WordBank.from_url(url))
    if not pairs:
        LOGGER.info("No word source given; using the built-in word bank")
        return WordBank.default()
    return WordBank.from_pairs(pairs)
