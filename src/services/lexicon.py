"""
English → Chinese lexicon store and loader.

The store is built once from an ordered sequence of entries and is read-only
afterwards. Besides the primary index by lowercase English key it keeps
explicit secondary indexes by word length (for fuzzy candidate pruning) and
by first letter.

The mapping file is looked up in the usual data locations; if none is found
a small embedded dataset is used so the service can still start.
"""

import gzip
import json
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Self


DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Category(StrEnum):
    """Semantic category of a lexicon entry."""

    NATURE = "Nature/Existence"
    SOCIETY = "People/Society"
    ACTIONS = "Actions/Changes"
    QUALITIES = "Qualities/Degree"
    MODERN = "Modern/Abstract"
    COMPOUND = "Compound"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, raw: object) -> "Category":
        """Parse a category label, accepting the short form ("Nature")."""
        if not isinstance(raw, str) or not raw.strip():
            return cls.UNKNOWN
        text = raw.strip()
        for category in cls:
            if category.value.lower() == text.lower():
                return category
        head = text.split("/")[0].lower()
        for category in cls:
            if category.value.split("/")[0].lower() == head:
                return category
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class EntryAnalysis:
    """Pre-computed analysis shipped with an enriched entry."""

    structure: str = ""
    morphemes: tuple[str, ...] = ()
    meaning: str = ""
    match_type: str = ""
    confidence: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        morphemes = data.get("morphemes") or ()
        if isinstance(morphemes, str):
            morphemes = (morphemes,)
        if not isinstance(morphemes, (list, tuple)):
            raise ValueError(f"morphemes must be a list, got {type(morphemes).__name__}")
        confidence = data.get("confidence")
        try:
            confidence = float(confidence) if confidence is not None else None
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid confidence {confidence!r}") from e
        return cls(
            structure=str(data.get("structure") or ""),
            morphemes=tuple(str(m) for m in morphemes),
            meaning=str(data.get("meaning") or ""),
            match_type=str(data.get("matchType", data.get("match_type")) or ""),
            confidence=confidence,
        )


@dataclass(frozen=True, slots=True)
class LexiconEntry:
    """Single English → Chinese mapping."""

    english: str
    chinese: str
    pinyin: str = ""
    category: Category = Category.UNKNOWN
    priority: int = 0
    analysis: EntryAnalysis | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Build an entry from a mapping-file record.

        Raises:
            ValueError: If `priority` is not an integer or `analysis` is not
                an object.
        """
        analysis = data.get("analysis")
        if analysis and not isinstance(analysis, dict):
            raise ValueError(f"analysis must be an object, got {type(analysis).__name__}")
        try:
            priority = int(data.get("priority") or 0)
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid priority {data.get('priority')!r}") from e
        return cls(
            english=str(data.get("english") or "").strip().lower(),
            chinese=str(data.get("chinese") or "").strip(),
            pinyin=str(data.get("pinyin") or ""),
            category=Category.parse(data.get("category")),
            priority=priority,
            analysis=EntryAnalysis.from_dict(analysis) if analysis else None,
        )


class LexiconStore:
    """In-memory lexicon with typed secondary indexes.

    Duplicate keys follow a last-write-wins policy: the later entry replaces
    the earlier one but keeps its original insertion position.
    """

    def __init__(self, entries: Iterable[LexiconEntry] = (), source: str = "memory") -> None:
        self._index: dict[str, LexiconEntry] = {}
        self._order: dict[str, int] = {}
        self._by_length: dict[int, list[LexiconEntry]] = {}
        self._by_letter: dict[str, list[LexiconEntry]] = {}
        self.source = source

        for entry in entries:
            self._add(entry)

    def _add(self, entry: LexiconEntry) -> None:
        key = entry.english.strip().lower()
        if not key:
            raise ValueError("Lexicon entry has an empty English key")
        previous = self._index.get(key)
        self._index[key] = entry

        if previous is not None:
            self._replace(self._by_length[len(key)], previous, entry)
            self._replace(self._by_letter[key[0]], previous, entry)
            return

        self._order[key] = len(self._order)
        self._by_length.setdefault(len(key), []).append(entry)
        self._by_letter.setdefault(key[0], []).append(entry)

    @staticmethod
    def _replace(bucket: list[LexiconEntry], old: LexiconEntry, new: LexiconEntry) -> None:
        for i, item in enumerate(bucket):
            if item is old:
                bucket[i] = new
                return

    def lookup(self, word: str) -> LexiconEntry | None:
        """Exact, case-insensitive key lookup."""
        return self._index.get(word.strip().lower())

    def entries_of_length(self, n: int) -> tuple[LexiconEntry, ...]:
        return tuple(self._by_length.get(n, ()))

    def entries_starting_with(self, letter: str) -> tuple[LexiconEntry, ...]:
        return tuple(self._by_letter.get(letter[:1].lower(), ()))

    def position(self, entry: LexiconEntry) -> int:
        """Insertion rank of an entry's key (used for stable tie-breaking)."""
        return self._order.get(entry.english.strip().lower(), len(self._order))

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[LexiconEntry]:
        return iter(sorted(self._index.values(), key=self.position))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.lookup(word) is not None


# ============================================================================
# Loading
# ============================================================================


FALLBACK_ENTRIES: tuple[dict[str, Any], ...] = (
    {
        "english": "photography",
        "chinese": "摄影",
        "pinyin": "shè yǐng",
        "category": "Modern/Abstract",
        "priority": 3,
        "analysis": {
            "structure": "photo (光) + graphy (写)",
            "morphemes": ["photo", "graphy"],
            "meaning": "光写 → 摄影",
            "matchType": "classical_compound",
        },
    },
    {
        "english": "democracy",
        "chinese": "民主",
        "pinyin": "mín zhǔ",
        "category": "Modern/Abstract",
        "priority": 3,
        "analysis": {
            "structure": "demo (民) + cracy (治)",
            "morphemes": ["demo", "cracy"],
            "meaning": "民治 → 民主",
            "matchType": "classical_compound",
        },
    },
    {"english": "water", "chinese": "水", "pinyin": "shuǐ", "category": "Nature/Existence", "priority": 1},
    {"english": "fire", "chinese": "火", "pinyin": "huǒ", "category": "Nature/Existence", "priority": 1},
    {"english": "person", "chinese": "人", "pinyin": "rén", "category": "People/Society", "priority": 1},
    {"english": "happy", "chinese": "快乐", "pinyin": "kuài lè", "category": "Qualities/Degree", "priority": 2},
    {"english": "write", "chinese": "写", "pinyin": "xiě", "category": "Actions/Changes", "priority": 1},
)


def _candidate_paths() -> list[Path]:
    paths: list[Path] = []
    env_path = os.getenv("LEXICON_PATH", "").strip()
    if env_path:
        paths.append(Path(env_path))
    paths.extend([
        DATA_DIR / "mapping.json",
        DATA_DIR / "mapping.json.gz",
        DATA_DIR / "sinographic_mapping.json",
    ])
    return paths


def _read_records(path: Path) -> list[dict[str, Any]]:
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as f:
            data = json.load(f)
    else:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

    if isinstance(data, dict):
        data = data.get("entries", [])
    if not isinstance(data, list):
        raise ValueError(f"Unexpected mapping format in {path.name}")
    return data


def build_entries(records: Iterable[Any]) -> list[LexiconEntry]:
    """Convert raw records to entries, skipping incomplete or malformed ones."""
    entries: list[LexiconEntry] = []
    skipped = 0
    for record in records:
        if not isinstance(record, dict):
            skipped += 1
            continue
        try:
            entry = LexiconEntry.from_dict(record)
        except ValueError as e:
            print(f"⚠️ Bad mapping record {record.get('english')!r}: {e}")
            skipped += 1
            continue
        if not entry.english or not entry.chinese:
            skipped += 1
            continue
        entries.append(entry)
    if skipped:
        print(f"⚠️ Skipped {skipped} incomplete or malformed mapping records")
    return entries


def load_lexicon(path: Path | str | None = None) -> LexiconStore:
    """
    Load the lexicon from a mapping file.

    Args:
        path: Explicit mapping file (.json or .json.gz). If None, checks
              LEXICON_PATH and the data directory.

    Returns:
        A populated LexiconStore. Falls back to the embedded dataset when no
        file can be loaded.
    """
    search_paths = [Path(path)] if path else _candidate_paths()
    found_any = False

    for candidate in search_paths:
        if not candidate.exists():
            continue
        found_any = True
        print(f"📚 Loading lexicon from {candidate}...")
        try:
            entries = build_entries(_read_records(candidate))
        except (OSError, ValueError) as e:
            print(f"⚠️ Failed to load {candidate}: {e}")
            continue
        store = LexiconStore(entries, source=str(candidate))
        print(f"✓ Loaded {len(store)} mapping entries")
        return store

    if found_any:
        print("⚠️ No mapping file could be loaded, using embedded fallback data")
    else:
        print("⚠️ No mapping file found, using embedded fallback data")
    return LexiconStore(build_entries(FALLBACK_ENTRIES), source="fallback")
