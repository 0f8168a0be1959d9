"""Word-to-mapping resolution engine.

Resolves an English word to a Chinese mapping by running an ordered cascade
of strategies; the first one that succeeds wins:

1. direct      - exact lexicon hit                        (1.00)
2. inflection  - strip -s/-es/-ed/-ing/-er/-est           (0.95)
3. prefixed    - strip un-/dis-/re-/... and prepend gloss (0.85)
   suffixed    - strip -ness/-less/... and append gloss   (0.80)
4. fuzzy       - character-set similarity                 (score)
5. compound    - classical/derivational segmentation      (0.75)

Every strategy is a plain function `(engine, word) -> MatchOutcome | None`.
The engine holds no per-query state, so `resolve` is deterministic.
"""

import re
from typing import Callable
from dataclasses import dataclass, replace
from enum import StrEnum, auto

from services.affixes import (
    CLASSICAL_PREFIXES,
    CLASSICAL_SUFFIXES,
    DEFAULT_TABLES,
    DERIVATIONAL_SUFFIXES,
    QUALITY_SUFFIXES,
    Y_INFLECTION_VARIANTS,
    AffixTables,
)
from services.lexicon import Category, EntryAnalysis, LexiconEntry, LexiconStore


class MatchKind(StrEnum):
    """Which strategy produced a result."""

    DIRECT = auto()
    INFLECTION = auto()
    PREFIXED = auto()
    SUFFIXED = auto()
    FUZZY = auto()
    COMPOUND = auto()
    UNKNOWN = auto()


class PartRole(StrEnum):
    """Role of a segment in a decomposition."""

    BASE = auto()
    INFLECTION = auto()
    PREFIX = auto()
    SUFFIX = auto()
    COMPONENT = auto()


@dataclass(frozen=True, slots=True)
class DecompositionPart:
    """One segment of a matched word.

    `part` is the literal substring of the normalized word; `lemma` is set
    when the segment was looked up under a different key (democrac -> democracy).
    """

    part: str
    role: PartRole
    gloss: str = ""
    lemma: str | None = None


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    """What a successful strategy reports back to the engine."""

    kind: MatchKind
    confidence: float
    entry: LexiconEntry
    decomposition: tuple[DecompositionPart, ...] = ()
    suggestions: tuple[LexiconEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Structured result of resolving one word."""

    original_input: str
    normalized_word: str
    found: bool
    confidence: float
    match_kind: MatchKind
    matched_entry: LexiconEntry | None = None
    decomposition: tuple[DecompositionPart, ...] = ()
    suggestions: tuple[LexiconEntry, ...] = ()
    entry_analysis: EntryAnalysis | None = None

    @classmethod
    def unknown(cls, original_input: str, normalized_word: str) -> "AnalysisResult":
        return cls(
            original_input=original_input,
            normalized_word=normalized_word,
            found=False,
            confidence=0.0,
            match_kind=MatchKind.UNKNOWN,
        )


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    """Tunable constants of the cascade.

    `fuzzy_threshold` is the single acceptance floor for fuzzy candidates;
    callers wanting a looser search pass their own config (e.g. 0.6).
    """

    direct_confidence: float = 1.0
    inflection_confidence: float = 0.95
    prefix_confidence: float = 0.85
    suffix_confidence: float = 0.80
    compound_confidence: float = 0.75
    fuzzy_threshold: float = 0.7
    fuzzy_length_window: int = 3
    fuzzy_min_length: int = 3
    max_suggestions: int = 4
    affix_min_stem: int = 3
    compound_min_length: int = 6
    compound_min_part: int = 3

    def __post_init__(self) -> None:
        if not 0.0 < self.fuzzy_threshold <= 1.0:
            raise ValueError(f"fuzzy_threshold must be in (0, 1], got {self.fuzzy_threshold}")
        if self.max_suggestions < 0:
            raise ValueError("max_suggestions must not be negative")


def normalize(word: str) -> str:
    """Trim and lowercase a raw word."""
    return word.strip().lower()


def similarity(a: str, b: str) -> float:
    """
    Similarity of two strings in [0, 1].

    1.0 for identical strings, 0.9 when one contains the other, otherwise
    the Jaccard index of their character sets. Symmetric in its arguments.
    """
    if a == b:
        return 1.0
    if a in b or b in a:
        return 0.9

    chars_a, chars_b = set(a), set(b)
    return len(chars_a & chars_b) / len(chars_a | chars_b)


# ============================================================================
# Strategies
# ============================================================================


Strategy = Callable[["MatchingEngine", str], MatchOutcome | None]


def match_direct(engine: "MatchingEngine", word: str) -> MatchOutcome | None:
    """Exact lexicon lookup."""
    entry = engine.store.lookup(word)
    if entry is None:
        return None
    return MatchOutcome(MatchKind.DIRECT, engine.config.direct_confidence, entry)


def _inflection_outcome(
    engine: "MatchingEngine",
    stem: str,
    ending: str,
    entry: LexiconEntry,
    meaning: str,
) -> MatchOutcome:
    lemma = entry.english if entry.english != stem else None
    return MatchOutcome(
        kind=MatchKind.INFLECTION,
        confidence=engine.config.inflection_confidence,
        entry=entry,
        decomposition=(
            DecompositionPart(stem, PartRole.BASE, entry.chinese, lemma),
            DecompositionPart(ending, PartRole.INFLECTION, meaning),
        ),
    )


def match_inflection(engine: "MatchingEngine", word: str) -> MatchOutcome | None:
    """
    Strip an inflectional ending and look up the stem.

    Endings are tried longest-first. If no plain stem matches, the y-variants
    (-ies, -ied, -ier, -iest) are tried with a final "y" restored.
    """
    tables = engine.tables
    store = engine.store

    for rule in tables.inflection_order():
        if word.endswith(rule.text) and len(word) > len(rule.text):
            stem = word[:-len(rule.text)]
            entry = store.lookup(stem)
            if entry:
                return _inflection_outcome(engine, stem, rule.text, entry, rule.meaning)

    for ending, inflection in Y_INFLECTION_VARIANTS.items():
        if word.endswith(ending) and len(word) > len(ending):
            stem = word[:-len(ending)]
            entry = store.lookup(stem + "y")
            if entry:
                meaning = tables.inflection_meaning(inflection)
                return _inflection_outcome(engine, stem, ending, entry, meaning)

    return None


def match_affix(engine: "MatchingEngine", word: str) -> MatchOutcome | None:
    """Strip a derivational prefix, or failing that a suffix."""
    tables = engine.tables
    store = engine.store
    config = engine.config

    for rule in tables.prefixes:
        if not word.startswith(rule.text) or len(word) - len(rule.text) < config.affix_min_stem:
            continue
        stem = word[len(rule.text):]
        entry = store.lookup(stem)
        if entry:
            return MatchOutcome(
                kind=MatchKind.PREFIXED,
                confidence=config.prefix_confidence,
                entry=replace(entry, english=word, chinese=rule.meaning + entry.chinese, analysis=None),
                decomposition=(
                    DecompositionPart(rule.text, PartRole.PREFIX, rule.meaning),
                    DecompositionPart(stem, PartRole.BASE, entry.chinese),
                ),
            )

    for rule in tables.suffixes:
        if not word.endswith(rule.text) or len(word) - len(rule.text) < config.affix_min_stem:
            continue
        stem = word[:-len(rule.text)]
        # happi + ness -> happy
        lemmas = [stem, stem[:-1] + "y"] if stem.endswith("i") else [stem]
        for lemma in lemmas:
            entry = store.lookup(lemma)
            if entry:
                return MatchOutcome(
                    kind=MatchKind.SUFFIXED,
                    confidence=config.suffix_confidence,
                    entry=replace(entry, english=word, chinese=entry.chinese + rule.meaning, analysis=None),
                    decomposition=(
                        DecompositionPart(stem, PartRole.BASE, entry.chinese, lemma if lemma != stem else None),
                        DecompositionPart(rule.text, PartRole.SUFFIX, rule.meaning),
                    ),
                )

    return None


def match_fuzzy(engine: "MatchingEngine", word: str) -> MatchOutcome | None:
    """Best similar entry above the acceptance threshold, with runners-up."""
    candidates = engine.fuzzy_candidates(word)
    if not candidates:
        return None

    score, best = candidates[0]
    limit = engine.config.max_suggestions
    return MatchOutcome(
        kind=MatchKind.FUZZY,
        confidence=score,
        entry=best,
        suggestions=tuple(entry for _, entry in candidates[1:1 + limit]),
    )


def _alternation(options: tuple[str, ...]) -> str:
    return "|".join(options)


# Checked in order; the first pattern whose parts all resolve wins.
COMPOUND_PATTERNS = (
    re.compile(rf"^(\w+)({_alternation(CLASSICAL_SUFFIXES)})$"),
    re.compile(rf"^(\w+)({_alternation(DERIVATIONAL_SUFFIXES)})$"),
    re.compile(rf"^({_alternation(CLASSICAL_PREFIXES)})(\w+)$"),
    re.compile(rf"^(\w+)({_alternation(QUALITY_SUFFIXES)})$"),
)


def match_compound(engine: "MatchingEngine", word: str) -> MatchOutcome | None:
    """
    Segment a long word with the compound patterns.

    All parts must be at least `compound_min_part` long and resolve by
    direct lookup; there are no partial compounds.
    """
    config = engine.config
    if len(word) < config.compound_min_length:
        return None

    for pattern in engine.compound_patterns:
        match = pattern.match(word)
        if not match:
            continue

        parts = match.groups()
        if len(parts) < 2 or any(len(part) < config.compound_min_part for part in parts):
            continue

        entries = [engine.store.lookup(part) for part in parts]
        if any(entry is None for entry in entries):
            continue

        decomposition = tuple(
            DecompositionPart(part, PartRole.COMPONENT, entry.chinese)
            for part, entry in zip(parts, entries)
        )
        synthesized = LexiconEntry(
            english=word,
            chinese="".join(entry.chinese for entry in entries),
            category=Category.COMPOUND,
            priority=4,
        )
        return MatchOutcome(
            kind=MatchKind.COMPOUND,
            confidence=config.compound_confidence,
            entry=synthesized,
            decomposition=decomposition,
        )

    return None


STRATEGIES: tuple[Strategy, ...] = (
    match_direct,
    match_inflection,
    match_affix,
    match_fuzzy,
    match_compound,
)


# ============================================================================
# Engine
# ============================================================================


class MatchingEngine:
    """Stateless resolver over an injected lexicon and affix tables."""

    def __init__(
        self,
        store: LexiconStore,
        tables: AffixTables = DEFAULT_TABLES,
        config: MatchingConfig | None = None,
        strategies: tuple[Strategy, ...] = STRATEGIES,
    ) -> None:
        self.store = store
        self.tables = tables
        self.config = config or MatchingConfig()
        self.strategies = strategies
        self.compound_patterns = COMPOUND_PATTERNS

    def fuzzy_candidates(self, word: str) -> list[tuple[float, LexiconEntry]]:
        """
        Entries similar to `word`, best first.

        Only entries within `fuzzy_length_window` characters of the word's
        length (and at least `fuzzy_min_length` long) are considered. Ties
        keep lexicon insertion order.
        """
        config = self.config
        low = max(config.fuzzy_min_length, len(word) - config.fuzzy_length_window)
        high = len(word) + config.fuzzy_length_window

        scored: list[tuple[float, LexiconEntry]] = []
        for length in range(low, high + 1):
            for entry in self.store.entries_of_length(length):
                score = similarity(word, entry.english.lower())
                if score >= config.fuzzy_threshold:
                    scored.append((score, entry))

        scored.sort(key=lambda item: (-item[0], self.store.position(item[1])))
        return scored

    def resolve(self, raw_word: str) -> AnalysisResult:
        """
        Resolve a raw word to its Chinese mapping.

        Args:
            raw_word: Word as typed; trimmed and lowercased before matching.

        Returns:
            AnalysisResult. Blank input and unmatched words yield an unknown
            result; this method does not raise for string input.
        """
        word = normalize(raw_word)
        if not word:
            return AnalysisResult.unknown(raw_word, word)

        for strategy in self.strategies:
            outcome = strategy(self, word)
            if outcome is None:
                continue
            return AnalysisResult(
                original_input=raw_word,
                normalized_word=word,
                found=True,
                confidence=outcome.confidence,
                match_kind=outcome.kind,
                matched_entry=outcome.entry,
                decomposition=outcome.decomposition,
                suggestions=outcome.suggestions,
                entry_analysis=outcome.entry.analysis if outcome.kind is MatchKind.DIRECT else None,
            )

        return AnalysisResult.unknown(raw_word, word)
