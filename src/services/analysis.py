"""Analysis service - the functions behind the API endpoints.

- WordAnalyzer: engine + cache wired to the loaded lexicon
- analyze_word / analyze_words: map English words to Chinese
- lookup_entry: raw lexicon entry for a word
- search_entries: filter the lexicon by text and category
- explain_etymology: classical roots inside a word
- related_words / usage_examples / random_word: lexicon browsing helpers
"""

import random
from dataclasses import replace
from functools import lru_cache
from typing import Self

from services.affixes import DEFAULT_TABLES, AffixTables
from services.cache import ResultCache
from services.lexicon import LexiconEntry, LexiconStore, load_lexicon
from services.matcher import (
    AnalysisResult,
    MatchingConfig,
    MatchingEngine,
    normalize,
)
from services.usage import examples_for, synonyms_for
from models import (
    AnalyzeResponse,
    BatchAnalyzeResponse,
    DecompositionItem,
    EntryAnalysisInfo,
    EntryListResponse,
    EntryResponse,
    EtymologyResponse,
    ExampleItem,
    ExamplesResponse,
    RelatedWordItem,
    RelatedWordsResponse,
    RootItem,
)


class WordAnalyzer:
    """Resolves words through the result cache and the matching engine."""

    def __init__(
        self,
        store: LexiconStore,
        tables: AffixTables = DEFAULT_TABLES,
        config: MatchingConfig | None = None,
    ) -> None:
        self.store = store
        self.tables = tables
        self.engine = MatchingEngine(store, tables, config)
        self.cache = ResultCache()

    @classmethod
    @lru_cache(maxsize=1)
    def get_instance(cls) -> Self:
        """Get or create a singleton instance backed by the default lexicon."""
        return cls(load_lexicon())

    def analyze(self, word: str) -> AnalysisResult:
        """Resolve `word`, reusing a cached result for the same normalized key."""
        key = normalize(word)
        cached = self.cache.get(key)
        if cached is None:
            cached = self.cache.put(key, self.engine.resolve(word))
        if cached.original_input != word:
            return replace(cached, original_input=word)
        return cached


# ============================================================================
# Conversion Helpers
# ============================================================================


def entry_to_response(entry: LexiconEntry) -> EntryResponse:
    analysis = None
    if entry.analysis:
        analysis = EntryAnalysisInfo(
            structure=entry.analysis.structure,
            morphemes=list(entry.analysis.morphemes),
            meaning=entry.analysis.meaning,
            match_type=entry.analysis.match_type,
            confidence=entry.analysis.confidence,
        )
    return EntryResponse(
        english=entry.english,
        chinese=entry.chinese,
        pinyin=entry.pinyin,
        category=entry.category.value,
        priority=entry.priority,
        analysis=analysis,
    )


def format_result(result: AnalysisResult) -> str:
    """One-line human readable summary of a result."""
    if not result.found or result.matched_entry is None:
        text = f"{result.normalized_word} → [no mapping found]"
        if result.suggestions:
            text += " | suggestions: " + ", ".join(e.english for e in result.suggestions[:3])
        return text

    entry = result.matched_entry
    reading = f" ({entry.pinyin})" if entry.pinyin else ""
    text = f"{result.normalized_word} → {entry.chinese}{reading} [{result.match_kind}, {result.confidence:.2f}]"
    if result.decomposition:
        text += " | " + " + ".join(
            f"{p.part}({p.gloss})" if p.gloss else p.part for p in result.decomposition
        )
    elif result.entry_analysis and result.entry_analysis.structure:
        text += f" | {result.entry_analysis.structure}"
    return text


def result_to_response(result: AnalysisResult) -> AnalyzeResponse:
    entry = result.matched_entry
    return AnalyzeResponse(
        original=result.original_input,
        normalized=result.normalized_word,
        found=result.found,
        confidence=result.confidence,
        match_type=result.match_kind.value,
        result=entry_to_response(entry) if entry else None,
        decomposition=[
            DecompositionItem(part=p.part, role=p.role.value, gloss=p.gloss, lemma=p.lemma)
            for p in result.decomposition
        ],
        suggestions=[entry_to_response(e) for e in result.suggestions],
        text_result=format_result(result),
    )


# ============================================================================
# Service Functions
# ============================================================================


def analyze_word(word: str, analyzer: WordAnalyzer | None = None) -> AnalyzeResponse:
    """Analyze a single English word. Raises ValueError for blank input."""
    if not word.strip():
        raise ValueError("Please enter an English word")
    analyzer = analyzer or WordAnalyzer.get_instance()
    return result_to_response(analyzer.analyze(word))


def analyze_words(words: list[str], analyzer: WordAnalyzer | None = None) -> BatchAnalyzeResponse:
    """Analyze several words, skipping blank items."""
    analyzer = analyzer or WordAnalyzer.get_instance()
    results = [result_to_response(analyzer.analyze(w)) for w in words if w.strip()]
    return BatchAnalyzeResponse(
        results=results,
        count=len(results),
        found=sum(1 for r in results if r.found),
    )


def lookup_entry(word: str, analyzer: WordAnalyzer | None = None) -> EntryResponse | None:
    """Exact lexicon entry for `word`, if any."""
    analyzer = analyzer or WordAnalyzer.get_instance()
    entry = analyzer.store.lookup(word)
    return entry_to_response(entry) if entry else None


def search_entries(
    search: str = "",
    category: str = "all",
    analyzer: WordAnalyzer | None = None,
) -> EntryListResponse:
    """
    Filter the lexicon.

    Args:
        search: Substring matched against english and pinyin (case-insensitive)
                and chinese. Empty matches everything.
        category: Substring of the category label, or "all".
    """
    analyzer = analyzer or WordAnalyzer.get_instance()
    term = search.strip().lower()
    wanted = category.strip().lower()

    matches: list[EntryResponse] = []
    for entry in analyzer.store:
        if term and not (
            term in entry.english.lower()
            or term in entry.chinese
            or term in entry.pinyin.lower()
        ):
            continue
        if wanted and wanted != "all" and wanted not in entry.category.value.lower():
            continue
        matches.append(entry_to_response(entry))

    return EntryListResponse(entries=matches, count=len(matches))


def explain_etymology(word: str, analyzer: WordAnalyzer | None = None) -> EtymologyResponse:
    """Classical roots contained in `word`, in order of appearance."""
    tables = analyzer.tables if analyzer else DEFAULT_TABLES
    normalized = normalize(word)
    hits = tables.find_roots(normalized)
    roots = [
        RootItem(root=root.root, chinese=root.meaning, english=root.english, position=position)
        for position, root in hits
    ]
    return EtymologyResponse(
        word=normalized,
        roots=roots,
        combined="".join(r.chinese for r in roots),
        is_classical=bool(roots),
    )


def related_words(word: str, analyzer: WordAnalyzer | None = None) -> RelatedWordsResponse:
    """Synonyms of `word`, each resolved through the matcher."""
    analyzer = analyzer or WordAnalyzer.get_instance()
    normalized = normalize(word)
    related = []
    for synonym in synonyms_for(normalized):
        result = analyzer.analyze(synonym)
        related.append(RelatedWordItem(
            english=synonym,
            chinese=result.matched_entry.chinese if result.matched_entry else None,
            match_type=result.match_kind.value,
        ))
    return RelatedWordsResponse(word=normalized, related=related)


def usage_examples(word: str) -> ExamplesResponse:
    normalized = normalize(word)
    return ExamplesResponse(
        word=normalized,
        examples=[ExampleItem(english=e.english, chinese=e.chinese) for e in examples_for(normalized)],
    )


def random_word(analyzer: WordAnalyzer | None = None, rng: random.Random | None = None) -> AnalyzeResponse:
    """
    Analyze a randomly chosen lexicon headword.

    Raises:
        ValueError: If the lexicon is empty.
    """
    analyzer = analyzer or WordAnalyzer.get_instance()
    entries = list(analyzer.store)
    if not entries:
        raise ValueError("Lexicon is empty")
    entry = (rng or random).choice(entries)
    return result_to_response(analyzer.analyze(entry.english))
