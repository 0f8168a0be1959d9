"""Sinographic services module."""

from .affixes import (
    AffixKind,
    AffixRule,
    AffixTables,
    ClassicalRoot,
    DEFAULT_TABLES,
)
from .cache import ResultCache
from .lexicon import (
    Category,
    EntryAnalysis,
    LexiconEntry,
    LexiconStore,
    load_lexicon,
)
from .matcher import (
    AnalysisResult,
    DecompositionPart,
    MatchingConfig,
    MatchingEngine,
    MatchKind,
    MatchOutcome,
    PartRole,
    similarity,
)

__all__ = [
    # Tables
    "AffixKind",
    "AffixRule",
    "AffixTables",
    "ClassicalRoot",
    "DEFAULT_TABLES",
    # Lexicon
    "Category",
    "EntryAnalysis",
    "LexiconEntry",
    "LexiconStore",
    "load_lexicon",
    # Engine
    "AnalysisResult",
    "DecompositionPart",
    "MatchingConfig",
    "MatchingEngine",
    "MatchKind",
    "MatchOutcome",
    "PartRole",
    "similarity",
    # Cache
    "ResultCache",
]
