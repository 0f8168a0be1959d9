#!/usr/bin/env python3
"""Tests for the matching cascade.

Covers each strategy in order:
- direct:      water -> 水
- inflection:  boxes -> box + es, democracies -> democrac(y) + ies
- affixes:     unhappy -> 不 + 快乐, happiness -> 快乐 + 性
- fuzzy:       wather -> water
- compound:    photography -> photo + graphy
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from services.lexicon import Category, EntryAnalysis, LexiconEntry, LexiconStore  # noqa: E402
from services.matcher import (  # noqa: E402
    AnalysisResult,
    DecompositionPart,
    MatchingConfig,
    MatchingEngine,
    MatchKind,
    PartRole,
    similarity,
)


WORDS = [
    ("water", "水"),
    ("fire", "火"),
    ("happy", "快乐"),
    ("democracy", "民主"),
    ("write", "写"),
    ("box", "盒"),
    ("photo", "光"),
    ("graphy", "写"),
    ("care", "关心"),
    ("heat", "热"),
    ("tree", "树"),
    ("do", "做"),
]


def make_engine(words=WORDS, extra=(), config=None) -> MatchingEngine:
    entries = [LexiconEntry(english=e, chinese=c) for e, c in words]
    entries.extend(extra)
    return MatchingEngine(LexiconStore(entries), config=config)


@pytest.fixture
def engine():
    return make_engine()


def joined(result: AnalysisResult) -> str:
    return "".join(p.part for p in result.decomposition)


# ============================================================================
# Similarity
# ============================================================================


def test_similarity_identity():
    for word in ["", "a", "water", "photography"]:
        assert similarity(word, word) == 1.0


def test_similarity_substring():
    assert similarity("water", "waterproof") == 0.9
    assert similarity("waterproof", "water") == 0.9


def test_similarity_character_sets():
    # {a, b, c} vs {a, b, d}: 2 shared out of 4
    assert similarity("abc", "abd") == 0.5
    # Repeated letters do not count twice
    assert similarity("aab", "abb") == 1.0
    assert similarity("xyz", "abc") == 0.0


def test_similarity_symmetric():
    pairs = [
        ("wather", "water"),
        ("photo", "graphy"),
        ("democracy", "democrat"),
        ("", "abc"),
        ("happiness", "unhappy"),
    ]
    for a, b in pairs:
        assert similarity(a, b) == similarity(b, a)


# ============================================================================
# Direct
# ============================================================================


def test_every_entry_resolves_directly(engine):
    for english, chinese in WORDS:
        result = engine.resolve(english)
        assert result.found
        assert result.match_kind is MatchKind.DIRECT
        assert result.confidence == 1.0
        assert result.matched_entry.chinese == chinese
        assert result.decomposition == ()


def test_direct_normalizes_input(engine):
    result = engine.resolve("  WATER ")

    assert result.original_input == "  WATER "
    assert result.normalized_word == "water"
    assert result.match_kind is MatchKind.DIRECT


def test_direct_passes_stored_analysis_through():
    analysis = EntryAnalysis(structure="photo (光) + graphy (写)", morphemes=("photo", "graphy"))
    engine = make_engine(extra=[LexiconEntry("photography", "摄影", analysis=analysis)])

    result = engine.resolve("photography")

    assert result.match_kind is MatchKind.DIRECT
    assert result.confidence == 1.0
    assert result.matched_entry.chinese == "摄影"
    assert result.entry_analysis is analysis
    assert result.decomposition == ()


# ============================================================================
# Inflection
# ============================================================================


def test_plural_s(engine):
    result = engine.resolve("waters")

    assert result.match_kind is MatchKind.INFLECTION
    assert result.confidence == 0.95
    assert result.matched_entry.english == "water"
    assert result.decomposition == (
        DecompositionPart("water", PartRole.BASE, "水"),
        DecompositionPart("s", PartRole.INFLECTION, "复数"),
    )


def test_es_stripped_before_s(engine):
    result = engine.resolve("boxes")

    assert result.match_kind is MatchKind.INFLECTION
    assert [p.part for p in result.decomposition] == ["box", "es"]


def test_falls_back_to_shorter_ending(engine):
    # "writ" + "es" fails, "write" + "s" succeeds
    result = engine.resolve("writes")

    assert result.match_kind is MatchKind.INFLECTION
    assert [p.part for p in result.decomposition] == ["write", "s"]


def test_past_tense(engine):
    result = engine.resolve("heated")

    assert result.match_kind is MatchKind.INFLECTION
    assert result.decomposition[1] == DecompositionPart("ed", PartRole.INFLECTION, "过去式")


def test_ies_restores_y(engine):
    result = engine.resolve("democracies")

    assert result.match_kind is MatchKind.INFLECTION
    assert result.confidence == 0.95
    assert result.matched_entry.chinese == "民主"
    base, inflection = result.decomposition
    assert base == DecompositionPart("democrac", PartRole.BASE, "民主", lemma="democracy")
    assert inflection == DecompositionPart("ies", PartRole.INFLECTION, "复数")
    assert joined(result) == "democracies"


def test_ier_restores_y(engine):
    result = engine.resolve("happier")

    assert result.match_kind is MatchKind.INFLECTION
    assert result.decomposition[0].lemma == "happy"
    assert result.decomposition[1].gloss == "比较级"


def test_inflection_base_gloss_matches_stem(engine):
    for word, stem in [("waters", "water"), ("trees", "tree"), ("cares", "care"), ("fires", "fire")]:
        result = engine.resolve(word)
        assert result.match_kind is MatchKind.INFLECTION
        assert result.decomposition[0].gloss == engine.store.lookup(stem).chinese


# ============================================================================
# Affixes
# ============================================================================


def test_prefix(engine):
    result = engine.resolve("unhappy")

    assert result.match_kind is MatchKind.PREFIXED
    assert result.confidence == 0.85
    assert result.matched_entry.chinese == "不快乐"
    assert result.matched_entry.english == "unhappy"
    assert result.decomposition == (
        DecompositionPart("un", PartRole.PREFIX, "不"),
        DecompositionPart("happy", PartRole.BASE, "快乐"),
    )


def test_prefix_re(engine):
    result = engine.resolve("rewrite")

    assert result.match_kind is MatchKind.PREFIXED
    assert result.matched_entry.chinese == "再写"


def test_prefix_needs_stem_longer_than_two(engine):
    # "do" is in the lexicon but "un" + "do" leaves a 2-letter stem
    result = engine.resolve("undo")

    assert result.match_kind is MatchKind.UNKNOWN
    assert not result.found


def test_suffix(engine):
    result = engine.resolve("careless")

    assert result.match_kind is MatchKind.SUFFIXED
    assert result.confidence == 0.80
    assert result.matched_entry.chinese == "关心无"
    assert [p.role for p in result.decomposition] == [PartRole.BASE, PartRole.SUFFIX]


def test_suffix_restores_y(engine):
    result = engine.resolve("happiness")

    assert result.match_kind is MatchKind.SUFFIXED
    assert result.matched_entry.chinese == "快乐性"
    assert result.decomposition[0] == DecompositionPart("happi", PartRole.BASE, "快乐", lemma="happy")
    assert joined(result) == "happiness"


def test_prefix_tried_before_suffix():
    engine = make_engine(extra=[LexiconEntry("happiness", "幸福")])

    result = engine.resolve("unhappiness")

    assert result.match_kind is MatchKind.PREFIXED
    assert result.matched_entry.chinese == "不幸福"
    assert [p.part for p in result.decomposition] == ["un", "happiness"]


def test_no_double_affix_stripping(engine):
    # Only "happy" is known: neither un+happiness nor unhappi+ness resolves
    result = engine.resolve("unhappiness")

    assert not result.found
    assert result.match_kind is MatchKind.UNKNOWN


def test_decomposition_reconstructs_word(engine):
    for word in ["waters", "boxes", "democracies", "happier", "unhappy", "rewrite", "careless", "happiness"]:
        result = engine.resolve(word)
        assert result.match_kind in {MatchKind.INFLECTION, MatchKind.PREFIXED, MatchKind.SUFFIXED}
        assert joined(result) == result.normalized_word


# ============================================================================
# Fuzzy
# ============================================================================


def test_fuzzy_match(engine):
    result = engine.resolve("wather")

    assert result.match_kind is MatchKind.FUZZY
    assert result.found
    assert result.matched_entry.english == "water"
    assert result.confidence == pytest.approx(5 / 6)
    assert result.suggestions == ()


def test_fuzzy_ranking_and_suggestions():
    words = [("alpha", "甲"), ("alph", "乙"), ("lpha", "丙"), ("alp", "丁"), ("lph", "戊"), ("pha", "己"), ("xalpha", "庚")]
    engine = make_engine(words)

    result = engine.resolve("alphax")

    # Same character set beats substrings; ties keep insertion order
    assert result.matched_entry.english == "xalpha"
    assert result.confidence == 1.0
    assert [e.english for e in result.suggestions] == ["alpha", "alph", "lpha", "alp"]


def test_fuzzy_threshold_is_configurable():
    strict = make_engine([("water", "水")])
    loose = make_engine([("water", "水")], config=MatchingConfig(fuzzy_threshold=0.6))

    assert strict.resolve("wadder").match_kind is MatchKind.UNKNOWN

    result = loose.resolve("wadder")
    assert result.match_kind is MatchKind.FUZZY
    assert result.confidence == pytest.approx(4 / 6)


def test_fuzzy_ignores_short_entries():
    engine = make_engine([("geo", "地"), ("graphy", "写")])

    # "geo" is a substring of "geology" but sits below the length window
    result = engine.resolve("geology")

    assert result.match_kind is MatchKind.UNKNOWN
    assert result.suggestions == ()


def test_invalid_threshold():
    with pytest.raises(ValueError):
        MatchingConfig(fuzzy_threshold=0)
    with pytest.raises(ValueError):
        MatchingConfig(fuzzy_threshold=1.5)


# ============================================================================
# Compound
# ============================================================================


def test_classical_compound(engine):
    result = engine.resolve("photography")

    assert result.match_kind is MatchKind.COMPOUND
    assert result.confidence == 0.75
    assert result.matched_entry.category is Category.COMPOUND
    assert result.matched_entry.chinese == "光写"
    assert [p.part for p in result.decomposition] == ["photo", "graphy"]
    assert all(p.role is PartRole.COMPONENT for p in result.decomposition)


def test_direct_entry_beats_compound():
    engine = make_engine(extra=[LexiconEntry("photography", "摄影")])

    result = engine.resolve("photography")

    assert result.match_kind is MatchKind.DIRECT
    assert result.matched_entry.chinese == "摄影"


def test_quality_suffix_compound():
    engine = make_engine([("water", "水"), ("proof", "防")])

    result = engine.resolve("waterproof")

    assert result.match_kind is MatchKind.COMPOUND
    assert result.matched_entry.chinese == "水防"


def test_no_partial_compounds():
    engine = make_engine([("geo", "地"), ("photo", "光")])

    # "geo" resolves but "logy" does not
    result = engine.resolve("geology")

    assert not result.found
    assert result.match_kind is MatchKind.UNKNOWN


def test_first_resolving_pattern_wins():
    words = [("thermo", "热"), ("metry", "测"), ("therm", "温"), ("ometry", "度量")]
    engine = make_engine(words)

    result = engine.resolve("thermometry")
    assert [p.part for p in result.decomposition] == ["thermo", "metry"]

    # Without "metry" the classical-suffix pattern fails and the prefix pattern applies
    engine = make_engine([w for w in words if w[0] != "metry"])
    result = engine.resolve("thermometry")
    assert [p.part for p in result.decomposition] == ["therm", "ometry"]
    assert result.matched_entry.chinese == "温度量"


def test_compound_minimum_length(engine):
    engine = make_engine(config=MatchingConfig(compound_min_length=12))

    assert engine.resolve("photography").match_kind is MatchKind.UNKNOWN


# ============================================================================
# Unknown & Determinism
# ============================================================================


@pytest.mark.parametrize("word", ["", "   ", "\t"])
def test_blank_input_is_unknown(engine, word):
    result = engine.resolve(word)

    assert not result.found
    assert result.match_kind is MatchKind.UNKNOWN
    assert result.confidence == 0.0
    assert result.normalized_word == ""


def test_unmatched_word(engine):
    result = engine.resolve("zzzqqq")

    assert result == AnalysisResult.unknown("zzzqqq", "zzzqqq")
    assert result.matched_entry is None
    assert result.decomposition == ()
    assert result.suggestions == ()


def test_found_results_are_consistent(engine):
    for word in ["water", "waters", "democracies", "unhappy", "careless", "wather", "photography", "zzzqqq"]:
        result = engine.resolve(word)
        if result.found:
            assert result.confidence > 0
            assert result.matched_entry is not None
            assert result.match_kind is not MatchKind.UNKNOWN
        else:
            assert result.match_kind is MatchKind.UNKNOWN


def test_resolve_is_deterministic(engine):
    for word in ["water", "democracies", "happiness", "wather", "photography", "nothing"]:
        assert engine.resolve(word) == engine.resolve(word)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
