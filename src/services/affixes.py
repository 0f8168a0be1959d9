"""Static affix and classical-root tables.

Glosses are short Chinese renderings used when a stripped affix has to be
folded back into the Chinese result:
- Prefixes (un-, dis-, re-, ...) are prepended: 不 + 快乐
- Suffixes (-ness, -less, ...) are appended: 快乐 + 性
- Inflections (-s, -ed, -ing, ...) only annotate the decomposition

Classical roots (photo, graph, logy, ...) drive compound segmentation and
etymology explanations.
"""

from dataclasses import dataclass, field
from enum import StrEnum, auto


class AffixKind(StrEnum):
    """Where an affix attaches to its stem."""

    PREFIX = auto()
    SUFFIX = auto()
    INFLECTION = auto()


@dataclass(frozen=True, slots=True)
class AffixRule:
    """A single prefix, suffix or inflection with its gloss."""

    text: str
    kind: AffixKind
    meaning: str = ""


@dataclass(frozen=True, slots=True)
class ClassicalRoot:
    """A Latin or Greek word-formation element."""

    root: str
    meaning: str
    english: str = ""


# ============================================================================
# Affix Tables
# ============================================================================


PREFIX_MEANINGS = {
    "un": "不",
    "dis": "非",
    "re": "再",
    "pre": "前",
    "mis": "误",
    "over": "过",
    "under": "不足",
    "sub": "下",
    "super": "超",
    "inter": "间",
    "intra": "内",
    "trans": "跨",
}

# Inflectional endings (-s, -ed, -ing) are handled by INFLECTION_MEANINGS
SUFFIX_MEANINGS = {
    "ly": "地",
    "ment": "",
    "ness": "性",
    "tion": "",
    "sion": "",
    "able": "可",
    "ible": "可",
    "al": "的",
    "ial": "的",
    "ful": "充满",
    "less": "无",
    "ize": "化",
    "ise": "化",
    "ity": "性",
    "ism": "主义",
    "ist": "家",
    "ance": "",
    "ence": "",
    "hood": "状态",
    "ship": "关系",
    "dom": "领域",
}

INFLECTION_MEANINGS = {
    "s": "复数",
    "es": "复数",
    "ed": "过去式",
    "ing": "进行式",
    "er": "比较级",
    "est": "最高级",
}

# Spelling variants that restore a final "y" on the stem: democracies -> democracy.
# Maps the surface ending to the inflection it realizes.
Y_INFLECTION_VARIANTS = {
    "ies": "es",
    "ied": "ed",
    "ier": "er",
    "iest": "est",
}


# ============================================================================
# Classical Roots
# ============================================================================


CLASSICAL_ROOTS = (
    ClassicalRoot("photo", "光", "light"),
    ClassicalRoot("graph", "写", "write"),
    ClassicalRoot("tele", "远", "far"),
    ClassicalRoot("phon", "声", "sound"),
    ClassicalRoot("bio", "生", "life"),
    ClassicalRoot("logy", "学", "study"),
    ClassicalRoot("demo", "民", "people"),
    ClassicalRoot("cracy", "治", "rule"),
    ClassicalRoot("geo", "地", "earth"),
    ClassicalRoot("therm", "热", "heat"),
    ClassicalRoot("hydro", "水", "water"),
    ClassicalRoot("psych", "心", "mind"),
    ClassicalRoot("chron", "时", "time"),
    ClassicalRoot("astr", "星", "star"),
    ClassicalRoot("anthrop", "人", "human"),
    ClassicalRoot("soci", "社", "society"),
)

# Alternations used by the compound segmentation patterns, in match order.
CLASSICAL_SUFFIXES = ("graphy", "logy", "nomy", "sophy", "pathy", "metry", "scopy")
DERIVATIONAL_SUFFIXES = (
    "able", "ible", "ful", "less", "ness", "ment", "tion", "sion", "ance", "ence",
)
CLASSICAL_PREFIXES = (
    "micro", "macro", "tele", "hydro", "psych", "chron",
    "geo", "bio", "astro", "therm", "photo",
)
QUALITY_SUFFIXES = ("proof", "resistant", "free", "wise", "like", "worthy")


def _rules(meanings: dict[str, str], kind: AffixKind) -> tuple[AffixRule, ...]:
    return tuple(AffixRule(text, kind, meaning) for text, meaning in meanings.items())


@dataclass(frozen=True, slots=True)
class AffixTables:
    """Bundle of static tables injected into the matching engine."""

    prefixes: tuple[AffixRule, ...] = field(
        default_factory=lambda: _rules(PREFIX_MEANINGS, AffixKind.PREFIX)
    )
    suffixes: tuple[AffixRule, ...] = field(
        default_factory=lambda: _rules(SUFFIX_MEANINGS, AffixKind.SUFFIX)
    )
    inflections: tuple[AffixRule, ...] = field(
        default_factory=lambda: _rules(INFLECTION_MEANINGS, AffixKind.INFLECTION)
    )
    classical_roots: tuple[ClassicalRoot, ...] = CLASSICAL_ROOTS

    def inflection_order(self) -> tuple[AffixRule, ...]:
        """Inflections longest-first so `-es`/`-ing` are stripped before bare `-s`."""
        return tuple(sorted(self.inflections, key=lambda r: len(r.text), reverse=True))

    def inflection_meaning(self, text: str) -> str:
        for rule in self.inflections:
            if rule.text == text:
                return rule.meaning
        return ""

    def find_roots(self, word: str) -> list[tuple[int, ClassicalRoot]]:
        """Classical roots contained in `word`, ordered by first position."""
        hits = [
            (word.find(root.root), root)
            for root in self.classical_roots
            if root.root in word
        ]
        hits.sort(key=lambda hit: hit[0])
        return hits


DEFAULT_TABLES = AffixTables()
