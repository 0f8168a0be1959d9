"""
Related words and usage examples for lexicon headwords.

Small hand-curated tables; words without an entry simply have no related
words or examples.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExampleSentence:
    english: str
    chinese: str


SYNONYM_GROUPS: dict[str, tuple[str, ...]] = {
    "beautiful": ("pretty", "attractive", "lovely", "gorgeous"),
    "big": ("large", "huge", "enormous", "massive"),
    "small": ("little", "tiny", "miniature", "petite"),
    "happy": ("joyful", "cheerful", "delighted", "pleased"),
    "sad": ("unhappy", "sorrowful", "melancholy", "depressed"),
    "run": ("jog", "sprint", "dash", "race"),
    "walk": ("stroll", "amble", "saunter", "hike"),
}


EXAMPLE_SENTENCES: dict[str, tuple[ExampleSentence, ...]] = {
    "photography": (
        ExampleSentence("She studied photography at university.", "她在大学学习摄影。"),
        ExampleSentence(
            "Digital photography has revolutionized the way we capture moments.",
            "数码摄影彻底改变了我们记录瞬间的方式。",
        ),
    ),
    "democracy": (
        ExampleSentence("The country transitioned to democracy in the 1990s.", "这个国家在20世纪90年代过渡到了民主。"),
        ExampleSentence("Free elections are fundamental to democracy.", "自由选举是民主的基础。"),
    ),
    "biology": (
        ExampleSentence("He majored in molecular biology.", "他主修分子生物学。"),
        ExampleSentence("Marine biology studies life in the oceans.", "海洋生物学研究海洋中的生命。"),
    ),
}


def synonyms_for(word: str) -> tuple[str, ...]:
    return SYNONYM_GROUPS.get(word.strip().lower(), ())


def examples_for(word: str) -> tuple[ExampleSentence, ...]:
    return EXAMPLE_SENTENCES.get(word.strip().lower(), ())
