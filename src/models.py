"""Pydantic models for Sinographic API requests and responses."""

from pydantic import BaseModel, Field


# ============================================================================
# Request Models
# ============================================================================


class AnalyzeRequest(BaseModel):
    """Request body for single-word analysis."""
    word: str = Field(..., min_length=1, max_length=100, description="English word to map")


class BatchAnalyzeRequest(BaseModel):
    """Request body for analyzing several words at once."""
    words: list[str] = Field(..., min_length=1, max_length=200, description="English words to map")


# ============================================================================
# Response Components
# ============================================================================


class EntryAnalysisInfo(BaseModel):
    """Stored analysis shipped with an enriched lexicon entry."""
    structure: str = Field("", description="Structure like 'photo (光) + graphy (写)'")
    morphemes: list[str] = Field(default_factory=list, description="Morphemes in order")
    meaning: str = Field("", description="How the meaning composes")
    match_type: str = Field("", description="Origin of the mapping")
    confidence: float | None = Field(None, description="Stored confidence, if any")


class EntryResponse(BaseModel):
    """Single lexicon entry."""
    english: str = Field(..., description="English headword")
    chinese: str = Field(..., description="Chinese characters")
    pinyin: str = Field("", description="Romanization")
    category: str = Field(..., description="Semantic category")
    priority: int = Field(0, description="Display ranking")
    analysis: EntryAnalysisInfo | None = Field(None, description="Stored analysis")


class DecompositionItem(BaseModel):
    """One segment of a decomposed word."""
    part: str = Field(..., description="Substring of the normalized word")
    role: str = Field(..., description="base, inflection, prefix, suffix or component")
    gloss: str = Field("", description="Chinese gloss of the segment")
    lemma: str | None = Field(None, description="Lexicon key when different from the part")


class RootItem(BaseModel):
    """Classical root found inside a word."""
    root: str = Field(..., description="Root text")
    chinese: str = Field(..., description="Chinese gloss")
    english: str = Field("", description="English meaning")
    position: int = Field(..., description="Offset of the root in the word")


# ============================================================================
# Response Models
# ============================================================================


class AnalyzeResponse(BaseModel):
    """Response for /analyze."""
    original: str = Field(..., description="Input as received")
    normalized: str = Field(..., description="Trimmed, lowercased word")
    found: bool
    confidence: float = Field(..., ge=0.0, le=1.0)
    match_type: str = Field(..., description="direct, inflection, prefixed, suffixed, fuzzy, compound or unknown")
    result: EntryResponse | None = Field(None, description="Matched (or synthesized) entry")
    decomposition: list[DecompositionItem] = Field(default_factory=list)
    suggestions: list[EntryResponse] = Field(default_factory=list)
    text_result: str = Field(..., description="Human-readable summary")


class BatchAnalyzeResponse(BaseModel):
    """Response for /analyze_batch."""
    results: list[AnalyzeResponse]
    count: int
    found: int = Field(..., description="How many words were mapped")


class EntryListResponse(BaseModel):
    """Response for /entries."""
    entries: list[EntryResponse]
    count: int


class EtymologyResponse(BaseModel):
    """Response for /etymology/{word}."""
    word: str
    roots: list[RootItem] = Field(default_factory=list)
    combined: str = Field("", description="Concatenated Chinese glosses")
    is_classical: bool = Field(..., description="True if any classical root was found")


class RelatedWordItem(BaseModel):
    """Related word with its mapping, when one can be derived."""
    english: str
    chinese: str | None = Field(None, description="Mapped Chinese, if the word resolves")
    match_type: str = Field(..., description="How the related word was resolved")


class RelatedWordsResponse(BaseModel):
    """Response for /related/{word}."""
    word: str
    related: list[RelatedWordItem] = Field(default_factory=list)


class ExampleItem(BaseModel):
    """Bilingual usage example."""
    english: str
    chinese: str


class ExamplesResponse(BaseModel):
    """Response for /examples/{word}."""
    word: str
    examples: list[ExampleItem] = Field(default_factory=list)
