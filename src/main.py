"""Sinographic FastAPI application - English to Chinese word mapping API."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from models import (
    AnalyzeRequest,
    BatchAnalyzeRequest,
    AnalyzeResponse,
    BatchAnalyzeResponse,
    EntryListResponse,
    EntryResponse,
    EtymologyResponse,
    ExamplesResponse,
    RelatedWordsResponse,
)
from services.analysis import (
    WordAnalyzer,
    analyze_word,
    analyze_words,
    explain_etymology,
    lookup_entry,
    random_word,
    related_words,
    search_entries,
    usage_examples,
)


VERSION = "0.1.0"


def _parse_csv_env(name: str) -> list[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return []
    return [x.strip() for x in raw.split(",") if x.strip()]


CORS_ORIGINS = _parse_csv_env("CORS_ORIGINS") or ["*"]


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the lexicon on startup."""
    _ = WordAnalyzer.get_instance()
    yield


# ============================================================================
# FastAPI Application
# ============================================================================


app = FastAPI(
    title="Sinographic API",
    description="""English → Chinese word mapping API.

## Matching cascade
- **Direct**: exact lexicon entry
- **Inflection**: plurals, past tense, -ing, comparatives
- **Affixes**: un-, re-, -ness, -less and friends
- **Fuzzy**: character-set similarity with suggestions
- **Compound**: classical roots like photo + graphy

## Endpoints
- `/analyze` - Map one word
- `/analyze_batch` - Map several words
- `/entries` - Browse and filter the lexicon
- `/etymology/{word}` - Classical roots inside a word
- `/related/{word}`, `/examples/{word}`, `/random` - Browsing helpers
""",
    version=VERSION,
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# ============================================================================
# Health Endpoints
# ============================================================================


@app.get("/", tags=["Health"])
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "service": "sinographic", "version": VERSION}


@app.get("/health", tags=["Health"])
async def health() -> dict[str, str | int]:
    """Detailed health check."""
    store = WordAnalyzer.get_instance().store
    return {
        "status": "healthy",
        "version": VERSION,
        "entries": len(store),
        "source": store.source,
    }


# ============================================================================
# Analysis Endpoints
# ============================================================================


@app.post("/analyze", response_model=AnalyzeResponse, tags=["Analysis"])
def analyze_endpoint(request: AnalyzeRequest) -> AnalyzeResponse:
    """
    Map an English word to Chinese.

    Returns the match type, confidence, the matched or synthesized entry,
    the decomposition for derived words and suggestions for fuzzy matches.
    """
    try:
        return analyze_word(request.word)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Analysis failed: {e!s}") from e


@app.post("/analyze_batch", response_model=BatchAnalyzeResponse, tags=["Analysis"])
def analyze_batch_endpoint(request: BatchAnalyzeRequest) -> BatchAnalyzeResponse:
    """Map several words in one request. Blank items are skipped."""
    try:
        return analyze_words(request.words)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Batch analysis failed: {e!s}") from e


@app.get("/etymology/{word}", response_model=EtymologyResponse, tags=["Analysis"])
def etymology_endpoint(word: str) -> EtymologyResponse:
    """Classical roots (photo, graph, logy, ...) found in a word."""
    return explain_etymology(word, WordAnalyzer.get_instance())


# ============================================================================
# Lexicon Endpoints
# ============================================================================


@app.get("/entries", response_model=EntryListResponse, tags=["Lexicon"])
def entries_endpoint(search: str = "", category: str = "all") -> EntryListResponse:
    """Filter lexicon entries by text and category."""
    return search_entries(search, category)


@app.get("/entries/{word}", response_model=EntryResponse, tags=["Lexicon"])
def entry_endpoint(word: str) -> EntryResponse:
    """Exact lexicon entry for a word."""
    entry = lookup_entry(word)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No entry for '{word}'")
    return entry


@app.get("/related/{word}", response_model=RelatedWordsResponse, tags=["Lexicon"])
def related_endpoint(word: str) -> RelatedWordsResponse:
    """Synonyms of a word with their mappings."""
    return related_words(word)


@app.get("/examples/{word}", response_model=ExamplesResponse, tags=["Lexicon"])
def examples_endpoint(word: str) -> ExamplesResponse:
    """Bilingual usage examples for a word."""
    return usage_examples(word)


@app.get("/random", response_model=AnalyzeResponse, tags=["Lexicon"])
def random_endpoint() -> AnalyzeResponse:
    """Analysis of a random lexicon headword."""
    try:
        return random_word()
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# ============================================================================
# CLI Entry Point
# ============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
