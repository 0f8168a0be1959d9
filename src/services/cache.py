"""Session-scoped memo of analysis results, keyed by normalized word."""

from threading import Lock

from services.matcher import AnalysisResult, normalize


class ResultCache:
    """
    Write-once cache of AnalysisResult objects.

    No TTL and no eviction: entries live as long as the cache. Access is
    guarded by a lock since sync FastAPI handlers run in a thread pool.
    """

    def __init__(self) -> None:
        self._results: dict[str, AnalysisResult] = {}
        self._lock = Lock()

    def get(self, word: str) -> AnalysisResult | None:
        with self._lock:
            return self._results.get(normalize(word))

    def put(self, word: str, result: AnalysisResult) -> AnalysisResult:
        """Store `result` unless the key is already cached; return the cached value."""
        with self._lock:
            return self._results.setdefault(normalize(word), result)

    def clear(self) -> None:
        with self._lock:
            self._results.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        with self._lock:
            return normalize(word) in self._results
