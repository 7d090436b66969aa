"""
In-memory cache for computed artifacts.

Results are keyed by the fingerprint of their computation input. Concurrent
requests for the same fingerprint share a single computation, and every
waiter receives its result or its exception.
"""

import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple


@dataclass
class CacheStats:
    """Counters describing cache usage."""
    entries: int
    hits: int
    misses: int

    def to_dict(self) -> Dict[str, int]:
        return {
            'entries': self.entries,
            'hits': self.hits,
            'misses': self.misses,
        }


class ComputedArtifactCache:
    """
    Memoizes computations by key.

    Failures are cached like results, so a failing input is not recomputed
    until the cache is cleared.

    Each entry holds a reference to the object its key was derived from, so
    keys built from object identity stay unique while the entry exists.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[Any, Future]] = {}
        self._hits = 0
        self._misses = 0

    def get_or_compute(self, key: str, compute: Callable[[], Any], source: Any = None) -> Any:
        """
        Return the cached result for a key, computing it on first request.

        Args:
            key: Cache key (input fingerprint)
            compute: Zero-argument callable producing the result
            source: Object the key was derived from, kept alive with the entry

        Returns:
            The computed result

        Raises:
            Whatever ``compute`` raised for this key
        """
        with self._lock:
            entry = self._entries.get(key)
            owner = entry is None
            if owner:
                future = Future()
                self._entries[key] = (source, future)
                self._misses += 1
            else:
                future = entry[1]
                self._hits += 1

        if owner:
            try:
                future.set_result(compute())
            except BaseException as e:
                future.set_exception(e)

        return future.result()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def clear(self) -> int:
        """
        Drop every entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        return removed

    def get_stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(entries=len(self._entries), hits=self._hits, misses=self._misses)
