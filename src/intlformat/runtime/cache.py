"""Thread-safe memo cache for compiled messages and constructed formatters.

Every expensive object the engine builds (a compiled Message, a
NumberFormatter, a DateTimeFormatter, ...) is fetched through
``get_or_compute`` keyed by ``(kind, key_parts)``.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - Unbounded by default; optional LRU eviction via OrderedDict
    - Immutable cache keys (tuples of hashable types)
    - No single-flight: concurrent misses both compute, last write wins

Cache Key Structure:
    (kind, key_parts_tuple)
    - kind: str ("message", "number", "date", "time", "relative")
    - key_parts_tuple: hashable form of the caller's key parts

Python 3.13+.
"""

from collections import OrderedDict
from collections.abc import Callable, Hashable
from threading import RLock
from typing import cast

__all__ = ["FormatCache", "HashableValue"]

# Recursive definition: primitives plus tuple/frozenset of self.
type HashableValue = Hashable | tuple["HashableValue", ...] | frozenset["HashableValue"]

type _CacheKey = tuple[str, HashableValue]


class FormatCache:
    """Thread-safe memo cache for compiled plans and native formatters.

    Attributes:
        maxsize: Maximum number of entries, or None for no bound
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses", "_unhashable_skips")

    def __init__(self, maxsize: int | None = None) -> None:
        """Initialize format cache.

        Args:
            maxsize: Maximum number of entries (default: None, unbounded)
        """
        if maxsize is not None and maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[_CacheKey, object] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._unhashable_skips = 0

    def get_or_compute[T](self, kind: str, key_parts: object, compute: Callable[[], T]) -> T:
        """Return the cached value for ``(kind, key_parts)``, computing it on a miss.

        ``compute`` runs outside the lock, so two threads missing the same key
        may both compute; the later store wins. Exceptions raised by
        ``compute`` propagate and nothing is stored.

        Args:
            kind: Namespace of the cached object
            key_parts: Anything; lists, dicts and sets are frozen recursively
            compute: Zero-argument factory for the value

        Returns:
            Cached or freshly computed value
        """
        key = self._make_key(kind, key_parts)

        if key is None:
            with self._lock:
                self._unhashable_skips += 1
                self._misses += 1
            return compute()

        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._hits += 1
                return cast(T, self._cache[key])
            self._misses += 1

        value = compute()

        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            elif self._maxsize is not None and len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)
            self._cache[key] = value
        return value

    def clear(self) -> None:
        """Clear all cached entries and reset metrics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._unhashable_skips = 0

    def get_stats(self) -> dict[str, int | float | None]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int | None): Maximum capacity, None when unbounded
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
            - unhashable_skips (int): Lookups that bypassed the cache
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "unhashable_skips": self._unhashable_skips,
            }

    @staticmethod
    def _make_hashable(value: object) -> HashableValue:
        """Convert list/tuple/dict/set values to hashable equivalents, recursively."""
        match value:
            case list() | tuple():
                return tuple(FormatCache._make_hashable(v) for v in value)
            case dict():
                return (
                    "__dict__",
                    tuple(
                        sorted(
                            ((k, FormatCache._make_hashable(v)) for k, v in value.items()),
                            key=lambda item: repr(item[0]),
                        )
                    ),
                )
            case set() | frozenset():
                return frozenset(FormatCache._make_hashable(v) for v in value)
            case _:
                return cast(HashableValue, value)

    @staticmethod
    def _make_key(kind: str, key_parts: object) -> _CacheKey | None:
        """Create an immutable cache key, or None if ``key_parts`` cannot be hashed.

        Dict items are sorted so {"a": 1, "b": 2} and {"b": 2, "a": 1} share
        one entry. Deeply nested structures (RecursionError) and truly
        unhashable values (TypeError) bypass caching instead of failing.
        """
        try:
            key = (kind, FormatCache._make_hashable(key_parts))
            hash(key)
        except (TypeError, RecursionError):
            return None
        return key

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def maxsize(self) -> int | None:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses

    @property
    def unhashable_skips(self) -> int:
        """Number of lookups that bypassed the cache."""
        with self._lock:
            return self._unhashable_skips
