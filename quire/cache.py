"""
Render cache - compiled units keyed by their view/layout/partial combination.

Provides:
- Deterministic, human-readable cache keys
- Thread-safe unit storage
- Cache statistics for monitoring
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .unit import TemplateUnit


KEY_SEPARATOR = "|"
LAYOUT_SEGMENT = "layout::"
PARTIAL_SEGMENT = "partial::"


def build_cache_key(
    view_id: str,
    layout_id: str = "",
    partial_ids: Iterable[str] = (),
) -> str:
    """
    Build the cache key for one render combination.

    Empty identifiers are left out, so a view rendered alone keys on its
    identifier only. Layout and partial segments carry their role so a
    layout can never be mistaken for a partial. Partial order is kept:
    the same partials in another order produce another key.

    Examples:
        build_cache_key("pages/home") -> "pages/home"
        build_cache_key("pages/home", "layout", ["card"])
            -> "pages/home|layout::layout|partial::card"
    """
    parts = [view_id] if view_id else []
    if layout_id:
        parts.append(LAYOUT_SEGMENT + layout_id)
    parts.extend(PARTIAL_SEGMENT + pid for pid in partial_ids if pid)
    return KEY_SEPARATOR.join(parts)


@dataclass
class CacheStats:
    """Cache statistics for monitoring."""
    hits: int = 0
    misses: int = 0
    stores: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Export stats as dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "stores": self.stores,
            "hit_rate": self.hit_rate,
        }


class RenderCache:
    """
    Thread-safe map from cache key to compiled unit.

    Concurrent misses on the same key may each compile a unit; the first
    one stored is kept and handed back to every later `put`, so all
    renders of a key converge on a single unit.
    """

    def __init__(self):
        self._units: Dict[str, "TemplateUnit"] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def get(self, key: str) -> Optional["TemplateUnit"]:
        with self._lock:
            unit = self._units.get(key)
            if unit is None:
                self._stats.misses += 1
            else:
                self._stats.hits += 1
            return unit

    def put(self, key: str, unit: "TemplateUnit") -> "TemplateUnit":
        """
        Store `unit` under `key` unless one is already there.

        Returns:
            The unit now cached for `key`
        """
        with self._lock:
            stored = self._units.setdefault(key, unit)
            if stored is unit:
                self._stats.stores += 1
            return stored

    def clear(self) -> None:
        with self._lock:
            self._units.clear()

    @property
    def stats(self) -> CacheStats:
        """Snapshot of the statistics counters."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                stores=self._stats.stores,
            )

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = CacheStats()

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._units)

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._units
