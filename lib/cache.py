# =============================================================================
# lib/cache.py - Response Cache
# =============================================================================
# In-memory TTL cache for repeatable read queries.
#
# - Entries are keyed by a request signature (see cache_key)
# - An entry is valid while `now - stored_at < ttl`
# - Stale entries are evicted lazily on lookup (no background sweep)
# - Payloads are deep-copied on the way in and out, so callers never share
#   (or mutate) the stored object
# - No size bound and no invalidation hook: writes made through the admin
#   services do not touch cached reads, so a read can lag a write by up
#   to one TTL window
#
# One instance is created per process (FastAPI lifespan) and injected into
# the services that use it.
#
# Usage:
#   cache = ResponseCache(ttl_seconds=300)
#   cache.set(cache_key("tools", 1, 20), page)
#   page = cache.get(cache_key("tools", 1, 20))
# =============================================================================

import copy
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


def cache_key(operation: str, *params: Any) -> str:
    """
    Build a deterministic request signature.

    Example:
        cache_key("tools", 2, 20)  -> "tools_2_20"
        cache_key("categories")    -> "categories"
    """
    return "_".join([operation, *(str(p) for p in params)])


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the clock reading at which it was stored."""
    payload: Any
    stored_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.stored_at < ttl


class ResponseCache:
    """
    Process-wide key/value store with a fixed time-to-live.

    Args:
        ttl_seconds: How long an entry stays valid
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached payload, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_fresh(self._clock(), self.ttl):
            logger.debug(f"Cache hit: {key}")
            return copy.deepcopy(entry.payload)

        # expired
        del self._entries[key]
        logger.debug(f"Cache entry expired: {key}")
        return None

    def set(self, key: str, payload: Any) -> None:
        """Store payload under key, replacing any previous entry."""
        self._entries[key] = CacheEntry(payload=copy.deepcopy(payload), stored_at=self._clock())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
