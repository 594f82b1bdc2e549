"""
In-memory cache of combined credibility results keyed by URL.

Keys are the raw URL string trimmed and lowercased. No canonical URL
parsing happens, so "http://example.com/a" and "http://example.com/a/"
are different keys.

The cache also provides single-flight execution: concurrent callers
asking for the same uncached key share one computation instead of each
running the full pipeline.
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from dataclasses import dataclass
import logging
import time
from typing import Awaitable, Callable

from .config import CacheConfig
from .core.types import CredibilityResult

logger = logging.getLogger(__name__)


def normalize_cache_key(url: str) -> str:
    """Return the cache key for a URL (trim + lowercase)."""
    return url.strip().lower()


@dataclass
class _CacheEntry:
    result: CredibilityResult
    stored_at: float


class CredibilityCache:
    """Keyed store of CredibilityResult objects with an injectable eviction policy.

    With the default policy (no size bound, no TTL) entries live for the
    lifetime of the process.

    Attributes:
        max_entries: Optional size bound; the oldest insertion is evicted first
        ttl_seconds: Optional time-to-live, checked lazily on read
    """

    def __init__(
        self,
        max_entries: int | None = None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._inflight: dict[str, asyncio.Future[CredibilityResult]] = {}

    @classmethod
    def from_config(cls, cfg: CacheConfig) -> "CredibilityCache":
        return cls(max_entries=cfg.max_entries, ttl_seconds=cfg.ttl_seconds)

    def get(self, url: str) -> CredibilityResult | None:
        key = normalize_cache_key(url)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        return entry.result

    def put(self, url: str, result: CredibilityResult) -> None:
        key = normalize_cache_key(url)
        self._entries.pop(key, None)
        self._entries[key] = _CacheEntry(result=result, stored_at=self._clock())
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache entry evicted: %s", evicted)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.get(url) is not None

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_compute(
        self,
        url: str,
        compute: Callable[[], Awaitable[CredibilityResult]],
    ) -> CredibilityResult:
        """Return the cached result for url, computing it at most once concurrently.

        The computation runs as a task owned by the cache. Every caller,
        including the one that started it, awaits it through
        ``asyncio.shield``, so cancelling one caller leaves the others
        waiting on the same run. Failures are not cached; they are raised to
        every waiter and the next call computes again.
        """
        key = normalize_cache_key(url)
        cached = self.get(key)
        if cached is not None:
            logger.info("Cache hit: %s", key)
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._compute_and_store(key, compute))
            task.add_done_callback(_retrieve_exception)
            self._inflight[key] = task
        else:
            logger.info("Joining in-flight check: %s", key)
        return await asyncio.shield(task)

    async def _compute_and_store(
        self,
        key: str,
        compute: Callable[[], Awaitable[CredibilityResult]],
    ) -> CredibilityResult:
        try:
            result = await compute()
        finally:
            self._inflight.pop(key, None)
        self.put(key, result)
        logger.info("Cached result: %s", key)
        return result

    def _is_expired(self, entry: _CacheEntry) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - entry.stored_at >= self.ttl_seconds


def _retrieve_exception(task: asyncio.Future[CredibilityResult]) -> None:
    # A run whose callers were all cancelled must not log "exception never retrieved"
    if not task.cancelled():
        task.exception()
