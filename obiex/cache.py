"""
Time-to-live cache for slow-changing API resources.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, TypeVar
import logging
import time

T = TypeVar("T")


@dataclass
class CacheEntry:
    """A cached value and the monotonic instant it goes stale."""

    value: Any
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class TTLCache:
    """
    Async read-through cache with per-entry expiry.

    Concurrent callers that find the same key stale or absent each run
    the producer, and the last result written wins. There is no
    single-flight de-duplication, so producers must be idempotent reads.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.is_fresh(time.monotonic())

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_set(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl_seconds: int
    ) -> T:
        """
        Return the cached value for key, or compute and store a new one.

        Args:
            key: Cache key
            producer: Zero-argument coroutine function computing the value
            ttl_seconds: Seconds the new value stays fresh (0 means it is
                stale immediately)

        Returns:
            The fresh cached value, or the producer's result

        Raises:
            Whatever the producer raises. Nothing is stored in that case.
        """
        entry = self._entries.get(key)
        if entry is not None and entry.is_fresh(time.monotonic()):
            logging.debug(f"Cache hit for '{key}'")
            return entry.value

        logging.debug(f"Cache miss for '{key}'")
        value = await producer()

        # Expiry counts from when the producer finished
        self._entries[key] = CacheEntry(value=value, expires_at=time.monotonic() + ttl_seconds)
        return value
