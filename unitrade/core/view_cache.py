"""
View Deduplication Cache

Tracks which client has recently viewed which product so repeat views inside
the suppression window do not bump the stored view counter. Entries are
swept periodically by ViewCacheSweeper to keep memory bounded.

The cache is plain in-process state. Its methods never await, so under the
asyncio event loop each call is atomic with respect to the others.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import timedelta

logger = logging.getLogger(__name__)

DEFAULT_SUPPRESSION_WINDOW = timedelta(minutes=30)
DEFAULT_RETENTION_WINDOW = timedelta(hours=1)
DEFAULT_SWEEP_INTERVAL = timedelta(hours=1)

# Returns the current instant in milliseconds
Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Default clock: monotonic time in milliseconds."""
    return int(time.monotonic() * 1000)


def _to_ms(window: timedelta) -> int:
    return int(window.total_seconds() * 1000)


def make_fingerprint(client_id: str, resource_id: str) -> str:
    """Join a client identifier and a resource identifier into a cache key."""
    return f"{client_id}_{resource_id}"


class ViewDedupCache:
    """
    In-memory map of view fingerprint -> last-seen timestamp.

    Args:
        clock: Callable returning the current time in milliseconds
        suppression_window: How long a marked fingerprint suppresses counting
        retention_window: Age after which sweep() drops an entry
    """

    def __init__(
        self,
        *,
        clock: Clock = monotonic_ms,
        suppression_window: timedelta = DEFAULT_SUPPRESSION_WINDOW,
        retention_window: timedelta = DEFAULT_RETENTION_WINDOW,
    ) -> None:
        if retention_window < suppression_window:
            raise ValueError("retention_window must not be shorter than suppression_window")

        self._clock = clock
        self._suppression_ms = _to_ms(suppression_window)
        self._retention_ms = _to_ms(retention_window)
        self._entries: dict[str, int] = {}

    def has_recently_viewed(self, key: str) -> bool:
        """Return True if `key` was marked less than one suppression window ago."""
        seen_at = self._entries.get(key)
        if seen_at is None:
            return False
        return self._clock() - seen_at < self._suppression_ms

    def mark_viewed(self, key: str) -> None:
        """Record a view for `key` at the current time."""
        now = self._clock()
        previous = self._entries.get(key)
        # Timestamps only move forward
        self._entries[key] = now if previous is None else max(previous, now)

    def sweep(self) -> int:
        """
        Drop every entry at least one retention window old.

        Returns:
            Number of entries removed
        """
        cutoff = self._clock() - self._retention_ms
        stale = [key for key, seen_at in self._entries.items() if seen_at <= cutoff]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        """Forget every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class ViewCacheSweeper:
    """
    Background task that calls ViewDedupCache.sweep() on a fixed period.

    Started and stopped by the application lifespan.
    """

    def __init__(
        self,
        cache: ViewDedupCache,
        interval: timedelta = DEFAULT_SWEEP_INTERVAL,
    ) -> None:
        self.cache = cache
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self._task is not None:
            return

        self._task = asyncio.create_task(self._run(), name="view-cache-sweeper")
        logger.info(f"View cache sweeper started (every {self.interval})")

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("View cache sweeper stopped")

    async def _run(self) -> None:
        delay = self.interval.total_seconds()
        while True:
            await asyncio.sleep(delay)
            removed = self.cache.sweep()
            logger.debug(
                f"View cache sweep removed {removed} entries, {len(self.cache)} remaining"
            )
