"""In-memory, time-bounded store of canonical offers keyed by offer_id.

Lookups share a read lock; inserts and the expiry sweep take the write lock.
A janitor task on the event loop sweeps expired offers at a fixed interval,
so an offer may outlive its TTL by up to one sweep interval.

Usage:
    store = DedupeStore(ttl_seconds=600, sweep_interval_seconds=60)
    store.start_janitor()          # inside a running event loop

    if store.add_if_absent(offer):
        ...                        # first sighting
    await store.stop_janitor()
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from app.core.config import settings
from app.core.locks import ReadWriteLock
from app.core.logging import get_logger
from app.schemas.offer import Offer

log = get_logger("dedupe_store")


class DedupeStore:
    """Identity-keyed offer cache with TTL expiry.

    ``is_duplicate`` followed by ``add`` is not atomic: two callers racing on
    the same identity can both see "new". Use ``add_if_absent`` when exactly
    one winner matters.
    """

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        sweep_interval_seconds: Optional[float] = None,
    ):
        interval = settings.DEDUPE_SWEEP_INTERVAL_SECONDS if sweep_interval_seconds is None else sweep_interval_seconds
        self.ttl = settings.dedupe_ttl if ttl_seconds is None else timedelta(seconds=ttl_seconds)
        self.sweep_interval = interval
        self._data: Dict[str, Offer] = {}
        self._lock = ReadWriteLock()
        self._janitor_task: Optional[asyncio.Task] = None

    # =========================================================================
    # Reads
    # =========================================================================
    def is_duplicate(self, offer: Offer) -> bool:
        """Check if an offer with the same offer_id is currently retained."""
        with self._lock.read():
            return offer.offer_id in self._data

    def get(self, offer_id: str) -> Optional[Offer]:
        with self._lock.read():
            return self._data.get(offer_id)

    def list(self) -> List[Offer]:
        """Point-in-time snapshot of all retained offers (unordered)."""
        with self._lock.read():
            return list(self._data.values())

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._data)

    # =========================================================================
    # Writes
    # =========================================================================
    def add(self, offer: Offer) -> None:
        """Insert or overwrite. The new record, and its created_at, wins."""
        with self._lock.write():
            self._data[offer.offer_id] = offer

    def add_if_absent(self, offer: Offer) -> bool:
        """Atomically insert unless the identity is already retained.

        Returns:
            True if the offer was inserted, False if it was a duplicate.
        """
        with self._lock.write():
            if offer.offer_id in self._data:
                return False
            self._data[offer.offer_id] = offer
            return True

    def evict_expired(self, now: Optional[datetime] = None) -> int:
        """Remove every offer older than the TTL. Returns the number removed."""
        now = now or datetime.now(timezone.utc)
        with self._lock.write():
            expired = [k for k, v in self._data.items() if now - v.created_at > self.ttl]
            for k in expired:
                del self._data[k]
        return len(expired)

    # =========================================================================
    # JANITOR - Background expiry sweep
    # =========================================================================
    @property
    def janitor_running(self) -> bool:
        return self._janitor_task is not None and not self._janitor_task.done()

    def start_janitor(self) -> None:
        """Start the background sweep task on the running event loop."""
        if self._janitor_task is not None:
            log.warning("Dedupe janitor already running")
            return
        self._janitor_task = asyncio.create_task(self._janitor_loop())
        log.info(f"Started dedupe janitor (interval: {self.sweep_interval}s, ttl: {self.ttl.total_seconds():.0f}s)")

    async def stop_janitor(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        task, self._janitor_task = self._janitor_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        log.info("Stopped dedupe janitor")

    async def _janitor_loop(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.sweep_interval)
                removed = self.evict_expired()
                if removed:
                    log.info(f"Evicted {removed} expired offers")
            except asyncio.CancelledError:
                log.info("Dedupe janitor cancelled")
                raise
            except Exception as exc:
                log.exception(f"Dedupe sweep failed: {exc}")


# Global instance holder for the store
_dedupe_store: Optional[DedupeStore] = None


def init_dedupe_store() -> DedupeStore:
    """Create the process-wide store and start its janitor if enabled.

    Called at application startup.
    """
    global _dedupe_store
    _dedupe_store = DedupeStore()
    if settings.DEDUPE_JANITOR_ENABLED:
        _dedupe_store.start_janitor()
    else:
        log.info("Dedupe janitor is disabled (DEDUPE_JANITOR_ENABLED=false)")
    return _dedupe_store


def get_dedupe_store() -> Optional[DedupeStore]:
    """Get the process-wide store instance."""
    return _dedupe_store


async def shutdown_dedupe_store() -> None:
    """Stop the janitor and drop the process-wide store."""
    global _dedupe_store
    if _dedupe_store:
        await _dedupe_store.stop_janitor()
        _dedupe_store = None
