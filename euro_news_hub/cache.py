"""Time-boxed single-slot memory cache in front of the news pipeline."""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .models import CachedResult

log = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _Slot:
    result: CachedResult
    stored_at: datetime


class NewsCache:
    """One process-wide slot holding the last good result and when it was stored.

    The slot is replaced wholesale, never mutated. A lock guards reads and
    writes of the slot but is not held while a refresh runs, so two
    overlapping refreshes both complete and the last one to finish wins.
    """

    def __init__(self, ttl: timedelta, clock: Callable[[], datetime] = utc_now):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._slot: Optional[_Slot] = None

    def _is_fresh(self, slot: Optional[_Slot]) -> bool:
        return slot is not None and self._clock() - slot.stored_at < self.ttl

    def get(self) -> Optional[CachedResult]:
        """Return the cached result if it is still within the TTL."""
        with self._lock:
            slot = self._slot
        if not self._is_fresh(slot):
            return None
        return replace(slot.result, from_cache=True, stale=False)

    def store(self, result: CachedResult) -> None:
        with self._lock:
            self._slot = _Slot(result=result, stored_at=self._clock())

    def clear(self) -> None:
        with self._lock:
            self._slot = None
        log.info("News cache cleared")

    def get_or_refresh(self, refresh: Callable[[], CachedResult]) -> Optional[CachedResult]:
        """Serve the slot while fresh, otherwise run *refresh* and store its result.

        If the refresh raises, the previous slot is served marked as stale,
        or ``None`` is returned when nothing was ever cached.
        """
        cached = self.get()
        if cached is not None:
            log.info("Using cached news data (ttl=%s)", self.ttl)
            return cached

        with self._lock:
            previous = self._slot

        try:
            result = refresh()
        except Exception as exc:
            log.warning("News refresh failed: %s", exc)
            if previous is None:
                return None
            log.info("Serving stale news from %s", previous.stored_at.isoformat())
            return replace(previous.result, from_cache=True, stale=True)

        result = replace(result, from_cache=False, stale=False)
        self.store(result)
        return result

    def status(self) -> dict:
        """Diagnostics about the slot (age, validity, TTL)."""
        with self._lock:
            slot = self._slot
        age = self._clock() - slot.stored_at if slot else None
        return {
            "has_cached_data": slot is not None,
            "cache_timestamp": slot.stored_at.isoformat() if slot else None,
            "cache_age_minutes": round(age.total_seconds() / 60) if age is not None else None,
            "cache_valid": self._is_fresh(slot),
            "ttl_minutes": round(self.ttl.total_seconds() / 60),
        }
