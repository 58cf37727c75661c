"""Daily memoisation of fetched input series."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# Upstream daily stats publish shortly after midnight UTC.
ROLLOVER_HOUR_UTC = 1


def daily_cache_key(base_key: str, now: Optional[datetime] = None) -> str:
    """``<base_key>-<YYYY-MM-DD>`` where the day rolls over at 01:00 UTC."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    if now.hour < ROLLOVER_HOUR_UTC:
        now = now - timedelta(days=1)
    return f"{base_key}-{now.date().isoformat()}"


def _base_of(key: str) -> str:
    # strip the "-YYYY-MM-DD" suffix
    return key[:-11]


class DailyCache:
    """Keeps one value per base key until the next 01:00 UTC rollover.

    Owned by whoever constructs it and passed by reference; nothing is
    shared at module level.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get_or_load(self, base_key: str, loader: Callable[[], Any]) -> Any:
        key = daily_cache_key(base_key, self._clock())
        with self._lock:
            if key in self._entries:
                return self._entries[key]

        value = loader()

        with self._lock:
            stale = [k for k in self._entries if _base_of(k) == base_key and k != key]
            for k in stale:
                del self._entries[k]
            self._entries[key] = value
        logger.debug("Cached %s", key)
        return value

    def invalidate(self, base_key: Optional[str] = None) -> None:
        with self._lock:
            if base_key is None:
                self._entries.clear()
            else:
                for k in [k for k in self._entries if _base_of(k) == base_key]:
                    del self._entries[k]

    def __len__(self) -> int:
        return len(self._entries)
