"""Time-windowed cache over market data feeds."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from ..observability.metrics import MARKET_DATA_FAILURES, MARKET_DATA_STALE_SERVES
from .providers import MarketDataError

LOGGER = logging.getLogger(__name__)

_Fetcher = Callable[[], Mapping[str, Optional[float]]]


@dataclass(frozen=True, slots=True)
class CachedValue:
    """A cached observation and the wall-clock time it was fetched."""

    value: float
    updated_at: float


class MarketDataCache:
    """Thread-safe per-asset cache refreshed once its TTL has elapsed.

    A failed refresh keeps serving the last known values. A refresh that
    reports an asset as unavailable does not erase a previously known value
    for that asset.
    """

    def __init__(
        self,
        fetcher: _Fetcher,
        *,
        name: str,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.name = name
        self._fetcher = fetcher
        self._ttl = max(0.0, ttl_seconds)
        self._clock = clock
        self._lock = threading.RLock()
        self._values: Dict[str, CachedValue] = {}
        self._last_updated: Optional[float] = None
        self._next_refresh: float = 0.0

    @property
    def last_updated(self) -> Optional[float]:
        """Wall-clock time of the last successful refresh."""

        with self._lock:
            return self._last_updated

    def is_expired(self) -> bool:
        with self._lock:
            return self._clock() >= self._next_refresh

    def reset(self) -> None:
        """Force a refresh on next access."""

        with self._lock:
            self._next_refresh = 0.0

    def refresh(self) -> None:
        """Fetch fresh values, raising :class:`MarketDataError` on failure."""

        with self._lock:
            now = self._clock()
            self._next_refresh = now + self._ttl
            try:
                payload = self._fetcher()
            except MarketDataError:
                MARKET_DATA_FAILURES.labels(provider=self.name).inc()
                raise

            for key, value in payload.items():
                if value is not None:
                    self._values[key] = CachedValue(float(value), now)
            self._last_updated = now

    def _ensure_fresh_locked(self) -> None:
        if self._clock() < self._next_refresh:
            return
        try:
            self.refresh()
        except MarketDataError as exc:
            if self._values:
                MARKET_DATA_STALE_SERVES.labels(provider=self.name).inc()
                LOGGER.warning("%s refresh failed, serving stale data: %s", self.name, exc)
            else:
                LOGGER.warning("%s refresh failed and no data is cached: %s", self.name, exc)

    def get(self, key: str) -> Optional[float]:
        """Return the latest known value for ``key`` or ``None``."""

        with self._lock:
            self._ensure_fresh_locked()
            entry = self._values.get(key)
            return entry.value if entry is not None else None

    def snapshot(self) -> Dict[str, CachedValue]:
        with self._lock:
            self._ensure_fresh_locked()
            return dict(self._values)


__all__ = ["CachedValue", "MarketDataCache"]
