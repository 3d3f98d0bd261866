"""Process-local TTL cache for the settings snapshot."""

import logging
import threading
import time
from collections.abc import Callable, Mapping
from types import MappingProxyType

from prometheus_client import Counter

from app.utils.setting_values import DEFAULT_SETTINGS, SettingValue

logger = logging.getLogger(__name__)

SETTINGS_CACHE_LOOKUPS_TOTAL = Counter(
    "settings_cache_lookups_total",
    "Settings cache lookups by outcome",
    ["result"],
)
SETTINGS_CACHE_INVALIDATIONS_TOTAL = Counter(
    "settings_cache_invalidations_total",
    "Total explicit settings cache invalidations",
)

Snapshot = Mapping[str, SettingValue]


class SettingsCache:
    """Singleton holding one immutable settings snapshot.

    The snapshot is the stored settings merged over ``DEFAULT_SETTINGS``, so
    every default key is always present. It is refetched when it is missing
    or older than the TTL. The lock guards only the slot; store reads happen
    outside it, so two concurrent misses may both read and the last one to
    finish wins. A read that started before an ``invalidate`` is returned to
    its caller but never stored.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: Snapshot | None = None
        self._loaded_at = 0.0
        self._generation = 0
        self._lock = threading.Lock()

    def get(self, fetch: Callable[[], Mapping[str, SettingValue]]) -> Snapshot:
        """Return the cached snapshot, reading through ``fetch`` on a miss.

        Args:
            fetch: Store read returning typed values for the stored keys

        Returns:
            Read-only snapshot containing at least every default key

        Raises:
            Exception: Propagated from ``fetch``; the slot stays empty
        """
        with self._lock:
            snapshot = self._snapshot
            if snapshot is not None and self._clock() - self._loaded_at < self.ttl_seconds:
                SETTINGS_CACHE_LOOKUPS_TOTAL.labels(result="hit").inc()
                return snapshot
            generation = self._generation

        SETTINGS_CACHE_LOOKUPS_TOTAL.labels(result="miss").inc()
        logger.debug("Settings cache miss, reading from database")

        stored = fetch()
        snapshot = MappingProxyType({**DEFAULT_SETTINGS, **stored})

        with self._lock:
            if generation == self._generation:
                self._snapshot = snapshot
                self._loaded_at = self._clock()
            else:
                logger.debug("Settings cache invalidated during read, not storing snapshot")

        return snapshot

    def invalidate(self) -> None:
        """Discard the snapshot so the next ``get`` reads the store."""
        with self._lock:
            self._snapshot = None
            self._generation += 1
        SETTINGS_CACHE_INVALIDATIONS_TOTAL.inc()
        logger.debug("Settings cache invalidated")
