"""
Tile health monitoring.

Aggregates asynchronous tile-fetch failures into a counter plus the last
error message. Every failure is counted immediately; listener
notifications are coalesced with a trailing debounce so a burst of failed
tiles produces one update.
"""

import logging
from typing import Callable, List, Optional

from spotmap.config.settings import TileSettings, get_settings
from spotmap.core.scheduler import DelayedCalls
from spotmap.models.internal_models import TileHealthState

logger = logging.getLogger(__name__)

HealthListener = Callable[[TileHealthState], None]


class TileHealthMonitor:
    def __init__(self, tile_settings: Optional[TileSettings] = None):
        settings = tile_settings or get_settings().tiles
        self.debounce_seconds = settings.failure_debounce_seconds
        self._failure_count = 0
        self._last_error: Optional[str] = None
        self._listeners: List[HealthListener] = []
        self._timers = DelayedCalls("tile-health")
        self._pending = None
        self._disposed = False

    def add_listener(self, listener: HealthListener) -> None:
        """
        Add callback to be notified of health changes.

        Args:
            listener: Function called with the current snapshot
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: HealthListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> TileHealthState:
        return TileHealthState(failure_count=self._failure_count, last_error=self._last_error)

    def record_failure(self, error: object) -> None:
        """Count a failed tile and (re)start the notification debounce."""
        if self._disposed:
            return
        self._failure_count += 1
        self._last_error = str(error)
        logger.debug(f"Tile failure #{self._failure_count}: {self._last_error}")

        if self._pending is not None:
            self._timers.cancel(self._pending)
        self._pending = self._timers.call_later(self.debounce_seconds, self._flush)

    def reset(self) -> None:
        """Zero the counter, clear the last error and drop any pending notification."""
        changed = self._failure_count > 0 or self._last_error is not None
        self._timers.cancel_all()
        self._pending = None
        self._failure_count = 0
        self._last_error = None
        if changed and not self._disposed:
            self._notify()

    def dispose(self) -> None:
        self._timers.cancel_all()
        self._pending = None
        self._listeners.clear()
        self._disposed = True

    def _flush(self) -> None:
        self._pending = None
        logger.info(f"Map tiles failing ({self._failure_count}); last error: {self._last_error}")
        self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Tile health listener error: {e}", exc_info=True)
