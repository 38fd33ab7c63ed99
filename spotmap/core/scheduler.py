"""
Cancellable delayed callbacks on the running event loop.

Viewport re-assertion, staged moves and the tile-failure debounce all
schedule work a few hundred milliseconds ahead; each owner keeps one
``DelayedCalls`` so it can drop every outstanding timer on reset or
teardown.
"""

import asyncio
import logging
from typing import Callable, Set

logger = logging.getLogger(__name__)


class DelayedCalls:
    """A group of pending ``loop.call_later`` handles."""

    def __init__(self, name: str = "timers"):
        self.name = name
        self._handles: Set[asyncio.TimerHandle] = set()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Run ``callback`` after ``delay_seconds`` unless cancelled first."""
        loop = asyncio.get_running_loop()
        handle: asyncio.TimerHandle

        def _run() -> None:
            self._handles.discard(handle)
            try:
                callback()
            except Exception as e:
                logger.error(f"{self.name}: delayed callback failed: {e}", exc_info=True)

        handle = loop.call_later(max(delay_seconds, 0.0), _run)
        self._handles.add(handle)
        return handle

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
        self._handles.discard(handle)

    def cancel_all(self) -> int:
        """Cancel every pending callback; returns how many were dropped."""
        count = len(self._handles)
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
        return count

    @property
    def pending(self) -> int:
        return len(self._handles)
