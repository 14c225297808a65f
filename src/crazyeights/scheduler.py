"""Delayed, cancellable opponent moves on an asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_OPPONENT_DELAY = 1.5


class OpponentScheduler:
    """Schedules a single pending opponent move keyed by state version.

    At most one call is pending at a time: scheduling again replaces it.
    The callback receives the version it was scheduled for, so the caller
    can drop it if the state has moved on in the meantime.

    The event loop is resolved lazily, so ``schedule()`` must run inside a
    running loop unless one is passed in.
    """

    def __init__(
        self,
        delay: float = DEFAULT_OPPONENT_DELAY,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._version: Optional[int] = None

    def schedule(self, version: int, callback: Callable[[int], None]) -> None:
        """Run ``callback(version)`` after the delay, replacing any pending call."""
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._version = version
        self._handle = loop.call_later(self.delay, self._fire, version, callback)
        logger.debug(f"Opponent move scheduled for version {version} in {self.delay}s")

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            logger.debug(f"Cancelled opponent move for version {self._version}")
        self._handle = None
        self._version = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def pending_version(self) -> Optional[int]:
        return self._version

    def _fire(self, version: int, callback: Callable[[int], None]) -> None:
        self._handle = None
        self._version = None
        callback(version)
