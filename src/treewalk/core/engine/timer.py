"""
Auto-play timer.

A repeating tick built from one-shot ``call_later`` callbacks. Only one
callback is ever scheduled at a time, so ticks cannot overlap, and
``cancel()`` drops the pending handle so nothing fires afterwards.

The scheduler is anything exposing ``call_later(delay, callback)`` that
returns a handle with ``cancel()``; an ``asyncio`` event loop qualifies and
is the default.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol

from treewalk.errors import SchedulerUnavailableError

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AutoPlayTimer:
    """Calls ``tick`` every ``interval_ms`` until it returns False or is cancelled."""

    def __init__(self, scheduler: Optional[Scheduler] = None):
        self._scheduler = scheduler
        self._handle: Optional[Cancellable] = None
        self._tick: Optional[Callable[[], bool]] = None
        self._interval_ms = 0

    @property
    def active(self) -> bool:
        return self._tick is not None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def start(self, interval_ms: int, tick: Callable[[], bool]) -> None:
        """
        Start ticking. Does nothing if already active.

        Raises:
            ValueError: If ``interval_ms`` is not positive
            SchedulerUnavailableError: If no scheduler was given and no
                asyncio event loop is running
        """
        if self.active:
            return
        if interval_ms <= 0:
            raise ValueError(f"Auto-play interval must be positive, got {interval_ms}")
        scheduler = self._resolve_scheduler()
        self._interval_ms = interval_ms
        self._tick = tick
        self._handle = scheduler.call_later(interval_ms / 1000, self._fire)
        logger.debug("Auto-play timer started (%d ms)", interval_ms)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Auto-play timer cancelled")
        self._handle = None
        self._tick = None

    def _resolve_scheduler(self) -> Scheduler:
        if self._scheduler is not None:
            return self._scheduler
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise SchedulerUnavailableError(
                "Auto-play needs a running asyncio event loop or an explicit scheduler"
            ) from exc

    def _fire(self) -> None:
        self._handle = None
        tick = self._tick
        if tick is None:
            return
        keep_going = tick()
        # The tick may have cancelled or restarted the timer itself.
        if keep_going and self._tick is tick and self._handle is None:
            self._handle = self._resolve_scheduler().call_later(self._interval_ms / 1000, self._fire)


__all__ = ["Cancellable", "Scheduler", "AutoPlayTimer"]
