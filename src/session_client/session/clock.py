"""Clock and scheduler abstractions for testable session timing.

This module defines a `Clock` protocol representing callables that return the
current UNIX timestamp as ``float`` and a `Scheduler` protocol for arming
one-shot timers.  All time-based decisions inside the session package MUST
depend on an injected ``Clock``/``Scheduler`` rather than calling
``time.time()`` or ``loop.call_later()`` directly.

Example
-------
>>> from session_client.session.clock import default_clock
>>> now = default_clock()
>>> isinstance(now, float)
True
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Callable protocol returning *seconds* since the UNIX epoch."""

    def __call__(self) -> float: ...


def default_clock() -> float:
    """Default implementation that delegates to ``time.time()``.

    Returns
    -------
    float
        Seconds since the UNIX epoch.
    """
    return time.time()


@runtime_checkable
class ScheduleHandle(Protocol):
    """Handle of a pending one-shot timer."""

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Arms one-shot timers; ``delay`` is expressed in *seconds*."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduleHandle: ...


class LoopScheduler:
    """Scheduler backed by the running asyncio event loop.

    The loop is resolved lazily on every call so a client may be constructed
    outside of a coroutine and used later from inside one.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, callback)
