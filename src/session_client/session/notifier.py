"""One-shot broadcast of authentication outcomes.

Two primitives live here:

``AuthNotifier``
    Scoped to a *single* authentication attempt.  Subscribers registered
    before :meth:`AuthNotifier.announce` receive the outcome exactly once;
    subscribers registered afterwards receive nothing and must wait for the
    next attempt.

``EventChannel``
    Per-client registry of persistent listeners for public events such as
    ``authenticate``.  Never shared between client instances.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Callable

from session_client.session.models import AuthOutcome

_LOG = logging.getLogger("session-client.session.notifier")

Subscriber = Callable[[AuthOutcome], None]
Listener = Callable[..., Any]


class AuthNotifier:
    """Explicit list of one-shot subscribers, cleared after firing."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._outcome: AuthOutcome | None = None

    @property
    def announced(self) -> bool:
        return self._outcome is not None

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Subscriber) -> bool:
        """Register *callback*; returns False when the attempt already resolved."""
        if self.announced:
            return False
        self._subscribers.append(callback)
        return True

    async def wait(self) -> AuthOutcome:
        """Suspend until the attempt resolves and return its outcome."""
        future: asyncio.Future[AuthOutcome] = asyncio.get_running_loop().create_future()

        def _resolve(outcome: AuthOutcome) -> None:
            if not future.done():
                future.set_result(outcome)

        if not self.subscribe(_resolve):
            raise RuntimeError("authentication attempt already announced")
        return await future

    def announce(self, outcome: AuthOutcome) -> None:
        """Deliver *outcome* to every current subscriber, exactly once."""
        if self.announced:
            raise RuntimeError("authentication outcome announced twice")
        self._outcome = outcome
        subscribers, self._subscribers = self._subscribers, []
        _LOG.debug("Announcing outcome ok=%s to %d waiter(s)", outcome.ok, len(subscribers))
        for callback in subscribers:
            callback(outcome)


class EventChannel:
    """Minimal per-instance event emitter."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def off(self, event: str, listener: Listener) -> None:
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def emit(self, event: str, *args: Any) -> None:
        # copy: listeners may unsubscribe themselves while being notified
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(*args)
            except Exception:  # noqa: BLE001
                _LOG.exception("Listener for %r raised", event)
