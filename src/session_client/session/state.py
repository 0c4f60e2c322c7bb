"""Mutable authentication state owned by a single client instance.

Invariants
----------
* ``authenticating`` is True strictly between :meth:`SessionState.begin_attempt`
  and :meth:`SessionState.end_attempt`; at most one attempt is outstanding.
* ``reauth_scheduled`` is the *only* pending re-authentication timer.  Arming
  a new one cancels the previous handle; firing or teardown clears it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from session_client.session.clock import ScheduleHandle
from session_client.session.notifier import AuthNotifier

_LOG = logging.getLogger("session-client.session.state")


@dataclass(slots=True)
class SessionState:
    """Current authentication outcome plus the pending re-auth timer."""

    authenticating: bool = False
    auth_data: Any = None
    reauth_scheduled: ScheduleHandle | None = None
    attempt: AuthNotifier | None = field(default=None, repr=False)
    attempts_started: int = 0

    def begin_attempt(self) -> AuthNotifier:
        """Mark an attempt as outstanding and return its notifier."""
        if self.authenticating:
            raise RuntimeError("an authentication attempt is already outstanding")
        self.authenticating = True
        self.attempts_started += 1
        self.attempt = AuthNotifier()
        return self.attempt

    def end_attempt(self) -> AuthNotifier:
        """Close the outstanding attempt; the caller announces the outcome."""
        if not self.authenticating or self.attempt is None:
            raise RuntimeError("no authentication attempt is outstanding")
        notifier, self.attempt = self.attempt, None
        self.authenticating = False
        return notifier

    def arm(self, handle: ScheduleHandle) -> None:
        if self.reauth_scheduled is not None:
            _LOG.debug("Replacing pending re-authentication timer")
            self.reauth_scheduled.cancel()
        self.reauth_scheduled = handle

    def disarm(self) -> bool:
        """Cancel the pending timer, if any. Returns True when one was pending."""
        handle, self.reauth_scheduled = self.reauth_scheduled, None
        if handle is None:
            return False
        handle.cancel()
        return True
