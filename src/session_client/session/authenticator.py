"""Authentication attempts and proactive re-authentication.

One attempt is a single identity-check call (``GET <auth_path>`` with the
username/password basic-auth pair).  Its outcome is applied in a fixed order
once the HTTP call resolves:

1. mutate :class:`~session_client.session.state.SessionState`,
2. broadcast to every deferred waiter via the attempt's notifier,
3. emit the public ``authenticate`` event,
4. return to (or raise into) the caller.

When re-authentication is enabled and the server sets a session cookie with a
lifetime, a one-shot timer is armed ``ttl - safety_margin`` milliseconds
ahead so the next session exists before the current one lapses.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final

from session_client.config import ClientOptions, CredentialMode
from session_client.session.clock import Scheduler
from session_client.session.errors import NotNeededError, SessionClientError, TransportError
from session_client.session.log_utils import get_session_logger
from session_client.session.models import AuthOutcome
from session_client.session.notifier import EventChannel
from session_client.session.state import SessionState
from session_client.session.transport import SessionTransport, decode_response

_LOG = logging.getLogger("session-client.session.authenticator")

AUTHENTICATE_EVENT: Final[str] = "authenticate"
# Lower bound for the re-auth delay when the session TTL is within the margin.
MIN_REAUTH_DELAY_MS: Final[int] = 1_000


def reauth_delay_ms(ttl_ms: float, safety_margin_ms: float) -> float:
    """Return the re-authentication delay for a session living *ttl_ms*.

    The delay is ``ttl_ms - safety_margin_ms`` clamped to
    :data:`MIN_REAUTH_DELAY_MS` so a short-lived session never yields a
    zero or negative timer.
    """
    return max(float(MIN_REAUTH_DELAY_MS), ttl_ms - safety_margin_ms)


class Authenticator:
    """Drives authentication attempts for one client instance."""

    def __init__(
        self,
        options: ClientOptions,
        transport: SessionTransport,
        state: SessionState,
        events: EventChannel,
        scheduler: Scheduler,
    ) -> None:
        self._options = options
        self._transport = transport
        self._state = state
        self._events = events
        self._scheduler = scheduler
        self._reauth_tasks: set[asyncio.Task[None]] = set()
        self._destroyed = False

    async def authenticate(self) -> Any:
        """Run (or join) an authentication attempt and return the auth data.

        Raises
        ------
        NotNeededError
            The client uses an API token; nothing is sent and no state changes.
        TransportError, APIError
            The identity check failed; deferred requests receive the same error.
        """
        if self._options.credential_mode is CredentialMode.TOKEN:
            raise NotNeededError()

        if self._state.authenticating and self._state.attempt is not None:
            _LOG.debug("Joining outstanding authentication attempt")
            outcome = await self._state.attempt.wait()
            if outcome.error is not None:
                raise outcome.error
            return outcome.data

        self._state.begin_attempt()
        log = get_session_logger(
            base_logger_name=_LOG.name,
            mode=self._options.credential_mode.value,
            host=self._options.host,
            attempt_id=self._state.attempts_started,
            username=self._options.username,
        )
        log.debug("Starting authentication attempt")

        try:
            data = await self._identity_check(log)
        except SessionClientError as exc:
            log.warning("Authentication failed: %s", exc)
            self._finish(AuthOutcome.failure(exc))
            raise
        except asyncio.CancelledError:
            log.warning("Authentication attempt cancelled")
            self._finish(
                AuthOutcome.failure(TransportError("Authentication attempt cancelled"))
            )
            raise
        except Exception as exc:
            log.exception("Authentication attempt raised unexpectedly")
            error = TransportError(
                f"Authentication failed: {exc!r}",
                method="GET",
                url=self._options.auth_path,
            )
            self._finish(AuthOutcome.failure(error))
            raise error from exc

        self._state.auth_data = data
        log.info("Authenticated")
        self._finish(AuthOutcome.success(data))
        return data

    async def _identity_check(self, log: logging.LoggerAdapter) -> Any:
        """Send the identity check and arm re-authentication on success."""
        auth = (self._options.username or "", self._options.password or "")
        response = await self._transport.send("GET", self._options.auth_path, auth=auth)
        data = decode_response(response)
        if self._options.reauth_enabled and not self._destroyed:
            ttl_ms = self._transport.session_ttl(self._options.session_cookie_name)
            if ttl_ms:
                self._schedule_reauth(ttl_ms)
            else:
                log.debug("Session cookie has no lifetime; re-authentication not scheduled")
        return data

    def _finish(self, outcome: AuthOutcome) -> None:
        notifier = self._state.end_attempt()
        notifier.announce(outcome)
        self._events.emit(AUTHENTICATE_EVENT, outcome.error, outcome.data)

    # ------------------------------------------------------------------ #
    # Re-authentication timer                                            #
    # ------------------------------------------------------------------ #
    def _schedule_reauth(self, ttl_ms: float) -> None:
        delay_ms = reauth_delay_ms(ttl_ms, self._options.safety_margin_ms)
        if ttl_ms - self._options.safety_margin_ms < MIN_REAUTH_DELAY_MS:
            _LOG.warning(
                "Session TTL %.0fms is within the %dms safety margin; "
                "re-authenticating in %.0fms",
                ttl_ms,
                self._options.safety_margin_ms,
                delay_ms,
            )
        handle = self._scheduler.call_later(delay_ms / 1000.0, self._on_timer)
        self._state.arm(handle)
        _LOG.info("Re-authentication scheduled in %.0fms (session ttl %.0fms)", delay_ms, ttl_ms)

    def _on_timer(self) -> None:
        self._state.reauth_scheduled = None
        if self._destroyed:
            return
        task = asyncio.get_running_loop().create_task(self._reauth())
        self._reauth_tasks.add(task)
        task.add_done_callback(self._reauth_tasks.discard)

    async def _reauth(self) -> None:
        try:
            await self.authenticate()
        except SessionClientError as exc:
            # already broadcast and emitted; nobody awaits this task
            _LOG.warning("Scheduled re-authentication failed: %s", exc)

    def destroy(self) -> None:
        """Cancel the pending timer and stop scheduling new ones."""
        self._destroyed = True
        if self._state.disarm():
            _LOG.debug("Cancelled pending re-authentication timer")
