"""Request gate: nothing reaches the API while authentication is in flight."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from session_client.config import TOKEN_PASSWORD, ClientOptions, CredentialMode
from session_client.session.state import SessionState
from session_client.session.transport import BasicAuthPair, SessionTransport, decode_response

_LOG = logging.getLogger("session-client.session.gate")


class RequestGate:
    """Holds calls during an outstanding attempt and replays them afterwards.

    A held call subscribes once to the attempt's notifier.  On failure it is
    abandoned with the attempt's error; on success it re-enters the gate,
    which normally lets it through straight away.
    """

    def __init__(
        self,
        options: ClientOptions,
        transport: SessionTransport,
        state: SessionState,
    ) -> None:
        self._options = options
        self._transport = transport
        self._state = state
        self.deferred_total = 0

    def _auth(self) -> BasicAuthPair | None:
        if self._options.credential_mode is CredentialMode.TOKEN:
            return (self._options.api_token or "", TOKEN_PASSWORD)
        # password mode: the session cookie travels in the transport's jar
        return None

    async def request(
        self,
        path: str,
        method: str = "GET",
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        while self._state.authenticating and self._state.attempt is not None:
            self.deferred_total += 1
            _LOG.debug("Deferring %s %s until authentication resolves", method, path)
            outcome = await self._state.attempt.wait()
            if outcome.error is not None:
                _LOG.debug("Dropping deferred %s %s: authentication failed", method, path)
                raise outcome.error

        response = await self._transport.send(
            method, path, auth=self._auth(), params=params, json=json
        )
        return decode_response(response)
