"""Public client façade composing the session components.

Usage::

    async with SessionClient(username="me@example.com", password="...") as client:
        me = await client.authenticate()
        projects = await client.request("/api/v8/workspaces")

Token mode needs no ``authenticate`` call::

    client = SessionClient(api_token="abc123")
    data = await client.request("/api/v8/me")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import httpx

from session_client.config import ClientOptions
from session_client.session.authenticator import Authenticator
from session_client.session.clock import Clock, LoopScheduler, Scheduler, default_clock
from session_client.session.gate import RequestGate
from session_client.session.notifier import EventChannel
from session_client.session.state import SessionState
from session_client.session.transport import SessionTransport

_LOG = logging.getLogger("session-client.client")


class SessionClient:
    """Authenticated client for a JSON HTTP API.

    Parameters
    ----------
    options:
        Pre-built :class:`ClientOptions`; keyword *overrides* are applied on
        top, or used alone when *options* is omitted.
    transport:
        Custom :class:`SessionTransport` (mainly for tests).
    http_transport:
        Low-level httpx transport, e.g. :class:`httpx.MockTransport`.
    scheduler:
        Timer source for re-authentication; defaults to the running loop.
    clock:
        Wall clock used to turn cookie expiry into a TTL.

    Raises
    ------
    ConfigError
        When neither credential form is complete or the base URL is empty.
    """

    def __init__(
        self,
        options: ClientOptions | None = None,
        *,
        transport: SessionTransport | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
        scheduler: Scheduler | None = None,
        clock: Clock = default_clock,
        **overrides: Any,
    ) -> None:
        if options is None:
            options = ClientOptions(**overrides)
        elif overrides:
            options = options.with_overrides(**overrides)
        self.options = options

        self.events = EventChannel()
        self.state = SessionState()
        self.transport = transport or SessionTransport(
            options.base_url,
            timeout_seconds=options.timeout_seconds,
            clock=clock,
            http_transport=http_transport,
        )
        self._authenticator = Authenticator(
            options,
            self.transport,
            self.state,
            self.events,
            scheduler or LoopScheduler(),
        )
        self._gate = RequestGate(options, self.transport, self.state)
        _LOG.debug(
            "Created client mode=%s host=%s", options.credential_mode.value, options.host
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "SessionClient":
        """Build a client from ``SESSION_CLIENT_*`` environment variables."""
        option_fields = set(ClientOptions.__dataclass_fields__)
        overrides = {k: kwargs.pop(k) for k in list(kwargs) if k in option_fields}
        return cls(ClientOptions.from_env(**overrides), **kwargs)

    # ------------------------------------------------------------------ #
    # State                                                              #
    # ------------------------------------------------------------------ #
    @property
    def auth_data(self) -> Any:
        """Payload of the last *successful* authentication (stale after failures)."""
        return self.state.auth_data

    @property
    def authenticating(self) -> bool:
        return self.state.authenticating

    # ------------------------------------------------------------------ #
    # Operations                                                         #
    # ------------------------------------------------------------------ #
    async def authenticate(self) -> Any:
        """Authenticate with username & password; see :class:`Authenticator`."""
        return await self._authenticator.authenticate()

    async def request(
        self,
        path: str,
        method: str = "GET",
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Perform an API call through the request gate and return decoded JSON."""
        return await self._gate.request(path, method, params=params, json=json)

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Subscribe to client events; ``authenticate`` passes ``(error, data)``."""
        self.events.on(event, listener)

    def off(self, event: str, listener: Callable[..., Any]) -> None:
        self.events.off(event, listener)

    # ------------------------------------------------------------------ #
    # Teardown                                                           #
    # ------------------------------------------------------------------ #
    def destroy(self) -> None:
        """Cancel any pending re-authentication; safe to call repeatedly."""
        self._authenticator.destroy()

    async def aclose(self) -> None:
        self.destroy()
        await self.transport.aclose()

    async def __aenter__(self) -> "SessionClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
