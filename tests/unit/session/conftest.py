"""Fixtures for session core tests: fake timers and a scriptable fake API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable

import httpx
import pytest

from session_client import SessionClient

BASE_URL = "https://api.example.com"
AUTH_PATH = "/api/v8/me"
ME = {"data": {"id": 7, "fullname": "Jane Roe"}}


# --------------------------------------------------------------------------- #
# Fake scheduler                                                              #
# --------------------------------------------------------------------------- #
@dataclass
class FakeHandle:
    delay: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeScheduler:
    """Records armed timers; tests fire them explicitly."""

    handles: list[FakeHandle] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire(self, handle: FakeHandle | None = None) -> bool:
        handle = handle or self.handles[-1]
        if handle.cancelled or handle.fired:
            return False
        handle.fired = True
        handle.callback()
        return True


# --------------------------------------------------------------------------- #
# Fake API                                                                    #
# --------------------------------------------------------------------------- #
@dataclass
class FakeApi:
    """Scriptable handler for :class:`httpx.MockTransport`.

    ``auth_status`` / ``auth_cookie`` shape the identity-check answer;
    ``hold_auth`` keeps the identity check pending until ``release()``;
    ``auth_raises`` makes the identity check raise instead of answering.
    """

    auth_status: int = 200
    auth_body: dict = field(default_factory=lambda: dict(ME))
    auth_cookie: str | None = "session=s3cr3t; Max-Age=60; Path=/"
    hold_auth: bool = False
    auth_raises: Exception | None = None
    routes: dict[str, tuple[int, object]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    _gate: asyncio.Event = field(default_factory=asyncio.Event)

    def release(self) -> None:
        self._gate.set()

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def count(self, path: str) -> int:
        return self.paths().count(path)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == AUTH_PATH:
            if self.hold_auth:
                await self._gate.wait()
            if self.auth_raises is not None:
                raise self.auth_raises
            headers = {"set-cookie": self.auth_cookie} if self.auth_cookie else {}
            if self.auth_status >= 300:
                return httpx.Response(self.auth_status, json={"msg": "denied"})
            return httpx.Response(self.auth_status, json=self.auth_body, headers=headers)
        status, body = self.routes.get(request.url.path, (200, {"ok": request.url.path}))
        return httpx.Response(status, json=body)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def make_client(fake_api: FakeApi, scheduler: FakeScheduler):
    """Factory building a client wired to *fake_api* and *scheduler*."""
    created: list[SessionClient] = []

    def _make(**options) -> SessionClient:
        options.setdefault("base_url", BASE_URL)
        if "api_token" not in options:
            options.setdefault("username", "jane@example.com")
            options.setdefault("password", "hunter2")
        client = SessionClient(
            http_transport=httpx.MockTransport(fake_api),
            scheduler=scheduler,
            **options,
        )
        created.append(client)
        return client

    yield _make
    for client in created:
        client.destroy()

