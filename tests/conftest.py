"""Shared pytest configuration.

Async tests run through the ``anyio`` pytest plugin, pinned to asyncio
because the client schedules timers on the running asyncio loop.
"""

from __future__ import annotations

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _clean_session_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``SESSION_CLIENT_*`` variables out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("SESSION_CLIENT_"):
            monkeypatch.delenv(key, raising=False)


def pytest_addoption(parser):
    """Add integration option to pytest."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests against a live API",
    )
