"""Typed, immutable records used by the session core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from session_client.session.errors import SessionClientError


@dataclass(frozen=True, slots=True)
class AuthOutcome:
    """Result of one authentication attempt, shared by every waiter."""

    error: SessionClientError | None = None
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any) -> "AuthOutcome":
        return cls(error=None, data=data)

    @classmethod
    def failure(cls, error: SessionClientError) -> "AuthOutcome":
        return cls(error=error, data=None)
