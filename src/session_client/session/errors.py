"""Exception types raised by the session core.

Only lightweight, **data-carrying** exceptions live here so that CLI or
application layers can transform them into user-friendly messages.  None of
them ever carries a password or API token.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Stable identifiers for runtime error categories."""

    CONFIG = "config_error"
    NOT_NEEDED = "not_needed"
    TRANSPORT = "transport_error"
    API = "api_error"


class SessionClientError(Exception):
    """Base class for every error raised by the session client."""

    kind: ErrorKind

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serialisable payload **without secrets**."""
        return {"error": self.kind.value, "message": str(self)}


class ConfigError(SessionClientError, ValueError):
    """Raised synchronously when client options are invalid."""

    kind = ErrorKind.CONFIG


class NotNeededError(SessionClientError):
    """Raised when ``authenticate`` is called on a token-mode client."""

    kind = ErrorKind.NOT_NEEDED

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or "No need to authenticate: the client uses an API token."
        )


class TransportError(SessionClientError):
    """Raised when no HTTP response could be obtained."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, method: str = "", url: str = "") -> None:
        super().__init__(message)
        self.method = method
        self.url = url

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["method"] = self.method
        payload["url"] = self.url
        return payload


class APIError(SessionClientError):
    """Raised when the API answers with a non-2xx status."""

    kind = ErrorKind.API

    def __init__(self, status_code: int, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error {status_code}")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["status_code"] = self.status_code
        payload["body"] = self.body
        return payload
