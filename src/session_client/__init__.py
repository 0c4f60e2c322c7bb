"""Session-aware client for JSON HTTP APIs with token or password auth."""

from __future__ import annotations

from .client import SessionClient  # noqa: F401
from .config import ClientOptions, CredentialMode  # noqa: F401
from .session.errors import (  # noqa: F401
    APIError,
    ConfigError,
    ErrorKind,
    NotNeededError,
    SessionClientError,
    TransportError,
)

__all__ = [
    "SessionClient",
    "ClientOptions",
    "CredentialMode",
    "ErrorKind",
    "SessionClientError",
    "ConfigError",
    "NotNeededError",
    "TransportError",
    "APIError",
]
