"""Client configuration.

``ClientOptions`` is validated on construction; any problem raises
:class:`~session_client.session.errors.ConfigError` synchronously.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Final
from urllib.parse import urlsplit

from session_client.session.errors import ConfigError

DEFAULT_BASE_URL: Final[str] = "https://api.example.com"
DEFAULT_SESSION_COOKIE: Final[str] = "session"
DEFAULT_AUTH_PATH: Final[str] = "/api/v8/me"
# Pseudo-password paired with the API token in the basic-auth header.
TOKEN_PASSWORD: Final[str] = "api_token"
SAFETY_MARGIN_MS: Final[int] = 5_000


class CredentialMode(str, Enum):
    TOKEN = "token"
    PASSWORD = "password"


@dataclass(frozen=True, slots=True)
class ClientOptions:
    """Validated options for :class:`~session_client.client.SessionClient`."""

    api_token: str | None = None
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    base_url: str = DEFAULT_BASE_URL
    session_cookie_name: str = DEFAULT_SESSION_COOKIE
    reauth_enabled: bool = False
    timeout_seconds: float = 30.0
    safety_margin_ms: int = SAFETY_MARGIN_MS
    auth_path: str = DEFAULT_AUTH_PATH

    def __post_init__(self) -> None:
        if not self.api_token and not (self.username and self.password):
            raise ConfigError(
                "You should either specify api_token or username and password"
            )
        if not self.base_url:
            raise ConfigError("API base URL is not specified")
        parts = urlsplit(self.base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError(f"API base URL must be an absolute http(s) URL: {self.base_url!r}")
        if not self.session_cookie_name:
            raise ConfigError("session_cookie_name must not be empty")
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds must be positive")
        if self.safety_margin_ms < 0:
            raise ConfigError("safety_margin_ms must not be negative")

        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        # a token never expires from the client's point of view
        if self.api_token:
            object.__setattr__(self, "reauth_enabled", True)

    @property
    def credential_mode(self) -> CredentialMode:
        return CredentialMode.TOKEN if self.api_token else CredentialMode.PASSWORD

    @property
    def host(self) -> str:
        return urlsplit(self.base_url).netloc

    def with_overrides(self, **overrides: Any) -> "ClientOptions":
        """Return a copy with *overrides* applied (re-validated)."""
        return replace(self, **overrides)

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientOptions":
        """Build options from ``SESSION_CLIENT_*`` variables; *overrides* win."""
        from session_client.utils.environment import options_from_env

        values = options_from_env()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
