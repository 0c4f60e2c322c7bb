"""Utility functions related to environment-driven configuration."""

import logging
import os
from typing import Any, Final, Tuple

logger = logging.getLogger("session-client.utils.environment")

ENV_PREFIX: Final[str] = "SESSION_CLIENT_"

_TRUTHY: Final[Tuple[str, ...]] = ("true", "1", "yes", "y", "on")
_FALSY: Final[Tuple[str, ...]] = ("false", "0", "no", "n", "off")


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def _env(key: str) -> str | None:
    """Return ``SESSION_CLIENT_<key>`` stripped, or None when unset/blank."""
    raw = os.getenv(ENV_PREFIX + key)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _env_bool(key: str) -> bool | None:
    raw = _env(key)
    if raw is None:
        return None
    if raw.lower() not in _TRUTHY + _FALSY:
        logger.warning("Ignoring unrecognised boolean %s%s=%r", ENV_PREFIX, key, raw)
        return None
    return _truthy(raw)


def _env_float(key: str) -> float | None:
    raw = _env(key)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s%s=%r", ENV_PREFIX, key, raw)
        return None


def options_from_env() -> dict[str, Any]:
    """
    Collect client option keyword arguments from the process environment.

    Only variables that are present are returned so that dataclass defaults
    still apply for the rest.  Secret values are never logged.
    """
    values: dict[str, Any] = {
        "api_token": _env("API_TOKEN"),
        "username": _env("USERNAME"),
        "password": _env("PASSWORD"),
        "base_url": _env("BASE_URL"),
        "session_cookie_name": _env("SESSION_COOKIE"),
        "reauth_enabled": _env_bool("REAUTH"),
        "timeout_seconds": _env_float("TIMEOUT"),
    }
    found = {k: v for k, v in values.items() if v is not None}
    logger.debug("Loaded client options from environment: %s", sorted(found))
    return found
