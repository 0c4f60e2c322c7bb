"""Structured logging helpers for session components.

This module purposefully restricts **which** contextual attributes are attached
to log records in order to avoid accidentally leaking secrets.  All helpers
ONLY inject the following *non-sensitive* fields:

- ``mode``        – Credential mode (``token`` or ``password``)
- ``host``        – Host part of the API base URL
- ``attempt_id``  – Sequence number of the authentication attempt
- ``username``    – Masked, first 2 chars kept

Usage
-----
>>> from session_client.session.log_utils import get_session_logger
>>> log = get_session_logger(mode="password", host="api.example.com")
>>> log.info("Starting authentication")
INFO session-client.session mode=password host=api.example.com ...

The adapter is a thin wrapper around :class:`logging.LoggerAdapter`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping


def mask_sensitive(value: str | None, keep: int = 4) -> str:
    """Return *value* with everything but the first *keep* chars replaced."""
    if not value:
        return ""
    if len(value) <= keep:
        return "*" * len(value)
    return value[:keep] + "*" * (len(value) - keep)


class _SessionLoggerAdapter(logging.LoggerAdapter):
    """Inject whitelisted session context into log records."""

    extra_keys = ("mode", "host", "attempt_id", "username")

    def __init__(self, logger: logging.Logger, extra: Mapping[str, Any] | None = None):
        extra_clean: MutableMapping[str, Any] = {}
        for k in self.extra_keys:
            if k == "username" and extra and extra.get("username"):
                extra_clean[k] = mask_sensitive(str(extra["username"]), 2)
            elif extra and k in extra and extra[k] is not None:
                extra_clean[k] = extra[k]
        super().__init__(logger, extra_clean)

    def process(self, msg: str, kwargs: MutableMapping[str, Any]):
        if "extra" not in kwargs or kwargs["extra"] is None:
            kwargs["extra"] = {}
        # merge but do not overwrite call-site provided extras
        for k, v in self.extra.items():
            kwargs["extra"].setdefault(k, v)
        return msg, kwargs


def get_session_logger(
    *,
    base_logger_name: str = "session-client.session",
    mode: str | None = None,
    host: str | None = None,
    attempt_id: int | None = None,
    username: str | None = None,
) -> logging.LoggerAdapter:
    """Return a LoggerAdapter pre-filled with session context."""
    logger = logging.getLogger(base_logger_name)
    return _SessionLoggerAdapter(
        logger,
        {
            "mode": mode,
            "host": host,
            "attempt_id": attempt_id,
            "username": username,
        },
    )
