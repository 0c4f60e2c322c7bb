"""Session core package.

This namespace hosts the **HTTP-agnostic** authentication state machine plus
the thin httpx transport it drives.

Sub-modules
-----------
clock
    Test-friendly time and timer abstractions.
errors
    Exception types used by the session logic.
models
    Immutable dataclasses capturing authentication outcomes.
notifier
    One-shot per-attempt broadcast and the per-client event channel.
state
    Mutable session state (in-flight flag, auth data, re-auth timer).
transport
    httpx-based transport adapter and response classification.
authenticator
    Authentication attempts and proactive re-authentication.
gate
    Request gate deferring calls while an attempt is outstanding.
log_utils
    Structured logging helpers (thin wrapper around :pymod:`logging`).

All public objects are re-exported here for convenience.
"""

from __future__ import annotations

from .clock import Clock, LoopScheduler, ScheduleHandle, Scheduler, default_clock  # noqa: F401
from .errors import (  # noqa: F401
    APIError,
    ConfigError,
    ErrorKind,
    NotNeededError,
    SessionClientError,
    TransportError,
)
from .models import AuthOutcome  # noqa: F401
from .notifier import AuthNotifier, EventChannel  # noqa: F401
from .state import SessionState  # noqa: F401
from .log_utils import get_session_logger, mask_sensitive  # noqa: F401

__all__ = [
    # clock
    "Clock",
    "default_clock",
    "Scheduler",
    "ScheduleHandle",
    "LoopScheduler",
    # errors
    "ErrorKind",
    "SessionClientError",
    "ConfigError",
    "NotNeededError",
    "TransportError",
    "APIError",
    # models
    "AuthOutcome",
    # notifier
    "AuthNotifier",
    "EventChannel",
    # state
    "SessionState",
    # logging helpers
    "get_session_logger",
    "mask_sensitive",
]
