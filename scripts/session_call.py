"""session_call.py

Helper to invoke a single API endpoint through :class:`SessionClient`, with
credentials sourced from ``SESSION_CLIENT_*`` environment variables.

Key features
------------
* Optional ``.env``-style file loaded before the environment is read
  (existing variables always win)
* Password mode authenticates first; token mode goes straight to the call
* Prints the decoded JSON result, or the error payload on failure
* Logs **option names only** – credential values remain hidden

Example
-------
    uv run python scripts/session_call.py /api/v8/me
    uv run python scripts/session_call.py /api/v8/time_entries -X POST --data '{"description": "x"}'
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

from session_client import SessionClient, SessionClientError
from session_client.config import CredentialMode

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #
DEFAULT_ENV_FILE = Path("scripts/.env.session-client")

_LOG = logging.getLogger("session-client.scripts.session_call")


# --------------------------------------------------------------------------- #
# Environment helpers
# --------------------------------------------------------------------------- #
def _load_env_file(env_path: Path | None) -> None:
    """Load KEY=VALUE pairs from a .env style file into *os.environ*."""
    if env_path is None or not env_path.exists():
        return

    for raw in env_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = val


def _parse_params(pairs: Sequence[str]) -> Dict[str, str]:
    """Turn ``key=value`` CLI pairs into a query mapping."""
    params: Dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"query parameter must be key=value: {pair!r}")
        key, value = pair.split("=", 1)
        params[key] = value
    return params


# --------------------------------------------------------------------------- #
# Call
# --------------------------------------------------------------------------- #
async def _call(
    path: str, method: str, params: Dict[str, str], body: Any
) -> Tuple[int, Any]:
    """Return ``(exit_code, payload)`` for one request."""
    try:
        client = SessionClient.from_env()
    except SessionClientError as exc:
        return 2, exc.to_payload()

    _LOG.info(
        "Calling %s %s (mode=%s, params=%s)",
        method,
        path,
        client.options.credential_mode.value,
        sorted(params),
    )
    async with client:
        try:
            if client.options.credential_mode is CredentialMode.PASSWORD:
                await client.authenticate()
            data = await client.request(path, method, params=params or None, json=body)
        except SessionClientError as exc:
            return 1, exc.to_payload()
    return 0, data


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[2])
    parser.add_argument("path", help="API-relative path, e.g. /api/v8/me")
    parser.add_argument("-X", "--method", default="GET")
    parser.add_argument(
        "-q", "--param", action="append", default=[], metavar="KEY=VALUE"
    )
    parser.add_argument("--data", help="JSON request body")
    parser.add_argument("--env-file", type=Path, default=DEFAULT_ENV_FILE)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )
    _load_env_file(args.env_file)

    try:
        params = _parse_params(args.param)
        body = json.loads(args.data) if args.data else None
    except ValueError as exc:
        parser.error(str(exc))

    code, payload = asyncio.run(_call(args.path, args.method.upper(), params, body))
    json.dump(payload, sys.stdout if code == 0 else sys.stderr, indent=2)
    print(file=sys.stdout if code == 0 else sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())
