"""Unit tests for the ``session_call`` helper script."""

from __future__ import annotations

import json
import os
from unittest.mock import patch

import httpx
import pytest

import session_call
from session_client import SessionClient


def test_parse_params() -> None:
    assert session_call._parse_params(["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}
    with pytest.raises(ValueError):
        session_call._parse_params(["broken"])


def test_load_env_file_keeps_existing(
    tmp_path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "SESSION_CLIENT_USERNAME='jane'\n"
        "SESSION_CLIENT_PASSWORD=\"hunter2\"\n"
        "SESSION_CLIENT_BASE_URL=https://from-file.example.com\n"
        "not a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("SESSION_CLIENT_BASE_URL", "https://from-env.example.com")

    with patch.dict(os.environ):
        session_call._load_env_file(env_file)
        loaded = dict(os.environ)

    assert loaded["SESSION_CLIENT_USERNAME"] == "jane"
    assert loaded["SESSION_CLIENT_PASSWORD"] == "hunter2"
    assert loaded["SESSION_CLIENT_BASE_URL"] == "https://from-env.example.com"


def test_missing_env_file_is_ignored(tmp_path) -> None:
    session_call._load_env_file(tmp_path / "absent")
    session_call._load_env_file(None)


def test_main_without_credentials_exits_2(tmp_path, capsys) -> None:
    code = session_call.main(["/api/v8/me", "--env-file", str(tmp_path / "absent")])

    assert code == 2
    assert json.loads(capsys.readouterr().err)["error"] == "config_error"


def _client_factory(**options):
    """Stand-in for ``SessionClient.from_env`` wired to a mock transport."""
    return lambda: SessionClient(**options)


def test_main_password_mode_authenticates_first(tmp_path, capsys) -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        if request.url.path == "/api/v8/me":
            return httpx.Response(200, json={"data": {"id": 1}})
        return httpx.Response(200, json={"items": [], "q": dict(request.url.params)})

    factory = _client_factory(
        username="jane",
        password="hunter2",
        http_transport=httpx.MockTransport(handler),
    )
    with patch.object(session_call.SessionClient, "from_env", side_effect=factory):
        code = session_call.main(
            ["/api/v8/workspaces", "-q", "active=true", "--env-file", str(tmp_path / "x")]
        )

    assert code == 0
    assert seen == ["/api/v8/me", "/api/v8/workspaces"]
    assert json.loads(capsys.readouterr().out) == {"items": [], "q": {"active": "true"}}


def test_main_api_error_exits_1(tmp_path, capsys) -> None:
    factory = _client_factory(
        api_token="tok",
        http_transport=httpx.MockTransport(
            lambda r: httpx.Response(404, json={"msg": "gone"})
        ),
    )
    with patch.object(session_call.SessionClient, "from_env", side_effect=factory):
        code = session_call.main(["/missing", "--env-file", str(tmp_path / "x")])

    payload = json.loads(capsys.readouterr().err)
    assert code == 1
    assert payload["status_code"] == 404
    assert payload["body"] == {"msg": "gone"}
