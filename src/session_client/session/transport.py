"""HTTP transport adapter built on :class:`httpx.AsyncClient`.

The adapter owns the cookie jar that carries the server-issued session
credential.  The session core only *reads* the jar (via
:meth:`SessionTransport.session_ttl`) and never mutates it.

The jar keeps expiry in whole seconds, so the lifetime the server granted
through ``Max-Age`` is recorded separately from each ``Set-Cookie`` header.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from session_client.session.clock import Clock, default_clock
from session_client.session.errors import APIError, TransportError

_LOG = logging.getLogger("session-client.session.transport")

BasicAuthPair = tuple[str, str]

_DEFAULT_HEADERS: Mapping[str, str] = {
    "Accept": "application/json",
}


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        # not JSON; hand back the raw text like a lenient JSON client would
        return response.text


def _granted_max_age(set_cookie: str) -> tuple[str, float | None] | None:
    """Return ``(name, max_age_ms)`` for one ``Set-Cookie`` header value.

    ``max_age_ms`` is None when the header carries no usable ``Max-Age``.
    """
    pair, _, attributes = set_cookie.partition(";")
    name, sep, _value = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        return None
    for attribute in attributes.split(";"):
        key, _, value = attribute.partition("=")
        if key.strip().lower() != "max-age":
            continue
        try:
            return name, max(0.0, int(value.strip()) * 1000.0)
        except ValueError:
            return name, None
    return name, None


def decode_response(response: httpx.Response) -> Any:
    """Return the decoded body of a 2xx *response* or raise :class:`APIError`."""
    body = _decode_body(response)
    if 200 <= response.status_code < 300:
        return body
    raise APIError(response.status_code, body)


class SessionTransport:
    """Issues API requests and exposes the session cookie lifetime."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 30.0,
        clock: Clock = default_clock,
        http_transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._clock = clock
        self._max_age_ms: dict[str, float] = {}
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers=dict(_DEFAULT_HEADERS),
            timeout=httpx.Timeout(timeout_seconds),
            transport=http_transport,
        )

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def send(
        self,
        method: str,
        path: str,
        *,
        auth: BasicAuthPair | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request; raise :class:`TransportError` when no response arrives."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = await self._client.request(
                method.upper(),
                url,
                params=params,
                json=json,
                auth=auth,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            _LOG.warning("%s %s failed without response: %s", method.upper(), path, exc)
            raise TransportError(
                f"Request failed: {exc}", method=method.upper(), url=url
            ) from exc
        _LOG.debug("%s %s -> %s", method.upper(), path, response.status_code)
        self._record_max_age(response)
        return response

    def _record_max_age(self, response: httpx.Response) -> None:
        for header in response.headers.get_list("set-cookie"):
            granted = _granted_max_age(header)
            if granted is None:
                continue
            name, max_age_ms = granted
            if max_age_ms is None:
                self._max_age_ms.pop(name, None)
            else:
                self._max_age_ms[name] = max_age_ms

    def session_ttl(self, cookie_name: str) -> float | None:
        """Lifetime of the session cookie in **milliseconds**.

        A ``Max-Age`` from the latest ``Set-Cookie`` for *cookie_name* is
        returned as granted.  Otherwise the jar's ``Expires`` is measured
        against the clock.  Returns None when the cookie is missing or has no
        expiry (a browser session cookie), and 0 when it has already lapsed.
        """
        if cookie_name in self._max_age_ms:
            return self._max_age_ms[cookie_name]
        host = httpx.URL(self.base_url).host
        for cookie in self._client.cookies.jar:
            if cookie.name != cookie_name:
                continue
            domain = (cookie.domain or "").lstrip(".")
            if domain and not (host == domain or host.endswith("." + domain)):
                continue
            if cookie.expires is None:
                return None
            return max(0.0, (cookie.expires - self._clock()) * 1000.0)
        return None

    async def aclose(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()
