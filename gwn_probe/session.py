"""HTTP exchanges with the GWN embedded web server."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional, Union

import aiohttp

from .constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from .endpoints import login_headers, logout_headers, nonce_headers, query_headers
from .models import Failure

LOGGER = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def _dig(payload: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None when any level is missing."""

    current = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _decode(body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        return None


class SessionClient:
    """Performs each device exchange over its own short-lived connection.

    The embedded server keeps very few session slots, so every operation
    opens a fresh ``ClientSession`` that never reuses connections and never
    stores cookies, and closes it before returning. Nothing is retried.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent

    def _open_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(force_close=True),
            cookie_jar=aiohttp.DummyCookieJar(),
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )

    async def fetch_nonce(self, url: str, device_ip: str) -> Union[str, Failure]:
        """Request a single-use login nonce."""

        LOGGER.debug("Requesting nonce from %s", url)
        try:
            async with self._open_session() as session:
                async with session.get(
                    url, headers=nonce_headers(device_ip, self.user_agent)
                ) as response:
                    status = response.status
                    body = await response.read()
        except _TRANSPORT_ERRORS as exc:
            LOGGER.warning("Nonce request to %s failed: %r", url, exc)
            return Failure(f"Nonce request failed: {exc!r}")

        if status != 200:
            LOGGER.warning("Nonce request returned HTTP %s", status)
            return Failure(f"Nonce request failed. HTTP Code: {status}", status)

        nonce = _dig(_decode(body), "data", "nonce")
        if isinstance(nonce, bool) or not isinstance(nonce, (str, int, float)):
            return Failure("Nonce response missing 'data.nonce'", status)
        return str(nonce)

    async def login(
        self, url: str, device_ip: str, username: str, challenge: str
    ) -> Union[str, Failure]:
        """Submit the challenge response and return the session token."""

        LOGGER.debug("Logging in to %s as %s", url, username)
        payload = {"username": username, "password": challenge}
        try:
            async with self._open_session() as session:
                async with session.post(
                    url,
                    json=payload,
                    headers=login_headers(device_ip, self.user_agent),
                ) as response:
                    status = response.status
                    body = await response.read()
        except _TRANSPORT_ERRORS as exc:
            LOGGER.warning("Login request to %s failed: %r", url, exc)
            return Failure(f"Login request failed: {exc!r}")

        if status != 200:
            LOGGER.warning("Login returned HTTP %s", status)
            return Failure(f"Login failed. HTTP Code: {status}", status)

        data = _decode(body)
        code = _dig(data, "code")
        if code not in (200, "200"):
            LOGGER.warning("Login rejected by device (code=%r)", code)
            return Failure(f"Login rejected (code={code!r})", status)

        token = _dig(data, "data", "token")
        if not token or not isinstance(token, (str, int)):
            return Failure("Login response missing 'data.token'", status)
        return str(token)

    async def get_authenticated(
        self, url: str, token: str
    ) -> Union[Optional[Any], Failure]:
        """GET a protected resource.

        Returns the decoded JSON body (``None`` when the body is not JSON) on
        HTTP 200, otherwise a ``Failure`` carrying the observed status.
        """

        LOGGER.debug("Querying %s", url)
        try:
            async with self._open_session() as session:
                async with session.get(
                    url, headers=query_headers(token, self.user_agent)
                ) as response:
                    status = response.status
                    body = await response.read()
        except _TRANSPORT_ERRORS as exc:
            LOGGER.warning("Query to %s failed: %r", url, exc)
            return Failure(f"API status retrieval failed: {exc!r}")

        if status != 200:
            LOGGER.warning("Query to %s returned HTTP %s", url, status)
            return Failure(f"API status retrieval failed. HTTP Code: {status}", status)

        return _decode(body)

    async def logout(self, url: str, device_ip: str, token: str) -> bool:
        """Invalidate the session token; never raises."""

        try:
            async with self._open_session() as session:
                async with session.post(
                    url,
                    json={"token": token},
                    headers=logout_headers(device_ip, token, self.user_agent),
                ) as response:
                    status = response.status
                    await response.read()
        except _TRANSPORT_ERRORS as exc:
            LOGGER.warning("Logout request to %s failed: %r", url, exc)
            return False

        if status != 200:
            LOGGER.warning("Logout returned HTTP %s", status)
            return False
        LOGGER.debug("Logged out of %s", device_ip)
        return True
