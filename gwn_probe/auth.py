"""Nonce challenge-response login handshake."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .challenge import derive_challenge
from .models import Failure
from .session import SessionClient

LOGGER = logging.getLogger(__name__)


class AuthState(str, Enum):
    NO_NONCE = "no_nonce"
    HAVE_NONCE = "have_nonce"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class AuthSession:
    """Drives one login attempt: nonce, challenge, token.

    Any failure is terminal. ``failed_phase`` keeps the state the handshake
    was in when it failed so callers can tell a nonce error from a rejected
    login.
    """

    def __init__(self, client: SessionClient) -> None:
        self._client = client
        self.state = AuthState.NO_NONCE
        self.failure: Optional[Failure] = None
        self.failed_phase: Optional[AuthState] = None

    def _fail(self, failure: Failure) -> None:
        self.failed_phase = self.state
        self.failure = failure
        self.state = AuthState.FAILED

    async def authenticate(
        self,
        nonce_url: str,
        login_url: str,
        device_ip: str,
        username: str,
        password: str,
    ) -> Optional[str]:
        if self.state is not AuthState.NO_NONCE:
            raise RuntimeError("AuthSession is single-use")

        nonce = await self._client.fetch_nonce(nonce_url, device_ip)
        if isinstance(nonce, Failure):
            self._fail(nonce)
            return None
        self.state = AuthState.HAVE_NONCE

        challenge = derive_challenge(username, nonce, password)
        token = await self._client.login(login_url, device_ip, username, challenge)
        if isinstance(token, Failure):
            self._fail(token)
            LOGGER.info("Login to %s failed: %s", device_ip, token.reason)
            return None

        self.state = AuthState.AUTHENTICATED
        LOGGER.debug("Authenticated to %s", device_ip)
        return token
