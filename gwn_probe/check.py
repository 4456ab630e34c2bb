"""Single-shot voltage check: login, query, classify, logout."""

from __future__ import annotations

import logging
from typing import Optional

from .auth import AuthSession, AuthState
from .config import ProbeConfig
from .constants import DEFAULT_SCHEME
from .endpoints import DeviceEndpoints
from .evaluator import evaluate, extract_input_voltage
from .models import (
    CheckOutcome,
    Credentials,
    Failure,
    Status,
    ThresholdError,
    ThresholdPair,
)
from .session import SessionClient

LOGGER = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = (
    "Login failed. Check IP/connectivity or authentication credentials."
)
INVALID_STRUCTURE_MESSAGE = (
    "API response structure invalid: could not find 'inputVoltage' data."
)


class CheckOrchestrator:
    """Sequences the handshake, the telemetry query and the logout."""

    def __init__(
        self,
        client: Optional[SessionClient] = None,
        *,
        scheme: str = DEFAULT_SCHEME,
    ) -> None:
        self._client = client or SessionClient()
        self._scheme = scheme

    async def run(
        self,
        host: str,
        credentials: Credentials,
        thresholds: ThresholdPair,
    ) -> CheckOutcome:
        try:
            thresholds.validate()
        except ThresholdError as exc:
            return CheckOutcome(Status.UNKNOWN, str(exc))

        endpoints = DeviceEndpoints.for_host(host, scheme=self._scheme)
        auth = AuthSession(self._client)
        token = await auth.authenticate(
            endpoints.nonce_url,
            endpoints.login_url,
            host,
            credentials.username,
            credentials.password,
        )
        if token is None:
            return self._login_failure(auth)

        try:
            return await self._query(endpoints, token, thresholds, host)
        finally:
            logged_out = await self._client.logout(endpoints.logout_url, host, token)
            if not logged_out:
                LOGGER.warning("Logout from %s failed; session may linger", host)

    async def _query(
        self,
        endpoints: DeviceEndpoints,
        token: str,
        thresholds: ThresholdPair,
        host: str,
    ) -> CheckOutcome:
        payload = await self._client.get_authenticated(endpoints.power_info_url, token)
        if isinstance(payload, Failure):
            return CheckOutcome(Status.UNKNOWN, payload.reason)

        raw_millivolts = extract_input_voltage(payload)
        if raw_millivolts is None:
            return CheckOutcome(Status.UNKNOWN, INVALID_STRUCTURE_MESSAGE)

        return evaluate(raw_millivolts, thresholds, host)

    @staticmethod
    def _login_failure(auth: AuthSession) -> CheckOutcome:
        failure = auth.failure
        # An HTTP error from the nonce endpoint is a device/API fault, not a credential problem.
        if (
            auth.failed_phase is AuthState.NO_NONCE
            and failure is not None
            and failure.status is not None
            and failure.status != 200
        ):
            return CheckOutcome(Status.UNKNOWN, failure.reason)
        return CheckOutcome(Status.CRITICAL, LOGIN_FAILED_MESSAGE)


async def run_check(
    config: ProbeConfig, *, client: Optional[SessionClient] = None
) -> CheckOutcome:
    """Run one check using the resolved configuration."""

    if client is None:
        client = SessionClient(
            timeout=config.http.timeout_seconds,
            user_agent=config.http.user_agent,
        )

    orchestrator = CheckOrchestrator(client, scheme=config.device.scheme)
    outcome = await orchestrator.run(
        config.device.host,
        config.credentials,
        config.thresholds,
    )
    LOGGER.info("Check finished: %s", outcome.status.name)
    return outcome
