import socket
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


@dataclass
class RecordedRequest:
    cmd: str
    method: str
    headers: Dict[str, str]
    body: Optional[Any]
    peer: Any


@dataclass
class FakeDevice:
    """In-process stand-in for the GWN web API."""

    nonce: str = "abc123"
    token: str = "T1"
    nonce_status: int = 200
    nonce_payload: Optional[Any] = None
    login_status: int = 200
    login_payload: Optional[Any] = None
    power_status: int = 200
    power_payload: Optional[Any] = None
    power_raw_body: Optional[str] = None
    logout_status: int = 200
    requests: List[RecordedRequest] = field(default_factory=list)
    host: str = ""

    def commands(self) -> List[str]:
        return [request.cmd for request in self.requests]

    def calls(self, cmd: str) -> List[RecordedRequest]:
        return [request for request in self.requests if request.cmd == cmd]

    async def _record(self, request: web.Request) -> RecordedRequest:
        body = None
        if request.can_read_body:
            body = await request.json()
        recorded = RecordedRequest(
            cmd=request.query.get("cmd", ""),
            method=request.method,
            headers=dict(request.headers),
            body=body,
            peer=request.transport.get_extra_info("peername") if request.transport else None,
        )
        self.requests.append(recorded)
        return recorded

    async def handle_get(self, request: web.Request) -> web.StreamResponse:
        recorded = await self._record(request)
        if recorded.cmd == "get_nonce":
            if self.nonce_status != 200:
                return web.Response(status=self.nonce_status, text="error")
            payload = self.nonce_payload
            if payload is None:
                payload = {"data": {"nonce": self.nonce}}
            response = web.json_response(payload)
            response.set_cookie("sid", "leaky-cookie")
            return response

        if recorded.cmd == "poe_get_powerinfo":
            if recorded.headers.get("Authorization") != self.token:
                return web.Response(status=401)
            if self.power_status != 200:
                return web.Response(status=self.power_status)
            if self.power_raw_body is not None:
                return web.Response(text=self.power_raw_body, content_type="text/html")
            payload = self.power_payload
            if payload is None:
                payload = {"data": {"inputVoltage": 48200}}
            return web.json_response(payload)

        return web.Response(status=404)

    async def handle_set(self, request: web.Request) -> web.StreamResponse:
        recorded = await self._record(request)
        if recorded.cmd == "login":
            if self.login_status != 200:
                return web.Response(status=self.login_status)
            payload = self.login_payload
            if payload is None:
                payload = {"code": 200, "data": {"token": self.token}}
            return web.json_response(payload)

        if recorded.cmd == "logout":
            return web.json_response({"code": 200}, status=self.logout_status)

        return web.Response(status=404)

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/get.cgi", self.handle_get)
        app.router.add_post("/set.cgi", self.handle_set)
        return app


@pytest_asyncio.fixture
async def fake_device():
    device = FakeDevice()
    async with TestServer(device.build_app()) as server:
        device.host = f"{server.host}:{server.port}"
        yield device


@pytest.fixture
def unused_tcp_port():
    """A local port with nothing listening on it."""
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
