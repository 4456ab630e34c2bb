"""Grandstream GWN web API endpoints and request headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .constants import DEFAULT_SCHEME, DEFAULT_USER_AGENT

NONCE_PATH = "/get.cgi?cmd=get_nonce"
LOGIN_PATH = "/set.cgi?cmd=login"
LOGOUT_PATH = "/set.cgi?cmd=logout"
POWER_INFO_PATH = "/get.cgi?cmd=poe_get_powerinfo"


@dataclass(slots=True, frozen=True)
class DeviceEndpoints:
    nonce_url: str
    login_url: str
    logout_url: str
    power_info_url: str

    @classmethod
    def for_host(cls, host: str, *, scheme: str = DEFAULT_SCHEME) -> "DeviceEndpoints":
        base_url = f"{scheme}://{host}"
        return cls(
            nonce_url=base_url + NONCE_PATH,
            login_url=base_url + LOGIN_PATH,
            logout_url=base_url + LOGOUT_PATH,
            power_info_url=base_url + POWER_INFO_PATH,
        )


def nonce_headers(device_ip: str, user_agent: str = DEFAULT_USER_AGENT) -> Dict[str, str]:
    return {
        "Host": device_ip,
        "Accept": "application/json, text/plain, */*",
        "Referer": f"http://{device_ip}/",
        "User-Agent": user_agent,
        "X-Requested-With": "XMLHttpRequest",
    }


def login_headers(device_ip: str, user_agent: str = DEFAULT_USER_AGENT) -> Dict[str, str]:
    return {
        "Host": device_ip,
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Origin": f"http://{device_ip}",
        "Referer": f"http://{device_ip}/",
        "User-Agent": user_agent,
        "X-Requested-With": "XMLHttpRequest",
    }


def query_headers(token: str, user_agent: str = DEFAULT_USER_AGENT) -> Dict[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": user_agent,
        "X-Requested-With": "XMLHttpRequest",
        "Authorization": token,
    }


def logout_headers(
    device_ip: str, token: str, user_agent: str = DEFAULT_USER_AGENT
) -> Dict[str, str]:
    return {
        "Host": device_ip,
        "Accept": "application/json, text/plain, */*",
        "Authorization": token,
        "Content-Type": "application/json",
        "Origin": f"http://{device_ip}",
        "Referer": f"http://{device_ip}/",
        "User-Agent": user_agent,
        "X-Requested-With": "XMLHttpRequest",
    }
