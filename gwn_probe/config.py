"""Configuration loader for gwn-probe."""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from . import constants
from .models import Credentials, ThresholdPair


class ConfigurationError(ValueError):
    """Raised when required settings are missing or malformed."""


@dataclass(slots=True)
class DeviceConfig:
    host: str
    username: str
    password: str
    scheme: str = constants.DEFAULT_SCHEME


@dataclass(slots=True)
class HttpConfig:
    timeout_seconds: float = constants.DEFAULT_TIMEOUT_SECONDS
    user_agent: str = constants.DEFAULT_USER_AGENT


@dataclass(slots=True)
class LoggingConfig:
    level: str = constants.DEFAULT_LOG_LEVEL
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class ProbeConfig:
    device: DeviceConfig
    thresholds: ThresholdPair
    http: HttpConfig
    logging: LoggingConfig
    raw: ConfigParser
    path: Optional[Path]

    @property
    def credentials(self) -> Credentials:
        return Credentials(self.device.username, self.device.password)


_REQUIRED = (
    ("device", "host"),
    ("device", "username"),
    ("device", "password"),
    ("thresholds", "warn"),
    ("thresholds", "crit"),
)


def _get_float(parser: ConfigParser, section: str, option: str, **kwargs) -> float:
    try:
        return parser.getfloat(section, option, **kwargs)
    except ValueError as exc:
        raise ConfigurationError(
            f"[{section}] {option} must be a number, got {parser.get(section, option)!r}"
        ) from exc


def load_config(
    path: Optional[Path] = None,
    *,
    overrides: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> ProbeConfig:
    """Load configuration from disk and apply overrides (usually CLI flags).

    Precedence is defaults, then the file, then ``overrides``. An explicit
    ``path`` that does not exist is an error; the default path is optional.
    """

    parser = ConfigParser(interpolation=None)
    parser.read_dict(
        {
            "device": {"scheme": constants.DEFAULT_SCHEME},
            "thresholds": {},
            "http": {
                "timeout_seconds": str(constants.DEFAULT_TIMEOUT_SECONDS),
                "user_agent": constants.DEFAULT_USER_AGENT,
            },
            "logging": {
                "level": constants.DEFAULT_LOG_LEVEL,
                "log_network": "false",
            },
        }
    )

    config_path: Optional[Path] = path
    if path is not None:
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        parser.read(path, encoding="utf-8")
    elif constants.DEFAULT_CONFIG_PATH.exists():
        config_path = constants.DEFAULT_CONFIG_PATH
        parser.read(config_path, encoding="utf-8")

    if overrides:
        for section, values in overrides.items():
            if not parser.has_section(section):
                parser.add_section(section)
            for key, value in values.items():
                if value is not None:
                    parser.set(section, key, str(value))

    missing: List[str] = [
        f"{section}.{option}"
        for section, option in _REQUIRED
        if not parser.has_option(section, option)
    ]
    if not parser.get("device", "host", fallback="").strip() and "device.host" not in missing:
        missing.append("device.host")
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    device = DeviceConfig(
        host=parser.get("device", "host").strip(),
        username=parser.get("device", "username"),
        password=parser.get("device", "password"),
        scheme=parser.get("device", "scheme", fallback=constants.DEFAULT_SCHEME),
    )

    thresholds = ThresholdPair(
        warn=_get_float(parser, "thresholds", "warn"),
        crit=_get_float(parser, "thresholds", "crit"),
    )

    http = HttpConfig(
        timeout_seconds=max(
            0.1,
            _get_float(
                parser,
                "http",
                "timeout_seconds",
                fallback=constants.DEFAULT_TIMEOUT_SECONDS,
            ),
        ),
        user_agent=parser.get("http", "user_agent", fallback=constants.DEFAULT_USER_AGENT),
    )

    try:
        log_network = parser.getboolean("logging", "log_network", fallback=False)
    except ValueError as exc:
        raise ConfigurationError(f"[logging] log_network: {exc}") from exc

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback=constants.DEFAULT_LOG_LEVEL),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_network=log_network,
    )

    return ProbeConfig(
        device=device,
        thresholds=thresholds,
        http=http,
        logging=logging_config,
        raw=parser,
        path=config_path,
    )
