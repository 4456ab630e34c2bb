from pathlib import Path

import pytest

from gwn_probe import constants
from gwn_probe.config import ConfigurationError, load_config
from gwn_probe.models import ThresholdError


@pytest.fixture(autouse=True)
def _no_system_config(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(constants, "DEFAULT_CONFIG_PATH", tmp_path / "absent.cfg")


def _cli(**device):
    values = {"host": "10.0.0.5", "username": "admin", "password": "secret"}
    values.update(device)
    return {"device": values, "thresholds": {"warn": "40", "crit": "35"}}


def test_load_config_from_overrides_only() -> None:
    config = load_config(overrides=_cli())

    assert config.path is None
    assert config.device.host == "10.0.0.5"
    assert config.device.scheme == "http"
    assert config.credentials.username == "admin"
    assert config.credentials.password == "secret"
    assert config.thresholds.warn == 40.0
    assert config.thresholds.crit == 35.0
    assert config.http.timeout_seconds == constants.DEFAULT_TIMEOUT_SECONDS
    assert config.http.user_agent == "Mozilla/5.0"
    assert config.logging.level == "WARNING"
    assert config.logging.path is None


def test_password_is_hidden_from_repr() -> None:
    config = load_config(overrides=_cli())

    assert "secret" not in repr(config.credentials)


def test_file_values_are_overridden_by_cli(tmp_path: Path) -> None:
    config_path = tmp_path / "gwn-probe.cfg"
    config_path.write_text(
        """
[device]
host = 192.168.1.10
username = monitor
password = from-file

[thresholds]
warn = 44
crit = 42

[http]
timeout_seconds = 3.5

[logging]
level = DEBUG
path = ~/gwn-probe.log
""".strip()
        + "\n",
        encoding="utf-8",
    )

    config = load_config(
        config_path,
        overrides={"device": {"password": "p%ss", "host": None}, "thresholds": {"crit": "40"}},
    )

    assert config.path == config_path
    assert config.device.host == "192.168.1.10"
    assert config.device.username == "monitor"
    assert config.device.password == "p%ss"
    assert config.thresholds.warn == 44.0
    assert config.thresholds.crit == 40.0
    assert config.http.timeout_seconds == 3.5
    assert config.logging.level == "DEBUG"
    assert config.logging.path == Path("~/gwn-probe.log").expanduser()


def test_empty_password_is_allowed() -> None:
    config = load_config(overrides=_cli(password=""))

    assert config.device.password == ""


def test_missing_settings_are_reported() -> None:
    with pytest.raises(ConfigurationError, match="device.password"):
        load_config(overrides={"device": {"host": "10.0.0.5", "username": "admin"}})


def test_blank_host_is_missing() -> None:
    with pytest.raises(ConfigurationError, match="device.host"):
        load_config(overrides=_cli(host="  "))


def test_non_numeric_threshold_is_rejected() -> None:
    overrides = _cli()
    overrides["thresholds"]["warn"] = "forty"

    with pytest.raises(ConfigurationError, match="warn"):
        load_config(overrides=overrides)


def test_explicit_missing_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "nope.cfg", overrides=_cli())


def test_default_path_is_used_when_present(monkeypatch, tmp_path: Path) -> None:
    default_path = tmp_path / "default.cfg"
    default_path.write_text("[http]\nuser_agent = monitor/1\n", encoding="utf-8")
    monkeypatch.setattr(constants, "DEFAULT_CONFIG_PATH", default_path)

    config = load_config(overrides=_cli())

    assert config.path == default_path
    assert config.http.user_agent == "monitor/1"


def test_invalid_threshold_order_is_left_for_the_check() -> None:
    overrides = _cli()
    overrides["thresholds"] = {"warn": "30", "crit": "35"}

    config = load_config(overrides=overrides)

    assert config.thresholds.crit > config.thresholds.warn


def test_nan_thresholds_load_but_fail_validation() -> None:
    overrides = _cli()
    overrides["thresholds"] = {"warn": "nan", "crit": "nan"}

    config = load_config(overrides=overrides)

    with pytest.raises(ThresholdError):
        config.thresholds.validate()
