"""Constants used across the gwn-probe package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "gwn-probe"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path("/etc") / APP_NAME / DEFAULT_CONFIG_FILENAME

DEFAULT_SCHEME = "http"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "Mozilla/5.0"
DEFAULT_LOG_LEVEL = "WARNING"

METRIC_NAME = "Input_Voltage"
METRIC_RANGE_MIN = 0
METRIC_RANGE_MAX = 60
