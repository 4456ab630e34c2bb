"""Input voltage classification and performance data."""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from .constants import METRIC_NAME, METRIC_RANGE_MAX, METRIC_RANGE_MIN
from .models import CheckOutcome, Status, ThresholdPair

# Plain decimal or exponent notation only; no underscores, NaN or Infinity.
_NUMERIC_RE = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")


def extract_input_voltage(payload: Any) -> Optional[float]:
    """Return ``data.inputVoltage`` in millivolts, or None if absent or non-numeric."""

    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if not isinstance(data, dict):
        return None

    value = data.get("inputVoltage")
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)) and not (
        isinstance(value, str) and _NUMERIC_RE.fullmatch(value)
    ):
        return None
    try:
        reading = float(value)
    except OverflowError:
        return None
    return reading if math.isfinite(reading) else None


def to_volts(raw_millivolts: float) -> float:
    return round(raw_millivolts / 1000, 3)


def format_perfdata(volts: float, thresholds: ThresholdPair) -> str:
    return (
        f"'{METRIC_NAME}'={volts:.3f};{thresholds.warn:.1f};{thresholds.crit:.1f};"
        f"{METRIC_RANGE_MIN};{METRIC_RANGE_MAX}"
    )


def evaluate(
    raw_millivolts: float, thresholds: ThresholdPair, device_ip: str
) -> CheckOutcome:
    """Classify a reading against lower-bound thresholds.

    Falling to or below ``crit`` is CRITICAL, to or below ``warn`` is
    WARNING. Perfdata is attached for every classified reading.
    """

    volts = to_volts(raw_millivolts)

    if volts <= thresholds.crit:
        status = Status.CRITICAL
        breached: Optional[float] = thresholds.crit
    elif volts <= thresholds.warn:
        status = Status.WARNING
        breached = thresholds.warn
    else:
        status = Status.OK
        breached = None

    if breached is None:
        message = (
            f"{device_ip}: {METRIC_NAME} {volts:.3f}V, "
            f"(Warn < {thresholds.warn:.1f}V, Crit < {thresholds.crit:.1f}V)."
        )
    else:
        message = f"{device_ip}: {METRIC_NAME} {volts:.3f}V (Threshold: < {breached:.1f}V)."

    return CheckOutcome(
        status=status,
        message=message,
        perfdata=format_perfdata(volts, thresholds),
    )
