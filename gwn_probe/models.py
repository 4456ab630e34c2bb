"""Domain models for a single voltage check."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class Status(IntEnum):
    """Check severities; the value doubles as the plugin exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class ThresholdError(ValueError):
    """Raised when a warn/crit pair cannot be used for classification."""


@dataclass(slots=True, frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


@dataclass(slots=True, frozen=True)
class ThresholdPair:
    """Lower-bound voltage thresholds in volts."""

    warn: float
    crit: float

    def validate(self) -> None:
        finite = math.isfinite(self.warn) and math.isfinite(self.crit)
        if not (finite and self.warn > 0 and self.crit > 0 and self.crit <= self.warn):
            raise ThresholdError(
                "Invalid threshold range provided. Critical threshold must be lower "
                "than Warning threshold, and both must be positive values."
            )


@dataclass(slots=True, frozen=True)
class Failure:
    """Explicit failure value returned by device operations."""

    reason: str
    status: Optional[int] = None


@dataclass(slots=True, frozen=True)
class CheckOutcome:
    status: Status
    message: str
    perfdata: Optional[str] = None

    def render(self) -> str:
        line = f"{self.status.name} - {self.message}"
        if self.perfdata:
            line = f"{line} | {self.perfdata}"
        return line
