"""Grandstream GWN input voltage monitoring probe."""

from .check import CheckOrchestrator, run_check
from .models import CheckOutcome, Credentials, Status, ThresholdPair

__all__ = [
    "CheckOrchestrator",
    "CheckOutcome",
    "Credentials",
    "Status",
    "ThresholdPair",
    "run_check",
]

__version__ = "0.1.0"
