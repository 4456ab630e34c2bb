"""Log routing for the check.

The status line is the only thing written to stdout, so every log record
goes to stderr and, when configured, to a log file as well.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(
    level: str = "WARNING", *, log_path: Optional[Path] = None, log_network: bool = False
) -> None:
    """Install the stderr handler and an optional file handler on the root logger.

    Unknown level names fall back to WARNING. Unless ``log_network`` is set,
    aiohttp's own loggers stay at WARNING whatever ``level`` asks for.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not log_network:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
