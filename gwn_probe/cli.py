"""Command-line interface for gwn-probe."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

from . import constants
from .check import run_check
from .config import ConfigurationError, ProbeConfig, load_config
from .logging import configure_logging
from .models import CheckOutcome, Status

LOGGER = logging.getLogger(__name__)

USAGE_MESSAGE = (
    "Usage: gwn-probe -H <ip> -U <user> -P <pass> -w <warn_volts> -c <crit_volts>\n"
    "Example: gwn-probe -H 172.16.171.101 -U admin -P secret -w 40 -c 35"
)


class ProbeArgumentParser(argparse.ArgumentParser):
    """Exit with UNKNOWN (3) instead of argparse's usual code 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        print(f"{Status.UNKNOWN.name} - Bad arguments (see --help): {message}")
        sys.exit(Status.UNKNOWN)

    def exit(self, status: int = 0, message: Optional[str] = None) -> None:  # type: ignore[override]
        # --help also ends the run without a result, so it reports UNKNOWN too.
        super().exit(status or Status.UNKNOWN, message)


def build_parser() -> argparse.ArgumentParser:
    parser = ProbeArgumentParser(
        prog=constants.APP_NAME,
        description="Check the PoE input voltage of a Grandstream GWN switch",
    )
    parser.add_argument("-H", "--host", help="Device IP address or hostname")
    parser.add_argument("-U", "--username", help="Web management username")
    parser.add_argument("-P", "--password", help="Web management password")
    parser.add_argument(
        "-w", "--warning", help="Warning when voltage falls to or below this value (V)"
    )
    parser.add_argument(
        "-c", "--critical", help="Critical when voltage falls to or below this value (V)"
    )
    parser.add_argument(
        "-t", "--timeout", help="Per-request transport timeout in seconds"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH}, if present)",
    )
    parser.add_argument("--log-level", help="Log level for stderr output")
    parser.add_argument("--log-file", help="Append log records to this file")
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the resolved configuration and exit",
    )
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Dict[str, Optional[str]]]:
    return {
        "device": {
            "host": args.host,
            "username": args.username,
            "password": args.password,
        },
        "thresholds": {"warn": args.warning, "crit": args.critical},
        "http": {"timeout_seconds": args.timeout},
        "logging": {"level": args.log_level, "path": args.log_file},
    }


def _emit(outcome: CheckOutcome) -> int:
    print(outcome.render())
    return int(outcome.status)


def _show_config(config: ProbeConfig) -> int:
    source = config.path if config.path is not None else "command line"
    print(f"Configuration loaded from {source!s}\n")
    for section in config.raw.sections():
        print(f"[{section}]")
        for key, value in config.raw[section].items():
            if key == "password":
                value = "********"
            print(f"{key} = {value}")
        print()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, overrides=_overrides(args))
    except ConfigurationError as exc:
        message = str(exc)
        if message.startswith("Missing required settings"):
            message = f"{message}\n{USAGE_MESSAGE}"
        return _emit(CheckOutcome(Status.UNKNOWN, message))

    configure_logging(
        config.logging.level,
        log_path=config.logging.path,
        log_network=config.logging.log_network,
    )

    if args.show_config:
        return _show_config(config)

    LOGGER.debug("Checking %s", config.device.host)
    outcome = asyncio.run(run_check(config))
    return _emit(outcome)


if __name__ == "__main__":
    sys.exit(main())
