"""Command-line and environment configuration for the agent and server."""

from __future__ import annotations

import argparse
import os
import re
import sys
from dataclasses import dataclass
from datetime import timedelta
from typing import NoReturn, Sequence

DEFAULT_ADDRESS = "localhost:8080"
DEFAULT_REPORT_SECONDS = 10
DEFAULT_POLL_SECONDS = 2

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class AgentConfig:
    """Where the agent reports and how often it polls and reports."""

    address: str = DEFAULT_ADDRESS
    report_interval_seconds: int = DEFAULT_REPORT_SECONDS
    poll_interval_seconds: int = DEFAULT_POLL_SECONDS

    @property
    def report_interval(self) -> timedelta:
        return timedelta(seconds=self.report_interval_seconds)

    @property
    def poll_interval(self) -> timedelta:
        return timedelta(seconds=self.poll_interval_seconds)


@dataclass
class ServerConfig:
    """The address the server listens on."""

    address: str = DEFAULT_ADDRESS


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(message, file=sys.stderr)
        raise SystemExit(1)


def _integer(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise argparse.ArgumentTypeError(
            f'strconv.ParseInt: parsing "{text}": invalid syntax'
        )
    return int(text)


def _address_option(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "-a",
        "--address",
        default=os.environ.get("ADDRESS", DEFAULT_ADDRESS),
        help=help_text,
    )


def load_agent_config(argv: Sequence[str] | None = None) -> AgentConfig:
    """Read agent settings: flags override environment, which overrides defaults."""
    print("Start getting data for agent config")
    parser = _Parser(prog="agent", allow_abbrev=False)
    _address_option(parser, "Address of the HTTP server")
    parser.add_argument(
        "-r",
        "--report",
        type=_integer,
        default=os.environ.get("REPORT_INTERVAL", str(DEFAULT_REPORT_SECONDS)),
        help="Frequency (in seconds) for sending reports to the server",
    )
    parser.add_argument(
        "-p",
        "--poll",
        type=_integer,
        default=os.environ.get("POLL_INTERVAL", str(DEFAULT_POLL_SECONDS)),
        help="Frequency (in seconds) for polling metrics from runtime",
    )
    args = parser.parse_args(list(argv) if argv is not None else [])
    config = AgentConfig(args.address, args.report, args.poll)
    print("The data for the agent has been loaded")
    return config


def load_server_config(argv: Sequence[str] | None = None) -> ServerConfig:
    """Read server settings: flags override environment, which overrides defaults."""
    print("Start getting data for server config")
    parser = _Parser(prog="server", allow_abbrev=False)
    _address_option(parser, "Server host address")
    args = parser.parse_args(list(argv) if argv is not None else [])
    config = ServerConfig(args.address)
    print("The data for the server has been loaded")
    return config