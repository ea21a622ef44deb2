"""Minimal logging to standard output."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Protocol


class Logger(Protocol):
    """Anything that accepts informational and error messages."""

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


def _timestamp(moment: datetime) -> str:
    return f"{moment:%Y-%m-%d %H:%M:%S}.{moment.microsecond // 100:04d}"


class StdoutLogger:
    """Writes each message as one timestamped line on standard output."""

    def _write(self, level: str, message: str) -> None:
        sys.stdout.write(f"{level} ({_timestamp(datetime.now())}) : {message} \n")
        sys.stdout.flush()

    def info(self, message: str) -> None:
        self._write("INFO", message)

    def error(self, message: str) -> None:
        self._write("ERROR", message)