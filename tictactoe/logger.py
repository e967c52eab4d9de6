"""Coloured console logging and the server's structured start-up logger."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import IO, Any

_RESET = "\033[0m"
_RED = "\033[31m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"


def _sprint(args: tuple[Any, ...]) -> str:
    """Join operands, adding a space only between two non-string neighbours."""
    parts: list[str] = []
    previous: Any = None
    for position, arg in enumerate(args):
        if position and not isinstance(arg, str) and not isinstance(previous, str):
            parts.append(" ")
        parts.append(str(arg))
        previous = arg
    return "".join(parts)


def _output(stream: IO[str], tag: str, color: str, args: tuple[Any, ...]) -> None:
    caller = sys._getframe(2)
    location = f"{os.path.basename(caller.f_code.co_filename)}:{caller.f_lineno}"
    stamp = datetime.now().strftime("%Y/%m/%d %H:%M:%S")
    stream.write(f"{stamp} {location}: {color}[{tag}] {_sprint(args)}{_RESET}\n")
    stream.flush()


def info(*args: Any) -> None:
    """Write a green INFO line to standard output."""
    _output(sys.stdout, "INFO", _GREEN, args)


def error(*args: Any) -> None:
    """Write a red ERROR line to standard error."""
    _output(sys.stderr, "ERROR", _RED, args)


def warn(*args: Any) -> None:
    """Write a yellow WARN line to standard error."""
    _output(sys.stderr, "WARN", _YELLOW, args)


def _quote(value: Any) -> str:
    text = str(value)
    if not text or any(ch.isspace() or ch in '="' or not ch.isprintable() for ch in text):
        return json.dumps(text)
    return text


class _TextFormatter(logging.Formatter):
    _LEVELS = {"WARNING": "WARN", "CRITICAL": "ERROR"}

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).astimezone()
        pairs = [
            ("time", stamp.isoformat(timespec="milliseconds")),
            ("level", self._LEVELS.get(record.levelname, record.levelname)),
            ("msg", record.getMessage()),
        ]
        pairs.extend(getattr(record, "fields", {}).items())
        return " ".join(f"{key}={_quote(value)}" for key, value in pairs)


def setup_logger(directory: str | os.PathLike[str] = "logs") -> tuple[logging.Logger, IO[str]]:
    """Create a timestamped log file and a logger writing to it and to stdout.

    Key/value pairs may be attached with ``extra={"fields": {...}}``.
    The caller owns the returned file and must close it.
    """
    os.makedirs(directory, mode=0o755, exist_ok=True)
    name = f"log_{datetime.now():%Y%m%d_%H%M%S}.log"
    path = os.path.join(os.fspath(directory), name)
    log_file = open(path, "a", encoding="utf-8")

    logger = logging.Logger("tictactoe.server", logging.INFO)
    formatter = _TextFormatter()
    for stream in (sys.stdout, log_file):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Server starting...", extra={"fields": {"logFile": path}})
    return logger, log_file