"""Diagnostic printers.

The translator only reports through this narrow interface (one line / formatted text),
so callers can route diagnostics to logging, a stream, or nowhere.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, Protocol, TextIO


class Printer(Protocol):
    def println(self, *values: Any) -> None: ...

    def printf(self, fmt: str, *args: Any) -> None: ...


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    if not args:
        return fmt
    return fmt % args


class NullPrinter:
    """Drops all diagnostics."""

    def println(self, *values: Any) -> None:
        return None

    def printf(self, fmt: str, *args: Any) -> None:
        return None


class LoggingPrinter:
    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.ERROR) -> None:
        self._logger = logger or logging.getLogger("gqlrest.translate")
        self._level = level

    def println(self, *values: Any) -> None:
        self._logger.log(self._level, " ".join(str(v) for v in values))

    def printf(self, fmt: str, *args: Any) -> None:
        # Let logging do the %-interpolation lazily.
        self._logger.log(self._level, fmt, *args)


class StreamPrinter:
    """Writes diagnostics to a text stream (stderr by default); safe across threads."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def _write(self, text: str) -> None:
        stream = self._stream or sys.stderr
        if not text.endswith("\n"):
            text += "\n"
        with self._lock:
            stream.write(text)
            stream.flush()

    def println(self, *values: Any) -> None:
        self._write(" ".join(str(v) for v in values))

    def printf(self, fmt: str, *args: Any) -> None:
        self._write(_format(fmt, args))


def printer_from_name(name: str) -> Printer:
    """Build the printer selected by `translator.diagnostics` (logging | stderr | none)."""
    key = (name or "").strip().lower()
    if key == "logging":
        return LoggingPrinter()
    if key == "stderr":
        return StreamPrinter()
    if key == "none":
        return NullPrinter()
    raise ValueError(f"Unknown diagnostics printer: {name!r}")
