"""GraphQL result -> response body translation.

Two output shapes are supported:
- GraphQL pass-through: `{"data": ..., "errors": [...]}` exactly as produced upstream
- RESTful envelope: `{"code": <int>, "message": "...", "data": <inner value>}`

The REST path never raises for a malformed result: any internal fault is turned into a
fixed 500 envelope and reported through the injected diagnostic printer.
"""

from __future__ import annotations

from gqlrest.translate.errcode import PARSE_FAILED, VALIDATION_FAILED, ErrorKind, error_kind, status_for
from gqlrest.translate.errors import (
    MalformedDataError,
    ResponseSerializationError,
    ResponseWriteError,
    TranslationError,
)
from gqlrest.translate.models import ExecutionError, ExecutionResult, RESTEnvelope
from gqlrest.translate.printer import LoggingPrinter, NullPrinter, Printer, StreamPrinter, printer_from_name
from gqlrest.translate.translator import FALLBACK_MESSAGE, ResponseTranslator

__all__ = [
    "FALLBACK_MESSAGE",
    "PARSE_FAILED",
    "VALIDATION_FAILED",
    "ErrorKind",
    "ExecutionError",
    "ExecutionResult",
    "LoggingPrinter",
    "MalformedDataError",
    "NullPrinter",
    "Printer",
    "RESTEnvelope",
    "ResponseSerializationError",
    "ResponseTranslator",
    "ResponseWriteError",
    "StreamPrinter",
    "TranslationError",
    "error_kind",
    "printer_from_name",
    "status_for",
]
