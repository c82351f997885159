from __future__ import annotations

from enum import Enum
from typing import Iterable

from gqlrest.translate.models import ExecutionError


VALIDATION_FAILED = "GRAPHQL_VALIDATION_FAILED"
PARSE_FAILED = "GRAPHQL_PARSE_FAILED"

# Upstream servers sometimes report the constant names instead of the wire values.
_PROTOCOL_CODES = frozenset({VALIDATION_FAILED, PARSE_FAILED, "ValidationFailed", "ParseFailed"})


class ErrorKind(str, Enum):
    USER = "user"
    PROTOCOL = "protocol"


def is_protocol_code(code: object) -> bool:
    return isinstance(code, str) and code in _PROTOCOL_CODES


def error_kind(errors: Iterable[ExecutionError]) -> ErrorKind:
    for e in errors:
        if is_protocol_code(e.extensions.get("code")):
            return ErrorKind.PROTOCOL
    return ErrorKind.USER


def status_for(errors: Iterable[ExecutionError]) -> int:
    """HTTP status for a GraphQL pass-through response."""
    if error_kind(errors) is ErrorKind.PROTOCOL:
        return 422
    return 200
