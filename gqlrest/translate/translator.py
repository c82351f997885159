from __future__ import annotations

import io
import re
from typing import IO, Any

from gqlrest.translate import rawjson
from gqlrest.translate.errcode import is_protocol_code
from gqlrest.translate.errors import (
    MalformedDataError,
    ResponseSerializationError,
    ResponseWriteError,
    TranslationError,
)
from gqlrest.translate.models import ExecutionError, ExecutionResult, RESTEnvelope, render_path
from gqlrest.translate.printer import NullPrinter, Printer
from gqlrest.translate.steps import Err, Ok, StepResult, attempt


FALLBACK_MESSAGE = "unexpected error: unmarshal or write response error"

HTTP_UNPROCESSABLE_ENTITY = 422
HTTP_INTERNAL_SERVER_ERROR = 500

_NUM_RE = re.compile(r"[0-9]+")

_FALLBACK_BODY = RESTEnvelope(code=HTTP_INTERNAL_SERVER_ERROR, message=FALLBACK_MESSAGE).encode()


def resolve_code(code: str) -> int:
    """Map a code string from error extensions to the envelope's numeric code."""
    if _NUM_RE.fullmatch(code):
        return int(code)
    if is_protocol_code(code):
        return HTTP_UNPROCESSABLE_ENTITY
    return HTTP_INTERNAL_SERVER_ERROR


def _error_message(e: ExecutionError) -> str:
    if e.path:
        return f"{e.message} {render_path(e.path)}"
    return e.message


def _write(sink: IO[bytes], payload: bytes) -> None:
    try:
        sink.write(payload)
    except Exception as e:
        raise ResponseWriteError(f"Failed to write response: {e}", cause=e) from e


class ResponseTranslator:
    """Turns an ExecutionResult into a GraphQL or RESTful response body.

    Stateless apart from the diagnostic printer, so one instance can serve concurrent
    requests as long as each call gets its own sink.
    """

    def __init__(self, *, printer: Printer | None = None) -> None:
        self._printer: Printer = printer or NullPrinter()

    def write_json(self, sink: IO[bytes], result: ExecutionResult, *, is_restful: bool) -> None:
        if not is_restful:
            self._write_graphql(sink, result)
            return
        self._write_rest(sink, result)

    def translate(self, result: ExecutionResult, *, is_restful: bool) -> bytes:
        buf = io.BytesIO()
        self.write_json(buf, result, is_restful=is_restful)
        return buf.getvalue()

    def write_error(self, sink: IO[bytes], code: Any, *, is_restful: bool, message: str) -> None:
        err = ExecutionError(message=message, extensions={"code": code})
        self.write_json(sink, ExecutionResult(errors=[err]), is_restful=is_restful)

    def emit_error(self, code: Any, *, is_restful: bool, message: str) -> bytes:
        buf = io.BytesIO()
        self.write_error(buf, code, is_restful=is_restful, message=message)
        return buf.getvalue()

    def emit_errorf(self, code: Any, fmt: str, *args: Any, is_restful: bool) -> bytes:
        return self.emit_error(code, is_restful=is_restful, message=fmt % args if args else fmt)

    def _write_graphql(self, sink: IO[bytes], result: ExecutionResult) -> None:
        try:
            payload = result.encode()
        except Exception as e:
            raise ResponseSerializationError(f"Failed to encode GraphQL response: {e}") from e
        _write(sink, payload)

    def _write_rest(self, sink: IO[bytes], result: ExecutionResult) -> None:
        outcome = (
            self.build_envelope(result)
            .then(self._encode_envelope)
            .then(lambda payload: attempt(lambda: _write(sink, payload), wrap=_as_write_error))
        )
        if isinstance(outcome, Err):
            self._printer.printf("restful response recover from error: %s", outcome.detail)
            # Last resort; a failure here propagates to the caller.
            _write(sink, _FALLBACK_BODY)

    def build_envelope(self, result: ExecutionResult) -> StepResult[RESTEnvelope]:
        return self._extract_data(result).then(lambda data: self._apply_errors(result, data))

    def _extract_data(self, result: ExecutionResult) -> StepResult[str]:
        if not result.has_data:
            return Ok("null")
        return attempt(lambda: _single_field_value(result), wrap=_as_malformed)

    def _apply_errors(self, result: ExecutionResult, data: str) -> StepResult[RESTEnvelope]:
        envelope = RESTEnvelope(code=0, data=data)
        if not result.errors:
            return Ok(envelope)

        def _resolve() -> RESTEnvelope:
            code = str(HTTP_UNPROCESSABLE_ENTITY)
            msgs: list[str] = []
            for e in result.errors:
                if e.has_code:
                    # Integer codes become digits; anything else non-numeric resolves to 500.
                    code = str(e.extensions["code"])
                msgs.append(_error_message(e))
            envelope.code = resolve_code(code)
            envelope.message = "; ".join(msgs)
            return envelope

        return attempt(_resolve, wrap=lambda e: TranslationError(f"Failed to resolve errors: {e}"))

    def _encode_envelope(self, envelope: RESTEnvelope) -> StepResult[bytes]:
        return attempt(
            envelope.encode,
            wrap=lambda e: ResponseSerializationError(f"Failed to encode REST envelope: {e}"),
        )


def _single_field_value(result: ExecutionResult) -> str:
    """Raw JSON text of the single top-level field in data."""
    text = rawjson.to_text(result.data)
    decoded = rawjson.loads(text)
    if decoded is None:
        return "null"
    if not isinstance(decoded, dict):
        raise MalformedDataError(f"Expected a JSON object in data, got {type(decoded).__name__}")
    if not decoded:
        return "{}"
    fields = rawjson.members(text)
    # An operation has one top-level field; with several, the first in document order wins.
    # dict() keeps the first position of a repeated name and its last value, as json.loads does.
    return rawjson.compact(dict(fields)[fields[0][0]])


def _as_malformed(e: Exception) -> TranslationError:
    return MalformedDataError(f"Failed to decode data: {e}")


def _as_write_error(e: Exception) -> TranslationError:
    return ResponseWriteError(f"Failed to write response: {e}", cause=e)
