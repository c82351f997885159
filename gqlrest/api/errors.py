from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from gqlrest.api.dependencies import get_app_config, get_translator
from gqlrest.translate import ExecutionError, ExecutionResult


logger = logging.getLogger(__name__)


@dataclass
class APIError(Exception):
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None


def error_response(
    req: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> Response:
    """Render an error in the service's default output mode.

    The numeric status doubles as the error's `code` extension so RESTful clients see it in the
    envelope; the symbolic code travels along as `reason`.
    """
    translator = get_translator(req)
    is_restful = get_app_config(req).translator.restful_by_default
    extensions: dict[str, Any] = {"code": int(status_code), "reason": code}
    if details:
        extensions["details"] = details
    result = ExecutionResult(errors=[ExecutionError(message=message, extensions=extensions)])
    body = translator.translate(result, is_restful=is_restful)
    return Response(content=body, status_code=int(status_code), media_type="application/json")


async def api_error_handler(req: Request, exc: APIError) -> Response:
    return error_response(
        req,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def validation_error_handler(req: Request, exc: RequestValidationError) -> Response:
    translator = get_translator(req)
    is_restful = get_app_config(req).translator.restful_by_default
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    body = translator.emit_errorf(
        400, "request validation failed: %s", "; ".join(parts) or "invalid request", is_restful=is_restful
    )
    return Response(content=body, status_code=400, media_type="application/json")


async def unhandled_error_handler(req: Request, exc: Exception) -> Response:
    # Keep details out of the body; the server log has the traceback.
    logger.exception("Unhandled error: %s", type(exc).__name__)
    translator = get_translator(req)
    is_restful = get_app_config(req).translator.restful_by_default
    body = translator.emit_error(500, is_restful=is_restful, message="internal server error")
    return Response(content=body, status_code=500, media_type="application/json")
