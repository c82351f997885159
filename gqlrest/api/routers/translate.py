from __future__ import annotations

from typing import Any, Literal, Union

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field

from gqlrest.api.dependencies import get_app_config, get_translator
from gqlrest.api.errors import APIError
from gqlrest.translate import ExecutionResult, ResponseTranslator, rawjson, status_for


router = APIRouter()


class ErrorLocation(BaseModel):
    line: int
    column: int


class ExecutionErrorIn(BaseModel):
    message: str
    path: list[Union[str, int]] | None = None
    locations: list[ErrorLocation] | None = None
    extensions: dict[str, Any] = Field(default_factory=dict)


class ExecutionResultIn(BaseModel):
    """An execution result as produced by an upstream GraphQL server."""

    data: Any = None
    errors: list[ExecutionErrorIn] = Field(default_factory=list)
    extensions: dict[str, Any] | None = None

    def to_result(self, raw_body: bytes) -> ExecutionResult:
        """Build the translator input; `data` is taken verbatim from the request body."""
        result = ExecutionResult.from_dict(self.model_dump(exclude={"data"}))
        if self.data is not None:
            result.data = rawjson.member(raw_body, "data")
        return result


@router.post("/translate")
async def translate_result(
    body: ExecutionResultIn,
    request: Request,
    mode: Literal["rest", "graphql"] | None = Query(default=None, description="Output shape; defaults to config."),
    translator: ResponseTranslator = Depends(get_translator),
) -> Response:
    """Translate an execution result into a RESTful envelope or a GraphQL response.

    RESTful responses always use HTTP 200 and carry the outcome in the envelope's `code`.
    GraphQL responses use 422 when the request itself failed validation/parsing.
    """
    if mode is None:
        is_restful = get_app_config(request).translator.restful_by_default
    else:
        is_restful = mode == "rest"

    if body.data is None and not body.errors:
        raise APIError(
            status_code=400,
            code="invalid_argument",
            message="execution result has neither data nor errors",
        )

    result = body.to_result(await request.body())
    content = translator.translate(result, is_restful=is_restful)
    status_code = 200 if is_restful else status_for(result.errors)
    return Response(content=content, status_code=status_code, media_type="application/json")
