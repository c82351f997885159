from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from gqlrest.translate.errors import TranslationError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def then(self, fn: Callable[[T], "StepResult[U]"]) -> "StepResult[U]":
        return fn(self.value)


@dataclass(frozen=True)
class Err:
    error: TranslationError
    detail: str = ""

    def then(self, fn: Callable[[Any], "StepResult[U]"]) -> "StepResult[U]":
        return self


StepResult = Union[Ok[T], Err]


def _describe(exc: BaseException) -> str:
    # Includes the chained cause, if any.
    return "".join(traceback.format_exception(exc))


def attempt(
    fn: Callable[[], T],
    *,
    wrap: Callable[[Exception], TranslationError],
) -> StepResult[T]:
    """Run one translation step, turning any exception into an Err.

    TranslationErrors raised by the step are kept as is; anything else goes through `wrap`.
    """
    try:
        return Ok(fn())
    except TranslationError as e:
        return Err(error=e, detail=_describe(e))
    except Exception as e:
        err = wrap(e)
        err.__cause__ = e
        return Err(error=err, detail=_describe(err))
