from __future__ import annotations


class TranslationError(RuntimeError):
    """Base class for internal faults while building a response body."""


class MalformedDataError(TranslationError):
    """`data` is not a JSON object with a single top-level field."""


class ResponseSerializationError(TranslationError):
    """The response could not be encoded as JSON."""


class ResponseWriteError(TranslationError):
    """The output sink rejected the encoded response."""

    def __init__(self, message: str, *, cause: BaseException) -> None:
        super().__init__(message)
        self.cause = cause
