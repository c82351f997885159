from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from gqlrest.translate import rawjson


PathSegment = Union[str, int]
RawJSON = Union[bytes, str, None]


def render_path(path: Sequence[PathSegment] | None) -> str:
    """Render an error path the way GraphQL servers print it: `users[0].name`."""
    if not path:
        return ""
    out: list[str] = []
    for i, seg in enumerate(path):
        # bool is an int subclass but never a valid list index here.
        if isinstance(seg, int) and not isinstance(seg, bool):
            out.append(f"[{seg}]")
        elif isinstance(seg, str):
            if i != 0:
                out.append(".")
            out.append(seg)
        else:
            raise TypeError(f"Invalid path segment: {seg!r}")
    return "".join(out)


def _compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


@dataclass
class ExecutionError:
    message: str
    path: list[PathSegment] | None = None
    locations: list[dict[str, int]] | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "ExecutionError":
        if not isinstance(obj, dict):
            raise ValueError(f"Error entry must be an object, got {type(obj).__name__}")
        message = obj.get("message")
        if not isinstance(message, str):
            raise ValueError("Error entry is missing a string 'message'")

        path_any = obj.get("path")
        if path_any is not None and not isinstance(path_any, list):
            raise ValueError("Error 'path' must be a list")
        locations_any = obj.get("locations")
        if locations_any is not None and not isinstance(locations_any, list):
            raise ValueError("Error 'locations' must be a list")
        for loc in locations_any or []:
            if not isinstance(loc, dict):
                raise ValueError(f"Error 'locations' entries must be objects, got {type(loc).__name__}")
        ext_any = obj.get("extensions")
        if ext_any is not None and not isinstance(ext_any, dict):
            raise ValueError("Error 'extensions' must be an object")

        return cls(
            message=message,
            path=list(path_any) if path_any else None,
            locations=[dict(loc) for loc in locations_any] if locations_any else None,
            extensions=dict(ext_any or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        # Same member order as gqlgen's gqlerror.Error.
        out: dict[str, Any] = {"message": self.message}
        if self.path:
            out["path"] = self.path
        if self.locations:
            out["locations"] = self.locations
        if self.extensions:
            out["extensions"] = self.extensions
        return out

    @property
    def has_code(self) -> bool:
        return "code" in self.extensions


@dataclass
class ExecutionResult:
    """Outcome of one GraphQL operation.

    `data` is kept as raw serialized JSON so both output shapes can emit it without a
    decode/encode round trip; number literals come out exactly as they went in.
    """

    data: RawJSON = None
    errors: list[ExecutionError] = field(default_factory=list)
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "ExecutionResult":
        if not isinstance(obj, dict):
            raise ValueError(f"Execution result must be an object, got {type(obj).__name__}")

        errors_any = obj.get("errors")
        if errors_any is not None and not isinstance(errors_any, list):
            raise ValueError("'errors' must be a list")
        ext_any = obj.get("extensions")
        if ext_any is not None and not isinstance(ext_any, dict):
            raise ValueError("'extensions' must be an object")

        data = _compact_json(obj["data"]) if obj.get("data") is not None else None
        return cls(
            data=data,
            errors=[ExecutionError.from_dict(e) for e in (errors_any or [])],
            extensions=dict(ext_any) if ext_any else None,
        )

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "ExecutionResult":
        """Parse a serialized result, keeping the `data` member as its source text."""
        text = rawjson.to_text(raw)
        obj = json.loads(text)
        if not isinstance(obj, dict):
            raise ValueError(f"Execution result must be an object, got {type(obj).__name__}")
        result = cls.from_dict({k: v for k, v in obj.items() if k != "data"})
        data = rawjson.member(text, "data")
        result.data = None if data is None or data == "null" else data
        return result

    @property
    def has_data(self) -> bool:
        return self.data is not None and len(self.data) > 0

    def encode(self) -> bytes:
        """Serialize as a GraphQL response body: errors, data, extensions."""
        parts: list[str] = []
        if self.errors:
            parts.append('"errors":' + rawjson.dumps([e.to_dict() for e in self.errors]))
        if self.has_data:
            text = rawjson.to_text(self.data)
            rawjson.loads(text)
            parts.append('"data":' + rawjson.compact(text))
        else:
            parts.append('"data":null')
        if self.extensions:
            parts.append('"extensions":' + rawjson.dumps(self.extensions))
        return ("{" + ",".join(parts) + "}").encode("utf-8")


@dataclass
class RESTEnvelope:
    """`data` holds raw JSON text for the envelope's data member."""

    code: int = 0
    message: str = ""
    data: str = "null"

    def encode(self) -> bytes:
        head = '{"code":' + str(int(self.code))
        if self.message:
            head += ',"message":' + rawjson.dumps(self.message)
        return (head + ',"data":' + (self.data or "null") + "}").encode("utf-8")
