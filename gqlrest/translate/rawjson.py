"""Helpers for handling `data` as raw JSON text.

`data` is copied to the output as it arrived: numbers keep their source text (no float rounding,
no overflow to inf), and only insignificant whitespace is dropped.
"""

from __future__ import annotations

import json
from decimal import Decimal
from json.decoder import scanstring
from typing import Any, Union


_WS = " \t\n\r"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


# Validation: numbers as Decimal so nothing overflows; NaN/Infinity are not JSON.
_STRICT = json.JSONDecoder(parse_float=Decimal, parse_int=Decimal, parse_constant=_reject_constant)
# Span scanning only; the value itself is never used.
_SPAN = json.JSONDecoder(parse_float=Decimal, parse_int=Decimal)


def to_text(raw: Union[bytes, str, None]) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8")
    return raw


def loads(text: str) -> Any:
    return _STRICT.decode(text)


def dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=(",", ":"))


def compact(text: str) -> str:
    """Drop whitespace outside strings. `text` must already be valid JSON."""
    out: list[str] = []
    in_str = False
    escaped = False
    for ch in text:
        if in_str:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
        elif ch in _WS:
            continue
        else:
            out.append(ch)
            if ch == '"':
                in_str = True
    return "".join(out)


def _skip_ws(text: str, idx: int) -> int:
    while idx < len(text) and text[idx] in _WS:
        idx += 1
    return idx


def members(text: str) -> list[tuple[str, str]]:
    """Top-level members of a JSON object as (name, raw value text), in document order."""
    idx = _skip_ws(text, 0)
    if idx >= len(text) or text[idx] != "{":
        raise ValueError("Expected a JSON object")
    idx = _skip_ws(text, idx + 1)
    out: list[tuple[str, str]] = []
    if idx < len(text) and text[idx] == "}":
        return out
    while True:
        if idx >= len(text) or text[idx] != '"':
            raise ValueError(f"Expected a member name at offset {idx}")
        name, idx = scanstring(text, idx + 1)
        idx = _skip_ws(text, idx)
        if idx >= len(text) or text[idx] != ":":
            raise ValueError(f"Expected ':' at offset {idx}")
        idx = _skip_ws(text, idx + 1)
        _, end = _SPAN.raw_decode(text, idx)
        out.append((name, text[idx:end]))
        idx = _skip_ws(text, end)
        if idx < len(text) and text[idx] == ",":
            idx = _skip_ws(text, idx + 1)
            continue
        if idx < len(text) and text[idx] == "}":
            return out
        raise ValueError(f"Expected ',' or '}}' at offset {idx}")


def member(raw: Union[bytes, str], name: str) -> str | None:
    """Raw text of one top-level member, or None when absent. Duplicate names: last wins, as in json.loads."""
    found: str | None = None
    for key, value in members(to_text(raw)):
        if key == name:
            found = value
    return found
