"""Render assertion payloads for display.

Reporters show the ``actual`` and ``expected`` values of a failure as JSON
when the value has a JSON form, and fall back to ``repr`` otherwise. The
output is meant for people to read; it is not meant to be parsed back.
"""

from __future__ import annotations

import datetime as dt
import json
import re
from collections.abc import Mapping, Sequence, Set
from typing import Any

from minispec.domain.equality import Kind, classify, own_members
from minispec.domain.values import HOLE, UNDEFINED

CYCLE_MARKER = "<cycle>"


def stringify(value: Any) -> str:
    """Return a JSON-like, single-line rendering of `value`.

    - ``None`` renders as ``null`` and `UNDEFINED` as ``undefined``.
    - Sequences and sets render as arrays, holes as ``null``.
    - Mappings and plain objects render as objects of their own members.
    - Dates and times render as ISO 8601 strings, patterns as ``/source/``.
    - Composite values met again while being rendered render as ``<cycle>``.
    """
    return _render(value, [])


def _render(value: Any, stack: list[Any]) -> str:
    if value is UNDEFINED:
        return "undefined"
    if value is HOLE:
        return "null"
    kind = classify(value)
    match kind:
        case Kind.NULL | Kind.BOOLEAN | Kind.TEXT:
            return json.dumps(value, ensure_ascii=False)
        case Kind.NUMBER:
            return _render_number(value)
        case Kind.TEMPORAL:
            if isinstance(value, (dt.date, dt.time)):
                return json.dumps(value.isoformat())
            return json.dumps(str(value))
        case Kind.PATTERN:
            return _render_pattern(value)
        case Kind.BINARY | Kind.CALLABLE | Kind.OPAQUE:
            return repr(value)

    if any(seen is value for seen in stack):
        return CYCLE_MARKER
    stack.append(value)
    try:
        if kind is Kind.SEQUENCE or kind is Kind.SET:
            items: Sequence[Any] | Set[Any] = value
            return "[" + ",".join(_render(item, stack) for item in items) + "]"
        members: Mapping[Any, Any] = own_members(value)
        return (
            "{"
            + ",".join(
                f"{json.dumps(str(key), ensure_ascii=False)}:{_render(item, stack)}"
                for key, item in members.items()
            )
            + "}"
        )
    finally:
        stack.pop()


def _render_number(value: Any) -> str:
    if isinstance(value, (int, float)):
        # json.dumps writes NaN and Infinity as bare words.
        return json.dumps(value)
    return str(value)


_FLAG_LETTERS = {re.IGNORECASE: "i", re.MULTILINE: "m", re.DOTALL: "s", re.VERBOSE: "x"}


def _render_pattern(pattern: re.Pattern[Any]) -> str:
    flags = "".join(
        letter for flag, letter in _FLAG_LETTERS.items() if pattern.flags & flag
    )
    source = (
        pattern.pattern
        if isinstance(pattern.pattern, str)
        else pattern.pattern.decode("latin-1")
    )
    return f"/{source}/{flags}"
