"""Sentinel values used by the engine and the equality comparator."""

from __future__ import annotations

from typing import Any, Final

# pylint: disable=too-few-public-methods


class _Sentinel:
    """A named singleton that is falsy and compares only by identity."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Sentinel:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Sentinel:
        return self

    def __reduce__(self) -> str:
        return self._name


UNDEFINED: Final = _Sentinel("UNDEFINED")
"""The absence of a value. Distinct from ``None``, which is an explicit null."""

HOLE: Final = _Sentinel("HOLE")
"""An elided slot in a sequence: the index exists but was never populated."""


def sparse(length: int) -> list[Any]:
    """Return a sequence of ``length`` unpopulated slots."""
    return [HOLE] * length
