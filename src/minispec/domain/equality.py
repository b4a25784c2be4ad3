"""Deep equality for arbitrary Python values.

`equals` compares values structurally. Every value is first mapped to a
`Kind` by `classify`; values of different kinds are never equal, values of
the same kind are compared by the rule of that kind. Composite values are
compared recursively while a stack of the left-hand composites being
compared guards against cycles: meeting a composite that is already on the
stack presumes equality, so self-referential structures of the same shape
compare equal.

Notable rules:
    - ``0.0`` and ``-0.0`` are different, two NaNs are equal.
    - ``None`` and `UNDEFINED` are only equal to themselves.
    - ``True`` is not equal to ``1``, ``"1"`` is not equal to ``1``.
    - A `HOLE` in a sequence is not equal to anything but another hole.
    - Mappings and plain objects are compared by their own members.
"""

from __future__ import annotations

import datetime as dt
import functools
import math
import numbers
import re
import types
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from typing import Any

from .values import HOLE, UNDEFINED


class Kind(Enum):
    """The closed set of value kinds the comparator distinguishes."""

    NULL = "null"
    TEXT = "text"
    BINARY = "binary"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEMPORAL = "temporal"
    PATTERN = "pattern"
    CALLABLE = "callable"
    SEQUENCE = "sequence"
    SET = "set"
    MAP = "map"
    OPAQUE = "opaque"


_TEMPORAL_TYPES = (dt.date, dt.time, dt.timedelta)
_CALLABLE_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    functools.partial,
    type,
)
_SCALAR_TYPES = (type(None), bool, int, float, complex, str, bytes)


# ============================================================================
#                               Classification
# ============================================================================


def classify(value: Any) -> Kind:
    """Return the `Kind` of `value`.

    The order of the checks matters: ``bool`` is an ``int``, ``str`` is a
    ``Sequence`` and a class is callable.
    """
    if value is None or value is UNDEFINED or value is HOLE:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Kind.BINARY
    if isinstance(value, numbers.Real):
        return Kind.NUMBER
    if isinstance(value, _TEMPORAL_TYPES):
        return Kind.TEMPORAL
    if isinstance(value, re.Pattern):
        return Kind.PATTERN
    if isinstance(value, _CALLABLE_TYPES):
        return Kind.CALLABLE
    if isinstance(value, Mapping):
        return Kind.MAP
    if isinstance(value, Sequence):
        return Kind.SEQUENCE
    if isinstance(value, Set):
        return Kind.SET
    if hasattr(value, "__dict__") or _slot_names(type(value)):
        return Kind.MAP
    return Kind.OPAQUE


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def own_members(value: Any) -> dict[Any, Any]:
    """Return the own members of a mapping or a plain object."""
    if isinstance(value, Mapping):
        return dict(value.items())
    members = dict(vars(value)) if hasattr(value, "__dict__") else {}
    for name in _slot_names(type(value)):
        # An unset slot is an absent member.
        if hasattr(value, name):
            members[name] = getattr(value, name)
    return members


# ============================================================================
#                               Comparison
# ============================================================================


def equals(*values: Any) -> bool:
    """Return True if every adjacent pair of `values` is deeply equal.

    Calling it with fewer than two values returns True.
    """
    return all(_eq(left, right, []) for left, right in zip(values, values[1:]))


def _eq(left: Any, right: Any, stack: list[Any]) -> bool:
    if left is right:
        return True
    kind = classify(left)
    if kind is not classify(right):
        return False
    match kind:
        case Kind.NULL:
            return False  # identity was checked above
        case Kind.TEXT:
            return str(left) == str(right)
        case Kind.BINARY:
            return bytes(left) == bytes(right)
        case Kind.BOOLEAN:
            return bool(left) is bool(right)
        case Kind.NUMBER:
            return _numbers_equal(left, right)
        case Kind.TEMPORAL:
            return _opaque_equal(left, right)
        case Kind.PATTERN:
            return left.pattern == right.pattern and left.flags == right.flags
        case Kind.CALLABLE:
            return _callables_equal(left, right)
        case Kind.OPAQUE:
            return _opaque_equal(left, right)

    # Composite kinds from here on.
    if any(seen is left for seen in stack):
        return True
    stack.append(left)
    try:
        if kind is Kind.SEQUENCE:
            return _sequences_equal(left, right, stack)
        if kind is Kind.SET:
            return _sets_equal(left, right, stack)
        return _mappings_equal(own_members(left), own_members(right), stack)
    finally:
        stack.pop()


def _numbers_equal(left: Any, right: Any) -> bool:
    # pylint: disable=comparison-with-itself
    if left != left:
        return right != right
    if right != right:
        return False
    if left == 0 and right == 0:
        return math.copysign(1.0, left) == math.copysign(1.0, right)
    return bool(left == right)


def _callables_equal(left: Any, right: Any) -> bool:
    if isinstance(left, types.MethodType) and isinstance(right, types.MethodType):
        return left.__func__ is right.__func__ and left.__self__ is right.__self__
    return False


def _opaque_equal(left: Any, right: Any) -> bool:
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        return False


def _sequences_equal(
    left: Sequence[Any], right: Sequence[Any], stack: list[Any]
) -> bool:
    if len(left) != len(right):
        return False
    for lhs, rhs in zip(left, right):
        # A hole only matches another hole.
        if (lhs is HOLE) is not (rhs is HOLE):
            return False
        if not _eq(lhs, rhs, stack):
            return False
    return True


def _sets_equal(left: Set[Any], right: Set[Any], stack: list[Any]) -> bool:
    if len(left) != len(right):
        return False
    candidates = list(right)
    return all(any(_eq(item, other, stack) for other in candidates) for item in left)


def _mappings_equal(
    left: dict[Any, Any], right: dict[Any, Any], stack: list[Any]
) -> bool:
    if len(left) != len(right):
        return False
    for key, value in left.items():
        if key not in right:
            return False
        if not _eq(value, right[key], stack):
            return False
    return True


# ============================================================================
#                           Shallow comparisons
# ============================================================================


def strict_equals(left: Any, right: Any) -> bool:
    """Return True if `left` and `right` are the same value.

    Immutable scalars (None, bool, int, float, complex, str, bytes) are the
    same value when they have exactly the same type and compare equal, so
    ``1`` is not ``1.0`` and NaN is not NaN. Every other value is only
    the same as itself.
    """
    if type(left) in _SCALAR_TYPES:
        return type(left) is type(right) and bool(left == right)
    return left is right


def loose_equals(left: Any, right: Any) -> bool:
    """Return True if `left == right`; comparisons that raise are unequal."""
    return _opaque_equal(left, right)
