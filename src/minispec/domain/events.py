"""Event records and the channel names used by tests and suites."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Final

from .values import UNDEFINED

# ============================================================================
#                               Channels
# ============================================================================

ALL: Final = "all"
"""Wildcard channel; its listeners receive every emitted event."""

START: Final = "start"
SETUP: Final = "setup"
ASSERTION: Final = "assertion"
FAILURE: Final = "failure"
ERROR: Final = "error"
TEARDOWN: Final = "teardown"
COMPLETE: Final = "complete"


# ============================================================================
#                               Event record
# ============================================================================


@dataclass(eq=False)
class Event:
    """A transient record dispatched to listeners.

    Attributes:
        type: The channel the event is dispatched on.
        target: The object the event concerns. Filled in with the emitter when
            left as ``None``.
        actual: Actual value of an assertion (``UNDEFINED`` when not relevant).
        expected: Expected value of an assertion (``UNDEFINED`` when not relevant).
        message: Assertion name or user supplied message.
        error: The exception carried by an ``error`` event.
        extra: Any further payload, kept opaque.
    """

    type: str
    target: Any = None
    actual: Any = UNDEFINED
    expected: Any = UNDEFINED
    message: str | None = None
    error: BaseException | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Any) -> Event | None:
        """Normalize the argument of ``emit`` into an event.

        Strings become ``Event(type=value)``; mappings must carry a string
        ``type`` and unknown keys are moved into ``extra``. A nested ``extra``
        mapping is merged; any other ``extra`` value is kept as is under the
        ``"extra"`` key. Anything else is rejected with ``None``.
        """
        if isinstance(value, Event):
            return value if _is_channel(value.type) else None
        if isinstance(value, str):
            return cls(type=value) if _is_channel(value) else None
        if isinstance(value, Mapping) and _is_channel(value.get("type")):
            known = {f.name for f in fields(cls)} - {"extra"}
            kwargs = {key: val for key, val in value.items() if key in known}
            extra = {
                key: val
                for key, val in value.items()
                if key not in known and key != "extra"
            }
            nested = value.get("extra")
            if isinstance(nested, Mapping):
                extra.update(nested)
            elif nested is not None:
                extra["extra"] = nested
            return cls(**kwargs, extra=extra)
        return None

    def __getattr__(self, name: str) -> Any:
        # Only called for names that are not regular attributes.
        try:
            return self.__dict__["extra"][name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            ) from None


def _is_channel(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
