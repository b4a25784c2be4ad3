"""Library error definitions.

Test failures and errors raised inside test bodies or listeners are never
raised to callers; they are reported as events. The exceptions below cover
misuse of the library itself.
"""


class MinispecError(Exception):
    """Base class for minispec errors."""


class UnknownSchedulerError(MinispecError, ValueError):
    """Raised when a scheduler is requested by a name that is not registered."""

    def __init__(self, name: str, choices: tuple[str, ...]) -> None:
        super().__init__(
            f"Unknown scheduler {name!r}; expected one of: {', '.join(choices)}"
        )
        self.name = name
        self.choices = choices


class TargetLoadError(MinispecError):
    """Raised when a ``module:attribute`` target cannot be loaded as a suite."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Cannot load {target!r}: {reason}")
        self.target = target
        self.reason = reason
