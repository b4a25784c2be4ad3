"""Configuration utilities for minispec.

A `Config` is built once, at composition time, and handed to every suite
that should share it. Nothing in the engine reads global state.
"""

import os
from dataclasses import dataclass, field

from minispec.adapters.schedulers import TrampolineScheduler, build_scheduler
from minispec.interfaces.scheduler import Scheduler

SCHEDULER_ENV_VAR = "MINISPEC_SCHEDULER"  # pragma: no mutate
DEFAULT_SCHEDULER = "trampoline"  # pragma: no mutate


@dataclass(frozen=True)
class Config:
    """Immutable engine configuration.

    Attributes:
        scheduler: Runs each test of a suite. Defaults to a fresh
            `TrampolineScheduler`, which runs a whole suite synchronously
            without growing the call stack from test to test.
    """

    scheduler: Scheduler = field(default_factory=TrampolineScheduler)


def get_scheduler_name() -> str:
    """Get the scheduler name from the environment.

    Returns:
        The value of `MINISPEC_SCHEDULER`, or `DEFAULT_SCHEDULER` when unset
        or empty.
    """
    return os.environ.get(SCHEDULER_ENV_VAR) or DEFAULT_SCHEDULER


def build_config(scheduler_name: str | None = None) -> Config:
    """Build a `Config`.

    Args:
        scheduler_name: Registered scheduler name (``trampoline``,
            ``immediate`` or ``thread``). Defaults to `get_scheduler_name()`.

    Raises:
        UnknownSchedulerError: If the scheduler name is not registered.
    """
    return Config(scheduler=build_scheduler(scheduler_name or get_scheduler_name()))
