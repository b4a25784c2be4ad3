"""Interface for deferred execution."""

import abc
from collections.abc import Callable
from typing import Any

# pylint: disable=too-few-public-methods

Task = Callable[[], Any]


class Scheduler(abc.ABC):
    """Contract for running a task, now or later.

    A suite hands each test's ``run`` to its scheduler. Implementations
    decide when and where the task runs; they never run two tasks handed to
    them by the same suite at the same time, because the suite only schedules
    the next test once the current one has torn down.
    """

    @abc.abstractmethod
    def schedule(self, task: Task) -> None:
        """Arrange for `task` to be called with no arguments."""
