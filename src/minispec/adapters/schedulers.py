"""Schedulers for minispec."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import deque
from collections.abc import Callable

from minispec.errors import UnknownSchedulerError
from minispec.interfaces.scheduler import Scheduler, Task

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class ImmediateScheduler(Scheduler):
    """Run every task synchronously, right away.

    Note:
        A suite run on this scheduler nests each test inside the teardown of
        the previous one, so very long suites can exhaust the call stack.
        Prefer `TrampolineScheduler`.
    """

    def schedule(self, task: Task) -> None:
        """Call the task."""
        task()


class TrampolineScheduler(Scheduler):
    """Run tasks synchronously without nesting them.

    A task scheduled while another task is running on the same thread is
    queued and runs as soon as the running task returns. The first call to
    `schedule` on a thread therefore returns only once the queue is drained.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def schedule(self, task: Task) -> None:
        """Queue the task, and drain the queue unless it is already draining."""
        queue: deque[Task] = self._queue()
        queue.append(task)
        if getattr(self._local, "draining", False):
            return
        self._local.draining = True
        try:
            while queue:
                queue.popleft()()
        except BaseException:
            queue.clear()
            raise
        finally:
            self._local.draining = False

    def _queue(self) -> deque[Task]:
        if not hasattr(self._local, "queue"):
            self._local.queue = deque()
        return self._local.queue


class ThreadScheduler(Scheduler):
    """Run each task on its own daemon thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []

    def schedule(self, task: Task) -> None:
        """Start a thread running the task."""
        thread = threading.Thread(target=task, name="minispec-task", daemon=True)
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
        thread.start()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the threads started so far, including ones they start."""
        while True:
            with self._lock:
                pending = [t for t in self._threads if t.is_alive()]
            if not pending:
                return
            for thread in pending:
                thread.join(timeout)
                if thread.is_alive():
                    logger.warning("Task thread %s still running", thread.name)
                    return


class AsyncioScheduler(Scheduler):
    """Post each task to an asyncio event loop.

    Args:
        loop: The loop to post to. Defaults to the running loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def schedule(self, task: Task) -> None:
        """Schedule the task on the loop; safe to call from any thread."""
        self._loop.call_soon_threadsafe(task)


SCHEDULERS: dict[str, Callable[[], Scheduler]] = {
    "trampoline": TrampolineScheduler,
    "immediate": ImmediateScheduler,
    "thread": ThreadScheduler,
}


def build_scheduler(name: str) -> Scheduler:
    """Build a scheduler by its registered name.

    Raises:
        UnknownSchedulerError: If `name` is not in `SCHEDULERS`.
    """
    try:
        factory = SCHEDULERS[name.strip().lower()]
    except KeyError:
        raise UnknownSchedulerError(name, tuple(SCHEDULERS)) from None
    return factory()
