"""Suites: ordered collections of tests run one at a time."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Iterator
from typing import Any, Self

from minispec.config import Config

from .eventhub import EventEmitter
from .events import ALL, ASSERTION, COMPLETE, ERROR, FAILURE, START, TEARDOWN, Event
from .test_case import TestBody, TestCase

logger = logging.getLogger(__name__)


class Suite(EventEmitter):
    """An ordered collection of tests, run strictly one after another.

    While a suite runs, every event emitted by the current test is re-emitted
    on the suite, so a reporter listening on the suite sees the whole run.
    The suite emits ``start`` before the first test and ``complete`` after
    the last one, and keeps the total number of assertions, failures and
    errors of the tests it ran.

    The next test is only started once the current test has emitted
    ``teardown``, however long its body takes to call ``done``. A test that
    never completes therefore stalls the suite.

    Slots of `tests` that do not hold a `TestCase` (for instance ``None``
    after a test was cleared) are skipped.

    Args:
        name: Suite name, defaults to ``"Anonymous Suite"``.
        tests: Initial slots.
        config: Engine configuration; its scheduler starts each test.
    """

    __test__ = False  # not a pytest test class

    name: str = "Anonymous Suite"

    def __init__(
        self,
        name: str | None = None,
        tests: Iterable[Any] | None = None,
        *,
        config: Config | None = None,
    ) -> None:
        if name is not None:
            self.name = str(name)
        self.tests: list[Any] = list(tests) if tests is not None else []
        self.config = config or Config()
        self.assertions = 0
        self.failures = 0
        self.errors = 0
        self.is_running = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, tests={len(self.tests)})"

    def __len__(self) -> int:
        return len(self.tests)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.tests)

    def __getitem__(self, index: int) -> Any:
        return self.tests[index]

    @property
    def test_count(self) -> int:
        """Number of slots holding a `TestCase`."""
        return sum(isinstance(test, TestCase) for test in self.tests)

    def add_test(
        self, name: str | TestBody | None = None, body: TestBody | None = None
    ) -> Self:
        """Append a new `TestCase`; the name is optional."""
        self.tests.append(TestCase(name, body))
        return self

    def shuffle(self, rng: random.Random | None = None) -> Self:
        """Shuffle the slots in place, to surface state leaking between tests."""
        (rng or random.Random()).shuffle(self.tests)
        return self

    def index_of(self, position: int = 0) -> int | None:
        """Return the index of the first test at or after `position`.

        Args:
            position: Start index; negative values count from the end.

        Returns:
            The index of the next slot holding a `TestCase`, or None.
        """
        length = len(self.tests)
        if position < 0:
            position = max(length + position, 0)
        for index in range(position, length):
            if isinstance(self.tests[index], TestCase):
                return index
        return None

    def run(self) -> Self:
        """Run every test in order.

        Does nothing if the suite is already running. Resets the totals,
        emits ``start`` and starts the first test; each following test is
        started from the teardown of the previous one.
        """
        if self.is_running:
            return self
        self.is_running = True
        self.assertions = self.failures = self.errors = 0
        logger.debug("Starting suite %r (%d slots)", self.name, len(self.tests))
        self.emit(START)
        self._advance(0)
        return self

    def _advance(self, position: int) -> None:
        index = self.index_of(position)
        if index is None:
            self.is_running = False
            logger.debug(
                "Suite %r complete: %d assertions, %d failures, %d errors",
                self.name,
                self.assertions,
                self.failures,
                self.errors,
            )
            self.emit(COMPLETE)
            return
        test: TestCase = self.tests[index]
        # Ahead of the test's own wildcard listeners, which may return False.
        # pylint: disable-next=protected-access
        test._prepend(ALL, self._relay(test, index))
        self.config.scheduler.schedule(test.run)

    def _relay(self, test: TestCase, index: int) -> Any:
        """Build the listener that proxies and tallies the events of `test`."""

        def relay(event: Event) -> None:
            self.emit(event)
            if event.type == ASSERTION:
                self.assertions += 1
            elif event.type == FAILURE:
                self.failures += 1
            elif event.type == ERROR:
                self.errors += 1
            elif event.type == TEARDOWN and event.target is test:
                test.off(ALL, relay)
                self._advance(index + 1)

        return relay
