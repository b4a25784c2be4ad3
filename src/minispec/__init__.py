"""minispec

A minimal, event-driven unit-testing library. Tests are wrapped in
`TestCase` objects that record assertions as events; a `Suite` runs them one
at a time and aggregates the results for any reporter listening in.
"""

from minispec.config import Config
from minispec.domain.equality import equals
from minispec.domain.eventhub import EventEmitter
from minispec.domain.events import Event
from minispec.domain.suite import Suite
from minispec.domain.test_case import TestCase
from minispec.domain.values import HOLE, UNDEFINED, sparse

__all__ = [
    "HOLE",
    "UNDEFINED",
    "Config",
    "Event",
    "EventEmitter",
    "Suite",
    "TestCase",
    "__version__",
    "equals",
    "sparse",
]
__version__ = "1.0.0"
