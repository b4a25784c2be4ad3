"""Global pytest fixtures for minispec."""

from __future__ import annotations

import pytest

from minispec import Config
from minispec.adapters.schedulers import ImmediateScheduler, TrampolineScheduler

from tests.helpers.recorder import EventRecorder


@pytest.fixture
def recorder() -> EventRecorder:
    """A fresh event recorder; attach it with ``recorder.attach(emitter)``."""
    return EventRecorder()


@pytest.fixture(params=["trampoline", "immediate"])
def sync_config(request: pytest.FixtureRequest) -> Config:
    """A `Config` for each scheduler that runs a suite within `Suite.run`."""
    if request.param == "immediate":
        return Config(scheduler=ImmediateScheduler())
    return Config(scheduler=TrampolineScheduler())
