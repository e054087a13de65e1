"""Pytest fixtures for mouse_stay_up tests. Nothing here needs a display."""

import os
from datetime import datetime, timedelta

import pytest

# pystray picks its backend on import; the dummy one needs no tray or display
os.environ["PYSTRAY_BACKEND"] = "dummy"

from mouse_stay_up import scheduler as scheduler_module
from mouse_stay_up.config import ALLOWED_INTERVALS, Config
from mouse_stay_up.menu import ExclusiveChoice, MenuState


class FakeClock:
    """Wall clock that only moves when the scheduler sleeps."""

    def __init__(self, start: datetime):
        self.start = start
        self.current = start
        self.sleeps = []
        self.hooks = []

    def now(self) -> datetime:
        return self.current

    def elapsed(self) -> float:
        return (self.current - self.start).total_seconds()

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.current += timedelta(seconds=seconds)
        for hook in list(self.hooks):
            hook(self)


class RecordingMover:
    def __init__(self, clock: FakeClock | None = None, result=True):
        self.clock = clock
        self.result = result
        self.calls = []

    def __call__(self):
        self.calls.append(self.clock.elapsed() if self.clock else None)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeThread:
    """Stands in for threading.Thread so runs can be driven by hand."""

    started = []

    def __init__(self, target=None, args=(), name=None, daemon=None):
        self.target = target
        self.args = args
        self.name = name

    def start(self):
        FakeThread.started.append(self)

    def run(self):
        self.target(*self.args)


@pytest.fixture
def config():
    return Config({"enabled": True, "sleep_interval": 30})


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 4, 12, 0, 0))


@pytest.fixture
def mover(clock):
    return RecordingMover(clock)


@pytest.fixture
def menu(config):
    return MenuState(
        intervals=ExclusiveChoice(ALLOWED_INTERVALS, config.sleep_interval),
        hours=ExclusiveChoice(config.working_hours, config.working_hours_interval),
    )


@pytest.fixture
def fake_threads(monkeypatch):
    FakeThread.started = []
    monkeypatch.setattr(scheduler_module.threading, "Thread", FakeThread)
    return FakeThread.started
