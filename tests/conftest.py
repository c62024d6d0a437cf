"""Root conftest — shared test configuration and a controllable clock."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Tests build their own empty stores; never seed demo data
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("LOG_FORMAT", "text")


NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns a fixed instant that advances by `tick` on every call."""

    def __init__(self, start: datetime = NOW, tick: timedelta = timedelta(seconds=1)):
        self.current = start
        self.tick = tick

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.tick
        return value


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
