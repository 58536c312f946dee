"""
Shared fixtures: a controllable clock, a private metrics collector and a
fresh order store per test.
"""
from datetime import datetime, timedelta, timezone

import pytest

from order_tracker.lib.metrics import MetricsCollector
from order_tracker.services.order_store import OrderStore


class FakeClock:
    """Clock that only moves when told to."""
    
    def __init__(self, start: datetime):
        self.now = start
    
    def __call__(self) -> datetime:
        return self.now
    
    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def metrics():
    """Fresh metrics collector for each test."""
    return MetricsCollector()


@pytest.fixture
def saved():
    """Collects every collection handed to the save hook."""
    return []


@pytest.fixture
def store(clock, metrics, saved):
    return OrderStore(on_change=saved.append, clock=clock, metrics=metrics)
