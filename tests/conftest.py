"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from signtools_app.adapters.memory import InMemoryChart, RecordingNotifications
from signtools_app.data.models import BarSeries
from signtools_app.markers.models import Signal

START_TIME = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def bar_time(index: int) -> datetime:
    """Open time of bar ``index`` in the hourly test series."""
    return START_TIME + timedelta(hours=index)


class ScriptedEvaluator:
    """Evaluator answering from a mutable index -> Signal mapping."""

    def __init__(self, signals: Optional[Dict[int, Signal]] = None):
        self.signals: Dict[int, Signal] = dict(signals or {})
        self.calls: List[int] = []

    def __call__(self, index: int) -> Optional[Signal]:
        self.calls.append(index)
        return self.signals.get(index)


@pytest.fixture
def make_series():
    """Factory for an hourly series where bar i spans 98+i .. 102+i."""
    def _make(count: int) -> BarSeries:
        return BarSeries.from_ohlc([
            (bar_time(i), 100.0 + i, 102.0 + i, 98.0 + i, 101.0 + i)
            for i in range(count)
        ])
    return _make


@pytest.fixture
def make_chart(make_series):
    """Factory for an in-memory chart with a 90..130 visible price range."""
    def _make(count: int = 11, visible_bar_count: int = 5) -> InMemoryChart:
        return InMemoryChart(
            make_series(count),
            visible_bar_count=visible_bar_count,
            price_range=(90.0, 130.0),
        )
    return _make


@pytest.fixture
def chart(make_chart) -> InMemoryChart:
    """Eleven-bar chart (bar 10 open), five bars visible, margin 2.0."""
    return make_chart()


@pytest.fixture
def evaluator() -> ScriptedEvaluator:
    return ScriptedEvaluator()


@pytest.fixture
def notifications() -> RecordingNotifications:
    return RecordingNotifications()


@pytest.fixture
def make_evaluator():
    """Factory for scripted evaluators."""
    return ScriptedEvaluator


@pytest.fixture
def times():
    """Bar index -> open time helper."""
    return bar_time
