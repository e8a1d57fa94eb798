#!/usr/bin/env python3
"""
Basic Usage Example - SignTools marker engine

This script replays a synthetic price series through an in-memory chart and
shows how to:
- Build the engine for a symbol profile
- Backfill historical crossover signals
- Feed live ticks and bar opens
- Walk the confirmed markers with the navigation buttons

Run: python examples/basic_usage.py
"""

import math
from datetime import datetime, timedelta, timezone

from signtools_app.adapters.memory import InMemoryChart, RecordingNotifications
from signtools_app.data.models import BarSeries
from signtools_app.engine import SignToolsEngine
from signtools_app.logging import configure_logging

START = datetime(2024, 1, 1, tzinfo=timezone.utc)
BAR = timedelta(minutes=15)


def wave(i: int) -> float:
    """Synthetic close price with a few crossovers per hundred bars."""
    return 1.10 + 0.01 * math.sin(i / 6.0) + 0.002 * math.sin(i / 1.7)


def create_series(count: int) -> BarSeries:
    """Create a series whose last bar is still open."""
    rows = []
    for i in range(count):
        close = wave(i)
        open_ = wave(i - 1)
        rows.append((START + BAR * i, open_, max(open_, close) + 0.0005,
                     min(open_, close) - 0.0005, close))
    return BarSeries.from_ohlc(rows)


def print_markers(engine: SignToolsEngine) -> None:
    print(f"📍 {len(engine.markers)} markers, {len(engine.navigation_index)} confirmed")
    for marker in engine.markers:
        state = "confirmed" if marker.confirmed else "provisional"
        print(f"  {marker.marker_id}: {marker.kind.value} @ {marker.price:.5f} ({state})")
    print()


def main():
    """Main demo function."""
    configure_logging(level="WARNING")

    print("🚀 SignTools marker engine - Basic Usage Demo")
    print("=" * 60)

    series = create_series(120)
    chart = InMemoryChart(series, visible_bar_count=40)
    sounds = RecordingNotifications()
    engine = SignToolsEngine.from_symbol(
        chart, "XAUUSD", notifications=sounds,
        overrides={"signal": {"short_period": 5, "long_period": 15}}
    )
    engine.attach()

    print("1. Backfill on first tick")
    chart.tick(series.last_bar.close)
    print_markers(engine)

    print("2. Live session")
    for i in range(120, 200):
        chart.open_bar(START + BAR * i, wave(i - 1))
        for step in range(1, 4):
            chart.tick(wave(i - 1) + (wave(i) - wave(i - 1)) * step / 3)
    print_markers(engine)
    print(f"🔔 Alert visible: {chart.alert_visible}, sounds played: {len(sounds.played)}")
    engine.handle_key_down()
    print(f"🔕 Alert visible after key press: {chart.alert_visible}\n")

    print("3. Navigation")
    print(f"  ◀◀ oldest -> first visible bar {chart.press('◀◀')}")
    for _ in range(3):
        target = chart.press("▶")
        print(f"  ▶ next marker -> {target}")
    for _ in range(2):
        target = chart.press("◀")
        print(f"  ◀ previous marker -> {target}")
    print(f"  ▶▶ newest -> first visible bar {chart.press('▶▶')}")

    engine.detach()
    print("\n✅ Demo complete")


if __name__ == "__main__":
    main()
