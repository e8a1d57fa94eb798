"""
Bar data models and the in-memory bar series.

The series is append-only. Only the last bar is mutable; it becomes
immutable as soon as a new bar opens.
"""

from bisect import bisect_left
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..errors import DataQualityError, InvalidBarIndexError


@dataclass(frozen=True)
class Bar:
    """One interval of the price series."""
    index: int
    open_time: datetime      # UTC bar open time
    open: float
    high: float
    low: float
    close: float

    def with_price(self, price: float) -> "Bar":
        """Apply a tick: move the close and stretch the range."""
        return replace(
            self,
            high=max(self.high, price),
            low=min(self.low, price),
            close=price,
        )


class BarSeries:
    """Append-only bar series with a mutable last bar."""

    def __init__(self, bars: Optional[list[Bar]] = None):
        self._bars: list[Bar] = []
        self._open_times: list[datetime] = []
        for bar in bars or []:
            self.append(bar)

    @classmethod
    def from_ohlc(cls, rows: list[tuple]) -> "BarSeries":
        """Build a series from ``(open_time, open, high, low, close)`` rows."""
        series = cls()
        for open_time, open_, high, low, close in rows:
            series.append(Bar(
                index=series.count,
                open_time=open_time,
                open=open_,
                high=high,
                low=low,
                close=close,
            ))
        return series

    @property
    def count(self) -> int:
        return len(self._bars)

    @property
    def last_bar(self) -> Bar:
        if not self._bars:
            raise InvalidBarIndexError("Series is empty", index=-1, count=0)
        return self._bars[-1]

    def __len__(self) -> int:
        return len(self._bars)

    def __getitem__(self, index: int) -> Bar:
        return self._bar(index)

    def append(self, bar: Bar) -> None:
        """Append a new bar; its index and time must extend the series."""
        if bar.index != self.count:
            raise InvalidBarIndexError(
                f"Expected bar index {self.count}, got {bar.index}",
                index=bar.index,
                count=self.count
            )
        if self._open_times and bar.open_time <= self._open_times[-1]:
            raise DataQualityError(
                "Bar open time must be later than the previous bar",
                context={"open_time": bar.open_time.isoformat(),
                         "previous": self._open_times[-1].isoformat()}
            )
        self._bars.append(bar)
        self._open_times.append(bar.open_time)

    def open_bar(self, open_time: datetime, price: float) -> Bar:
        """Open a new bar at ``price``; the previous last bar closes."""
        bar = Bar(
            index=self.count,
            open_time=open_time,
            open=price,
            high=price,
            low=price,
            close=price,
        )
        self.append(bar)
        return bar

    def update_last(self, price: float) -> Bar:
        """Apply a tick to the still-open last bar."""
        updated = self.last_bar.with_price(price)
        self._bars[-1] = updated
        return updated

    def open_time_at(self, index: int) -> datetime:
        return self._bar(index).open_time

    def high_at(self, index: int) -> float:
        return self._bar(index).high

    def low_at(self, index: int) -> float:
        return self._bar(index).low

    def close_at(self, index: int) -> float:
        return self._bar(index).close

    def index_by_time(self, open_time: datetime) -> int:
        """Index of the bar containing ``open_time`` (latest bar opened at or before it)."""
        pos = bisect_left(self._open_times, open_time)
        if pos < len(self._open_times) and self._open_times[pos] == open_time:
            return pos
        return max(pos - 1, 0)

    def _bar(self, index: int) -> Bar:
        if index < 0 or index >= len(self._bars):
            raise InvalidBarIndexError(
                f"Bar index {index} out of range",
                index=index,
                count=len(self._bars)
            )
        return self._bars[index]
