"""Moving-average crossover signal evaluator."""

from typing import Optional

from ..adapters.base import BarAccess
from ..config.defaults import SignalParams
from ..markers.models import Signal


def calculate_sma(bars: BarAccess, index: int, period: int) -> Optional[float]:
    """
    Simple moving average of closes ending at ``index``.

    Args:
        bars: Bar series
        index: Last bar included in the average
        period: Number of bars averaged

    Returns:
        SMA value or None if fewer than ``period`` bars are available
    """
    if period <= 0 or index < period - 1:
        return None
    closes = [bars.close_at(i) for i in range(index - period + 1, index + 1)]
    return sum(closes) / period


class MovingAverageCrossEvaluator:
    """
    Signals where the short and long moving averages cross.

    Sell when the long average crosses above the short one, Buy when it
    crosses below. The open bar is evaluated on its current close, so its
    answer can change until the bar closes.
    """

    def __init__(self, bars: BarAccess, params: Optional[SignalParams] = None):
        self.bars = bars
        self.params = params or SignalParams()

    def __call__(self, index: int) -> Optional[Signal]:
        if index < 1:
            return None

        short_prev = calculate_sma(self.bars, index - 1, self.params.short_period)
        long_prev = calculate_sma(self.bars, index - 1, self.params.long_period)
        short_now = calculate_sma(self.bars, index, self.params.short_period)
        long_now = calculate_sma(self.bars, index, self.params.long_period)
        if None in (short_prev, long_prev, short_now, long_now):
            return None

        if long_prev < short_prev and long_now > short_now:
            return Signal.SELL
        if long_prev > short_prev and long_now < short_now:
            return Signal.BUY
        return None
