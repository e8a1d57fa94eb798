"""
Navigation across confirmed markers.

Jumps are anchored on the right edge of the chart: the target marker ends
up ``jump_margin`` bars in from the last visible bar, which is also where
the next jump takes its reference time from. Repeated presses therefore
walk the markers one by one.
"""

from bisect import bisect_left
from datetime import datetime
from typing import Optional

import structlog

from ..adapters.base import ChartAdapter, NavigationButton
from ..config.defaults import NavigationParams
from ..markers.store import MarkerStore

logger = structlog.get_logger(__name__)


class NavigationEngine:
    """Scrolls the chart between confirmed markers."""

    def __init__(
        self,
        chart: ChartAdapter,
        store: MarkerStore,
        params: Optional[NavigationParams] = None,
    ):
        self.logger = logger
        self.chart = chart
        self.store = store
        self.params = params or NavigationParams()

    def search(self, time: datetime) -> int:
        """Position of ``time`` in the navigation index, or its insertion point."""
        return bisect_left(self.store.navigation_index, time)

    def jump_to_previous(self, reference_time: Optional[datetime] = None) -> Optional[datetime]:
        """
        Scroll to the confirmed marker before the reference time.

        Args:
            reference_time: Defaults to the bar ``jump_margin`` bars in
                from the right edge

        Returns:
            Open time of the marker jumped to, or None if there is none
        """
        times = self.store.navigation_index
        if reference_time is None:
            reference_time = self._edge_time(-self.params.jump_margin)
        if reference_time is None or not times:
            return None

        pos = self.search(reference_time)
        if pos == 0:
            self.logger.debug("Already at oldest marker", reference=reference_time.isoformat())
            return None

        target = times[pos - 1]
        self.scroll_to_time(target)
        return target

    def jump_to_next(self, reference_time: Optional[datetime] = None) -> Optional[datetime]:
        """
        Scroll to the confirmed marker after the reference time.

        Args:
            reference_time: Defaults to the bar right after the current
                jump anchor

        Returns:
            Open time of the marker jumped to, or None if there is none
        """
        times = self.store.navigation_index
        if reference_time is None:
            reference_time = self._edge_time(1 - self.params.jump_margin)
        if reference_time is None or not times:
            return None

        pos = self.search(reference_time)
        if pos < len(times) and times[pos] == reference_time:
            pos += 1
        if pos >= len(times):
            self.logger.debug("Already at newest marker", reference=reference_time.isoformat())
            return None

        target = times[pos]
        self.scroll_to_time(target)
        return target

    def jump_to_oldest(self) -> int:
        """Scroll to the start of the series."""
        return self.scroll_to_index(0)

    def jump_to_newest(self) -> int:
        """Scroll past the last bar, leaving room for new bars."""
        return self.scroll_to_index(self.chart.bars.count + self.params.newest_overscroll)

    def scroll_to_time(self, time: datetime) -> int:
        return self.scroll_to_index(self.chart.bars.index_by_time(time))

    def scroll_to_index(self, index: int) -> int:
        """
        Bring bar ``index`` in near the right edge and refit the price range.

        Returns:
            The bar index the chart was scrolled to
        """
        bars = self.chart.bars
        visible = self.chart.visible_bar_count
        if bars.count == 0:
            return 0

        left = index - visible
        left = max(left, 0)
        left = min(left, bars.count - 1)
        position = left + self.params.jump_margin
        self.chart.scroll_to(position)

        end = min(left + visible, bars.count)
        highest = max(bars.high_at(i) for i in range(left, end))
        lowest = min(bars.low_at(i) for i in range(left, end))
        margin = (highest - lowest) * self.params.range_margin_fraction
        self.chart.set_visible_range(lowest - margin, highest + margin)

        self.logger.info("Chart scrolled", target_index=index, scroll_index=position)
        return position

    def buttons(self) -> list[NavigationButton]:
        """Oldest / previous / next / newest actions for the host panel."""
        return [
            NavigationButton(label="◀◀", action=self.jump_to_oldest),
            NavigationButton(label=" ◀ ", action=self.jump_to_previous),
            NavigationButton(label=" ▶ ", action=self.jump_to_next),
            NavigationButton(label="▶▶", action=self.jump_to_newest),
        ]

    def _edge_time(self, offset: int) -> Optional[datetime]:
        bars = self.chart.bars
        if bars.count == 0:
            return None
        index = self.chart.last_visible_index + offset
        index = min(max(index, 0), bars.count - 1)
        return bars.open_time_at(index)
