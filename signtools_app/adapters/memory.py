"""
In-memory host adapters.

Headless implementations of the chart and sound collaborators, used for
replays, demos and tests.
"""

from datetime import datetime
from typing import Any, Callable, Optional

import structlog

from ..data.models import BarSeries
from .base import DrawnMarker, HostEvent, NavigationButton
from .notifications import BaseNotificationAdapter

logger = structlog.get_logger(__name__)


class InMemoryChart:
    """Chart state kept in plain Python structures."""

    def __init__(
        self,
        bars: BarSeries,
        visible_bar_count: int = 50,
        price_range: Optional[tuple[float, float]] = None,
        theme_buy_color: Optional[str] = "green",
        theme_sell_color: Optional[str] = "red",
    ):
        self.logger = logger
        self.bars = bars
        self.theme_buy_color = theme_buy_color
        self.theme_sell_color = theme_sell_color
        self.objects: dict[str, DrawnMarker] = {}
        self.buttons: list[NavigationButton] = []
        self.alert_visible = False
        self.alert_color: Optional[str] = None
        self.scroll_history: list[int] = []
        self._visible_bar_count = visible_bar_count
        self._first_visible_index = max(bars.count - visible_bar_count, 0)
        self._price_range = price_range or self._range_for(self._first_visible_index)
        self._handlers: dict[HostEvent, list[Callable[[], None]]] = {
            event: [] for event in HostEvent
        }

    @property
    def visible_bar_count(self) -> int:
        return self._visible_bar_count

    @property
    def first_visible_index(self) -> int:
        return self._first_visible_index

    @property
    def last_visible_index(self) -> int:
        return self._first_visible_index + self._visible_bar_count - 1

    @property
    def visible_price_range(self) -> tuple[float, float]:
        return self._price_range

    def draw_marker(self, marker_id: str, icon: str, time: datetime,
                    price: float, color: Optional[str]) -> DrawnMarker:
        drawn = DrawnMarker(marker_id=marker_id, icon=icon, time=time, price=price, color=color)
        self.objects[marker_id] = drawn
        return drawn

    def remove_marker(self, marker_id: str) -> None:
        self.objects.pop(marker_id, None)

    def find_marker(self, marker_id: str) -> Optional[DrawnMarker]:
        return self.objects.get(marker_id)

    def scroll_to(self, index: int) -> None:
        self._first_visible_index = index
        self.scroll_history.append(index)

    def set_visible_range(self, low: float, high: float) -> None:
        self._price_range = (low, high)

    def show_alert(self, color: Optional[str]) -> None:
        self.alert_visible = True
        if color is not None:
            self.alert_color = color

    def hide_alert(self) -> None:
        self.alert_visible = False

    def add_buttons(self, buttons: list[NavigationButton]) -> None:
        self.buttons.extend(buttons)

    def press(self, label: str) -> Any:
        """Click the navigation button with ``label``."""
        for button in self.buttons:
            if button.label.strip() == label.strip():
                return button.action()
        raise KeyError(label)

    def subscribe(self, event: HostEvent, callback: Callable[[], None]) -> None:
        self._handlers[event].append(callback)

    def unsubscribe(self, event: HostEvent, callback: Callable[[], None]) -> None:
        if callback in self._handlers[event]:
            self._handlers[event].remove(callback)

    def subscriber_count(self, event: HostEvent) -> int:
        return len(self._handlers[event])

    def emit(self, event: HostEvent) -> None:
        """Dispatch a host event to subscribers, in registration order."""
        for callback in list(self._handlers[event]):
            callback()

    def tick(self, price: float) -> None:
        """Apply a price update to the open bar and raise the tick event."""
        self.bars.update_last(price)
        self.emit(HostEvent.TICK)

    def open_bar(self, open_time: datetime, price: float) -> None:
        """Open a new bar and raise bar-opened followed by its first tick."""
        self.bars.open_bar(open_time, price)
        self.emit(HostEvent.BAR_OPENED)
        self.emit(HostEvent.TICK)

    def _range_for(self, first_index: int) -> tuple[float, float]:
        if self.bars.count == 0:
            return (0.0, 0.0)
        first_index = min(max(first_index, 0), self.bars.count - 1)
        last = min(first_index + self._visible_bar_count, self.bars.count)
        lows = [self.bars.low_at(i) for i in range(first_index, last)]
        highs = [self.bars.high_at(i) for i in range(first_index, last)]
        return (min(lows), max(highs))


class RecordingNotifications(BaseNotificationAdapter):
    """Sound output that keeps every requested resource."""

    def __init__(self, name: str = "recording"):
        super().__init__(name)
        self.played: list[str] = []

    def _play(self, resource: str) -> None:
        self.played.append(resource)
