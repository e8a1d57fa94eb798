"""
Host collaborator interfaces.

The engine only talks to the chart, the sound output and the signal source
through these protocols, so any charting host can plug in.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from ..markers.models import Signal

SignalEvaluator = Callable[[int], Optional[Signal]]
"""Pure function ``evaluate(index) -> Signal | None`` over the bar series."""


class HostEvent(str, Enum):
    """Host events the engine subscribes to."""
    TICK = "tick"
    BAR_OPENED = "bar_opened"
    KEY_DOWN = "key_down"


@dataclass(frozen=True)
class NavigationButton:
    """Labelled navigation action for the host's button panel."""
    label: str
    action: Callable[[], Any]


@dataclass(frozen=True)
class DrawnMarker:
    """Chart-side view of a drawn marker object."""
    marker_id: str
    icon: str
    time: datetime
    price: float
    color: Optional[str]


class BarAccess(Protocol):
    """Read access to the host's bar series."""

    @property
    def count(self) -> int: ...

    def open_time_at(self, index: int) -> datetime: ...

    def high_at(self, index: int) -> float: ...

    def low_at(self, index: int) -> float: ...

    def close_at(self, index: int) -> float: ...

    def index_by_time(self, open_time: datetime) -> int: ...


class ChartAdapter(Protocol):
    """Rendering and viewport operations provided by the charting host."""

    bars: BarAccess
    theme_buy_color: Optional[str]
    theme_sell_color: Optional[str]

    @property
    def visible_bar_count(self) -> int: ...

    @property
    def last_visible_index(self) -> int: ...

    @property
    def visible_price_range(self) -> tuple[float, float]: ...

    def draw_marker(self, marker_id: str, icon: str, time: datetime,
                    price: float, color: Optional[str]) -> DrawnMarker: ...

    def remove_marker(self, marker_id: str) -> None: ...

    def find_marker(self, marker_id: str) -> Optional[DrawnMarker]: ...

    def scroll_to(self, index: int) -> None: ...

    def set_visible_range(self, low: float, high: float) -> None: ...

    def show_alert(self, color: Optional[str]) -> None: ...

    def hide_alert(self) -> None: ...

    def add_buttons(self, buttons: list[NavigationButton]) -> None: ...

    def subscribe(self, event: HostEvent, callback: Callable[[], None]) -> None: ...

    def unsubscribe(self, event: HostEvent, callback: Callable[[], None]) -> None: ...


class NotificationAdapter(Protocol):
    """Sound output provided by the host."""

    def play_sound(self, resource: str) -> None: ...
