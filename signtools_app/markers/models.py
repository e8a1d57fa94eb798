"""
Marker data models.

Markers are immutable records; lifecycle changes produce new instances.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class Signal(str, Enum):
    """Directional signal returned by an evaluator. Absence is ``None``."""
    BUY = "buy"
    SELL = "sell"


class MarkerStatus(str, Enum):
    """Marker lifecycle states, used for the audit trail."""
    NONE = "none"
    PROVISIONAL = "provisional"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class Marker:
    """A drawn signal marker for one bar."""

    bar_index: int
    open_time: datetime
    kind: Signal
    marker_id: str                # Chart object handle
    price: float                  # Displayed vertical position
    confirmed: bool = False

    @property
    def status(self) -> MarkerStatus:
        return MarkerStatus.CONFIRMED if self.confirmed else MarkerStatus.PROVISIONAL

    def with_kind(self, kind: Signal, price: float) -> "Marker":
        """Redraw of a provisional marker with a fresh evaluation."""
        return replace(self, kind=kind, price=price)

    def with_confirmed(self, price: float) -> "Marker":
        """Terminal transition to confirmed at the adjusted price."""
        return replace(self, price=price, confirmed=True)
