"""
Marker storage and the navigation index.

MarkerStore is the single owner of markers (keyed by bar index) and of the
time-ordered list of confirmed marker open times used for navigation.
"""

from datetime import datetime
from typing import Optional

import structlog

from ..errors import MarkerStateError, NavigationOrderError
from .models import Marker

logger = structlog.get_logger(__name__)


class MarkerStore:
    """Holds provisional and confirmed markers plus the navigation index."""

    def __init__(self):
        self.logger = logger
        self._markers: dict[int, Marker] = {}
        self._navigation_index: list[datetime] = []

    def __len__(self) -> int:
        return len(self._markers)

    def __contains__(self, bar_index: int) -> bool:
        return bar_index in self._markers

    def get(self, bar_index: int) -> Optional[Marker]:
        """Marker attached to ``bar_index``, if any."""
        return self._markers.get(bar_index)

    @property
    def navigation_index(self) -> tuple[datetime, ...]:
        """Confirmed marker open times, ascending."""
        return tuple(self._navigation_index)

    def markers(self) -> list[Marker]:
        """All markers ordered by bar index."""
        return [self._markers[i] for i in sorted(self._markers)]

    def confirmed_markers(self) -> list[Marker]:
        return [m for m in self.markers() if m.confirmed]

    def provisional_markers(self) -> list[Marker]:
        return [m for m in self.markers() if not m.confirmed]

    def put_provisional(self, marker: Marker) -> Optional[Marker]:
        """
        Store or replace the provisional marker for its bar.

        Returns:
            The marker previously stored for the bar, if any
        """
        previous = self._markers.get(marker.bar_index)
        if previous is not None and previous.confirmed:
            raise MarkerStateError(
                "Confirmed marker cannot be redrawn",
                bar_index=marker.bar_index,
                attempted_transition="confirmed->provisional"
            )
        if marker.confirmed:
            raise MarkerStateError(
                "Only provisional markers can be stored directly",
                bar_index=marker.bar_index,
                attempted_transition="none->confirmed"
            )

        self._markers[marker.bar_index] = marker
        return previous

    def remove_provisional(self, bar_index: int) -> Optional[Marker]:
        """Drop the provisional marker for ``bar_index``; absent is a no-op."""
        marker = self._markers.get(bar_index)
        if marker is None:
            return None
        if marker.confirmed:
            raise MarkerStateError(
                "Confirmed marker cannot be removed",
                bar_index=bar_index,
                attempted_transition="confirmed->none"
            )
        return self._markers.pop(bar_index)

    def confirm(self, bar_index: int, price: float) -> Marker:
        """
        Confirm the provisional marker at ``bar_index``.

        Appends its open time to the navigation index. The index must stay
        strictly ascending; a confirmation that would break the order raises
        instead of re-sorting.
        """
        marker = self._markers.get(bar_index)
        if marker is None:
            raise MarkerStateError(
                "No marker to confirm",
                bar_index=bar_index,
                attempted_transition="none->confirmed"
            )
        if marker.confirmed:
            raise MarkerStateError(
                "Marker already confirmed",
                bar_index=bar_index,
                attempted_transition="confirmed->confirmed"
            )

        if self._navigation_index and marker.open_time <= self._navigation_index[-1]:
            self.logger.error(
                "Confirmation out of time order",
                bar_index=bar_index,
                open_time=marker.open_time.isoformat(),
                last_confirmed=self._navigation_index[-1].isoformat()
            )
            raise NavigationOrderError(
                "Confirmed marker would precede the newest navigation entry",
                open_time=marker.open_time,
                last_time=self._navigation_index[-1]
            )

        confirmed = marker.with_confirmed(price)
        self._markers[bar_index] = confirmed
        self._navigation_index.append(confirmed.open_time)
        return confirmed
