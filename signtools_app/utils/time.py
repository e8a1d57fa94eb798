"""
Time formatting utilities for chart object identity.

Marker ids are derived from the bar open time so that the same bar always
maps to the same chart object, across redraws and after backfill.
"""

from datetime import datetime

MARKER_ID_PREFIX = "sign_at_"


def format_general_time(ts: datetime) -> str:
    """
    Format a timestamp in general date/long time form.

    Produces ``M/d/yyyy h:mm:ss AM`` (no zero padding on month, day and
    hour), independent of the process locale.

    Args:
        ts: Bar open time

    Returns:
        Formatted timestamp string
    """
    hour = ts.hour % 12 or 12
    meridiem = "AM" if ts.hour < 12 else "PM"
    return f"{ts.month}/{ts.day}/{ts.year} {hour}:{ts.minute:02d}:{ts.second:02d} {meridiem}"


def marker_id_for(open_time: datetime) -> str:
    """Chart object id for the marker attached to the bar opening at ``open_time``."""
    return MARKER_ID_PREFIX + format_general_time(open_time)
