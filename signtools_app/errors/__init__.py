"""
Error classification for the marker lifecycle engine.

Separates recoverable input problems from system failures that must stop
the engine.
"""

from .data_quality import (
    DataQualityError,
    ConfigurationError,
    InvalidBarIndexError,
)
from .system_failures import (
    SystemFailureError,
    SignalSourceMissingError,
    MarkerStateError,
    NavigationOrderError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "ConfigurationError",
    "InvalidBarIndexError",
    # System Failures
    "SystemFailureError",
    "SignalSourceMissingError",
    "MarkerStateError",
    "NavigationOrderError",
]
