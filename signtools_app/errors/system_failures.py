"""
System failure error classifications for unrecoverable errors.

These exceptions represent programming errors or corrupted engine state.
The engine does not try to continue after raising one of them.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class SignalSourceMissingError(SystemFailureError):
    """Backfill or evaluation requested without a signal evaluator."""
    
    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation


class MarkerStateError(SystemFailureError):
    """Invalid marker transition, such as rewriting a confirmed marker."""
    
    def __init__(self, message: str, bar_index: Optional[int] = None, 
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.bar_index = bar_index
        self.attempted_transition = attempted_transition


class NavigationOrderError(SystemFailureError):
    """Confirmation would leave the navigation index out of time order."""
    
    def __init__(self, message: str, open_time: Optional[Any] = None, 
                 last_time: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.open_time = open_time
        self.last_time = last_time
