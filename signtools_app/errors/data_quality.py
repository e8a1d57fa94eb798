"""
Data quality error classifications.

These exceptions describe bad input (configuration values, bar indices)
that the caller can correct and retry with.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for input issues that can be handled gracefully."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class ConfigurationError(DataQualityError):
    """Configuration values failed validation."""
    
    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class InvalidBarIndexError(DataQualityError):
    """Bar index outside the current series."""
    
    def __init__(self, message: str, index: Optional[int] = None, 
                 count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.index = index
        self.count = count
