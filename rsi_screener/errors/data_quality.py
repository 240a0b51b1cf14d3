"""
Data quality error classifications for exchange market data.

These exceptions describe problems with a single symbol's data. They are
recoverable: the screener skips the affected symbol and keeps scanning.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""
    
    def __init__(self, message: str, raw_data: Optional[str] = None, 
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InsufficientDataError(DataQualityError):
    """Not enough price history for the indicator period."""
    
    def __init__(self, message: str, required_count: Optional[int] = None, 
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
