"""
Exchange transport error classifications.

Raised when a request to the exchange cannot be completed at the
transport level (connection refused, timeout, HTTP error status).
"""

from typing import Optional, Dict, Any


class ExchangeRequestError(Exception):
    """A market-data request failed before a usable body was received."""
    
    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.context = context or {}
        self.recoverable = True
