"""
System failure error classifications for unrecoverable errors.

These exceptions abort the whole screening run.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class CandidateListError(SystemFailureError):
    """The candidate symbol listing could not be retrieved or parsed."""
    
    def __init__(self, message: str, endpoint: Optional[str] = None,
                 cause: Optional[Exception] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.endpoint = endpoint
        self.cause = cause


class ConfigurationError(SystemFailureError):
    """Configuration failed validation or could not be loaded."""
    
    def __init__(self, message: str, errors: Optional[list] = None,
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
        self.source = source
