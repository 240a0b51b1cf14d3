"""
Error classification system for the RSI screener.

Data quality and transport errors are recoverable and only cost the
affected symbol; system failures abort the run.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    InsufficientDataError,
)
from .exchange import ExchangeRequestError
from .system_failures import (
    SystemFailureError,
    CandidateListError,
    ConfigurationError,
)

# Errors that skip a single symbol without aborting the scan
RECOVERABLE_ERRORS = (DataQualityError, ExchangeRequestError)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "InsufficientDataError",
    # Transport Errors
    "ExchangeRequestError",
    # System Failures
    "SystemFailureError",
    "CandidateListError",
    "ConfigurationError",
    "RECOVERABLE_ERRORS",
]
