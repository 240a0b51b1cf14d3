"""
Logging configuration and utilities for the RSI screener.
"""
from .config import configure_logging, get_logger, log_classification

__all__ = ["configure_logging", "get_logger", "log_classification"]
