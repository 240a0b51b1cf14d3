"""
Centralized logging configuration for the RSI screener.

This module provides standardized logging configuration using structlog
for all components. Every component obtains its logger through
get_logger() so output format and level are controlled in one place.
"""
import logging
import sys
from typing import IO, Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    stream: Optional[IO[str]] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        stream: Destination stream (defaults to stdout)
    """
    # Convert string level to logging constant
    log_level = getattr(logging, level.upper())

    # Configure standard library logging
    logging.basicConfig(
        level=log_level,
        stream=stream or sys.stdout,
        format="%(message)s",  # structlog will handle formatting
        force=True,
    )

    # Build processor chain
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    # Add final formatting processor
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def log_classification(
    logger: FilteringBoundLogger,
    symbol: str,
    rsi: float,
    zone: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an RSI classification with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Symbol that was classified
        rsi: Computed RSI value
        zone: Zone name (oversold, overbought, neutral)
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        rsi=round(rsi, 2),
        zone=zone,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if zone == "neutral":
        bound_logger.debug("RSI within neutral band")
    else:
        bound_logger.info("RSI outside neutral band")
