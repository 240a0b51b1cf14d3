"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

# Interval codes accepted by the Bybit V5 kline endpoint
VALID_INTERVALS = frozenset(
    {"1", "3", "5", "15", "30", "60", "120", "240", "360", "720", "D", "W", "M"}
)
MAX_KLINE_LIMIT = 1000
VALID_RANKINGS = frozenset({"turnover24h"})
VALID_OUTPUT_FORMATS = frozenset({"pretty", "json"})
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_rsi_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate RSI parameters."""
        errors = []

        if "period" in params:
            value = params["period"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="rsi.period",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_screener_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate candidate selection and threshold parameters."""
        errors = []

        if "candidate_limit" in params:
            value = params["candidate_limit"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="screener.candidate_limit",
                    message="Must be a positive integer",
                    value=value
                ))

        thresholds_valid = True
        for name in ("low_threshold", "high_threshold"):
            if name in params:
                value = params[name]
                if not _is_number(value) or not 0 <= value <= 100:
                    thresholds_valid = False
                    errors.append(ValidationError(
                        field=f"screener.{name}",
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        if thresholds_valid and "low_threshold" in params and "high_threshold" in params:
            low, high = params["low_threshold"], params["high_threshold"]
            if low >= high:
                errors.append(ValidationError(
                    field="screener.low_threshold",
                    message="Must be lower than high_threshold",
                    value=low
                ))

        if "symbol_suffix" in params:
            value = params["symbol_suffix"]
            if value is not None and (not isinstance(value, str) or not value):
                errors.append(ValidationError(
                    field="screener.symbol_suffix",
                    message="Must be a non-empty string or null",
                    value=value
                ))

        if "rank_by" in params:
            value = params["rank_by"]
            if value is not None and value not in VALID_RANKINGS:
                errors.append(ValidationError(
                    field="screener.rank_by",
                    message=f"Must be null or one of {sorted(VALID_RANKINGS)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_exchange_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate exchange endpoint parameters."""
        errors = []

        for name in ("tickers_url", "kline_url"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                    errors.append(ValidationError(
                        field=f"exchange.{name}",
                        message="Must be an http(s) URL",
                        value=value
                    ))

        if "category" in params:
            value = params["category"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="exchange.category",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "interval" in params:
            value = params["interval"]
            if value not in VALID_INTERVALS:
                errors.append(ValidationError(
                    field="exchange.interval",
                    message=f"Must be one of {sorted(VALID_INTERVALS)}",
                    value=value
                ))

        if "kline_limit" in params:
            value = params["kline_limit"]
            if not _is_int(value) or not 1 <= value <= MAX_KLINE_LIMIT:
                errors.append(ValidationError(
                    field="exchange.kline_limit",
                    message=f"Must be an integer between 1 and {MAX_KLINE_LIMIT}",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="exchange.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_output_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate report output parameters."""
        errors = []

        if "format" in params and params["format"] not in VALID_OUTPUT_FORMATS:
            errors.append(ValidationError(
                field="output.format",
                message=f"Must be one of {sorted(VALID_OUTPUT_FORMATS)}",
                value=params["format"]
            ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in VALID_LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {sorted(VALID_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="logging.format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        section_validators = {
            "exchange": ConfigValidator.validate_exchange_params,
            "rsi": ConfigValidator.validate_rsi_params,
            "screener": ConfigValidator.validate_screener_params,
            "output": ConfigValidator.validate_output_params,
            "logging": ConfigValidator.validate_logging_params,
        }

        # An empty YAML section loads as None
        sections = {}
        for name, validate in section_validators.items():
            params = config.get(name)
            if params is None:
                params = {}
            elif not isinstance(params, dict):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            sections[name] = params
            errors.extend(validate(params))

        # Cross-section: the kline request must be able to cover the RSI period
        limit = sections.get("exchange", {}).get("kline_limit")
        period = sections.get("rsi", {}).get("period")
        if _is_int(limit) and _is_int(period) and period > 0 and limit < period:
            errors.append(ValidationError(
                field="exchange.kline_limit",
                message="Must be at least rsi.period",
                value=limit
            ))

        return errors
