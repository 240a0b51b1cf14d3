"""
Bybit-specific data parsers for converting raw exchange payloads to normalized objects.

This module handles parsing of Bybit V5 ticker listings and kline payloads into
canonical data structures with proper type conversion and error handling.
"""

import math
from datetime import UTC, datetime
from typing import Any, Optional

from ..errors import MalformedDataError
from .models import Candle, Ticker


class ParseError(MalformedDataError):
    """Raised when parsing fails due to invalid data format."""
    pass


class ResponseShapeError(ParseError):
    """Raised when the payload lacks an expected field or has the wrong type."""
    pass


class ExchangeStatusError(ParseError):
    """Raised when the exchange reports a non-zero return code."""

    def __init__(self, message: str, ret_code: Any = None, ret_msg: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.ret_code = ret_code
        self.ret_msg = ret_msg


class InvalidPriceError(ParseError):
    """Raised when price data is invalid."""
    pass


class InvalidTimestampError(ParseError):
    """Raised when timestamp data is invalid."""
    pass


# Positional layout of a Bybit kline record
KLINE_START_TIME = 0
KLINE_OPEN = 1
KLINE_HIGH = 2
KLINE_LOW = 3
KLINE_CLOSE = 4
KLINE_VOLUME = 5


def extract_result_list(payload: Any) -> list[Any]:
    """
    Return the ``result.list`` array of a Bybit V5 response.

    Expected Bybit format:
    {
        "retCode": 0,
        "retMsg": "OK",
        "result": {"category": "linear", "list": [...]},
        "time": 1672376496682
    }

    Raises:
        ResponseShapeError: If ``result`` or ``result.list`` is absent or mistyped
        ExchangeStatusError: If ``retCode`` is present and non-zero
    """
    if not isinstance(payload, dict):
        raise ResponseShapeError(
            "Payload must be a JSON object",
            expected_format="object",
            raw_data=repr(payload)[:200]
        )

    ret_code = payload.get("retCode", 0)
    if ret_code not in (0, "0"):
        raise ExchangeStatusError(
            f"Exchange returned retCode={ret_code}: {payload.get('retMsg')}",
            ret_code=ret_code,
            ret_msg=payload.get("retMsg")
        )

    result = payload.get("result")
    if not isinstance(result, dict):
        raise ResponseShapeError(
            "Missing 'result' object in payload",
            expected_format="result.list"
        )

    if "list" not in result or result["list"] is None:
        raise ResponseShapeError(
            "Missing 'result.list' field in payload",
            expected_format="result.list"
        )

    entries = result["list"]
    if not isinstance(entries, list):
        raise ResponseShapeError(
            "'result.list' field must be an array",
            expected_format="array",
            raw_data=repr(entries)[:200]
        )

    return entries


def parse_tickers_payload(payload: Any) -> list[Ticker]:
    """
    Parse a Bybit ticker listing into Ticker objects, in listing order.

    Entries without a string ``symbol`` field are skipped.

    Raises:
        ResponseShapeError: If the listing array is absent or mistyped
        ExchangeStatusError: If the exchange reported an error
    """
    tickers = []

    for entry in extract_result_list(payload):
        if not isinstance(entry, dict):
            continue

        symbol = entry.get("symbol")
        if not isinstance(symbol, str) or not symbol:
            continue

        tickers.append(Ticker(
            symbol=symbol,
            turnover_24h=_parse_optional_float(entry.get("turnover24h"))
        ))

    return tickers


def parse_kline_payload(payload: Any) -> list[Candle]:
    """
    Parse a Bybit kline payload into Candle objects, oldest first.

    Inner array format: [startTime, open, high, low, close, volume, turnover]
    Bybit returns records newest first; they are sorted by start time here.

    Raises:
        ResponseShapeError: If the kline array or a record is malformed
        InvalidPriceError: If a price cannot be parsed or is not positive
        InvalidTimestampError: If a start time cannot be parsed
    """
    candles = []

    for i, record in enumerate(extract_result_list(payload)):
        try:
            candles.append(_parse_single_candle(record))
        except ParseError as e:
            e.context.setdefault("index", i)
            raise

    candles.sort(key=lambda candle: candle.ts)
    return candles


def _parse_single_candle(record: Any) -> Candle:
    """Parse single Bybit kline array into Candle object."""
    if not isinstance(record, list):
        raise ResponseShapeError(
            "Kline record must be an array",
            raw_data=repr(record)[:200]
        )

    if len(record) <= KLINE_CLOSE:
        raise ResponseShapeError(
            f"Kline record must have at least {KLINE_CLOSE + 1} elements, got {len(record)}",
            raw_data=repr(record)[:200]
        )

    raw_ts = record[KLINE_START_TIME]
    try:
        ts_ms = int(raw_ts)
        ts = datetime.fromtimestamp(ts_ms / 1000.0, tz=UTC)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        raise InvalidTimestampError(f"Invalid start time '{raw_ts}': {e}", raw_data=repr(raw_ts))

    open_price = _parse_price(record[KLINE_OPEN], "open")
    high_price = _parse_price(record[KLINE_HIGH], "high")
    low_price = _parse_price(record[KLINE_LOW], "low")
    close_price = _parse_price(record[KLINE_CLOSE], "close")

    volume = 0.0
    if len(record) > KLINE_VOLUME:
        volume = _parse_optional_float(record[KLINE_VOLUME]) or 0.0

    return Candle(
        ts=ts,
        open=open_price,
        high=high_price,
        low=low_price,
        close=close_price,
        volume=volume
    )


def _parse_price(raw: Any, name: str) -> float:
    """Parse a price field, encoded by Bybit as a decimal string."""
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise InvalidPriceError(f"Invalid {name} price {raw!r}: not a string or number",
                                raw_data=repr(raw))
    try:
        value = float(raw)
    except ValueError as e:
        raise InvalidPriceError(f"Invalid {name} price {raw!r}: {e}", raw_data=repr(raw))

    if not math.isfinite(value) or value <= 0:
        raise InvalidPriceError(f"{name} price must be positive and finite: {value}",
                                raw_data=repr(raw))

    return value


def _parse_optional_float(raw: Any) -> Optional[float]:
    """Parse an optional numeric field, returning None when absent or unparsable."""
    if raw is None or raw == "" or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None
