"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict, List, Optional

import pytest
import structlog

from rsi_screener.config.defaults import (
    ScreenerConfig,
    ScreenerParams,
    get_default_config,
)
from rsi_screener.errors import MalformedDataError

FOUR_HOURS_MS = 4 * 60 * 60 * 1000
BASE_TS_MS = 1_700_000_000_000

# Textbook Wilder RSI example closes (first RSI value 70.53)
TEXTBOOK_CLOSES = [
    44.3389, 44.0902, 44.1497, 43.6124, 44.3278, 44.8264, 45.0955,
    45.4245, 45.8433, 46.0826, 45.8931, 46.0328, 45.6140, 46.2820, 46.2820,
]


def make_kline_payload(closes: List[float], symbol: str = "BTCUSDT") -> Dict[str, Any]:
    """Build a Bybit kline payload for chronological closes, newest first like the API."""
    records = []
    for i, close in enumerate(closes):
        ts = BASE_TS_MS + i * FOUR_HOURS_MS
        price = str(close)
        records.append([str(ts), price, price, price, price, "1000", "100000"])
    records.reverse()

    return {
        "retCode": 0,
        "retMsg": "OK",
        "result": {"symbol": symbol, "category": "linear", "list": records},
        "retExtInfo": {},
        "time": BASE_TS_MS,
    }


def make_tickers_payload(symbols: List[str],
                         turnovers: Optional[List[str]] = None) -> Dict[str, Any]:
    """Build a Bybit ticker listing payload."""
    entries = []
    for i, symbol in enumerate(symbols):
        entry = {"symbol": symbol, "lastPrice": "1.0"}
        if turnovers is not None:
            entry["turnover24h"] = turnovers[i]
        entries.append(entry)

    return {
        "retCode": 0,
        "retMsg": "OK",
        "result": {"category": "linear", "list": entries},
        "retExtInfo": {},
        "time": BASE_TS_MS,
    }


class FakeResponse:
    """Minimal stand-in for the object returned by urlopen()."""

    def __init__(self, body: Any, status: int = 200):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body
        self._status = status

    def getcode(self) -> int:
        return self._status

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


class FakeMarketClient:
    """In-memory market data client keyed by symbol."""

    def __init__(self, symbols: List[str], closes: Optional[Dict[str, Any]] = None,
                 listing_error: Optional[Exception] = None):
        self.symbols = symbols
        self.closes = closes or {}
        self.listing_error = listing_error
        self.fetched: List[str] = []

    def fetch_tickers(self):
        from rsi_screener.data.models import Ticker

        if self.listing_error is not None:
            raise self.listing_error
        return [Ticker(symbol=s) for s in self.symbols]

    def fetch_closes(self, symbol: str) -> List[float]:
        self.fetched.append(symbol)
        value = self.closes.get(symbol)
        if isinstance(value, Exception):
            raise value
        if value is None:
            raise MalformedDataError(f"No data for {symbol}")
        return value


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def default_config() -> ScreenerConfig:
    """Default screener configuration."""
    return get_default_config()


@pytest.fixture
def small_config() -> ScreenerConfig:
    """Configuration with a short RSI period for compact fixtures."""
    from dataclasses import replace

    config = get_default_config()
    return replace(
        config,
        rsi=replace(config.rsi, period=3),
        screener=ScreenerParams(candidate_limit=10),
    )


@pytest.fixture
def rising_closes() -> List[float]:
    """Strictly rising closes, RSI 100."""
    return [100.0 + i for i in range(20)]


@pytest.fixture
def falling_closes() -> List[float]:
    """Strictly falling closes, RSI 0."""
    return [100.0 - i for i in range(20)]
