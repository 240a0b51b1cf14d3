"""
Canonical data models for normalized market data and screener output.

This module defines immutable data structures that represent clean, validated
market data after parsing from raw exchange payloads, plus the report the
screener produces from it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Ticker:
    """Single entry of the exchange's instrument listing."""
    symbol: str
    turnover_24h: Optional[float] = None    # Quote-currency turnover, if reported


@dataclass(frozen=True)
class Candle:
    """Normalized kline record with UTC timestamp."""
    ts: datetime        # UTC candle start time
    open: float
    high: float
    low: float
    close: float
    volume: float       # Base volume


class RSIZone(Enum):
    """Interpretation band of an RSI value."""
    OVERSOLD = "oversold"
    OVERBOUGHT = "overbought"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class RSIReading:
    """RSI value computed for one symbol."""
    symbol: str
    rsi: float


@dataclass(frozen=True)
class ScreenerReport:
    """Outcome of one screening run, buckets in processing order."""
    checked: int
    low_threshold: float
    high_threshold: float
    oversold: tuple[RSIReading, ...] = field(default_factory=tuple)
    overbought: tuple[RSIReading, ...] = field(default_factory=tuple)

    @property
    def oversold_symbols(self) -> list[str]:
        return [reading.symbol for reading in self.oversold]

    @property
    def overbought_symbols(self) -> list[str]:
        return [reading.symbol for reading in self.overbought]

    def to_dict(self) -> dict[str, Any]:
        """Serialize the report to plain JSON-compatible types."""
        return {
            "checked": self.checked,
            "thresholds": {
                "low": self.low_threshold,
                "high": self.high_threshold,
            },
            "oversold": [
                {"symbol": r.symbol, "rsi": round(r.rsi, 2)} for r in self.oversold
            ],
            "overbought": [
                {"symbol": r.symbol, "rsi": round(r.rsi, 2)} for r in self.overbought
            ],
        }
