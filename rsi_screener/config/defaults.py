"""Default configuration parameters for the RSI screener."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExchangeParams:
    """Bybit V5 public market-data endpoints and request parameters."""
    tickers_url: str = "https://api.bybit.com/v5/market/tickers"
    kline_url: str = "https://api.bybit.com/v5/market/kline"
    category: str = "linear"                         # USDT/USDC perpetual futures
    interval: str = "240"                            # 4 hour candles
    kline_limit: int = 100                           # Candles requested per symbol
    timeout_seconds: float = 10.0
    user_agent: str = "rsi-screener/0.1"


@dataclass(frozen=True)
class RSIParams:
    """RSI calculation parameters."""
    period: int = 14


@dataclass(frozen=True)
class ScreenerParams:
    """Candidate selection and classification parameters."""
    candidate_limit: int = 100                       # Max symbols to screen
    low_threshold: float = 30.0                      # Below: oversold
    high_threshold: float = 70.0                     # Above: overbought
    symbol_suffix: Optional[str] = None              # e.g. "USDT", None keeps all
    rank_by: Optional[str] = None                    # "turnover24h" or listing order


@dataclass(frozen=True)
class OutputParams:
    """Report rendering parameters."""
    format: str = "pretty"                           # pretty, json


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class ScreenerConfig:
    """Complete screener configuration."""
    exchange: ExchangeParams
    rsi: RSIParams
    screener: ScreenerParams
    output: OutputParams
    logging: LoggingParams


def get_default_config() -> ScreenerConfig:
    """Get the default configuration instance."""
    return ScreenerConfig(
        exchange=ExchangeParams(),
        rsi=RSIParams(),
        screener=ScreenerParams(),
        output=OutputParams(),
        logging=LoggingParams(),
    )
