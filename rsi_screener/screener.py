"""
Main screening coordinator.

Orchestrates the RSI screening pipeline: candidate listing, per-symbol price
retrieval, RSI calculation and classification into oversold/overbought
buckets.
"""

from collections.abc import Iterable
from typing import Any, Optional

from .config.defaults import ScreenerConfig, get_default_config
from .data.client import BybitMarketClient
from .data.models import RSIReading, RSIZone, ScreenerReport, Ticker
from .errors import (
    RECOVERABLE_ERRORS,
    CandidateListError,
    InsufficientDataError,
)
from .logging.config import get_logger, log_classification
from .metrics.rsi import RSICalculator

RANK_BY_TURNOVER = "turnover24h"


class RSIScreener:
    """
    Coordinator for a single screening pass.

    Manages the pipeline:
    Listing → Candidates → (Klines → RSI → Zone)* → Report

    Symbols are processed sequentially and bucket order follows processing
    order. A failure on one symbol is logged and skipped; a failure to list
    candidates aborts the run with CandidateListError.
    """

    def __init__(self, config: Optional[ScreenerConfig] = None,
                 client: Optional[Any] = None) -> None:
        """
        Initialize the screener.

        Args:
            config: Screener configuration (defaults if omitted)
            client: Market data client exposing fetch_tickers() and
                fetch_closes(symbol); a BybitMarketClient is built from
                the exchange configuration if omitted
        """
        self.config = config or get_default_config()
        self.client = client or BybitMarketClient(self.config.exchange)
        self.rsi_calculator = RSICalculator(period=self.config.rsi.period)
        self.logger = get_logger(__name__)

    def list_candidates(self) -> list[str]:
        """
        Select up to ``candidate_limit`` symbols from the exchange listing.

        Raises:
            CandidateListError: If the listing cannot be fetched or parsed
        """
        try:
            tickers = self.client.fetch_tickers()
        except RECOVERABLE_ERRORS as e:
            self.logger.error(
                "Failed to fetch candidate listing",
                endpoint=self.config.exchange.tickers_url,
                error=str(e),
                error_type=type(e).__name__
            )
            raise CandidateListError(
                f"Failed to fetch candidate symbols: {e}",
                endpoint=self.config.exchange.tickers_url,
                cause=e
            ) from e

        selected = self._select_tickers(tickers)
        symbols = [ticker.symbol for ticker in selected]

        self.logger.info(
            "Candidate symbols selected",
            listed=len(tickers),
            selected=len(symbols),
            category=self.config.exchange.category
        )
        return symbols

    def _select_tickers(self, tickers: list[Ticker]) -> list[Ticker]:
        """Apply suffix filter and ranking, then truncate to the limit."""
        params = self.config.screener

        if params.symbol_suffix:
            tickers = [t for t in tickers if t.symbol.endswith(params.symbol_suffix)]

        if params.rank_by == RANK_BY_TURNOVER:
            # Stable sort, tickers without turnover go last
            tickers = sorted(
                tickers,
                key=lambda t: (t.turnover_24h is not None, t.turnover_24h or 0.0),
                reverse=True
            )

        return tickers[:params.candidate_limit]

    def evaluate_symbol(self, symbol: str) -> float:
        """
        Fetch the price series of a symbol and compute its RSI.

        Raises:
            InsufficientDataError: If fewer closes than the RSI period exist
            DataQualityError: If the kline response is malformed
            ExchangeRequestError: If the request fails
        """
        closes = self.client.fetch_closes(symbol)
        rsi = self.rsi_calculator.calculate(closes)

        if rsi is None:
            raise InsufficientDataError(
                f"{symbol}: {len(closes)} closes available, "
                f"{self.rsi_calculator.period} required",
                required_count=self.rsi_calculator.period,
                available_count=len(closes),
                context={"symbol": symbol}
            )

        return rsi

    def classify(self, rsi: float) -> RSIZone:
        """Classify an RSI value against the configured thresholds."""
        if rsi < self.config.screener.low_threshold:
            return RSIZone.OVERSOLD
        if rsi > self.config.screener.high_threshold:
            return RSIZone.OVERBOUGHT
        return RSIZone.NEUTRAL

    def scan(self, symbols: Iterable[str]) -> ScreenerReport:
        """
        Evaluate and classify each symbol in order.

        Per-symbol errors are logged as warnings and the symbol is left out
        of both buckets.
        """
        oversold: list[RSIReading] = []
        overbought: list[RSIReading] = []
        checked = 0
        skipped = 0

        for symbol in symbols:
            checked += 1
            try:
                rsi = self.evaluate_symbol(symbol)
            except RECOVERABLE_ERRORS as e:
                skipped += 1
                self.logger.warning(
                    "Failed to evaluate RSI, skipping symbol",
                    symbol=symbol,
                    error=str(e),
                    error_type=type(e).__name__
                )
                continue

            zone = self.classify(rsi)
            log_classification(self.logger, symbol, rsi, zone.value)

            if zone is RSIZone.OVERSOLD:
                oversold.append(RSIReading(symbol=symbol, rsi=rsi))
            elif zone is RSIZone.OVERBOUGHT:
                overbought.append(RSIReading(symbol=symbol, rsi=rsi))

        self.logger.info(
            "Scan complete",
            checked=checked,
            oversold=len(oversold),
            overbought=len(overbought),
            skipped=skipped
        )

        return ScreenerReport(
            checked=checked,
            low_threshold=self.config.screener.low_threshold,
            high_threshold=self.config.screener.high_threshold,
            oversold=tuple(oversold),
            overbought=tuple(overbought),
        )

    def run(self) -> ScreenerReport:
        """List candidates and scan them."""
        return self.scan(self.list_candidates())
