"""HTTP client for the Bybit V5 public market-data endpoints."""

import json
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from ..config.defaults import ExchangeParams
from ..errors import ExchangeRequestError, MalformedDataError
from ..logging.config import get_logger
from .models import Candle, Ticker
from .parsers import parse_kline_payload, parse_tickers_payload


class BybitMarketClient:
    """Read-only client for the instrument listing and kline endpoints."""

    def __init__(self, params: ExchangeParams):
        self.params = params
        self.logger = get_logger(__name__)

    def get_json(self, url: str, query: dict[str, Any]) -> Any:
        """
        Perform a GET request and decode the JSON body.

        Raises:
            ExchangeRequestError: On network or protocol failure, or non-2xx HTTP status
            MalformedDataError: If the body is not valid UTF-8 JSON
        """
        full_url = f"{url}?{urlencode(query)}"
        headers = {
            'Accept': 'application/json',
            'User-Agent': self.params.user_agent
        }
        req = Request(full_url, headers=headers, method='GET')

        self.logger.debug("Requesting market data", url=full_url)

        try:
            with urlopen(req, timeout=self.params.timeout_seconds) as response:
                response_code = response.getcode()
                raw_body = response.read()

        except HTTPError as e:
            raise ExchangeRequestError(
                f"HTTP {e.code}: {e.reason}",
                url=full_url,
                status_code=e.code
            ) from e

        except (URLError, OSError, HTTPException) as e:
            # URLError wraps DNS/connection failures, OSError covers timeouts,
            # HTTPException covers bad status lines and truncated bodies
            raise ExchangeRequestError(
                f"Network error: {e}",
                url=full_url
            ) from e

        if not 200 <= response_code < 300:
            raise ExchangeRequestError(
                f"HTTP {response_code}",
                url=full_url,
                status_code=response_code
            )

        try:
            return json.loads(raw_body.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedDataError(
                f"Response is not valid JSON: {e}",
                raw_data=raw_body[:200].decode('utf-8', errors='replace'),
                expected_format="json",
                context={"url": full_url}
            ) from e

    def fetch_tickers(self) -> list[Ticker]:
        """Fetch the instrument listing for the configured category."""
        payload = self.get_json(
            self.params.tickers_url,
            {"category": self.params.category}
        )
        return parse_tickers_payload(payload)

    def fetch_candles(self, symbol: str) -> list[Candle]:
        """Fetch klines for a symbol over the configured interval, oldest first."""
        payload = self.get_json(
            self.params.kline_url,
            {
                "category": self.params.category,
                "symbol": symbol,
                "interval": self.params.interval,
                "limit": self.params.kline_limit,
            }
        )
        candles = parse_kline_payload(payload)

        self.logger.debug(
            "Fetched candles",
            symbol=symbol,
            interval=self.params.interval,
            count=len(candles)
        )
        return candles

    def fetch_closes(self, symbol: str) -> list[float]:
        """Fetch the chronological closing price series for a symbol."""
        return [candle.close for candle in self.fetch_candles(symbol)]
