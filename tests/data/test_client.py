"""Tests for the Bybit market data client."""

import socket
from unittest.mock import patch
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qs, urlparse

import pytest

from conftest import FakeResponse, make_kline_payload, make_tickers_payload
from rsi_screener.config.defaults import ExchangeParams
from rsi_screener.data.client import BybitMarketClient
from rsi_screener.data.parsers import ResponseShapeError
from rsi_screener.errors import ExchangeRequestError, MalformedDataError

URLOPEN = "rsi_screener.data.client.urlopen"


def _query(request) -> dict:
    return {k: v[0] for k, v in parse_qs(urlparse(request.full_url).query).items()}


class TestGetJson:
    """Test request execution and body decoding."""

    def test_decodes_json(self):
        """Test a 200 JSON body is decoded."""
        client = BybitMarketClient(ExchangeParams())
        with patch(URLOPEN, return_value=FakeResponse({"ok": True})):
            assert client.get_json("https://example.test/x", {"a": 1}) == {"ok": True}

    def test_request_headers_and_timeout(self):
        """Test the request carries the user agent and configured timeout."""
        params = ExchangeParams(timeout_seconds=3.5, user_agent="test-agent/1")
        client = BybitMarketClient(params)

        with patch(URLOPEN, return_value=FakeResponse({})) as mock_urlopen:
            client.get_json("https://example.test/x", {})

        request = mock_urlopen.call_args.args[0]
        assert request.get_method() == "GET"
        assert request.get_header("User-agent") == "test-agent/1"
        assert mock_urlopen.call_args.kwargs["timeout"] == 3.5

    def test_invalid_json(self):
        """Test a non-JSON body raises MalformedDataError."""
        client = BybitMarketClient(ExchangeParams())
        with patch(URLOPEN, return_value=FakeResponse("<html>busy</html>")):
            with pytest.raises(MalformedDataError) as exc_info:
                client.get_json("https://example.test/x", {})

        assert exc_info.value.expected_format == "json"
        assert "busy" in exc_info.value.raw_data

    def test_http_error(self):
        """Test an HTTP error status raises ExchangeRequestError."""
        client = BybitMarketClient(ExchangeParams())
        error = HTTPError("https://example.test/x", 503, "Service Unavailable", {}, None)

        with patch(URLOPEN, side_effect=error):
            with pytest.raises(ExchangeRequestError) as exc_info:
                client.get_json("https://example.test/x", {})

        assert exc_info.value.status_code == 503
        assert exc_info.value.recoverable is True

    def test_non_success_status(self):
        """Test a non-2xx response code raises ExchangeRequestError."""
        client = BybitMarketClient(ExchangeParams())
        with patch(URLOPEN, return_value=FakeResponse({}, status=302)):
            with pytest.raises(ExchangeRequestError) as exc_info:
                client.get_json("https://example.test/x", {})

        assert exc_info.value.status_code == 302

    @pytest.mark.parametrize("error", [
        URLError("Name or service not known"),
        socket.timeout("timed out"),
        ConnectionResetError("reset"),
    ])
    def test_network_errors(self, error):
        """Test network failures raise ExchangeRequestError."""
        client = BybitMarketClient(ExchangeParams())
        with patch(URLOPEN, side_effect=error):
            with pytest.raises(ExchangeRequestError, match="Network error"):
                client.get_json("https://example.test/x", {})


class TestEndpoints:
    """Test listing and kline endpoint calls."""

    def test_fetch_tickers(self):
        """Test the listing request uses the configured category."""
        client = BybitMarketClient(ExchangeParams(category="linear"))

        with patch(URLOPEN, return_value=FakeResponse(make_tickers_payload(["BTCUSDT", "ETHUSDT"]))) as mock_urlopen:
            tickers = client.fetch_tickers()

        request = mock_urlopen.call_args.args[0]
        assert request.full_url.startswith("https://api.bybit.com/v5/market/tickers?")
        assert _query(request) == {"category": "linear"}
        assert [t.symbol for t in tickers] == ["BTCUSDT", "ETHUSDT"]

    def test_fetch_candles_query(self):
        """Test the kline request carries category, symbol, interval and limit."""
        params = ExchangeParams(interval="60", kline_limit=200)
        client = BybitMarketClient(params)

        with patch(URLOPEN, return_value=FakeResponse(make_kline_payload([1.0, 2.0]))) as mock_urlopen:
            client.fetch_candles("ETHUSDT")

        request = mock_urlopen.call_args.args[0]
        assert request.full_url.startswith("https://api.bybit.com/v5/market/kline?")
        assert _query(request) == {
            "category": "linear",
            "symbol": "ETHUSDT",
            "interval": "60",
            "limit": "200",
        }

    def test_fetch_closes_chronological(self):
        """Test closes come back oldest first."""
        client = BybitMarketClient(ExchangeParams())

        with patch(URLOPEN, return_value=FakeResponse(make_kline_payload([3.0, 1.0, 2.0]))):
            assert client.fetch_closes("BTCUSDT") == [3.0, 1.0, 2.0]

    def test_fetch_closes_malformed(self):
        """Test a kline body without result.list raises a parse error."""
        client = BybitMarketClient(ExchangeParams())

        with patch(URLOPEN, return_value=FakeResponse({"retCode": 0, "result": {}})):
            with pytest.raises(ResponseShapeError):
                client.fetch_closes("BTCUSDT")

    def test_custom_endpoints(self):
        """Test alternate endpoints from configuration are used."""
        params = ExchangeParams(kline_url="http://localhost:8080/kline")
        client = BybitMarketClient(params)

        with patch(URLOPEN, return_value=FakeResponse(make_kline_payload([1.0]))) as mock_urlopen:
            client.fetch_candles("BTCUSDT")

        assert mock_urlopen.call_args.args[0].full_url.startswith("http://localhost:8080/kline?")
