"""
Tests for the Finnhub adapter
"""
import asyncio

import httpx
import pytest

from stockdash.domain.errors import (
    AGGREGATE_MESSAGE_LIMIT,
    AggregateRetrievalError,
    EmptyResultError,
    RetrievalError,
    TransportError,
)
from stockdash.infrastructure.market_data.finnhub_adapter import (
    HISTORY_WINDOW_SECONDS,
    FinnhubQuoteProvider,
)

NOW = 1_700_000_000


def quote_handler(failing=()):
    def handler(request):
        symbol = request.url.params["symbol"]
        if symbol in failing:
            return httpx.Response(500, json={"error": "upstream"})
        return httpx.Response(200, json={"c": 100.5, "d": 1.1, "dp": 1.2, "pc": 99.4})

    return handler


class TestFinnhubQuotes:
    """Test FinnhubQuoteProvider.fetch_quotes"""

    def test_one_request_per_symbol_with_token(self, make_client):
        client, transport = make_client(quote_handler())
        provider = FinnhubQuoteProvider(client, token="secret", base_url="https://finnhub.test/api/v1")

        quotes = asyncio.run(provider.fetch_quotes(["AAPL", "MSFT", "TSLA"]))

        assert transport.call_count == 3
        assert {r.url.params["symbol"] for r in transport.requests} == {"AAPL", "MSFT", "TSLA"}
        assert all(r.url.params["token"] == "secret" for r in transport.requests)
        assert all(r.url.path == "/api/v1/quote" for r in transport.requests)
        assert [q.symbol for q in quotes] == ["AAPL", "MSFT", "TSLA"]
        assert quotes[0].price == 100.5
        assert quotes[0].change_percent == 1.2

    def test_partial_failure_returns_successes(self, make_client):
        client, _ = make_client(quote_handler(failing={"MSFT"}))
        provider = FinnhubQuoteProvider(client, token="secret")

        quotes = asyncio.run(provider.fetch_quotes(["AAPL", "MSFT", "TSLA"]))

        assert len(quotes) == 2
        assert [q.symbol for q in quotes] == ["AAPL", "TSLA"]

    def test_total_failure_raises_aggregate(self, make_client):
        client, _ = make_client(quote_handler(failing={"AAPL", "MSFT", "TSLA"}))
        provider = FinnhubQuoteProvider(client, token="secret")

        with pytest.raises(AggregateRetrievalError) as exc_info:
            asyncio.run(provider.fetch_quotes(["AAPL", "MSFT", "TSLA"]))

        message = str(exc_info.value)
        assert message.startswith("All Finnhub requests failed: ")
        assert "Finnhub quote failed (500)" in message
        assert len(message) <= AGGREGATE_MESSAGE_LIMIT
        assert len(exc_info.value.errors) == 3

    def test_aggregate_message_truncated(self, make_client):
        symbols = [f"SYM{i}" for i in range(12)]
        client, _ = make_client(quote_handler(failing=set(symbols)))
        provider = FinnhubQuoteProvider(client, token="secret")

        with pytest.raises(AggregateRetrievalError) as exc_info:
            asyncio.run(provider.fetch_quotes(symbols))

        assert len(str(exc_info.value)) == AGGREGATE_MESSAGE_LIMIT

    def test_requests_run_concurrently(self, make_client):
        async def scenario():
            in_flight = 0
            all_started = asyncio.Event()

            async def handler(request):
                nonlocal in_flight
                in_flight += 1
                if in_flight == 3:
                    all_started.set()
                # a sequential fan-out would never get all three in flight
                await asyncio.wait_for(all_started.wait(), timeout=1)
                return httpx.Response(200, json={"c": 1.0, "dp": 0.0})

            client, _ = make_client(handler)
            provider = FinnhubQuoteProvider(client, token="secret")
            return await provider.fetch_quotes(["AAPL", "MSFT", "TSLA"])

        assert len(asyncio.run(scenario())) == 3

    def test_empty_input_makes_no_request(self, make_client):
        client, transport = make_client(quote_handler())
        provider = FinnhubQuoteProvider(client, token="secret")

        assert asyncio.run(provider.fetch_quotes([])) == []
        assert transport.call_count == 0

    def test_missing_fields_map_to_none(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json={}))
        provider = FinnhubQuoteProvider(client, token="secret")

        quotes = asyncio.run(provider.fetch_quotes(["AAPL"]))

        assert quotes[0].price is None
        assert quotes[0].change_percent is None


class TestFinnhubHistory:
    """Test FinnhubQuoteProvider.fetch_history"""

    def test_requests_trailing_thirty_days(self, make_client):
        client, transport = make_client(
            lambda request: httpx.Response(200, json={"s": "ok", "t": [], "c": []})
        )
        provider = FinnhubQuoteProvider(client, token="secret", clock=lambda: NOW + 0.75)

        asyncio.run(provider.fetch_history("AAPL"))

        params = transport.requests[0].url.params
        assert transport.requests[0].url.path.endswith("/stock/candle")
        assert params["symbol"] == "AAPL"
        assert params["resolution"] == "D"
        assert params["to"] == str(NOW)
        assert params["from"] == str(NOW - HISTORY_WINDOW_SECONDS)
        assert params["token"] == "secret"

    def test_series_from_candles(self, make_client):
        payload = {"s": "ok", "t": [1700000000, 1700086400], "c": [189.7, 190.25], "o": [1, 2]}
        client, _ = make_client(lambda request: httpx.Response(200, json=payload))
        provider = FinnhubQuoteProvider(client, token="secret")

        series = asyncio.run(provider.fetch_history("AAPL"))

        assert series.labels == ["2023-11-14", "2023-11-15"]
        assert series.values == [189.7, 190.25]
        assert len(series.labels) == len(series.values)

    def test_no_data_status_is_empty_result(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json={"s": "no_data"}))
        provider = FinnhubQuoteProvider(client, token="secret")

        with pytest.raises(EmptyResultError, match="No Finnhub chart data"):
            asyncio.run(provider.fetch_history("AAPL"))

    def test_http_error(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(403, json={"error": "no access"}))
        provider = FinnhubQuoteProvider(client, token="secret")

        with pytest.raises(TransportError, match=r"Finnhub chart failed \(403\)"):
            asyncio.run(provider.fetch_history("AAPL"))

    def test_errors_share_base_class(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json={"s": "no_data"}))
        provider = FinnhubQuoteProvider(client, token="secret")

        with pytest.raises(RetrievalError):
            asyncio.run(provider.fetch_history("AAPL"))
