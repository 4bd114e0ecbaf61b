"""
Infrastructure adapter: Yahoo Finance public JSON API → IQuoteProvider.
No API key is needed. Quotes for all symbols come from one batched request,
so a failure is all-or-nothing.
"""

import logging
from urllib.parse import quote as url_quote

import httpx

from stockdash.domain.entities.dashboard_config import (
    DEFAULT_LABEL_FORMAT,
    DEFAULT_YAHOO_BASE_URL,
    ProviderChoice,
)
from stockdash.domain.entities.quote import HistorySeries, Quote
from stockdash.domain.errors import EmptyResultError
from stockdash.domain.ports.quote_provider_port import IQuoteProvider
from stockdash.infrastructure.market_data.http_support import decode_json, get_checked
from stockdash.infrastructure.market_data.response_parsing import build_series, dig, to_float

logger = logging.getLogger(__name__)


class YahooQuoteProvider(IQuoteProvider):
    """Fetches quotes and daily charts from query1.finance.yahoo.com."""

    choice = ProviderChoice.YAHOO

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_YAHOO_BASE_URL,
        label_format: str = DEFAULT_LABEL_FORMAT,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._label_format = label_format

    async def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        if not symbols:
            return []
        response = await get_checked(
            self._client,
            f"{self._base_url}/v7/finance/quote",
            "Yahoo quotes failed",
            params={"symbols": ",".join(symbols)},
        )
        payload = decode_json(response, "Yahoo quotes")
        records = dig(payload, "quoteResponse", "result")
        if not isinstance(records, list):
            return []

        requested = {symbol.upper() for symbol in symbols}
        quotes = []
        for record in records:
            symbol = dig(record, "symbol")
            if not isinstance(symbol, str) or symbol.upper() not in requested:
                logger.debug(f"Ignoring unrequested Yahoo record {symbol!r}")
                continue
            quotes.append(
                Quote(
                    symbol=symbol.upper(),
                    price=to_float(dig(record, "regularMarketPrice")),
                    change_percent=to_float(dig(record, "regularMarketChangePercent")),
                )
            )
        return quotes

    async def fetch_history(self, symbol: str) -> HistorySeries:
        response = await get_checked(
            self._client,
            f"{self._base_url}/v8/finance/chart/{url_quote(symbol, safe='')}",
            "Yahoo chart failed",
            params={"range": "1mo", "interval": "1d"},
        )
        payload = decode_json(response, "Yahoo chart")
        result = dig(payload, "chart", "result", 0)
        if not isinstance(result, dict):
            raise EmptyResultError("No Yahoo chart data")
        return build_series(
            symbol,
            dig(result, "timestamp"),
            dig(result, "indicators", "quote", 0, "close"),
            self._label_format,
        )
