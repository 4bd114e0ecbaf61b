"""
Infrastructure adapter: Finnhub REST API → IQuoteProvider.
Finnhub has no batch quote endpoint, so quotes are fetched one request per
symbol, concurrently. Symbols whose request fails are dropped; only a total
failure is raised.
"""

import logging
import time
from typing import Callable, Optional

import httpx

from stockdash.application.services.settle import gather_partial
from stockdash.domain.entities.dashboard_config import (
    DEFAULT_FINNHUB_BASE_URL,
    DEFAULT_LABEL_FORMAT,
    ProviderChoice,
)
from stockdash.domain.entities.quote import HistorySeries, Quote
from stockdash.domain.errors import EmptyResultError
from stockdash.domain.ports.quote_provider_port import IQuoteProvider
from stockdash.infrastructure.market_data.http_support import decode_json, get_checked
from stockdash.infrastructure.market_data.response_parsing import build_series, dig, to_float

logger = logging.getLogger(__name__)

HISTORY_WINDOW_SECONDS = 30 * 24 * 60 * 60


class FinnhubQuoteProvider(IQuoteProvider):
    """Fetches quotes and daily candles from finnhub.io using an API token."""

    choice = ProviderChoice.FINNHUB

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: Optional[str],
        base_url: str = DEFAULT_FINNHUB_BASE_URL,
        label_format: str = DEFAULT_LABEL_FORMAT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._token = token or ""
        self._base_url = base_url.rstrip("/")
        self._label_format = label_format
        self._clock = clock

    async def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        if not symbols:
            return []
        settled = await gather_partial(
            [(symbol, self._fetch_quote(symbol)) for symbol in symbols],
            "All Finnhub requests failed",
        )
        for symbol, exc in settled.failed:
            logger.warning(f"Dropping {symbol} from Finnhub quotes: {exc}")
        return settled.values

    async def _fetch_quote(self, symbol: str) -> Quote:
        response = await get_checked(
            self._client,
            f"{self._base_url}/quote",
            "Finnhub quote failed",
            params={"symbol": symbol, "token": self._token},
        )
        payload = decode_json(response, "Finnhub quote")
        return Quote(
            symbol=symbol,
            price=to_float(dig(payload, "c")),
            change_percent=to_float(dig(payload, "dp")),
        )

    async def fetch_history(self, symbol: str) -> HistorySeries:
        to_ts = int(self._clock())
        from_ts = to_ts - HISTORY_WINDOW_SECONDS
        response = await get_checked(
            self._client,
            f"{self._base_url}/stock/candle",
            "Finnhub chart failed",
            params={
                "symbol": symbol,
                "resolution": "D",
                "from": from_ts,
                "to": to_ts,
                "token": self._token,
            },
        )
        payload = decode_json(response, "Finnhub chart")
        # Finnhub reports "no_data" with HTTP 200.
        if dig(payload, "s") != "ok":
            raise EmptyResultError("No Finnhub chart data")
        return build_series(symbol, dig(payload, "t"), dig(payload, "c"), self._label_format)
