"""
FastAPI entry point: JSON backend for the stock price dashboard.

This module is the Composition Root: it loads configuration from the
environment, resolves the market-data provider once, and passes it to the
application use-cases. The resolved provider stays fixed for the lifetime of
the process.

Run locally:
    uvicorn stockdash.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Literal, Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query, Request
from pydantic import BaseModel

load_dotenv()

from stockdash.application.services.quote_table import parse_symbols
from stockdash.application.use_cases.get_price_history import GetPriceHistoryUseCase
from stockdash.application.use_cases.get_quotes import GetQuotesUseCase
from stockdash.domain.entities.dashboard_config import DashboardConfig
from stockdash.domain.errors import RetrievalError
from stockdash.infrastructure.config.env_config import load_config
from stockdash.infrastructure.market_data.provider_registry import create_quote_provider

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_SYMBOLS = "AAPL,MSFT,GOOGL,AMZN,TSLA"


class QuoteOut(BaseModel):
    symbol: str
    price: float | None
    change_percent: float | None


class QuotesResponse(BaseModel):
    provider: str
    quotes: list[QuoteOut]


class HistoryResponse(BaseModel):
    symbol: str
    labels: list[str]
    values: list[float | None]


def create_app(
    config: Optional[DashboardConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Wire adapters and use-cases into a FastAPI app.

    Args:
        config: Dashboard configuration; read from the environment when omitted.
        client: Shared HTTP client. When omitted the app creates one and closes
                it on shutdown; an injected client is left to its owner.
    """
    config = config or load_config()
    owns_client = client is None
    http_client = client or httpx.AsyncClient()

    provider = create_quote_provider(config, http_client)
    quotes_uc = GetQuotesUseCase(provider)
    history_uc = GetPriceHistoryUseCase(provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_client:
            await http_client.aclose()

    app = FastAPI(title="Stock Price Dashboard API", lifespan=lifespan)
    app.state.provider = provider

    @app.get("/quotes", response_model=QuotesResponse)
    async def get_quotes(
        symbols: str = Query(DEFAULT_SYMBOLS, description="Comma-separated tickers"),
        sort: Optional[Literal["symbol", "price", "change_percent"]] = None,
        order: Literal["asc", "desc"] = "asc",
    ):
        """Current price and percent change for each requested symbol."""
        try:
            quotes = await quotes_uc.execute(
                parse_symbols(symbols),
                sort_by=sort,
                descending=order == "desc",
            )
        except RetrievalError as exc:
            logger.error(f"Quote fetch failed: {exc}")
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return QuotesResponse(
            provider=provider.choice.value,
            quotes=[
                QuoteOut(symbol=q.symbol, price=q.price, change_percent=q.change_percent)
                for q in quotes
            ],
        )

    @app.get("/history/{symbol}", response_model=HistoryResponse)
    async def get_history(symbol: str):
        """Daily closing prices for *symbol* over the trailing month."""
        try:
            series = await history_uc.execute(symbol)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RetrievalError as exc:
            logger.error(f"History fetch for {symbol!r} failed: {exc}")
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return HistoryResponse(symbol=series.symbol, labels=series.labels, values=series.values)

    @app.get("/health")
    async def health(request: Request):
        return {"status": "ok", "provider": request.app.state.provider.choice.value}

    return app


app = create_app()
