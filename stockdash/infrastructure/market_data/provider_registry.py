"""
Provider dispatch: maps a resolved ProviderChoice to its adapter.
This registry is the only place that knows which adapter serves which choice;
adding a provider means adding one entry here.
"""

import logging
from typing import Callable, Iterable

import httpx

from stockdash.application.services.provider_selector import resolve_provider
from stockdash.domain.entities.dashboard_config import DashboardConfig, ProviderChoice
from stockdash.domain.entities.quote import HistorySeries, Quote
from stockdash.domain.ports.quote_provider_port import IQuoteProvider
from stockdash.infrastructure.market_data.finnhub_adapter import FinnhubQuoteProvider
from stockdash.infrastructure.market_data.yahoo_adapter import YahooQuoteProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[DashboardConfig, httpx.AsyncClient], IQuoteProvider]

PROVIDER_FACTORIES: dict[ProviderChoice, ProviderFactory] = {
    ProviderChoice.YAHOO: lambda config, client: YahooQuoteProvider(
        client,
        base_url=config.yahoo_base_url,
        label_format=config.label_format,
    ),
    ProviderChoice.FINNHUB: lambda config, client: FinnhubQuoteProvider(
        client,
        token=config.finnhub_token,
        base_url=config.finnhub_base_url,
        label_format=config.label_format,
    ),
}


def create_quote_provider(config: DashboardConfig, client: httpx.AsyncClient) -> IQuoteProvider:
    """Resolve the provider for *config* once and build its adapter on *client*."""
    choice = resolve_provider(config)
    logger.info(f"Using {choice.value} market-data provider")
    return PROVIDER_FACTORIES[choice](config, client)


async def fetch_quotes(provider: IQuoteProvider, symbols: Iterable[str]) -> list[Quote]:
    return await provider.fetch_quotes(list(symbols))


async def fetch_history(provider: IQuoteProvider, symbol: str) -> HistorySeries:
    return await provider.fetch_history(symbol)
