"""
Port (interface) for quote data providers.
Infrastructure adapters (e.g. YahooQuoteProvider, FinnhubQuoteProvider) must
implement this interface.
"""

from abc import ABC, abstractmethod

from stockdash.domain.entities.dashboard_config import ProviderChoice
from stockdash.domain.entities.quote import HistorySeries, Quote


class IQuoteProvider(ABC):
    choice: ProviderChoice

    @abstractmethod
    async def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        """Return current quotes for *symbols*.

        An empty list must return [] without touching the network.

        Raises:
            RetrievalError: when no quote at all could be retrieved.
        """
        ...

    @abstractmethod
    async def fetch_history(self, symbol: str) -> HistorySeries:
        """Return roughly one month of daily closes for *symbol*.

        Raises:
            RetrievalError: on HTTP failure or when the provider has no data.
        """
        ...
