"""
Use-case: retrieve the trailing one-month closing-price series for a symbol.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from stockdash.domain.entities.quote import HistorySeries
from stockdash.domain.ports.quote_provider_port import IQuoteProvider


class GetPriceHistoryUseCase:
    def __init__(self, provider: IQuoteProvider) -> None:
        self._provider = provider

    async def execute(self, symbol: str) -> HistorySeries:
        """Fetch the price history for *symbol* (uppercased).

        Raises:
            ValueError: if *symbol* is blank.
            RetrievalError: propagated from the provider on failure.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        return await self._provider.fetch_history(symbol.upper().strip())
