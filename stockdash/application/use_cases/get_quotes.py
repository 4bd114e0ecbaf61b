"""
Use-case: retrieve current quotes for a set of ticker symbols.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from typing import Iterable, Optional

from stockdash.application.services.quote_table import (
    SORT_KEYS,
    normalize_symbols,
    sort_quotes,
)
from stockdash.domain.entities.quote import Quote
from stockdash.domain.ports.quote_provider_port import IQuoteProvider


class GetQuotesUseCase:
    def __init__(self, provider: IQuoteProvider) -> None:
        self._provider = provider

    async def execute(
        self,
        symbols: Iterable[str],
        sort_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[Quote]:
        """Fetch quotes for *symbols* (trimmed, uppercased, de-duplicated).

        Args:
            symbols:    Ticker symbols in display order.
            sort_by:    Optional column to order by: symbol, price or
                        change_percent. Provider order is kept when omitted.
            descending: Reverse the sort order.

        Returns:
            The quotes that could be retrieved; [] without any network call
            when no symbol survives normalization.

        Raises:
            ValueError: if *sort_by* is not a known column.
            RetrievalError: propagated from the provider on failure.
        """
        cleaned = normalize_symbols(symbols)
        if sort_by is not None and sort_by not in SORT_KEYS:
            raise ValueError(f"sort_by must be one of {', '.join(SORT_KEYS)}; got {sort_by!r}")
        if not cleaned:
            return []
        quotes = await self._provider.fetch_quotes(cleaned)
        if sort_by is None:
            return quotes
        return sort_quotes(quotes, sort_by, descending=descending)
