"""
Helpers that shape user input and quote rows for the dashboard table.
"""

from typing import Iterable, Optional

from stockdash.domain.entities.quote import Quote

SORT_KEYS = ("symbol", "price", "change_percent")


def parse_symbols(raw: Optional[str]) -> list[str]:
    """Split comma-separated ticker input into unique uppercase symbols.

    >>> parse_symbols(" aapl, msft,,AAPL ")
    ['AAPL', 'MSFT']
    """
    if not raw:
        return []
    return normalize_symbols(raw.split(","))


def normalize_symbols(symbols: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for symbol in symbols:
        cleaned = (symbol or "").strip().upper()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            result.append(cleaned)
    return result


def sort_quotes(quotes: list[Quote], key: str, descending: bool = False) -> list[Quote]:
    """Return *quotes* ordered by *key*; quotes missing that value go last.

    Raises:
        ValueError: if *key* is not one of SORT_KEYS.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"sort key must be one of {', '.join(SORT_KEYS)}; got {key!r}")
    present = [q for q in quotes if getattr(q, key) is not None]
    missing = [q for q in quotes if getattr(q, key) is None]
    present.sort(key=lambda q: getattr(q, key), reverse=descending)
    return present + missing
