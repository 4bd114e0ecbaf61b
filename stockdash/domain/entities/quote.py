"""
Domain entities for quote and price-history data.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: Optional[float]
    change_percent: Optional[float]


@dataclass(frozen=True)
class HistorySeries:
    """Daily closing prices for one symbol, oldest first.

    labels[i] is the date label for values[i]; values may contain None for
    gaps the provider reports (e.g. non-trading days).
    """

    symbol: str
    labels: list[str] = field(default_factory=list)
    values: list[Optional[float]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.values):
            raise ValueError(
                f"labels and values must have equal length "
                f"({len(self.labels)} != {len(self.values)})"
            )
