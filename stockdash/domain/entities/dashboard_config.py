"""
Domain entities for dashboard configuration.
Built once at startup by the composition root and passed down explicitly;
nothing in the domain or application layers reads the environment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

AUTO_PROVIDER = "auto"

DEFAULT_YAHOO_BASE_URL = "https://query1.finance.yahoo.com"
DEFAULT_FINNHUB_BASE_URL = "https://finnhub.io/api/v1"
DEFAULT_LABEL_FORMAT = "%Y-%m-%d"


class ProviderChoice(str, Enum):
    YAHOO = "yahoo"
    FINNHUB = "finnhub"


@dataclass(frozen=True)
class DashboardConfig:
    provider: str = AUTO_PROVIDER
    finnhub_token: Optional[str] = None
    yahoo_base_url: str = DEFAULT_YAHOO_BASE_URL
    finnhub_base_url: str = DEFAULT_FINNHUB_BASE_URL
    label_format: str = DEFAULT_LABEL_FORMAT
