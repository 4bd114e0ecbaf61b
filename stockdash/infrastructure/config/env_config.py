"""
Infrastructure adapter: process environment → DashboardConfig.
The composition root calls load_dotenv() first, so values from a local .env
file are visible here.
"""

import os
from typing import Mapping, Optional

from stockdash.domain.entities.dashboard_config import (
    AUTO_PROVIDER,
    DEFAULT_FINNHUB_BASE_URL,
    DEFAULT_LABEL_FORMAT,
    DEFAULT_YAHOO_BASE_URL,
    DashboardConfig,
)


def load_config(environ: Optional[Mapping[str, str]] = None) -> DashboardConfig:
    """Build the dashboard configuration from environment variables.

    Reads STOCKDASH_PROVIDER, FINNHUB_TOKEN, YAHOO_BASE_URL, FINNHUB_BASE_URL
    and STOCKDASH_LABEL_FORMAT. Blank values count as unset.
    """
    env = os.environ if environ is None else environ

    def read(name: str) -> Optional[str]:
        value = env.get(name, "").strip()
        return value or None

    return DashboardConfig(
        provider=(read("STOCKDASH_PROVIDER") or AUTO_PROVIDER).lower(),
        finnhub_token=read("FINNHUB_TOKEN"),
        yahoo_base_url=read("YAHOO_BASE_URL") or DEFAULT_YAHOO_BASE_URL,
        finnhub_base_url=read("FINNHUB_BASE_URL") or DEFAULT_FINNHUB_BASE_URL,
        label_format=read("STOCKDASH_LABEL_FORMAT") or DEFAULT_LABEL_FORMAT,
    )
