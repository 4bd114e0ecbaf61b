"""
Provider selection: decides which market-data backend a session uses.
"""

import logging

from stockdash.domain.entities.dashboard_config import (
    AUTO_PROVIDER,
    DashboardConfig,
    ProviderChoice,
)

logger = logging.getLogger(__name__)


def resolve_provider(config: DashboardConfig) -> ProviderChoice:
    """Resolve the provider for *config*.

    An explicit provider name wins. With "auto" (or nothing) set, a Finnhub
    token selects Finnhub and its absence selects Yahoo. Unknown names fall
    back to Yahoo.
    """
    requested = (config.provider or AUTO_PROVIDER).strip().lower()
    if requested and requested != AUTO_PROVIDER:
        try:
            return ProviderChoice(requested)
        except ValueError:
            logger.warning(f"Unknown provider {config.provider!r}; using Yahoo")
            return ProviderChoice.YAHOO
    return ProviderChoice.FINNHUB if config.finnhub_token else ProviderChoice.YAHOO
