"""
Helpers for picking values out of loosely-shaped provider JSON.
Missing or mistyped fields become None instead of raising.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from stockdash.domain.entities.quote import HistorySeries

logger = logging.getLogger(__name__)


def dig(payload: Any, *path: Any) -> Any:
    """Follow dict keys / list indexes in *path*; None as soon as one is missing.

    >>> dig({"chart": {"result": [{"x": 1}]}}, "chart", "result", 0, "x")
    1
    """
    current = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def format_label(epoch_seconds: Any, label_format: str) -> str:
    """Format a UTC epoch-seconds timestamp as a date label."""
    try:
        moment = datetime.fromtimestamp(float(epoch_seconds), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return str(epoch_seconds)
    return moment.strftime(label_format)


def build_series(
    symbol: str,
    timestamps: Optional[Sequence[Any]],
    closes: Optional[Sequence[Any]],
    label_format: str,
) -> HistorySeries:
    """Pair timestamps with closes, cutting both to the shorter length."""
    timestamps = list(timestamps) if isinstance(timestamps, list) else []
    closes = list(closes) if isinstance(closes, list) else []
    if len(timestamps) != len(closes):
        logger.warning(
            f"{symbol}: {len(timestamps)} timestamps vs {len(closes)} closes; "
            f"truncating to {min(len(timestamps), len(closes))}"
        )
    size = min(len(timestamps), len(closes))
    return HistorySeries(
        symbol=symbol,
        labels=[format_label(ts, label_format) for ts in timestamps[:size]],
        values=[to_float(close) for close in closes[:size]],
    )
