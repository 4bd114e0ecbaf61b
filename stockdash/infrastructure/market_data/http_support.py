"""
Shared HTTP plumbing for the market-data adapters.
Turns httpx failures and non-success statuses into domain TransportErrors and
decodes JSON bodies into RetrievalErrors when they are not valid JSON.
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from stockdash.domain.errors import RetrievalError, TransportError

logger = logging.getLogger(__name__)


async def get_checked(
    client: httpx.AsyncClient,
    url: str,
    failure_message: str,
    params: Optional[Mapping[str, Any]] = None,
) -> httpx.Response:
    """GET *url* and return the response if its status is 2xx.

    Raises:
        TransportError: "<failure_message> (<status>)" on a non-2xx status, or
                        "<failure_message> (<ExceptionName>)" when no response
                        arrived at all.
    """
    logger.debug(f"GET {url}")
    try:
        response = await client.get(url, params=params)
    except httpx.HTTPError as exc:
        raise TransportError(f"{failure_message} ({exc.__class__.__name__})") from exc
    if not response.is_success:
        raise TransportError(
            f"{failure_message} ({response.status_code})",
            status_code=response.status_code,
        )
    return response


def decode_json(response: httpx.Response, what: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise RetrievalError(f"{what} returned an invalid JSON body") from exc
