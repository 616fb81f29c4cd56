"""Gemini API HTTP client for making requests"""

import logging
from typing import Any, Dict, Optional

import httpx

from errors import TransportError
from oauth.models import AuthContext
from settings import CONNECT_TIMEOUT, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


async def make_gemini_request(
    url: str,
    body: Dict[str, Any],
    auth: AuthContext,
    timeout: float = REQUEST_TIMEOUT,
    connect_timeout: float = CONNECT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Make a non-streaming generation request

    Args:
        url: Model endpoint URL
        body: JSON request body
        auth: Bearer header or API key query parameter
        timeout: Total timeout for the request
        connect_timeout: Time allowed to establish the connection
        transport: Optional httpx transport (tests)

    Returns:
        HTTP response from the Resource Server, whatever its status

    Raises:
        TransportError: If no response was received
    """
    headers = {
        "Content-Type": "application/json",
        **auth.headers,
    }

    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            transport=transport,
        ) as client:
            return await client.post(url, json=body, headers=headers, params=auth.params)
    except httpx.TimeoutException as e:
        logger.error(f"Generation request timed out: {e!r}")
        raise TransportError(f"Generation request timed out after {timeout}s")
    except httpx.HTTPError as e:
        logger.error(f"Generation request failed: {e!r}")
        raise TransportError(f"HTTP request failed: {e}")
