"""
Common utilities for upstream service adapters.
"""
from __future__ import annotations

from typing import Optional, Type

import httpx

from news_sentiment.config import HTTP_HEADERS
from news_sentiment.errors import StageError
from news_sentiment.models import JsonDict


async def request_json(
    client: Optional[httpx.AsyncClient],
    method: str,
    url: str,
    *,
    error_cls: Type[StageError],
    timeout: float,
    **kwargs,
) -> JsonDict:
    """
    Send one request and decode a JSON object body.

    Args:
        client: Shared client, or None to open a short-lived one
        method: HTTP method
        url: Endpoint URL
        error_cls: Stage error raised for any transport or decoding failure
        timeout: Per-request timeout in seconds
        **kwargs: Passed through to ``httpx.AsyncClient.request``

    Returns:
        Decoded JSON object

    Raises:
        error_cls: On connection errors, timeouts, non-2xx status or a body
            that is not a JSON object
    """
    try:
        if client is None:
            async with httpx.AsyncClient(headers=HTTP_HEADERS, timeout=timeout) as own_client:
                response = await own_client.request(method, url, **kwargs)
        else:
            response = await client.request(method, url, timeout=timeout, **kwargs)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        # Message built by hand: the request URL can carry an API key.
        raise error_cls(f"HTTP {e.response.status_code}: {e.response.text[:200]}") from e
    except httpx.HTTPError as e:
        raise error_cls(f"{type(e).__name__}: {e}") from e
    except ValueError as e:
        raise error_cls("response body is not valid JSON") from e

    if not isinstance(data, dict):
        raise error_cls(f"expected a JSON object, got {type(data).__name__}")
    return data


def clean_text(text: Optional[str]) -> str:
    """Strip surrounding whitespace; None becomes an empty string."""
    if not text:
        return ""
    return text.strip()
