"""
Ticker to company-name lookup through the Alpha Vantage OVERVIEW function.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from news_sentiment.config import ALPHA_VANTAGE_URL
from news_sentiment.errors import ResolutionError
from news_sentiment.models import CompanyProfile
from news_sentiment.sources.common import clean_text, request_json

logger = logging.getLogger(__name__)

# Keys Alpha Vantage uses in place of data for throttling and bad symbols.
_NOTICE_KEYS = ("Note", "Information", "Error Message")


class AlphaVantageResolver:
    """Resolves a ticker symbol to the company's registered name."""

    BASE_URL = ALPHA_VANTAGE_URL

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 15.0):
        self.api_key = api_key
        self.client = client
        self.timeout = timeout

    async def resolve(self, ticker: str) -> CompanyProfile:
        """
        Look up the company behind a ticker.

        Args:
            ticker: Upper-case ticker symbol (e.g., 'GME')

        Returns:
            CompanyProfile with a non-empty company name

        Raises:
            ResolutionError: If the service returns no name. Unknown, delisted
                and rate-limited symbols all look the same here.
        """
        data = await request_json(
            self.client,
            "GET",
            self.BASE_URL,
            error_cls=ResolutionError,
            timeout=self.timeout,
            params={"function": "OVERVIEW", "symbol": ticker, "apikey": self.api_key},
        )

        name = clean_text(data.get("Name"))
        if not name:
            notice = next((data[key] for key in _NOTICE_KEYS if key in data), None)
            if notice:
                logger.warning("Alpha Vantage notice for %s: %s", ticker, notice)
            raise ResolutionError(f"no company found for ticker {ticker!r}")

        return CompanyProfile(ticker=ticker, company_name=name)
