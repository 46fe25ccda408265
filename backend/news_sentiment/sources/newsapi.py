"""
NewsAPI full-text search for company coverage.
"""
from __future__ import annotations

from typing import List, Optional

import httpx

from news_sentiment.config import NEWS_API_URL, NEWS_LANGUAGE, NEWS_RESULTS_PAGE, NEWS_SORT_BY
from news_sentiment.errors import FetchError
from news_sentiment.models import Article, DateWindow
from news_sentiment.sources.common import request_json


class NewsApiFetcher:
    """Fetches articles mentioning a company from NewsAPI /v2/everything."""

    BASE_URL = NEWS_API_URL

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 15.0):
        self.api_key = api_key
        self.client = client
        self.timeout = timeout

    def build_params(self, company_name: str, window: DateWindow) -> dict:
        return {
            "q": company_name,
            "from": window.start.isoformat(),
            "to": window.end.isoformat(),
            "language": NEWS_LANGUAGE,
            "sortBy": NEWS_SORT_BY,
            "page": NEWS_RESULTS_PAGE,
        }

    async def fetch(self, company_name: str, window: DateWindow) -> List[Article]:
        """
        Fetch articles for a company within the date window.

        Args:
            company_name: Query string, usually the resolved company name
            window: Inclusive publication date range

        Returns:
            Articles in relevance order; empty if nothing matched

        Raises:
            FetchError: On transport failure or a NewsAPI error envelope
        """
        data = await request_json(
            self.client,
            "GET",
            self.BASE_URL,
            error_cls=FetchError,
            timeout=self.timeout,
            params=self.build_params(company_name, window),
            headers={"X-Api-Key": self.api_key},
        )

        if data.get("status") == "error":
            raise FetchError(f"NewsAPI error {data.get('code')}: {data.get('message')}")

        return [Article.from_api(item) for item in data.get("articles") or [] if isinstance(item, dict)]
