"""
Sentiment pipeline: ticker in, company name + articles + aggregate score out.

Flow per request:
  1. Resolve  - ticker -> company name (Alpha Vantage)
  2. Window   - 14-day lookback ending today
  3. Fetch    - articles about the company inside the window (NewsAPI)
  4. Extract  - title/description/content of each article as scorable units
  5. Score    - one sentiment request per unit, bounded concurrency
  6. Combine  - magnitude-weighted mean of the unit sentiments

Every failure leaves ``run`` as a PipelineError naming the stage. Partial
results are never returned.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Awaitable, List, Optional, Protocol, TypeVar

from news_sentiment.core.aggregate import aggregate_sentiment
from news_sentiment.core.extract import extract_all
from news_sentiment.core.window import compute_date_window
from news_sentiment.errors import PipelineError
from news_sentiment.models import AggregateResult, Article, CompanyProfile, DateWindow
from news_sentiment.services.language import Scorer, score_units

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Resolver(Protocol):
    async def resolve(self, ticker: str) -> CompanyProfile: ...


class Fetcher(Protocol):
    async def fetch(self, company_name: str, window: DateWindow) -> List[Article]: ...


def normalize_ticker(ticker: str) -> str:
    return ticker.strip().upper()


class SentimentPipeline:
    """Runs the full ticker-to-sentiment flow against injected services.

    Args:
        resolver: Ticker to company-name lookup
        fetcher: News search
        scorer: Per-text sentiment service
        concurrency: Maximum sentiment requests in flight
        timeout: Deadline in seconds for the whole run (None disables it)
        skip_failed_units: Drop units the scorer fails on instead of failing
            the request
        today: Fixed anchor date for the window (defaults to the current date)
    """

    def __init__(
        self,
        resolver: Resolver,
        fetcher: Fetcher,
        scorer: Scorer,
        *,
        concurrency: int = 4,
        timeout: Optional[float] = None,
        skip_failed_units: bool = False,
        today: Optional[date] = None,
    ) -> None:
        self.resolver = resolver
        self.fetcher = fetcher
        self.scorer = scorer
        self.concurrency = concurrency
        self.timeout = timeout
        self.skip_failed_units = skip_failed_units
        self.today = today

    async def run(self, ticker: str) -> AggregateResult:
        """
        Compute the aggregate news sentiment for a ticker.

        Args:
            ticker: Ticker symbol in any case

        Returns:
            AggregateResult with company name, articles and sentiment

        Raises:
            PipelineError: If any stage fails or the deadline passes
        """
        ticker = normalize_ticker(ticker)
        try:
            return await asyncio.wait_for(self._run(ticker), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise PipelineError("timeout", e) from e

    async def _run(self, ticker: str) -> AggregateResult:
        profile = await self._stage("resolve", self.resolver.resolve(ticker))
        logger.info("Resolved %s to %r", ticker, profile.company_name)

        window = compute_date_window(self.today)
        articles = await self._stage("fetch", self.fetcher.fetch(profile.company_name, window))

        units = extract_all(articles)
        logger.info(
            "Scoring %d units from %d articles for %s (%s to %s)",
            len(units), len(articles), ticker, window.start, window.end,
        )

        samples = await self._stage(
            "score",
            score_units(self.scorer, units, self.concurrency, skip_failed=self.skip_failed_units),
        )

        sentiment = aggregate_sentiment(samples)
        logger.info("Aggregate sentiment for %s: %.4f over %d samples", ticker, sentiment, len(samples))

        return AggregateResult(company_name=profile.company_name, articles=articles, sentiment=sentiment)

    @staticmethod
    async def _stage(stage: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except PipelineError:
            raise
        except Exception as e:
            raise PipelineError(stage, e) from e
