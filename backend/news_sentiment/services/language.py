"""
Sentiment scoring through the Google Cloud Natural Language API.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

import httpx

from news_sentiment.config import LANGUAGE_API_URL, NEWS_LANGUAGE
from news_sentiment.errors import ScoreError
from news_sentiment.models import SentimentSample
from news_sentiment.sources.common import request_json

logger = logging.getLogger(__name__)

NEUTRAL_SAMPLE = SentimentSample(sentiment=0.0, magnitude=0.0)


class Scorer(Protocol):
    async def score(self, text: str) -> SentimentSample: ...


class GoogleLanguageScorer:
    """Scores plain text with documents:analyzeSentiment, one request per text."""

    BASE_URL = LANGUAGE_API_URL

    def __init__(self, api_key: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 15.0):
        self.api_key = api_key
        self.client = client
        self.timeout = timeout

    async def score(self, text: str) -> SentimentSample:
        """
        Score a single piece of text.

        Args:
            text: Plain English text

        Returns:
            SentimentSample with the document-level score and magnitude

        Raises:
            ScoreError: On transport failure or a response without a
                document sentiment
        """
        # The API rejects empty documents.
        if not text.strip():
            return NEUTRAL_SAMPLE

        data = await request_json(
            self.client,
            "POST",
            self.BASE_URL,
            error_cls=ScoreError,
            timeout=self.timeout,
            params={"key": self.api_key},
            json={
                "document": {"type": "PLAIN_TEXT", "content": text, "language": NEWS_LANGUAGE},
                "encodingType": "UTF8",
            },
        )

        document = data.get("documentSentiment")
        if not isinstance(document, dict):
            raise ScoreError("response has no documentSentiment")

        try:
            return SentimentSample(
                sentiment=float(document.get("score", 0.0)),
                magnitude=float(document.get("magnitude", 0.0)),
            )
        except (TypeError, ValueError) as e:
            raise ScoreError(f"malformed documentSentiment: {document!r}") from e


async def score_units(
    scorer: Scorer,
    units: Sequence[str],
    concurrency: int = 4,
    skip_failed: bool = False,
) -> List[SentimentSample]:
    """
    Score every unit with at most ``concurrency`` requests in flight.

    Args:
        scorer: Anything with an async ``score(text)`` method
        units: Texts to score
        concurrency: Maximum simultaneous requests
        skip_failed: Drop units whose scoring raised ScoreError instead of
            failing the whole batch

    Returns:
        Samples in unit order (failed units omitted when ``skip_failed``)

    Raises:
        ScoreError: First failure, when ``skip_failed`` is False
    """
    if not units:
        return []

    sem = asyncio.Semaphore(max(1, concurrency))

    async def score_one(index: int, text: str) -> Optional[SentimentSample]:
        async with sem:
            try:
                return await scorer.score(text)
            except ScoreError as e:
                if not skip_failed:
                    raise
                logger.warning("Skipping unit %d after scoring failure: %s", index, e)
                return None

    tasks = [asyncio.ensure_future(score_one(i, text)) for i, text in enumerate(units)]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    return [sample for sample in results if sample is not None]
