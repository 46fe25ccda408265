"""
File: news_sentiment/models.py
Internal data structures passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional


JsonDict = Dict[str, Any]


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar-date range used to filter the news search."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class CompanyProfile:
    ticker: str
    company_name: str


@dataclass
class Article:
    """One news article as returned by the search service.

    Any of the text fields may be None. ``raw`` keeps the full upstream
    object so the response can echo every display field unchanged.
    """

    title: Optional[str]
    description: Optional[str]
    content: Optional[str]
    url: Optional[str]
    raw: JsonDict = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: JsonDict) -> "Article":
        return cls(
            title=payload.get("title"),
            description=payload.get("description"),
            content=payload.get("content"),
            url=payload.get("url"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class SentimentSample:
    sentiment: float  # [-1, 1], polarity
    magnitude: float  # >= 0, strength of emotional content


@dataclass
class AggregateResult:
    company_name: str
    articles: List[Article]
    sentiment: float


__all__ = [
    "AggregateResult",
    "Article",
    "CompanyProfile",
    "DateWindow",
    "JsonDict",
    "SentimentSample",
]
