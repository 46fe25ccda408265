"""
Flatten articles into the text units sent for scoring.
"""
from __future__ import annotations

from typing import Iterable, List

from news_sentiment.models import Article

SCORABLE_FIELDS = ("title", "description", "content")


def extract_units(article: Article) -> List[str]:
    """Return the article's non-null text fields in title, description, content order."""
    units = []
    for name in SCORABLE_FIELDS:
        value = getattr(article, name)
        if value is not None:
            units.append(value)
    return units


def extract_all(articles: Iterable[Article]) -> List[str]:
    """
    Extract units from every article, keeping article order.

    Args:
        articles: Articles in search-result order

    Returns:
        All units from article 0, then article 1, and so on
    """
    units: List[str] = []
    for article in articles:
        units.extend(extract_units(article))
    return units
