"""
Lookback window for the news search.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from news_sentiment.config import LOOKBACK_DAYS
from news_sentiment.models import DateWindow


def compute_date_window(today: Optional[date] = None, days: int = LOOKBACK_DAYS) -> DateWindow:
    """
    Compute the inclusive window ending today.

    Dates are local wall-clock calendar dates; no timezone conversion is done.

    Args:
        today: Anchor date (defaults to the local current date)
        days: Window length in days, counting both ends

    Returns:
        DateWindow spanning exactly ``days`` calendar days
    """
    if days < 1:
        raise ValueError("window must span at least one day")

    end = today or date.today()
    return DateWindow(start=end - timedelta(days=days - 1), end=end)
