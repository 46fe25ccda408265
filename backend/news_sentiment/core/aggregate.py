"""
Magnitude-weighted combination of per-unit sentiment samples.

Each unit's weight is its share of the total magnitude, so strongly worded
text moves the aggregate more than a neutral snippet.
"""
from __future__ import annotations

from typing import List, Sequence

from news_sentiment.models import SentimentSample


def total_magnitude(samples: Sequence[SentimentSample]) -> float:
    """Sum of magnitudes across all samples."""
    return sum(sample.magnitude for sample in samples)


def magnitude_weights(samples: Sequence[SentimentSample]) -> List[float]:
    """
    Calculate each sample's share of the total magnitude.

    Args:
        samples: Scored units

    Returns:
        One weight per sample, summing to 1.0 when the total magnitude is
        positive; all zeros otherwise
    """
    total = total_magnitude(samples)
    if total <= 0:
        return [0.0 for _ in samples]
    return [sample.magnitude / total for sample in samples]


def aggregate_sentiment(samples: Sequence[SentimentSample]) -> float:
    """
    Calculate the magnitude-weighted mean sentiment.

    Args:
        samples: Scored units, possibly empty

    Returns:
        Weighted sentiment, or 0.0 when there are no samples or every
        magnitude is zero
    """
    if not samples:
        return 0.0

    weights = magnitude_weights(samples)
    return sum(sample.sentiment * weight for sample, weight in zip(samples, weights))
