"""
Error taxonomy for the sentiment pipeline.

Each upstream adapter raises a ``StageError`` subclass. The pipeline wraps
whatever escapes a stage into a single ``PipelineError`` that records which
stage failed, so callers only ever handle one exception type.
"""
from __future__ import annotations

from typing import Optional


class StageError(Exception):
    """Base class for failures raised by a single pipeline stage."""

    stage = "unknown"


class ResolutionError(StageError):
    """Ticker could not be resolved to a company name."""

    stage = "resolve"


class FetchError(StageError):
    """News search failed at the transport or service level."""

    stage = "fetch"


class ScoreError(StageError):
    """Sentiment service failed for a single content unit."""

    stage = "score"


class PipelineError(Exception):
    """Uniform failure surfaced by the pipeline."""

    def __init__(self, stage: str, cause: Optional[BaseException] = None):
        self.stage = stage
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"pipeline failed at {stage}{detail}")
