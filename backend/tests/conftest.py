# backend/tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from fakes import make_article
from news_sentiment.main import app, get_pipeline
from news_sentiment.models import SentimentSample
from news_sentiment.pipeline import SentimentPipeline


@pytest.fixture
def gme_articles():
    return [
        make_article(f"title {i}", f"description {i}", f"content {i}", url=f"https://example.com/{i}")
        for i in range(3)
    ]


@pytest.fixture
def gme_samples():
    sentiments = [0.5, -0.2, 0.1, 0.3, -0.4, 0.6, 0.0, 0.2, -0.1]
    texts = [f"{field} {i}" for i in range(3) for field in ("title", "description", "content")]
    return {text: SentimentSample(sentiment=s, magnitude=1.0) for text, s in zip(texts, sentiments)}


@pytest.fixture
def api_client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_pipeline():
    """Route /news requests through a test-built pipeline."""
    def _install(pipeline: SentimentPipeline) -> SentimentPipeline:
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        return pipeline
    yield _install
    app.dependency_overrides.clear()
