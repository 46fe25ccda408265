import json

import httpx
import pytest

from fakes import FakeScorer
from news_sentiment.errors import ScoreError
from news_sentiment.models import SentimentSample
from news_sentiment.services.language import GoogleLanguageScorer, score_units


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_scorer_posts_plain_text_document():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["key"] = request.url.params.get("key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={
            "documentSentiment": {"magnitude": 1.3, "score": -0.4},
            "language": "en",
            "sentences": [],
        })

    async with mock_client(handler) as client:
        sample = await GoogleLanguageScorer("g-key", client=client).score("Shares slid after earnings.")

    assert sample == SentimentSample(sentiment=-0.4, magnitude=1.3)
    assert seen["method"] == "POST"
    assert seen["key"] == "g-key"
    assert seen["body"]["document"] == {
        "type": "PLAIN_TEXT",
        "content": "Shares slid after earnings.",
        "language": "en",
    }


@pytest.mark.asyncio
async def test_scorer_skips_blank_text_without_request():
    def handler(request):
        raise AssertionError("no request expected")

    async with mock_client(handler) as client:
        sample = await GoogleLanguageScorer("k", client=client).score("   ")

    assert sample == SentimentSample(0.0, 0.0)


@pytest.mark.asyncio
async def test_scorer_service_error_fails():
    body = {"error": {"code": 400, "message": "Invalid text content", "status": "INVALID_ARGUMENT"}}
    async with mock_client(lambda request: httpx.Response(400, json=body)) as client:
        with pytest.raises(ScoreError, match="400"):
            await GoogleLanguageScorer("k", client=client).score("text")


@pytest.mark.asyncio
async def test_scorer_missing_document_sentiment_fails():
    async with mock_client(lambda request: httpx.Response(200, json={"language": "en"})) as client:
        with pytest.raises(ScoreError):
            await GoogleLanguageScorer("k", client=client).score("text")


@pytest.mark.asyncio
async def test_scorer_timeout_fails():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(ScoreError, match="ReadTimeout"):
            await GoogleLanguageScorer("k", client=client).score("text")


# ── fan-out ───────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_score_units_preserves_order():
    samples = {f"u{i}": SentimentSample(i / 10, 1.0) for i in range(8)}
    scorer = FakeScorer(samples, delay=0.001)

    result = await score_units(scorer, list(samples), concurrency=3)

    assert result == list(samples.values())


@pytest.mark.asyncio
async def test_score_units_respects_concurrency_limit():
    units = [f"u{i}" for i in range(10)]
    scorer = FakeScorer({}, delay=0.01)

    await score_units(scorer, units, concurrency=3)

    assert len(scorer.calls) == 10
    assert scorer.max_in_flight == 3


@pytest.mark.asyncio
async def test_score_units_sequential_when_concurrency_is_one():
    scorer = FakeScorer({}, delay=0.001)
    await score_units(scorer, ["a", "b", "c"], concurrency=1)
    assert scorer.calls == ["a", "b", "c"]
    assert scorer.max_in_flight == 1


@pytest.mark.asyncio
async def test_score_units_empty():
    assert await score_units(FakeScorer({}), []) == []


@pytest.mark.asyncio
async def test_score_units_fails_on_first_error_by_default():
    scorer = FakeScorer({}, failing={"bad"})
    with pytest.raises(ScoreError):
        await score_units(scorer, ["ok", "bad", "ok too"], concurrency=1)


@pytest.mark.asyncio
async def test_score_units_can_skip_failed_units():
    samples = {"ok": SentimentSample(0.5, 1.0), "ok too": SentimentSample(-0.5, 2.0)}
    scorer = FakeScorer(samples, failing={"bad"})

    result = await score_units(scorer, ["ok", "bad", "ok too"], skip_failed=True)

    assert result == [samples["ok"], samples["ok too"]]
