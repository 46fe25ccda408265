"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from news_sentiment.config import HTTP_HEADERS, Settings, get_settings
from news_sentiment.errors import PipelineError
from news_sentiment.models import AggregateResult
from news_sentiment.pipeline import SentimentPipeline
from news_sentiment.schemas import ErrorResponse, HealthResponse, NewsResponse
from news_sentiment.services.language import GoogleLanguageScorer
from news_sentiment.sources.alpha_vantage import AlphaVantageResolver
from news_sentiment.sources.newsapi import NewsApiFetcher
from news_sentiment.utils import configure_logging, now_utc

# Configure logging
configure_logging(get_settings())
logger = logging.getLogger("uvicorn")


def build_news_response(result: AggregateResult) -> NewsResponse:
    """
    Build the API payload from a pipeline result.

    Args:
        result: Completed pipeline result

    Returns:
        NewsResponse with the upstream article objects echoed unchanged
    """
    return NewsResponse(
        companyName=result.company_name,
        articles=[article.raw for article in result.articles],
        sentiment=result.sentiment,
    )


def build_error_response(error: PipelineError, settings: Settings) -> JSONResponse:
    """Generic 400 body; the failing stage is included only when configured."""
    body = ErrorResponse(stage=error.stage if settings.EXPOSE_ERROR_STAGE else None)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


def get_pipeline(request: Request, settings: Settings = Depends(get_settings)) -> SentimentPipeline:
    """Assemble a pipeline for one request from settings and the shared HTTP client."""
    client = getattr(request.app.state, "http_client", None)
    timeout = settings.HTTP_TIMEOUT_SECONDS
    return SentimentPipeline(
        resolver=AlphaVantageResolver(settings.ALPHA_VANTAGE_API_KEY, client=client, timeout=timeout),
        fetcher=NewsApiFetcher(settings.NEWS_API_KEY, client=client, timeout=timeout),
        scorer=GoogleLanguageScorer(settings.GOOGLE_API_KEY, client=client, timeout=timeout),
        concurrency=settings.SCORING_CONCURRENCY,
        timeout=settings.PIPELINE_TIMEOUT_SECONDS,
        skip_failed_units=settings.SKIP_FAILED_UNITS,
    )


# Initialize FastAPI app
app = FastAPI(
    title="News Sentiment API",
    version="0.1.0",
    description="Aggregate news sentiment for a stock ticker over the last two weeks",
)


@app.on_event("startup")
async def open_http_client():
    """Create the pooled HTTP client shared by all upstream adapters."""
    settings = get_settings()
    app.state.http_client = httpx.AsyncClient(headers=HTTP_HEADERS, timeout=settings.HTTP_TIMEOUT_SECONDS)
    logger.info("HTTP client ready (timeout %.1fs)", settings.HTTP_TIMEOUT_SECONDS)


@app.on_event("shutdown")
async def close_http_client():
    client = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()
        app.state.http_client = None


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "news-sentiment-api"
    }


@app.get(
    "/news/{ticker}",
    response_model=NewsResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_news_sentiment(
    ticker: str,
    pipeline: SentimentPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    """
    Aggregate sentiment of the last two weeks of news for a ticker.

    Args:
        ticker: Stock ticker symbol (any case)

    Returns:
        NewsResponse on success, or a 400 with a generic error body
    """
    logger.info(f"Collecting news sentiment for {ticker.upper()}")

    try:
        result = await pipeline.run(ticker)
    except PipelineError as e:
        logger.error(f"Sentiment pipeline failed for {ticker.upper()} at {e.stage}: {e.cause}")
        return build_error_response(e, settings)

    return build_news_response(result)


def run() -> None:
    """Console entry point."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
