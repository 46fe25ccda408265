"""
Application configuration with environment variable support.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Upstream credentials
    ALPHA_VANTAGE_API_KEY: str = ""
    NEWS_API_KEY: str = ""
    GOOGLE_API_KEY: str = ""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3002

    # Pipeline limits
    HTTP_TIMEOUT_SECONDS: float = 15.0
    PIPELINE_TIMEOUT_SECONDS: float = 60.0
    SCORING_CONCURRENCY: int = 4
    SKIP_FAILED_UNITS: bool = False
    EXPOSE_ERROR_STAGE: bool = False

    # CORS Configuration
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()


# Upstream endpoints
ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"
NEWS_API_URL = "https://newsapi.org/v2/everything"
LANGUAGE_API_URL = "https://language.googleapis.com/v1/documents:analyzeSentiment"

# News Collection Settings
LOOKBACK_DAYS: int = 14
NEWS_LANGUAGE = "en"
NEWS_SORT_BY = "relevancy"
# Page 1 of a relevancy search is dominated by the same few syndicated stories;
# page 2 gives a broader spread of coverage.
NEWS_RESULTS_PAGE: int = 2

# HTTP Client Configuration
USER_AGENT = "news-sentiment-api/0.1"
HTTP_HEADERS = {"User-Agent": USER_AGENT}
