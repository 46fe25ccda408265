# news_sentiment/schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class NewsResponse(BaseModel):
    companyName: str
    articles: List[Dict[str, Any]] = Field(default_factory=list)   # upstream article objects, unchanged
    sentiment: float

class ErrorResponse(BaseModel):
    error: str = "failed"
    stage: Optional[str] = None                                    # only sent when EXPOSE_ERROR_STAGE is on

class HealthResponse(BaseModel):
    status: str
    as_of: str
    service: str
