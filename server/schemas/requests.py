"""Pydantic request models for FastAPI endpoints."""

from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

ResponseType = Literal["text", "json", "html", "markdown"]


class FetchUrlRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., min_length=1, description="The URL to fetch")
    response_type: ResponseType = Field(
        "text", alias="responseType", description="Expected response type"
    )
    timeout: int = Field(
        30000, ge=1000, le=60000, description="Request timeout in milliseconds"
    )

    @field_validator("url")
    @classmethod
    def validate_http_url(cls, value: str) -> str:
        parts = urlsplit(value.strip())
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ValueError("url must be an absolute http(s) URL")
        return value.strip()


class GoogleSearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1, description="The search query to execute")
    response_type: ResponseType = Field(
        "json", alias="responseType", description="Expected response type"
    )
    max_results: int = Field(
        10, ge=1, le=100, alias="maxResults", description="Maximum number of results to return"
    )
    topic: Literal["web", "news"] = Field("web", description="Type of search to perform")
    deep: bool = Field(False, description="Also fetch the full content of every result")

    @field_validator("query")
    @classmethod
    def validate_query(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value
