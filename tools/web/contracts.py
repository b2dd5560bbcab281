"""Data contracts for the fetch/search pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union
from urllib.parse import urlsplit

from config.config import MAX_TIMEOUT_MS, MIN_TIMEOUT_MS
from models.formatted_response import ResponseFormat

from .errors import ValidationError


class SearchTopic(str, Enum):
    WEB = "web"
    NEWS = "news"


@dataclass(frozen=True)
class SearchResult:
    """One entry of a search-results listing, in document order."""

    title: str
    url: str
    description: str | None = None

    def __post_init__(self):
        title = (self.title or "").strip()
        url = (self.url or "").strip()
        if not title or not url:
            raise ValueError("SearchResult requires a non-empty title and url")
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "url", url)
        description = (self.description or "").strip()
        object.__setattr__(self, "description", description or None)

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "url": self.url, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        return cls(
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class DeepSearchEntry:
    """Per-URL outcome of a deep search; exactly one of content/error is set."""

    url: str
    title: str | None = None
    content: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "title": self.title, "content": self.content, "error": self.error}


@dataclass(frozen=True)
class FetchRequest:
    url: str
    response_type: ResponseFormat = ResponseFormat.TEXT
    timeout_ms: int = 30000
    # Cap for search-results extraction; None means the configured default
    max_results: int | None = None


@dataclass(frozen=True)
class SearchRequest:
    query: str
    response_type: ResponseFormat = ResponseFormat.JSON
    max_results: int = 10
    topic: SearchTopic = SearchTopic.WEB
    deep: bool = False
    timeout_ms: int = 30000


# -------------------------------------------------------------------
# Per-attempt fetch outcomes
# -------------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True)
class RateLimited:
    status: int = 429


@dataclass(frozen=True)
class Timeout:
    timeout_ms: int


@dataclass(frozen=True)
class HttpError:
    status: int
    status_text: str


@dataclass(frozen=True)
class NetworkFailure:
    message: str


FetchOutcome = Union[Success, RateLimited, Timeout, HttpError, NetworkFailure]


# -------------------------------------------------------------------
# Boundary validation
# -------------------------------------------------------------------


def parse_response_format(value: Any) -> ResponseFormat:
    try:
        return ResponseFormat(value)
    except ValueError:
        allowed = ", ".join(f.value for f in ResponseFormat)
        raise ValidationError(f"responseType must be one of: {allowed}") from None


def _validate_timeout(timeout_ms: Any) -> int:
    if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int):
        raise ValidationError("timeout must be an integer number of milliseconds")
    if not MIN_TIMEOUT_MS <= timeout_ms <= MAX_TIMEOUT_MS:
        raise ValidationError(f"timeout must be between {MIN_TIMEOUT_MS} and {MAX_TIMEOUT_MS} ms")
    return timeout_ms


def validate_fetch_request(url: Any, response_type: Any = "text", timeout_ms: Any = 30000) -> FetchRequest:
    """
    Build a FetchRequest from raw tool arguments.

    Raises:
        ValidationError: If the url is not an absolute http(s) URL, the format is
            unknown or the timeout is out of range
    """
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("url is required")
    parts = urlsplit(url.strip())
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValidationError(f"Invalid URL: {url}")

    return FetchRequest(
        url=url.strip(),
        response_type=parse_response_format(response_type),
        timeout_ms=_validate_timeout(timeout_ms),
    )


def validate_search_request(
    query: Any,
    response_type: Any = "json",
    max_results: Any = 10,
    topic: Any = "web",
    deep: bool = False,
    timeout_ms: Any = 30000,
) -> SearchRequest:
    """
    Build a SearchRequest from raw tool arguments.

    Raises:
        ValidationError: On an empty query or out-of-range parameters
    """
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("query must be a non-empty string")
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise ValidationError("maxResults must be an integer")
    if not 1 <= max_results <= 100:
        raise ValidationError("maxResults must be between 1 and 100")
    try:
        search_topic = SearchTopic(topic)
    except ValueError:
        raise ValidationError("topic must be one of: web, news") from None

    return SearchRequest(
        query=query,
        response_type=parse_response_format(response_type),
        max_results=max_results,
        topic=search_topic,
        deep=bool(deep),
        timeout_ms=_validate_timeout(timeout_ms),
    )
