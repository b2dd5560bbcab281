"""Error kinds raised by the fetch/search pipeline.

All of them are caught at the tool boundary (BrowserToolService) and turned into
an error FormattedResponse.
"""

from typing import Any

from models.formatted_response import ToolError


class FetchError(Exception):
    """Base class for every pipeline failure."""

    code = "fetch_error"
    retryable = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_tool_error(self) -> ToolError:
        return ToolError(
            code=self.code,
            message=self.message,
            retryable=self.retryable,
            details=dict(self.details),
        )


class ValidationError(FetchError):
    """Malformed input, rejected before any network I/O."""

    code = "validation_error"


class RateLimitedError(FetchError):
    code = "rate_limit"
    retryable = True


class FetchTimeoutError(FetchError):
    code = "timeout"


class HttpStatusError(FetchError):
    code = "http_error"

    def __init__(self, status: int, reason: str):
        super().__init__(f"HTTP {status}: {reason}", details={"status": status})
        self.status = status
        self.reason = reason


class NetworkError(FetchError):
    code = "network_error"
    retryable = True


class SizeLimitExceededError(FetchError):
    code = "size_limit"


class ContentTypeMismatchError(FetchError):
    code = "content_type_mismatch"


class ExtractionError(FetchError):
    code = "extraction_error"
