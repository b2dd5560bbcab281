from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResponseFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    HTML = "html"
    MARKDOWN = "markdown"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]


_MIME_TYPES = {
    ResponseFormat.TEXT: "text/plain",
    ResponseFormat.JSON: "application/json",
    ResponseFormat.HTML: "text/html",
    ResponseFormat.MARKDOWN: "text/markdown",
}


@dataclass(frozen=True)
class ToolError:
    code: str
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        valid_codes = {
            "validation_error",
            "rate_limit",
            "timeout",
            "http_error",
            "network_error",
            "size_limit",
            "content_type_mismatch",
            "extraction_error",
            "fetch_error",
            "unknown",
        }
        if self.code not in valid_codes:
            object.__setattr__(self, "code", "unknown")


@dataclass(frozen=True)
class FormattedResponse:
    """
    Terminal artifact of one tool call.

    Metadata is informational only (echoed request parameters, counts, flags).
    An error response carries a ToolError and its message as text.
    """

    text: str
    mime_type: str = ResponseFormat.TEXT.mime_type
    metadata: dict[str, Any] = field(default_factory=dict)
    error: ToolError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(
        cls, text: str, response_format: ResponseFormat, metadata: dict[str, Any] | None = None
    ) -> "FormattedResponse":
        return cls(text=text, mime_type=response_format.mime_type, metadata=dict(metadata or {}))

    @classmethod
    def failure(
        cls, error: ToolError, metadata: dict[str, Any] | None = None
    ) -> "FormattedResponse":
        return cls(
            text=error.message,
            mime_type=ResponseFormat.TEXT.mime_type,
            metadata=dict(metadata or {}),
            error=error,
        )

    def to_envelope(self) -> dict[str, Any]:
        """Uniform tool envelope: one text content item, metadata, error flag."""
        envelope: dict[str, Any] = {
            "content": [{"type": "text", "text": self.text, "mimeType": self.mime_type}],
            "metadata": self.metadata,
            "isError": self.is_error,
        }
        if self.error:
            envelope["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "retryable": self.error.retryable,
                "details": self.error.details,
            }
        return envelope
