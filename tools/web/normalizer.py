"""Turns a successful HTTP response into text in the requested format."""

from __future__ import annotations

import json
from collections.abc import Mapping
from urllib.parse import urlsplit

import httpx

from config.config import FetchConfig
from models.formatted_response import ResponseFormat

from .converter import html_to_markdown, render_results
from .errors import ContentTypeMismatchError, SizeLimitExceededError
from .extractor import ResultExtractor

_REQUIRED_CONTENT_TYPES = {
    ResponseFormat.JSON: "application/json",
    ResponseFormat.HTML: "text/html",
    ResponseFormat.MARKDOWN: "text/markdown",
}


def content_type_satisfies(content_type: str | None, response_format: ResponseFormat) -> bool:
    """
    Whether a declared content type can be served as the requested format.

    TEXT accepts anything. JSON, HTML and MARKDOWN require their own media type.
    """
    required = _REQUIRED_CONTENT_TYPES.get(ResponseFormat(response_format))
    if required is None:
        return True
    return required in (content_type or "").lower()


_DEFAULT_PORTS = {"http": 80, "https": 443}


def _origin(url: str) -> tuple[str, str, int | None]:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    try:
        port = parts.port
    except ValueError:
        return scheme, (parts.hostname or ""), -1
    return scheme, (parts.hostname or ""), port or _DEFAULT_PORTS.get(scheme)


def is_search_results_url(url: str, endpoint: str) -> bool:
    """
    Origin + path equality with the search endpoint; query string is ignored.

    An explicit default port (":443" on https) is the same origin as none.
    """
    return _origin(url) == _origin(endpoint) and urlsplit(url).path == urlsplit(endpoint).path


def _header(headers: Mapping[str, str], name: str) -> str | None:
    if isinstance(headers, httpx.Headers):
        return headers.get(name)
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


class ResponseNormalizer:
    """Applies the size limit, content-type checks and format conversion."""

    def __init__(self, config: FetchConfig, extractor: ResultExtractor | None = None):
        self.config = config
        self.extractor = extractor or ResultExtractor()
        self._handlers = {
            ResponseFormat.JSON: self._as_json,
            ResponseFormat.HTML: self._as_html,
            ResponseFormat.MARKDOWN: self._as_markdown,
            ResponseFormat.TEXT: self._as_text,
        }

    def enforce_size_limit(self, headers: Mapping[str, str]) -> None:
        """
        Reject a response whose declared content-length exceeds the limit.

        Raises:
            SizeLimitExceededError: Before any of the body has been consumed
        """
        raw = _header(headers, "content-length")
        if not raw:
            return
        try:
            declared = int(raw)
        except ValueError:
            return
        if declared > self.config.max_response_bytes:
            raise SizeLimitExceededError(
                "Response too large",
                details={"content_length": declared, "limit": self.config.max_response_bytes},
            )

    async def read_body(self, response: httpx.Response) -> str:
        """
        Stream the body of an open response, aborting once it exceeds the limit.

        Raises:
            SizeLimitExceededError: On a declared or streamed size above the limit
        """
        self.enforce_size_limit(response.headers)

        chunks: list[bytes] = []
        received = 0
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > self.config.max_response_bytes:
                raise SizeLimitExceededError(
                    "Response too large",
                    details={"received_bytes": received, "limit": self.config.max_response_bytes},
                )
            chunks.append(chunk)

        data = b"".join(chunks)
        try:
            return data.decode(response.charset_encoding or "utf-8", errors="replace")
        except LookupError:
            return data.decode("utf-8", errors="replace")

    def normalize(
        self,
        headers: Mapping[str, str],
        body: str,
        response_format: ResponseFormat,
        source_url: str,
        max_results: int | None = None,
    ) -> str:
        """
        Convert a response body into the requested format.

        Search-results pages are always routed through structured extraction.

        Raises:
            SizeLimitExceededError: If the declared content-length is too large
            ContentTypeMismatchError: If JSON or HTML was requested and the
                declared content type does not match
            ExtractionError: If parsing a search-results page fails
        """
        self.enforce_size_limit(headers)
        response_format = ResponseFormat(response_format)
        content_type = _header(headers, "content-type") or ""

        if is_search_results_url(source_url, self.config.google_search_url):
            limit = max_results or self.config.max_search_results
            results = self.extractor.extract(body, limit)
            return render_results(results, response_format)

        return self._handlers[response_format](body, content_type)

    @staticmethod
    def _as_json(body: str, content_type: str) -> str:
        if not content_type_satisfies(content_type, ResponseFormat.JSON):
            raise ContentTypeMismatchError(
                "Response is not JSON", details={"content_type": content_type}
            )
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError as e:
            raise ContentTypeMismatchError(
                f"Response is not valid JSON: {e}", details={"content_type": content_type}
            ) from e
        return json.dumps(parsed, indent=2, ensure_ascii=False)

    @staticmethod
    def _as_html(body: str, content_type: str) -> str:
        if not content_type_satisfies(content_type, ResponseFormat.HTML):
            raise ContentTypeMismatchError(
                "Response is not HTML", details={"content_type": content_type}
            )
        return body

    @staticmethod
    def _as_markdown(body: str, content_type: str) -> str:
        if content_type_satisfies(content_type, ResponseFormat.HTML):
            return html_to_markdown(body)
        if content_type_satisfies(content_type, ResponseFormat.MARKDOWN):
            return body
        return f"```\n{body}\n```"

    @staticmethod
    def _as_text(body: str, content_type: str) -> str:
        return body
