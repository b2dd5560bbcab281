"""
ResilientFetcher - retry/timeout/backoff state machine around one logical fetch.

Each attempt produces exactly one FetchOutcome. Only rate limiting (429) and
transport failures are retried, with exponential backoff between attempts.
Timeouts, other HTTP errors and normalization failures are terminal.
"""

import asyncio
from collections.abc import Awaitable, Callable

import httpx

from config.config import FetchConfig
from models.formatted_response import FormattedResponse, ResponseFormat
from utils.logger import get_logger

from .contracts import (
    FetchOutcome,
    FetchRequest,
    HttpError,
    NetworkFailure,
    RateLimited,
    Success,
    Timeout,
)
from .errors import (
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    NetworkError,
    RateLimitedError,
    ValidationError,
)
from .normalizer import ResponseNormalizer, is_search_results_url

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]

_ACCEPT_BY_FORMAT = {
    ResponseFormat.JSON: "application/json",
    ResponseFormat.HTML: "text/html",
    ResponseFormat.MARKDOWN: "text/markdown, text/html;q=0.9, text/plain;q=0.8",
    ResponseFormat.TEXT: "text/plain, */*;q=0.8",
}


def build_request_headers(
    response_format: ResponseFormat, is_search_page: bool, user_agent: str
) -> dict[str, str]:
    """Browser-like request headers; search pages always ask for HTML."""
    headers = {
        "User-Agent": user_agent,
        "Accept": _ACCEPT_BY_FORMAT[ResponseFormat(response_format)],
        "Accept-Language": "en-US,en;q=0.9",
        "Cache-Control": "no-cache",
    }
    if is_search_page:
        headers["Accept"] = "text/html"
        headers["Pragma"] = "no-cache"
    return headers


class ResilientFetcher:
    """
    Fetches one URL with bounded retries and hands the body to the normalizer.

    Example usage:
        fetcher = ResilientFetcher(load_config())
        response = await fetcher.fetch(FetchRequest(url="https://example.com"))
    """

    def __init__(
        self,
        config: FetchConfig,
        normalizer: ResponseNormalizer | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            config: Retry, timeout and size policy
            normalizer: Response normalizer (defaults to one built from config)
            transport: Optional httpx transport, used by tests to simulate servers
            sleep: Awaitable used for backoff waits
        """
        self.config = config
        self.normalizer = normalizer or ResponseNormalizer(config)
        self._transport = transport
        self._sleep = sleep

    def _client(self, timeout_s: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            follow_redirects=True, timeout=timeout_s, transport=self._transport
        )

    async def fetch(self, request: FetchRequest) -> FormattedResponse:
        """
        Fetch and normalize one URL.

        Returns:
            FormattedResponse with the normalized text and request metadata

        Raises:
            FetchError: A subclass describing the terminal failure
        """
        is_search_page = is_search_results_url(request.url, self.config.google_search_url)
        headers = build_request_headers(request.response_type, is_search_page, self.config.user_agent)
        timeout_s = request.timeout_ms / 1000

        async with self._client(timeout_s) as client:
            for attempt in range(self.config.max_retries):
                outcome = await self._attempt(client, request, headers, timeout_s)
                is_last = attempt == self.config.max_retries - 1
                self._log_outcome(request, attempt, outcome)

                if isinstance(outcome, Success):
                    text = self.normalizer.normalize(
                        outcome.headers,
                        outcome.body,
                        request.response_type,
                        request.url,
                        max_results=request.max_results,
                    )
                    return FormattedResponse.success(
                        text,
                        request.response_type,
                        metadata={
                            "url": request.url,
                            "status": outcome.status,
                            "contentType": outcome.headers.get("content-type"),
                            "contentLength": outcome.headers.get("content-length"),
                            "isGoogleSearch": is_search_page,
                            "responseType": request.response_type.value,
                            "attempts": attempt + 1,
                        },
                    )

                if isinstance(outcome, Timeout):
                    raise FetchTimeoutError(
                        f"Request timed out after {outcome.timeout_ms}ms",
                        details={"url": request.url, "timeout_ms": outcome.timeout_ms},
                    )

                if isinstance(outcome, HttpError):
                    raise HttpStatusError(outcome.status, outcome.status_text)

                if isinstance(outcome, RateLimited) and is_last:
                    raise RateLimitedError(
                        "Rate limit exceeded. Please try again later.",
                        details={"url": request.url, "attempts": attempt + 1},
                    )

                if isinstance(outcome, NetworkFailure) and is_last:
                    raise NetworkError(
                        f"Failed to fetch URL: {outcome.message}",
                        details={"url": request.url, "attempts": attempt + 1},
                    )

                if not is_last:
                    await self._sleep(self.config.retry_delay_s(attempt))

        raise FetchError("Failed to fetch URL after all retry attempts", details={"url": request.url})

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        request: FetchRequest,
        headers: dict[str, str],
        timeout_s: float,
    ) -> FetchOutcome:
        """Run one request under a hard deadline and classify what happened."""
        try:
            return await asyncio.wait_for(self._send(client, request, headers), timeout=timeout_s)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return Timeout(timeout_ms=request.timeout_ms)
        except httpx.InvalidURL as e:
            raise ValidationError(f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            return NetworkFailure(message=str(e) or type(e).__name__)

    async def _send(
        self, client: httpx.AsyncClient, request: FetchRequest, headers: dict[str, str]
    ) -> FetchOutcome:
        async with client.stream("GET", request.url, headers=headers) as response:
            if response.status_code == 429:
                return RateLimited()
            if not response.is_success:
                return HttpError(status=response.status_code, status_text=response.reason_phrase)

            body = await self.normalizer.read_body(response)
            return Success(status=response.status_code, headers=dict(response.headers), body=body)

    @staticmethod
    def _log_outcome(request: FetchRequest, attempt: int, outcome: FetchOutcome) -> None:
        fields = {"url": request.url, "attempt": attempt, "outcome": type(outcome).__name__}
        if isinstance(outcome, Success):
            logger.info(
                f"Fetched {request.url} ({outcome.status})",
                extra={"extra_fields": {**fields, "status": outcome.status}},
            )
        elif isinstance(outcome, HttpError):
            fields["status"] = outcome.status
            logger.warning(f"HTTP {outcome.status} for {request.url}", extra={"extra_fields": fields})
        elif isinstance(outcome, NetworkFailure):
            fields["error"] = outcome.message
            logger.warning(
                f"Network failure for {request.url}: {outcome.message}",
                extra={"extra_fields": fields},
            )
        else:
            logger.warning(
                f"{type(outcome).__name__} for {request.url}", extra={"extra_fields": fields}
            )
