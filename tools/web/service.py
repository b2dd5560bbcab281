"""Tool boundary: validates arguments and converts every failure into an error response."""

import asyncio
import concurrent.futures
from collections.abc import Coroutine
from typing import Any

from config.config import FetchConfig
from models.formatted_response import FormattedResponse, ToolError
from utils.logger import get_logger

from .contracts import validate_fetch_request, validate_search_request
from .errors import FetchError
from .fetcher import ResilientFetcher
from .search import SearchOrchestrator

logger = get_logger(__name__)


def _plain(value: Any) -> Any:
    """Enum members are echoed by value."""
    return getattr(value, "value", value)


class BrowserToolService:
    """
    Implements the fetch_url and google_search tools.

    Methods on this class NEVER raise - all errors are caught and returned as a
    FormattedResponse with error set.
    """

    def __init__(
        self,
        config: FetchConfig,
        fetcher: ResilientFetcher | None = None,
        searcher: SearchOrchestrator | None = None,
    ):
        self.config = config
        self.fetcher = fetcher or ResilientFetcher(config)
        self.searcher = searcher or SearchOrchestrator(self.fetcher, config)

    async def fetch_url(
        self, url: str, response_type: str = "text", timeout: int | None = None
    ) -> FormattedResponse:
        """
        Fetch a URL and return its content in the requested format.

        Args:
            url: Absolute http(s) URL
            response_type: One of text, json, html, markdown
            timeout: Request timeout in milliseconds (1000-60000)
        """
        timeout = self.config.default_timeout_ms if timeout is None else timeout
        echo = {"url": url, "responseType": _plain(response_type), "timeout": timeout}
        try:
            request = validate_fetch_request(url, response_type, timeout)
            return await self.fetcher.fetch(request)
        except FetchError as e:
            return self._failure(e, echo, "fetch_url")
        except Exception as e:
            return self._unexpected(e, echo, "fetch_url")

    async def google_search(
        self,
        query: str,
        response_type: str = "json",
        max_results: int = 10,
        topic: str = "web",
        deep: bool = False,
    ) -> FormattedResponse:
        """
        Execute a Google search and return results in the requested format.

        Args:
            query: Search query
            response_type: One of text, json, html, markdown
            max_results: Maximum number of results (1-100)
            topic: "web" or "news"
            deep: Also fetch the full content of every result URL
        """
        echo = {
            "query": query,
            "responseType": _plain(response_type),
            "maxResults": max_results,
            "topic": _plain(topic),
            "deep": deep,
        }
        try:
            request = validate_search_request(
                query,
                response_type,
                max_results,
                topic,
                deep=deep,
                timeout_ms=self.config.default_timeout_ms,
            )
            return await self.searcher.search(request)
        except FetchError as e:
            return self._failure(e, echo, "google_search", prefix="Failed to execute Google search: ")
        except Exception as e:
            return self._unexpected(e, echo, "google_search")

    def fetch_url_sync(self, *args, **kwargs) -> FormattedResponse:
        """Synchronous wrapper for fetch_url."""
        return self._run(self.fetch_url(*args, **kwargs))

    def google_search_sync(self, *args, **kwargs) -> FormattedResponse:
        """Synchronous wrapper for google_search."""
        return self._run(self.google_search(*args, **kwargs))

    @staticmethod
    def _run(coroutine: Coroutine[Any, Any, FormattedResponse]) -> FormattedResponse:
        """
        Run a coroutine to completion from synchronous code.

        If an event loop is already running in this thread, the coroutine runs in a
        separate thread with its own loop.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coroutine)

        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(asyncio.run, coroutine).result()

    @staticmethod
    def _failure(
        error: FetchError, echo: dict[str, Any], tool: str, prefix: str = ""
    ) -> FormattedResponse:
        logger.warning(
            f"{tool} failed: {error.message}",
            extra={"extra_fields": {"tool": tool, "code": error.code, **echo}},
        )
        tool_error = error.to_tool_error()
        if prefix:
            tool_error = ToolError(
                code=tool_error.code,
                message=prefix + tool_error.message,
                retryable=tool_error.retryable,
                details=tool_error.details,
            )
        return FormattedResponse.failure(tool_error, metadata=echo)

    @staticmethod
    def _unexpected(error: Exception, echo: dict[str, Any], tool: str) -> FormattedResponse:
        logger.error(f"Unexpected error in {tool}: {error}", exc_info=True)
        return FormattedResponse.failure(
            ToolError(
                code="unknown",
                message=f"Unexpected error: {error!s}",
                details={"exception_type": type(error).__name__},
            ),
            metadata=echo,
        )
