"""
SearchOrchestrator - Google search on top of ResilientFetcher.

The results page is always fetched as JSON so extraction output can be parsed
back into SearchResult objects, then rendered in the caller's format. Deep mode
re-fetches every result URL concurrently; one URL failing never fails the batch.
"""

import asyncio
import json
from urllib.parse import urlencode, urljoin

from config.config import GOOGLE_SEARCH_URL, FetchConfig
from models.formatted_response import FormattedResponse, ResponseFormat
from utils.logger import get_logger

from .contracts import DeepSearchEntry, FetchRequest, SearchRequest, SearchResult, SearchTopic
from .converter import render_deep_results, render_results
from .errors import ExtractionError
from .fetcher import ResilientFetcher

logger = get_logger(__name__)


def build_search_url(
    query: str, max_results: int = 10, topic: SearchTopic = SearchTopic.WEB, endpoint: str | None = None
) -> str:
    """Compose the search URL; news selects the news tab, web the plain web tab."""
    params = {"q": query, "num": str(max_results)}
    if SearchTopic(topic) == SearchTopic.NEWS:
        params["tbm"] = "nws"
    else:
        params["udm"] = "14"
    return f"{endpoint or GOOGLE_SEARCH_URL}?{urlencode(params)}"


def parse_results_json(text: str) -> list[SearchResult]:
    """
    Parse the JSON rendering of extracted results back into SearchResult objects.

    Raises:
        ExtractionError: If the payload is not a JSON array of result objects
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Search results were not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise ExtractionError("Search results were not a JSON array")

    results = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        try:
            results.append(SearchResult.from_dict(item))
        except ValueError:
            continue
    return results


class SearchOrchestrator:
    """Runs a search and, in deep mode, fetches every result page."""

    def __init__(self, fetcher: ResilientFetcher, config: FetchConfig | None = None):
        self.fetcher = fetcher
        self.config = config or fetcher.config

    async def search(self, request: SearchRequest) -> FormattedResponse:
        """
        Execute one search.

        Raises:
            FetchError: If the results page itself cannot be fetched or parsed
        """
        search_url = build_search_url(
            request.query, request.max_results, request.topic, self.config.google_search_url
        )
        logger.info(
            f"Searching: '{request.query[:100]}'",
            extra={
                "extra_fields": {
                    "topic": request.topic.value,
                    "max_results": request.max_results,
                    "deep": request.deep,
                }
            },
        )

        page = await self.fetcher.fetch(
            FetchRequest(
                url=search_url,
                response_type=ResponseFormat.JSON,
                timeout_ms=request.timeout_ms,
                max_results=request.max_results,
            )
        )
        results = parse_results_json(page.text)

        metadata = {
            "query": request.query,
            "topic": request.topic.value,
            "maxResults": request.max_results,
            "responseType": request.response_type.value,
            "deep": request.deep,
            "searchUrl": search_url,
        }

        if not request.deep:
            text = render_results(results, request.response_type)
            metadata.update({"resultsCount": len(results), "successCount": len(results)})
            return FormattedResponse.success(text, request.response_type, metadata)

        entries = await self.fetch_all(results, request.response_type)
        success_count = sum(1 for e in entries if e.ok)
        logger.info(
            f"Deep search complete: {success_count}/{len(entries)} pages fetched",
            extra={"extra_fields": {"results_count": len(entries), "success_count": success_count}},
        )
        metadata.update({"resultsCount": len(entries), "successCount": success_count})
        return FormattedResponse.success(
            render_deep_results(entries, request.response_type), request.response_type, metadata
        )

    async def fetch_all(
        self, results: list[SearchResult], response_format: ResponseFormat
    ) -> list[DeepSearchEntry]:
        """Fetch every result page with bounded concurrency, keeping extraction order."""
        semaphore = asyncio.Semaphore(self.config.deep_search_concurrency)

        async def _fetch_one(result: SearchResult) -> DeepSearchEntry:
            url = urljoin(self.config.google_search_url, result.url)
            async with semaphore:
                try:
                    page = await self.fetcher.fetch(
                        FetchRequest(
                            url=url,
                            response_type=response_format,
                            timeout_ms=self.config.internal_timeout_ms,
                        )
                    )
                    return DeepSearchEntry(url=url, title=result.title, content=page.text)
                except Exception as e:
                    logger.warning(
                        f"Deep fetch failed for {url}: {e}",
                        extra={"extra_fields": {"url": url, "error_type": type(e).__name__}},
                    )
                    return DeepSearchEntry(url=url, title=result.title, error=str(e) or type(e).__name__)

        return list(await asyncio.gather(*(_fetch_one(r) for r in results)))
