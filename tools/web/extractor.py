"""Structured extraction of Google search-result listings.

Google's markup is unversioned, so extraction tries a fixed list of layout
strategies in priority order and keeps the first one that yields anything.
Parsing is static (BeautifulSoup with html.parser): scripts are never executed
and nothing is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from bs4 import BeautifulSoup, Tag

from utils.logger import get_logger

from .contracts import SearchResult
from .errors import ExtractionError

logger = get_logger(__name__)

SNIPPET_SELECTOR = ".VwiC3b, .yXK7lf, .s"


@dataclass(frozen=True)
class SelectorStrategy:
    """
    One known result-listing layout.

    Attributes:
        name: Label used in logs
        block_selector: CSS selector for one result block
        title_selector: CSS selector for the title element inside a block
        description_selector: CSS selector for the snippet inside a block, or None
            to use the title element's next sibling
    """

    name: str
    block_selector: str
    title_selector: str
    description_selector: str | None = None


DEFAULT_STRATEGIES: tuple[SelectorStrategy, ...] = (
    SelectorStrategy(
        name="news_cluster",
        block_selector="div.SoaBEf, [data-news-cluster-id]",
        title_selector="[role=heading], h3, h4",
        description_selector=None,
    ),
    SelectorStrategy(
        name="primary",
        block_selector="div.g",
        title_selector="h3",
        description_selector=SNIPPET_SELECTOR,
    ),
    SelectorStrategy(
        name="alternate",
        block_selector="div.tF2Cxc, div.MjjYud",
        title_selector="h3",
        description_selector=SNIPPET_SELECTOR,
    ),
)


def unwrap_redirect(href: str) -> str:
    """Return the target of a Google "/url?q=..." redirect link, or href unchanged."""
    parts = urlsplit(href)
    if parts.path == "/url" and (not parts.netloc or parts.netloc.endswith("google.com")):
        target = parse_qs(parts.query).get("q") or parse_qs(parts.query).get("url")
        if target and target[0].strip():
            return target[0].strip()
    return href


def _text(element: Tag | None) -> str:
    if element is None:
        return ""
    return element.get_text(" ", strip=True)


class ResultExtractor:
    """Extracts SearchResult entries from a search-results page."""

    def __init__(self, strategies: tuple[SelectorStrategy, ...] = DEFAULT_STRATEGIES):
        self.strategies = strategies

    def extract(self, html: str, max_results: int) -> list[SearchResult]:
        """
        Extract up to max_results results in document order.

        Returns an empty list when no strategy matches.

        Raises:
            ExtractionError: If the parser fails while scanning the document
        """
        if max_results <= 0 or not html:
            return []

        try:
            soup = BeautifulSoup(html, "html.parser")
            for strategy in self.strategies:
                results = self._apply(soup, strategy, max_results)
                if results:
                    logger.debug(
                        f"Extracted {len(results)} results with '{strategy.name}' strategy",
                        extra={"extra_fields": {"strategy": strategy.name, "count": len(results)}},
                    )
                    return results
        except Exception as e:
            raise ExtractionError(f"Failed to parse Google search results: {e}") from e

        logger.info("No search results matched any known layout")
        return []

    def _apply(
        self, soup: BeautifulSoup, strategy: SelectorStrategy, max_results: int
    ) -> list[SearchResult]:
        results: list[SearchResult] = []
        seen: set[str] = set()

        for block in soup.select(strategy.block_selector):
            candidate = self._candidate(block, strategy)
            if candidate is None or candidate.url in seen:
                continue
            seen.add(candidate.url)
            results.append(candidate)
            if len(results) >= max_results:
                break

        return results

    @staticmethod
    def _candidate(block: Tag, strategy: SelectorStrategy) -> SearchResult | None:
        title_el = block.select_one(strategy.title_selector)
        link_el = block.find("a", href=True)

        title = _text(title_el)
        url = unwrap_redirect(str(link_el["href"]).strip()) if link_el else ""
        if not title or not url:
            return None

        if strategy.description_selector:
            description = _text(block.select_one(strategy.description_selector))
        else:
            sibling = title_el.find_next_sibling() if title_el else None
            description = _text(sibling)

        return SearchResult(title=title, url=url, description=description or None)
