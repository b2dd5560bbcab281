"""Web fetch and Google search tools for Fetch Browser."""

from .contracts import DeepSearchEntry, FetchRequest, SearchRequest, SearchResult, SearchTopic
from .factory import create_tool_service_from_env
from .fetcher import ResilientFetcher
from .search import SearchOrchestrator
from .service import BrowserToolService

__all__ = [
    "BrowserToolService",
    "DeepSearchEntry",
    "FetchRequest",
    "ResilientFetcher",
    "SearchOrchestrator",
    "SearchRequest",
    "SearchResult",
    "SearchTopic",
    "create_tool_service_from_env",
]
