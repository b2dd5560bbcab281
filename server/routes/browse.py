"""Tool endpoints: fetch_url and google_search."""

from fastapi import APIRouter, Depends

from server.dependencies import get_api_key, get_tool_service
from server.schemas.requests import FetchUrlRequest, GoogleSearchRequest
from server.schemas.responses import ToolDescriptorDTO, ToolResponseDTO
from tools.web.service import BrowserToolService
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/tools", tags=["Tools"])

TOOL_DESCRIPTORS = [
    ToolDescriptorDTO(
        name="fetch_url",
        description="Fetch content from a URL with proper error handling and response processing",
        parameters={
            "url": "The URL to fetch",
            "responseType": "Expected response type (text, json, html, markdown)",
            "timeout": "Request timeout in milliseconds (optional)",
        },
    ),
    ToolDescriptorDTO(
        name="google_search",
        description="Execute a Google search and return results in various formats",
        parameters={
            "query": "The search query to execute",
            "responseType": "Expected response type (text, json, html, markdown)",
            "maxResults": "Maximum number of results to return (optional)",
            "topic": "Type of search to perform (web or news)",
            "deep": "Also fetch the full content of every result (optional)",
        },
    ),
]


@router.get("", response_model=list[ToolDescriptorDTO])
async def list_tools():
    """List the tools exposed by this server."""
    return TOOL_DESCRIPTORS


@router.post("/fetch_url", response_model=ToolResponseDTO)
async def fetch_url(
    request: FetchUrlRequest,
    api_key: str = Depends(get_api_key),
    service: BrowserToolService = Depends(get_tool_service),
):
    """Fetch a URL. Tool failures are reported in the envelope, not as HTTP errors."""
    logger.info(
        "fetch_url called",
        extra={
            "extra_fields": {
                "url": request.url,
                "response_type": request.response_type,
            }
        },
    )
    result = await service.fetch_url(request.url, request.response_type, request.timeout)
    return ToolResponseDTO.from_formatted_response(result)


@router.post("/google_search", response_model=ToolResponseDTO)
async def google_search(
    request: GoogleSearchRequest,
    api_key: str = Depends(get_api_key),
    service: BrowserToolService = Depends(get_tool_service),
):
    """Run a Google search. Tool failures are reported in the envelope, not as HTTP errors."""
    logger.info(
        "google_search called",
        extra={
            "extra_fields": {
                "topic": request.topic,
                "max_results": request.max_results,
                "deep": request.deep,
            }
        },
    )
    result = await service.google_search(
        request.query,
        request.response_type,
        request.max_results,
        request.topic,
        deep=request.deep,
    )
    return ToolResponseDTO.from_formatted_response(result)
