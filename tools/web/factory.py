"""Factory for creating the browser tool service from environment configuration."""

from config.config import load_config
from utils.logger import get_logger

from .service import BrowserToolService

logger = get_logger(__name__)


def create_tool_service_from_env() -> BrowserToolService:
    """
    Create a BrowserToolService configured from environment variables.

    See config.config.load_config for the variables read.

    Raises:
        ValueError: If a configuration variable is invalid
    """
    config = load_config()
    logger.info(
        "Browser tool service configured",
        extra={
            "extra_fields": {
                "max_retries": config.max_retries,
                "max_response_bytes": config.max_response_bytes,
                "default_timeout_ms": config.default_timeout_ms,
                "deep_search_concurrency": config.deep_search_concurrency,
            }
        },
    )
    return BrowserToolService(config)
