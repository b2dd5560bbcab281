import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

GOOGLE_SEARCH_URL = "https://www.google.com/search"
MIN_TIMEOUT_MS = 1000
MAX_TIMEOUT_MS = 60000
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class FetchConfig:
    """Immutable fetch/search policy threaded into the orchestrators at construction."""

    max_retries: int = 3
    initial_retry_delay_s: float = 1.0
    max_response_bytes: int = 10 * 1024 * 1024  # 10MB
    default_timeout_ms: int = 30000
    internal_timeout_ms: int = 5000
    max_search_results: int = 5
    deep_search_concurrency: int = 5
    user_agent: str = DEFAULT_USER_AGENT
    google_search_url: str = GOOGLE_SEARCH_URL

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        if self.initial_retry_delay_s < 0:
            raise ValueError("initial_retry_delay_s must not be negative")
        if self.max_response_bytes <= 0:
            raise ValueError("max_response_bytes must be positive")
        for name in ("default_timeout_ms", "internal_timeout_ms"):
            value = getattr(self, name)
            if not MIN_TIMEOUT_MS <= value <= MAX_TIMEOUT_MS:
                raise ValueError(f"{name} must be between {MIN_TIMEOUT_MS} and {MAX_TIMEOUT_MS}")
        if not 1 <= self.max_search_results <= 100:
            raise ValueError("max_search_results must be between 1 and 100")
        if self.deep_search_concurrency < 1:
            raise ValueError("deep_search_concurrency must be at least 1")

    def retry_delay_s(self, attempt: int) -> float:
        """Exponential backoff delay for a 0-indexed attempt."""
        return self.initial_retry_delay_s * (2**attempt)


def load_config() -> FetchConfig:
    """
    Build FetchConfig from environment variables.

    A .env file at the project root is loaded first if it exists.

    Environment variables:
        FETCH_MAX_RETRIES, FETCH_INITIAL_RETRY_DELAY_S, FETCH_MAX_RESPONSE_BYTES,
        FETCH_DEFAULT_TIMEOUT_MS, FETCH_INTERNAL_TIMEOUT_MS, FETCH_MAX_SEARCH_RESULTS,
        FETCH_DEEP_CONCURRENCY, FETCH_USER_AGENT

    Raises:
        ValueError: If a variable is not a valid number or is out of range
    """
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)

    defaults = FetchConfig()
    return FetchConfig(
        max_retries=int(os.getenv("FETCH_MAX_RETRIES", defaults.max_retries)),
        initial_retry_delay_s=float(
            os.getenv("FETCH_INITIAL_RETRY_DELAY_S", defaults.initial_retry_delay_s)
        ),
        max_response_bytes=int(os.getenv("FETCH_MAX_RESPONSE_BYTES", defaults.max_response_bytes)),
        default_timeout_ms=int(os.getenv("FETCH_DEFAULT_TIMEOUT_MS", defaults.default_timeout_ms)),
        internal_timeout_ms=int(
            os.getenv("FETCH_INTERNAL_TIMEOUT_MS", defaults.internal_timeout_ms)
        ),
        max_search_results=int(os.getenv("FETCH_MAX_SEARCH_RESULTS", defaults.max_search_results)),
        deep_search_concurrency=int(
            os.getenv("FETCH_DEEP_CONCURRENCY", defaults.deep_search_concurrency)
        ),
        user_agent=os.getenv("FETCH_USER_AGENT", "").strip() or defaults.user_agent,
    )
