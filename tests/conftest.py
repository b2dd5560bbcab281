import os

# Keep test runs from writing rotating log files into the working tree
os.environ.setdefault("LOG_TO_FILE", "false")

import httpx  # noqa: E402
import pytest  # noqa: E402

from config.config import FetchConfig  # noqa: E402
from tests.helpers import SleepRecorder  # noqa: E402
from tools.web.fetcher import ResilientFetcher  # noqa: E402


@pytest.fixture
def config():
    return FetchConfig()


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def make_fetcher(config, sleep_recorder):
    """Build a ResilientFetcher backed by an httpx.MockTransport handler."""

    def _make(handler, fetch_config: FetchConfig | None = None) -> ResilientFetcher:
        return ResilientFetcher(
            fetch_config or config,
            transport=httpx.MockTransport(handler),
            sleep=sleep_recorder,
        )

    return _make
