"""Test doubles shared across the suite."""

import httpx


class SleepRecorder:
    """Stands in for asyncio.sleep and records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedHandler:
    """MockTransport handler that replays a list of responses/exceptions in order."""

    def __init__(self, *steps):
        self.steps = list(steps)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        if callable(step):
            return step(request)
        return step


class ExplodingStream(httpx.AsyncByteStream):
    """Response body that records whether anything tried to read it."""

    def __init__(self):
        self.read_attempted = False

    async def __aiter__(self):
        self.read_attempted = True
        raise AssertionError("body should not have been read")
        yield b""  # pragma: no cover

    async def aclose(self) -> None:
        pass
