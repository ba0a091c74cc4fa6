"""Test fixtures for xca-openai-client unit tests."""

import asyncio
from typing import Callable, List

import httpx
import pytest

from xca_openai_client import OpenAIClient

TEST_API_KEY = "sk-test-1234"
TEST_BASE_URL = "https://api.openai.com"


# -----------------------------------------------------------------------------
# Fake byte sources
# -----------------------------------------------------------------------------


class RecordingSource:
    """Async byte source that records when it is closed."""

    def __init__(self, pieces: List[bytes], error: Exception = None, repeat: bool = False):
        self.pieces = list(pieces)
        self.error = error
        self.repeat = repeat
        self.closed = False
        self.reads = 0

    def __aiter__(self):
        return self

    async def __anext__(self) -> bytes:
        if self.closed:
            raise StopAsyncIteration
        if self.repeat:
            piece = self.pieces[self.reads % len(self.pieces)]
        elif self.reads < len(self.pieces):
            piece = self.pieces[self.reads]
        elif self.error is not None:
            raise self.error
        else:
            raise StopAsyncIteration
        self.reads += 1
        return piece

    async def aclose(self) -> None:
        self.closed = True


class RecordingByteStream(httpx.AsyncByteStream):
    """Response body stream for httpx.MockTransport that records aclose()."""

    def __init__(self, pieces: List[bytes], repeat: bool = False, error: Exception = None):
        self.pieces = list(pieces)
        self.repeat = repeat
        self.error = error
        self.closed = False

    async def __aiter__(self):
        while True:
            for piece in self.pieces:
                if self.closed:
                    return
                yield piece
            if not self.repeat:
                break
        if self.error is not None:
            raise self.error

    async def aclose(self) -> None:
        self.closed = True


class SlowByteStream(httpx.AsyncByteStream):
    """Response body that yields one piece every ``delay`` seconds."""

    def __init__(self, pieces: List[bytes], delay: float):
        self.pieces = list(pieces)
        self.delay = delay
        self.sent = 0

    async def __aiter__(self):
        for piece in self.pieces:
            await asyncio.sleep(self.delay)
            self.sent += 1
            yield piece


# -----------------------------------------------------------------------------
# Client fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def captured_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(captured_requests) -> Callable[..., OpenAIClient]:
    """Factory fixture: OpenAIClient backed by an httpx.MockTransport handler."""

    def _make(handler, **kwargs) -> OpenAIClient:
        def _recording_handler(request: httpx.Request):
            captured_requests.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(
            base_url=TEST_BASE_URL,
            transport=httpx.MockTransport(_recording_handler),
        )
        return OpenAIClient(api_key=TEST_API_KEY, http_client=http_client, **kwargs)

    return _make


def chat_completion_json(content) -> dict:
    return {
        "id": "chatcmpl-1",
        "model": "gpt-4o",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }
