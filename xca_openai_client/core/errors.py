"""
客户端错误类型

Every failure of an operation reaches the caller as one of these types.
Nothing here is recovered or retried locally.
"""
from typing import Optional


class OpenAIClientError(Exception):
    """Base class for all errors raised by the client."""


class TransportFailureError(OpenAIClientError):
    """Network, timeout or connection fault, including middleware failures."""

    def __init__(self, message: str, underlying: Optional[BaseException] = None):
        super().__init__(message)
        self.underlying = underlying


class HttpStatusError(OpenAIClientError):
    """The server answered with a status outside of [200, 300)."""

    def __init__(self, status_code: int, payload_description: str):
        super().__init__(f"OpenAIClientError - statuscode: {status_code}, {payload_description}")
        self.status_code = status_code
        self.payload_description = payload_description


class EmptyResponseError(OpenAIClientError):
    """A success response whose body lacks the expected content field."""

    def __init__(self, message: str = "No Response"):
        super().__init__(message)


class DecodeFailureError(OpenAIClientError):
    """The body could not be decoded into the expected shape."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid format: {reason}")
        self.reason = reason


class RequestCompositionError(OpenAIClientError):
    """Caller parameters were rejected while composing the request."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
