"""
XCA OpenAI Client
"""
from .client import OpenAIClient
from .core.errors import (
    OpenAIClientError,
    TransportFailureError,
    HttpStatusError,
    EmptyResponseError,
    DecodeFailureError,
    RequestCompositionError,
)
from .core.logging_utils import configure_logging
from .middleware import AuthMiddleware
from .services.streaming import ByteChunkStream, StreamState

__all__ = [
    "OpenAIClient",
    "OpenAIClientError",
    "TransportFailureError",
    "HttpStatusError",
    "EmptyResponseError",
    "DecodeFailureError",
    "RequestCompositionError",
    "configure_logging",
    "AuthMiddleware",
    "ByteChunkStream",
    "StreamState",
]
