"""
Streaming pipeline package.
"""

from .chunker import ByteChunkStream, StreamState

__all__ = [
    "ByteChunkStream",
    "StreamState",
]
