"""
Requests building package.

Exports the composed request type and the per-operation builders.
"""

from .composed import ComposedRequest
from .builders import (
    build_chat_messages,
    build_response_format,
    prepare_chat_request,
    prepare_vision_request,
    build_speech_stream_payload,
    prepare_speech_request,
    prepare_speech_stream_request,
    prepare_transcription_request,
    prepare_image_request,
)

__all__ = [
    "ComposedRequest",
    "build_chat_messages",
    "build_response_format",
    "prepare_chat_request",
    "prepare_vision_request",
    "build_speech_stream_payload",
    "prepare_speech_request",
    "prepare_speech_stream_request",
    "prepare_transcription_request",
    "prepare_image_request",
]
