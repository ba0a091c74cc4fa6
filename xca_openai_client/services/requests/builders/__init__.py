"""
Focused request builders, one module per API family.
"""

from .chat_builder import (
    build_chat_messages,
    build_response_format,
    prepare_chat_request,
    prepare_vision_request,
)
from .audio_builder import (
    build_speech_stream_payload,
    prepare_speech_request,
    prepare_speech_stream_request,
    prepare_transcription_request,
)
from .image_builder import prepare_image_request

__all__ = [
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
