# -*- coding: utf-8 -*-
"""
Audio request builders: speech (buffered and streamed) and transcription.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..composed import ComposedRequest
from ..headers import build_audio_headers, build_json_headers, build_multipart_headers
from ..serialization import build_model, dump_model
from ...multipart import FileField, StringField, build_multipart_body
from ....core.config import (
    AUDIO_SPEECH_PATH,
    AUDIO_TRANSCRIPTIONS_PATH,
    DEFAULT_SPEECH_MODEL,
    TRANSCRIPTION_MODEL,
    TRANSCRIPTION_TIMEOUT,
)
from ....models.api_models import CreateSpeechRequest
from ....utils.helpers import orjson_dumps_bytes_wrapper

logger = logging.getLogger("XCAOpenAIClient.Services.Requests.AudioBuilder")


def prepare_speech_request(
    input: str,
    model: str = DEFAULT_SPEECH_MODEL,
    voice: str = "fable",
    response_format: str = "aac",
    instructions: str = "",
) -> ComposedRequest:
    request_body = build_model(
        CreateSpeechRequest,
        model=model,
        input=input,
        voice=voice,
        response_format=response_format,
        # 空字符串不下发 instructions 字段
        instructions=instructions or None,
    )
    return ComposedRequest(
        method="POST",
        path=AUDIO_SPEECH_PATH,
        headers=build_audio_headers(),
        body=dump_model(request_body),
    )


def build_speech_stream_payload(input: str, model: str, voice: str, response_format: str) -> Dict[str, Any]:
    """
    Streaming speech body. The schema model has no ``stream`` field, so the
    object is built by hand in this key order.
    """
    return {
        "model": model,
        "input": input,
        "voice": voice,
        "response_format": response_format,
        "stream": True,
    }


def prepare_speech_stream_request(
    input: str,
    model: str = DEFAULT_SPEECH_MODEL,
    voice: str = "fable",
    response_format: str = "aac",
) -> ComposedRequest:
    # 参数仍经 schema 校验，但请求体手工构建
    build_model(CreateSpeechRequest, model=model, input=input, voice=voice, response_format=response_format)
    payload = build_speech_stream_payload(input, model, voice, response_format)
    logger.debug(f"Composed streaming speech request: model={model}, voice={voice}, format={response_format}")
    return ComposedRequest(
        method="POST",
        path=AUDIO_SPEECH_PATH,
        headers=build_audio_headers(),
        body=orjson_dumps_bytes_wrapper(payload),
    )


def prepare_transcription_request(
    audio_data: bytes,
    file_name: str = "recording.m4a",
    prompt: str = "",
    language_code: Optional[str] = None,
    boundary: Optional[str] = None,
) -> ComposedRequest:
    fields = [
        FileField(name="file", file_name=file_name, content_type="audio/mpeg", data=audio_data),
        StringField(name="model", value=TRANSCRIPTION_MODEL),
        StringField(name="response_format", value="text"),
        StringField(name="prompt", value=prompt),
    ]
    if language_code:
        fields.append(StringField(name="language", value=language_code))

    multipart_body = build_multipart_body(fields, boundary=boundary)
    logger.debug(
        f"Composed transcription request: file={file_name}, audio bytes={len(audio_data)}, "
        f"language={language_code or 'auto'}"
    )
    return ComposedRequest(
        method="POST",
        path=AUDIO_TRANSCRIPTIONS_PATH,
        headers=build_multipart_headers(multipart_body.content_type),
        body=multipart_body.body,
        timeout=TRANSCRIPTION_TIMEOUT,
    )
