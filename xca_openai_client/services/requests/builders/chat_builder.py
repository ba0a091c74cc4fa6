# -*- coding: utf-8 -*-
"""
Chat completion request builder.

- Message order: assistant prompt first, caller history verbatim, new user prompt last.
- A response-format tag is wrapped into ResponseFormat; unknown tags are rejected.
- Vision requests reuse the chat endpoint with a base64 data URL image part.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from ..composed import ComposedRequest
from ..headers import build_json_headers
from ..serialization import build_model, dump_model
from ....core.config import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_ASSISTANT_PROMPT,
    DEFAULT_CHAT_MODEL,
    VISION_MODEL,
    VISION_INSTRUCTION,
)
from ....core.errors import RequestCompositionError
from ....models.api_models import (
    ChatCompletionRequestAssistantMessage,
    ChatCompletionRequestMessage,
    ChatCompletionRequestMessageContentPartImage,
    ChatCompletionRequestUserMessage,
    CreateChatCompletionRequest,
    ImageURL,
    ResponseFormat,
    chat_message_adapter,
)
from ....utils.helpers import to_jpeg_data_url

logger = logging.getLogger("XCAOpenAIClient.Services.Requests.ChatBuilder")

PreviousMessage = Union[ChatCompletionRequestMessage, Mapping[str, Any]]


def normalize_previous_messages(prev_messages: Optional[Sequence[PreviousMessage]]) -> List[ChatCompletionRequestMessage]:
    """
    Schema models pass through untouched; plain dicts are validated into
    the matching message model.
    """
    normalized: List[ChatCompletionRequestMessage] = []
    for index, message in enumerate(prev_messages or []):
        if isinstance(message, Mapping):
            try:
                message = chat_message_adapter.validate_python(dict(message))
            except ValidationError as e:
                logger.warning(f"Rejected previous message #{index}: {e}")
                raise RequestCompositionError(f"Invalid previous message #{index}: {e}") from e
        normalized.append(message)
    return normalized


def build_chat_messages(
    prompt: str,
    assistant_prompt: str = DEFAULT_ASSISTANT_PROMPT,
    prev_messages: Optional[Sequence[PreviousMessage]] = None,
) -> List[ChatCompletionRequestMessage]:
    return (
        [ChatCompletionRequestAssistantMessage(content=assistant_prompt)]
        + normalize_previous_messages(prev_messages)
        + [ChatCompletionRequestUserMessage(content=prompt)]
    )


def build_response_format(response_format_type: Optional[str]) -> Optional[ResponseFormat]:
    if response_format_type is None:
        return None
    return build_model(ResponseFormat, type=response_format_type)


def prepare_chat_request(
    prompt: str,
    model: str = DEFAULT_CHAT_MODEL,
    assistant_prompt: str = DEFAULT_ASSISTANT_PROMPT,
    response_format_type: Optional[str] = None,
    prev_messages: Optional[Sequence[PreviousMessage]] = None,
) -> ComposedRequest:
    request_body = build_model(
        CreateChatCompletionRequest,
        messages=build_chat_messages(prompt, assistant_prompt, prev_messages),
        model=model,
        response_format=build_response_format(response_format_type),
    )
    logger.debug(f"Composed chat request: model={model}, messages={len(request_body.messages)}")
    return ComposedRequest(
        method="POST",
        path=CHAT_COMPLETIONS_PATH,
        headers=build_json_headers(),
        body=dump_model(request_body),
    )


def prepare_vision_request(
    image_data: bytes,
    detail: str = "low",
    max_tokens: Optional[int] = 300,
) -> ComposedRequest:
    image_part = ChatCompletionRequestMessageContentPartImage(
        image_url=build_model(ImageURL, url=to_jpeg_data_url(image_data), detail=detail)
    )
    request_body = build_model(
        CreateChatCompletionRequest,
        messages=[
            ChatCompletionRequestUserMessage(content=VISION_INSTRUCTION),
            ChatCompletionRequestUserMessage(content=[image_part]),
        ],
        model=VISION_MODEL,
        max_tokens=max_tokens,
    )
    logger.debug(f"Composed vision request: image bytes={len(image_data)}, detail={detail}")
    return ComposedRequest(
        method="POST",
        path=CHAT_COMPLETIONS_PATH,
        headers=build_json_headers(),
        body=dump_model(request_body),
    )
