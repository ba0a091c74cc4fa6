"""
Response resolution: status classification and body decoding.

A buffered response is first classified into DocumentedResponse (status in
[200, 300)) or UndocumentedResponse (anything else). Resolvers then turn a
DocumentedResponse into the value the caller expects, or raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from ..core.errors import DecodeFailureError, EmptyResponseError, HttpStatusError
from ..models.api_models import CreateChatCompletionResponse, Image, ImagesResponse
from ..utils.helpers import preview_text

logger = logging.getLogger("XCAOpenAIClient.Services.ResponseResolver")

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class DocumentedResponse:
    status_code: int
    headers: httpx.Headers = field(repr=False)
    body: bytes = field(repr=False)


@dataclass(frozen=True)
class UndocumentedResponse:
    status_code: int
    headers: httpx.Headers = field(repr=False)
    body: bytes = field(repr=False)


RawResponse = Union[DocumentedResponse, UndocumentedResponse]


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def classify_response(status_code: int, headers: httpx.Headers, body: bytes) -> RawResponse:
    if is_success_status(status_code):
        return DocumentedResponse(status_code=status_code, headers=headers, body=body)
    return UndocumentedResponse(status_code=status_code, headers=headers, body=body)


def describe_payload(headers: httpx.Headers, body: bytes) -> str:
    """Full body text for diagnostics, never empty."""
    text = body.decode("utf-8", errors="replace") if body else "<empty body>"
    content_type = headers.get("Content-Type")
    if content_type:
        return f"[{content_type}] {text}"
    return text


def raise_for_undocumented(response: UndocumentedResponse) -> None:
    description = describe_payload(response.headers, response.body)
    logger.error(f"Undocumented response: {response.status_code} - {preview_text(description, 500)}")
    raise HttpStatusError(response.status_code, description)


def _require_documented(response: RawResponse) -> DocumentedResponse:
    if isinstance(response, UndocumentedResponse):
        raise_for_undocumented(response)
    return response


def _parse_json_body(response: DocumentedResponse, model_cls: Type[ModelT]) -> ModelT:
    try:
        return model_cls.model_validate_json(response.body)
    except ValidationError as e:
        logger.error(f"Failed to decode {model_cls.__name__}: {e}")
        raise DecodeFailureError(f"{model_cls.__name__}: {e}") from e


def resolve_chat_content(response: RawResponse) -> str:
    """``choices[0].message.content``; an empty string is a valid answer."""
    documented = _require_documented(response)
    completion = _parse_json_body(documented, CreateChatCompletionResponse)
    message = completion.choices[0].message if completion.choices else None
    if message is None or message.content is None:
        logger.warning("Chat completion returned no content")
        raise EmptyResponseError()
    return message.content


def resolve_bytes(response: RawResponse) -> bytes:
    return _require_documented(response).body


def resolve_text(response: RawResponse) -> str:
    documented = _require_documented(response)
    try:
        return documented.body.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error(f"Response body is not valid UTF-8: {e}")
        raise DecodeFailureError(f"body is not valid UTF-8: {e}") from e


def resolve_image(response: RawResponse) -> Image:
    documented = _require_documented(response)
    images = _parse_json_body(documented, ImagesResponse)
    if not images.data:
        logger.warning("Image generation returned no images")
        raise EmptyResponseError("Unknown response")
    return images.data[0]
