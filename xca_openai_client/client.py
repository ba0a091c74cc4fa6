"""
OpenAI API client.

Each public method composes one request, dispatches it through the
middleware chain and resolves the response into a plain value. Errors are
raised as the types in ``core.errors``; nothing is retried or suppressed.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, List, Optional, Sequence

import httpx

from .core.config import (
    DEFAULT_ASSISTANT_PROMPT,
    DEFAULT_CHAT_MODEL,
    DEFAULT_OPENAI_API_BASE_URL,
    DEFAULT_SPEECH_MODEL,
    MINI_CHAT_MODEL,
    OPENAI_API_KEY_ENV,
    STREAM_CHUNK_SIZE,
    STREAM_QUEUE_SIZE,
)
from .core.errors import RequestCompositionError, TransportFailureError
from .core.http_client import create_http_client
from .middleware.auth import AuthMiddleware
from .models.api_models import Image
from .services.requests import (
    prepare_chat_request,
    prepare_image_request,
    prepare_speech_request,
    prepare_speech_stream_request,
    prepare_transcription_request,
    prepare_vision_request,
)
from .services.requests.builders.chat_builder import PreviousMessage
from .services.response_resolver import (
    UndocumentedResponse,
    is_success_status,
    raise_for_undocumented,
    resolve_bytes,
    resolve_chat_content,
    resolve_image,
    resolve_text,
)
from .services.streaming import ByteChunkStream
from .services.transport import Dispatcher, RequestMiddleware
from .utils.helpers import preview_text

logger = logging.getLogger("XCAOpenAIClient.Client")

BYTE_STREAM_CONTENT_TYPES = ("application/octet-stream", "binary/octet-stream")


def is_byte_stream_content_type(content_type: Optional[str]) -> bool:
    # 未声明 Content-Type 时按 application/octet-stream 处理
    if not content_type:
        return True
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type.startswith("audio/") or media_type in BYTE_STREAM_CONTENT_TYPES


async def _iter_response_bytes(response: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for piece in response.aiter_bytes():
            if piece:
                yield piece
    except httpx.HTTPError as e:
        logger.error(f"Audio stream interrupted: {type(e).__name__} - {e}")
        raise TransportFailureError(f"{type(e).__name__}: {e}", e) from e


class OpenAIClient:
    """
    Async client for chat, speech, transcription, image and vision calls.

    The credential, middleware chain and ``httpx.AsyncClient`` are fixed at
    construction and shared read-only by concurrent calls. A client created
    here is closed by ``aclose()``; an injected ``http_client`` is left open.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_OPENAI_API_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        middlewares: Optional[Sequence[RequestMiddleware]] = None,
        stream_chunk_size: int = STREAM_CHUNK_SIZE,
    ):
        self._owns_http_client = http_client is None
        self.http_client = http_client or create_http_client(base_url)
        chain: List[RequestMiddleware] = [AuthMiddleware(api_key)]
        chain.extend(middlewares or [])
        self.dispatcher = Dispatcher(self.http_client, chain)
        self.stream_chunk_size = stream_chunk_size

    @classmethod
    def from_env(cls, **kwargs) -> "OpenAIClient":
        if not OPENAI_API_KEY_ENV:
            raise RequestCompositionError("OPENAI_API_KEY is not set")
        return cls(api_key=OPENAI_API_KEY_ENV, **kwargs)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "OpenAIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Chat ---

    async def prompt_chat_gpt(
        self,
        prompt: str,
        model: str = DEFAULT_CHAT_MODEL,
        assistant_prompt: str = DEFAULT_ASSISTANT_PROMPT,
        response_format_type: Optional[str] = None,
        prev_messages: Optional[Sequence[PreviousMessage]] = None,
    ) -> str:
        composed = prepare_chat_request(
            prompt,
            model=model,
            assistant_prompt=assistant_prompt,
            response_format_type=response_format_type,
            prev_messages=prev_messages,
        )
        content = resolve_chat_content(await self.dispatcher.send(composed))
        logger.info(f"Chat Response: {preview_text(content)}")
        return content

    async def prompt_chat_gpt_4o_mini(
        self,
        prompt: str,
        assistant_prompt: str = DEFAULT_ASSISTANT_PROMPT,
        response_format_type: Optional[str] = None,
        prev_messages: Optional[Sequence[PreviousMessage]] = None,
    ) -> str:
        return await self.prompt_chat_gpt(
            prompt,
            model=MINI_CHAT_MODEL,
            assistant_prompt=assistant_prompt,
            response_format_type=response_format_type,
            prev_messages=prev_messages,
        )

    async def prompt_chat_gpt_vision(
        self,
        image_data: bytes,
        detail: str = "low",
        max_tokens: Optional[int] = 300,
    ) -> str:
        composed = prepare_vision_request(image_data, detail=detail, max_tokens=max_tokens)
        return resolve_chat_content(await self.dispatcher.send(composed))

    # --- Speech ---

    async def generate_speech_from(
        self,
        input: str,
        model: str = DEFAULT_SPEECH_MODEL,
        voice: str = "fable",
        format: str = "aac",
        instructions: str = "",
    ) -> bytes:
        composed = prepare_speech_request(
            input, model=model, voice=voice, response_format=format, instructions=instructions
        )
        audio = resolve_bytes(await self.dispatcher.send(composed))
        logger.info(f"Text-to-Speech {model} ({voice}) returned {len(audio)} bytes of {format}")
        return audio

    async def streaming_generate_speech_from(
        self,
        input: str,
        model: str = DEFAULT_SPEECH_MODEL,
        voice: str = "fable",
        format: str = "aac",
    ) -> ByteChunkStream:
        """
        Start a streamed speech request and return its audio as chunks of
        ``stream_chunk_size`` bytes. Close the stream (``async with`` or
        ``aclose()``) when stopping early.
        """
        composed = prepare_speech_stream_request(input, model=model, voice=voice, response_format=format)
        response = await self.dispatcher.open_stream(composed)

        if not is_success_status(response.status_code):
            try:
                body = await response.aread()
            except httpx.HTTPError as e:
                raise TransportFailureError(f"{type(e).__name__}: {e}", e) from e
            finally:
                await response.aclose()
            raise_for_undocumented(UndocumentedResponse(response.status_code, response.headers, body))

        content_type = response.headers.get("Content-Type")
        if not is_byte_stream_content_type(content_type):
            await response.aclose()
            logger.error(f"Streaming speech returned unexpected content type: {content_type}")
            raise TransportFailureError(f"Unexpected content type for audio stream: {content_type}")

        logger.info(f"Starting Stream TTS: {model} ({voice}), format={format}, chunk_size={self.stream_chunk_size}")
        return ByteChunkStream(
            _iter_response_bytes(response),
            chunk_size=self.stream_chunk_size,
            max_pending=STREAM_QUEUE_SIZE,
            on_close=response.aclose,
        )

    # --- Transcription ---

    async def generate_audio_transcriptions(
        self,
        audio_data: bytes,
        file_name: str = "recording.m4a",
        prompt: str = "",
        language_code: Optional[str] = None,
    ) -> str:
        composed = prepare_transcription_request(
            audio_data, file_name=file_name, prompt=prompt, language_code=language_code
        )
        text = resolve_text(await self.dispatcher.send(composed))
        logger.info(f"STT Result: {preview_text(text)}")
        return text

    # --- Images ---

    async def generate_dall_e3_image(
        self,
        prompt: str,
        quality: str = "standard",
        response_format: str = "url",
        style: str = "vivid",
    ) -> Image:
        composed = prepare_image_request(prompt, quality=quality, response_format=response_format, style=style)
        return resolve_image(await self.dispatcher.send(composed))
