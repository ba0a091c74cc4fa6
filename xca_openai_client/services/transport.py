"""
Transport dispatcher.

Builds an httpx.Request from a ComposedRequest, runs it through the ordered
middleware chain and sends it. Every network-level fault is raised as
TransportFailureError.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Sequence, Union

import httpx

from .requests.composed import ComposedRequest
from .response_resolver import RawResponse, classify_response
from ..core.errors import TransportFailureError

logger = logging.getLogger("XCAOpenAIClient.Services.Transport")

RequestMiddleware = Callable[[httpx.Request], Union[httpx.Request, Awaitable[httpx.Request]]]


class Dispatcher:
    def __init__(self, http_client: httpx.AsyncClient, middlewares: Optional[Sequence[RequestMiddleware]] = None):
        self.http_client = http_client
        self.middlewares: List[RequestMiddleware] = list(middlewares or [])

    async def build(self, composed: ComposedRequest) -> httpx.Request:
        request = self.http_client.build_request(
            composed.method,
            composed.path,
            headers=composed.headers,
            content=composed.body,
            timeout=composed.timeout if composed.timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        for middleware in self.middlewares:
            try:
                result = middleware(request)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                logger.error(f"Middleware {middleware!r} failed: {type(e).__name__} - {e}")
                raise TransportFailureError(f"Request middleware failed: {e}", e) from e
            if not isinstance(result, httpx.Request):
                logger.error(f"Middleware {middleware!r} returned {type(result).__name__}")
                raise TransportFailureError(f"Request middleware {middleware!r} did not return a request")
            request = result
        return request

    async def send(self, composed: ComposedRequest) -> RawResponse:
        """
        Buffered exchange: the whole body is read before returning.

        When ``composed.timeout`` is set it is also a wall-clock deadline on the
        whole exchange, from connect to the last body byte.
        """
        request = await self.build(composed)
        logger.info(f"{request.method} {request.url}")
        try:
            if composed.timeout is not None:
                response = await asyncio.wait_for(self.http_client.send(request), timeout=composed.timeout)
            else:
                response = await self.http_client.send(request)
        except asyncio.TimeoutError as e:
            logger.error(f"{request.method} {request.url} timed out after {composed.timeout}s")
            raise TransportFailureError(f"Request timed out after {composed.timeout}s", e) from e
        except httpx.HTTPError as e:
            logger.error(f"{request.method} {request.url} failed: {type(e).__name__} - {e}")
            raise TransportFailureError(f"{type(e).__name__}: {e}", e) from e
        logger.info(f"{request.method} {request.url} -> {response.status_code} ({len(response.content)} bytes)")
        return classify_response(response.status_code, response.headers, response.content)

    async def open_stream(self, composed: ComposedRequest) -> httpx.Response:
        """
        Send with ``stream=True``. The caller owns the returned response and
        must ``aclose()`` it.
        """
        request = await self.build(composed)
        logger.info(f"{request.method} {request.url} (stream)")
        try:
            response = await self.http_client.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"{request.method} {request.url} failed: {type(e).__name__} - {e}")
            raise TransportFailureError(f"{type(e).__name__}: {e}", e) from e
        logger.info(f"{request.method} {request.url} -> {response.status_code} (stream)")
        return response
