"""
鉴权中间件
Attaches the bearer credential to every outbound request.
"""
import logging

import httpx

logger = logging.getLogger("XCAOpenAIClient.AuthMiddleware")


class AuthMiddleware:
    """
    Request middleware: ``Authorization: Bearer <api_key>``.

    Middlewares are callables that take an ``httpx.Request`` and return the
    request to send (sync or async). They run in list order before dispatch.
    """

    def __init__(self, api_key: str):
        if not api_key:
            raise ValueError("API key must not be empty")
        self._api_key = api_key

    def __call__(self, request: httpx.Request) -> httpx.Request:
        request.headers["Authorization"] = f"Bearer {self._api_key}"
        return request

    def __repr__(self) -> str:
        # 不在日志中泄露密钥
        return f"AuthMiddleware(api_key='***{self._api_key[-4:]}')"
