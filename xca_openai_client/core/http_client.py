"""
HTTP 客户端工厂
Builds the httpx.AsyncClient that an OpenAIClient keeps for its whole lifetime.
"""
import logging
import httpx
from typing import Optional, Union

from .config import (
    API_TIMEOUT,
    READ_TIMEOUT,
    MAX_CONNECTIONS,
    HTTP2_ENABLED,
    DEFAULT_OPENAI_API_BASE_URL,
)

logger = logging.getLogger("XCAOpenAIClient.Core.HTTPClient")


def create_http_client(
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: Optional[Union[float, httpx.Timeout]] = None,
) -> httpx.AsyncClient:
    """
    创建复用的 HTTP 客户端

    配置说明：
    - limits: 连接池限制，max_connections 总连接数，max_keepalive_connections 保持活跃的连接数
    - timeout: 总超时 API_TIMEOUT，读取超时 READ_TIMEOUT
    - transport: 测试时可注入 httpx.MockTransport
    """
    final_base_url = base_url or DEFAULT_OPENAI_API_BASE_URL
    final_timeout = timeout if timeout is not None else httpx.Timeout(API_TIMEOUT, read=READ_TIMEOUT)

    logger.info(
        f"Initializing HTTP client for {final_base_url}. "
        f"Timeout: {API_TIMEOUT}s, Read Timeout: {READ_TIMEOUT}s, Max Connections: {MAX_CONNECTIONS}"
    )
    return httpx.AsyncClient(
        base_url=final_base_url,
        timeout=final_timeout,
        limits=httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=50,
            keepalive_expiry=120.0,
        ),
        transport=transport,
        follow_redirects=True,
        http2=HTTP2_ENABLED and transport is None,
    )
