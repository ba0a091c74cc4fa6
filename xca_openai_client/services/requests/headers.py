"""
Headers builders for request construction.

The bearer credential is not set here; AuthMiddleware adds it at dispatch.
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx


def build_json_headers(extra: Optional[Dict[str, str]] = None) -> httpx.Headers:
    """
    Headers for JSON endpoints:
      - Content-Type: application/json
      - Accept: application/json
    """
    headers = httpx.Headers({
        "Content-Type": "application/json",
        "Accept": "application/json",
    })
    for name, value in (extra or {}).items():
        headers[name] = value
    return headers


def build_audio_headers() -> httpx.Headers:
    """JSON request body, binary audio response."""
    return build_json_headers({"Accept": "*/*"})


def build_multipart_headers(content_type: str) -> httpx.Headers:
    """
    Headers for multipart endpoints. ``content_type`` must carry the boundary,
    e.g. ``multipart/form-data; boundary=...``.
    """
    return httpx.Headers({
        "Content-Type": content_type,
        "Accept": "text/plain, application/json",
    })
