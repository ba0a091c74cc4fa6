from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx


@dataclass
class ComposedRequest:
    """
    A request ready for dispatch.

    ``path`` is relative to the client's base URL. ``headers`` is an
    ``httpx.Headers`` so lookups are case-insensitive and a later assignment
    replaces an earlier one. ``timeout`` is in seconds and bounds the whole
    buffered exchange.
    """
    method: str
    path: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes = b""
    timeout: Optional[float] = None

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")
