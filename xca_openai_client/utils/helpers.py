import base64
import orjson
from typing import Any


def orjson_dumps_bytes_wrapper(data: Any) -> bytes:
    return orjson.dumps(data, option=orjson.OPT_NON_STR_KEYS)


def to_jpeg_data_url(image_data: bytes) -> str:
    """把图片字节编码为 data URL（base64）"""
    return f"data:image/jpeg;base64,{base64.b64encode(image_data).decode('ascii')}"


def preview_text(text: str, limit: int = 100) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
