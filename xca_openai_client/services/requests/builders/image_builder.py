from __future__ import annotations

import logging

from ..composed import ComposedRequest
from ..headers import build_json_headers
from ..serialization import build_model, dump_model
from ....core.config import IMAGE_GENERATIONS_PATH, IMAGE_MODEL, IMAGE_SIZE
from ....models.api_models import CreateImageRequest

logger = logging.getLogger("XCAOpenAIClient.Services.Requests.ImageBuilder")


def prepare_image_request(
    prompt: str,
    quality: str = "standard",
    response_format: str = "url",
    style: str = "vivid",
) -> ComposedRequest:
    """DALL·E 3, one 1024x1024 image per request."""
    request_body = build_model(
        CreateImageRequest,
        prompt=prompt,
        model=IMAGE_MODEL,
        n=1,
        quality=quality,
        response_format=response_format,
        size=IMAGE_SIZE,
        style=style,
    )
    logger.debug(f"Composed image request: quality={quality}, style={style}, format={response_format}")
    return ComposedRequest(
        method="POST",
        path=IMAGE_GENERATIONS_PATH,
        headers=build_json_headers(),
        body=dump_model(request_body),
    )
