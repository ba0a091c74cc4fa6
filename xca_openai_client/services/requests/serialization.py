from __future__ import annotations

import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ...core.errors import RequestCompositionError
from ...utils.helpers import orjson_dumps_bytes_wrapper

logger = logging.getLogger("XCAOpenAIClient.Services.Requests.Serialization")

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_model(model_cls: Type[ModelT], **values: Any) -> ModelT:
    """Validate caller parameters through the schema layer."""
    try:
        return model_cls(**values)
    except ValidationError as e:
        logger.warning(f"Rejected {model_cls.__name__} parameters: {e}")
        raise RequestCompositionError(f"Invalid {model_cls.__name__}: {e}") from e


def dump_model(model: BaseModel) -> bytes:
    return orjson_dumps_bytes_wrapper(model.model_dump(mode="json", exclude_none=True, by_alias=True))
