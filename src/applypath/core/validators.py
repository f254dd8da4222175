from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic

from src.applypath.core.exceptions import ValidationError

S = TypeVar("S", bound=pydantic.BaseModel)


def validate_payload(schema: type[S], data: S | Mapping[str, Any]) -> S:
    """Coerce a payload into `schema`, raising the domain ValidationError on failure."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e
