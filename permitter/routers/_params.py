from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def flatten_scope(permitted: dict[str, Any], scope: str) -> dict[str, Any]:
    """Merge a single-object scope into the top level; the first entry wins for lists."""

    flat = {k: v for k, v in permitted.items() if k != scope}
    nested = permitted.get(scope)
    if isinstance(nested, list):
        nested = nested[0] if nested else None
    if isinstance(nested, Mapping):
        flat.update(nested)
    return flat


def parse_attributes(model: type[ModelT], attrs: Mapping[str, Any]) -> ModelT:
    try:
        return model.model_validate(attrs)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
