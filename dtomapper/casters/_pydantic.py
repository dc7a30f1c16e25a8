"""Cached pydantic adapters used for parsing value types."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

__all__ = ["type_adapter", "first_error_message", "PydanticValidationError"]


@lru_cache(maxsize=None)
def type_adapter(tp: Any) -> TypeAdapter:
    """Return a shared `TypeAdapter` for `tp`."""
    return TypeAdapter(tp)


def first_error_message(error: PydanticValidationError) -> str:
    """Return the message of the first error reported by pydantic."""
    errors = error.errors()
    if not errors:
        return str(error)
    return errors[0]["msg"]
