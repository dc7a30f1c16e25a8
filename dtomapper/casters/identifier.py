"""UUID caster."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from ..descriptor import TypeDescriptor, TypeKind
from ..utils import CastError, UnsupportedCastTargetError
from ._pydantic import PydanticValidationError, first_error_message, type_adapter
from .base import Caster

__all__ = ["UuidCaster"]


def _is_uuid(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, UUID)


class UuidCaster(Caster):
    """Casts UUID strings such as ``550e8400-e29b-41d4-a716-446655440000``."""

    def supports(self, descriptor: TypeDescriptor) -> bool:
        tag = descriptor.declared_type
        return tag.kind is TypeKind.CLASS and _is_uuid(tag.type)

    def cast(self, value: Any, descriptor: TypeDescriptor) -> Any:
        if not _is_uuid(descriptor.declared_type.type):
            raise UnsupportedCastTargetError(
                descriptor.type_name, value, "not a UUID type"
            )

        if isinstance(value, UUID):
            return value

        if value is None and descriptor.nullable:
            return None

        if isinstance(value, str):
            try:
                return type_adapter(UUID).validate_python(value)
            except PydanticValidationError as e:
                raise CastError("UUID", value, first_error_message(e)) from e

        raise CastError("UUID", value, "expected a valid UUID string")
