r"""Caster building nested objects from mappings.

A parameter typed with a constructible record class (a dataclass, a pydantic
model, a NamedTuple or any class with an annotated ``__init__``) is built
recursively by the owning `ObjectBuilder`. Value types from the standard
library (``Decimal``, ``Path`` and the like) are left to other casters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from ..descriptor import TypeDescriptor, TypeKind
from ..utils import CastError, UnsupportedCastTargetError
from .base import Caster

if TYPE_CHECKING:
    from ..builder import ObjectBuilder

__all__ = ["NestedObjectCaster", "is_value_type"]

_VALUE_MODULES = frozenset(
    {
        "builtins",
        "datetime",
        "decimal",
        "fractions",
        "ipaddress",
        "pathlib",
        "uuid",
    }
)


def is_value_type(cls: type) -> bool:
    """Return True for standard library value types that are never built."""
    return getattr(cls, "__module__", None) in _VALUE_MODULES


class NestedObjectCaster(Caster):
    """Builds a nested object from a mapping through the owning builder."""

    def __init__(self, builder: "ObjectBuilder"):
        self._builder = builder

    def supports(self, descriptor: TypeDescriptor) -> bool:
        tag = descriptor.declared_type
        return (
            tag.kind is TypeKind.CLASS
            and tag.type is not None
            and not is_value_type(tag.type)
            and self._builder.cache.is_constructible(tag.type)
        )

    def cast(self, value: Any, descriptor: TypeDescriptor) -> Any:
        tag = descriptor.declared_type
        if tag.kind is not TypeKind.CLASS or tag.type is None:
            raise UnsupportedCastTargetError(
                descriptor.type_name, value, "nested objects need a class type"
            )

        if isinstance(value, tag.type):
            return value

        if value is None and descriptor.nullable:
            return None

        if isinstance(value, Mapping):
            return self._builder.build(tag.type, value)

        raise CastError(
            descriptor.type_name,
            value,
            "expected a mapping for nested object",
            ["Send the nested object as a JSON object"],
        )
