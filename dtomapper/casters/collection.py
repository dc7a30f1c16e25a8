r"""Caster for homogeneous collections.

Each element is cast against the collection's element type:

1. ``None`` stays ``None`` when the element type is optional.
2. An element already of the element class passes through.
3. Mapping elements of a record element type are built as nested objects.
4. Enum element types go through `cast_to_enum`.
5. Anything else is coerced as a scalar; non-mapping elements of a class
   element type pass through unchanged.

The result is a ``tuple`` for tuple parameters and a ``list`` otherwise, in
input order. Failures carry the element index in their path (``[2]``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ..descriptor import TypeDescriptor, TypeKind, TypeTag
from ..utils import CastError, MappingError, UnsupportedCastTargetError
from .base import Caster
from .enumeration import cast_to_enum
from .nested import is_value_type
from .scalar import coerce_scalar

if TYPE_CHECKING:
    from ..builder import ObjectBuilder

logger = logging.getLogger(__name__)

__all__ = ["CollectionCaster"]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


class CollectionCaster(Caster):
    """Casts sequences element by element into lists or tuples."""

    def __init__(self, builder: "ObjectBuilder"):
        self._builder = builder

    def supports(self, descriptor: TypeDescriptor) -> bool:
        element = descriptor.element_type
        return (
            descriptor.declared_type.kind is TypeKind.COLLECTION
            and element is not None
            and element.kind is not TypeKind.MIXED
        )

    def cast(self, value: Any, descriptor: TypeDescriptor) -> Any:
        tag = descriptor.declared_type
        element = descriptor.element_type
        if tag.kind is not TypeKind.COLLECTION or element is None:
            raise UnsupportedCastTargetError(
                descriptor.type_name, value, "not a collection type"
            )

        if value is None and descriptor.nullable:
            return None

        container = tag.type or list
        if not _is_sequence(value):
            raise CastError(
                f"{container.__name__}[{element.name}]",
                value,
                "expected a sequence for collection",
                ["Send the collection as a JSON array"],
            )

        self._builder.check_items(descriptor, len(value))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Casting %d item(s) of %s to %s", len(value), descriptor.name, element.name
            )

        items = []
        for index, item in enumerate(value):
            try:
                items.append(self._cast_item(item, element))
            except MappingError as e:
                e.prefix_path(f"[{index}]")
                raise
        return container(items)

    def _cast_item(self, item: Any, element: TypeTag) -> Any:
        if item is None and element.nullable:
            return None

        if element.is_reference and isinstance(item, element.type):
            return item

        if (
            isinstance(item, Mapping)
            and element.kind is TypeKind.CLASS
            and not is_value_type(element.type)
            and self._builder.cache.is_constructible(element.type)
        ):
            return self._builder.build(element.type, item)

        if element.kind is TypeKind.ENUM:
            return cast_to_enum(item, element.type)

        return coerce_scalar(item, element.kind)
