r"""Caster for value-backed enums.

An enum is value-backed when every member's value is a ``str`` or an ``int``
(``StrEnum``, ``IntEnum`` and plain enums with such values all qualify).
Lookup is by value; digit strings are accepted for int-backed enums.

Usage::

    class Status(str, Enum):
        ACTIVE = "active"
        INACTIVE = "inactive"

    cast_to_enum("active", Status)   # Status.ACTIVE
    cast_to_enum("gone", Status)     # CastError: no matching member
"""

from __future__ import annotations

import enum
import re
from typing import Any, Type

from ..descriptor import TypeDescriptor, TypeKind
from ..utils import CastError, UnsupportedCastTargetError, get_type_name
from .base import Caster

__all__ = ["EnumCaster", "cast_to_enum", "is_backed_enum"]

_DIGITS_RE = re.compile(r"\s*[+-]?\d+\s*")


def _is_backing_value(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def is_backed_enum(cls: Any) -> bool:
    """Return True if `cls` is an enum whose members all carry str or int values."""
    if not (isinstance(cls, type) and issubclass(cls, enum.Enum)):
        return False
    members = list(cls)
    return bool(members) and all(_is_backing_value(m.value) for m in members)


def _lookup(enum_cls: Type[enum.Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return None


def cast_to_enum(value: Any, enum_cls: Type[enum.Enum]) -> enum.Enum:
    """Return the member of `enum_cls` whose value equals `value`.

    Raises:
        UnsupportedCastTargetError: If `enum_cls` is not value-backed.
        CastError: If `value` is not a str or int, or no member matches.
    """
    name = get_type_name(enum_cls)
    if isinstance(value, enum_cls):
        return value

    if not is_backed_enum(enum_cls):
        raise UnsupportedCastTargetError(
            name,
            value,
            "only enums backed by str or int values can be cast",
            ["Give every member a str or int value"],
        )

    if not _is_backing_value(value):
        raise CastError(name, value, "expected a str or int enum value")

    member = _lookup(enum_cls, value)
    if member is None and isinstance(value, str) and _DIGITS_RE.fullmatch(value):
        member = _lookup(enum_cls, int(value))
    if member is None:
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        raise CastError(
            name,
            value,
            f"no matching member for {value!r}",
            [f"Use one of: {allowed}"],
        )
    return member


class EnumCaster(Caster):
    """Casts str/int values to members of value-backed enums."""

    def supports(self, descriptor: TypeDescriptor) -> bool:
        tag = descriptor.declared_type
        return tag.kind is TypeKind.ENUM and is_backed_enum(tag.type)

    def cast(self, value: Any, descriptor: TypeDescriptor) -> Any:
        tag = descriptor.declared_type
        if tag.kind is not TypeKind.ENUM or tag.type is None:
            raise UnsupportedCastTargetError(
                descriptor.type_name, value, "not an enum type"
            )
        if value is None and descriptor.nullable:
            return None
        return cast_to_enum(value, tag.type)
