from .base import Caster
from .collection import CollectionCaster
from .enumeration import EnumCaster, cast_to_enum, is_backed_enum
from .identifier import UuidCaster
from .nested import NestedObjectCaster
from .registry import CasterRegistry, default_registry, register_defaults
from .scalar import ScalarCaster, coerce_scalar, is_numeric
from .temporal import DateTimeCaster

__all__ = [
    "Caster",
    "CasterRegistry",
    "ScalarCaster",
    "DateTimeCaster",
    "UuidCaster",
    "EnumCaster",
    "NestedObjectCaster",
    "CollectionCaster",
    "default_registry",
    "register_defaults",
    "cast_to_enum",
    "is_backed_enum",
    "coerce_scalar",
    "is_numeric",
]
