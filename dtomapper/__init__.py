from ._version import __version__
from .builder import ObjectBuilder
from .cache import MetadataCache
from .casters import (
    Caster,
    CasterRegistry,
    CollectionCaster,
    DateTimeCaster,
    EnumCaster,
    NestedObjectCaster,
    ScalarCaster,
    UuidCaster,
    default_registry,
    register_defaults,
)
from .config import MapperSettings
from .descriptor import CastWith, TypeDescriptor, TypeKind, TypeTag
from .mapper import RequestMapper, merge_sources
from .utils import (
    CastError,
    ConfigurationError,
    InstantiationError,
    LimitExceededError,
    MappingError,
    MissingRequiredParameterError,
    NoConstructorError,
    RegistryError,
    TypeNotConstructibleError,
    UnsupportedCastTargetError,
    ValidationError,
    configure_logging,
)
from .validator import NullValidator, PydanticValidator, Validator

__all__ = [
    "ObjectBuilder",
    "MetadataCache",
    "RequestMapper",
    "merge_sources",
    "MapperSettings",
    "CastWith",
    "TypeDescriptor",
    "TypeKind",
    "TypeTag",
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
    "Validator",
    "NullValidator",
    "PydanticValidator",
    "MappingError",
    "TypeNotConstructibleError",
    "NoConstructorError",
    "MissingRequiredParameterError",
    "InstantiationError",
    "CastError",
    "UnsupportedCastTargetError",
    "LimitExceededError",
    "RegistryError",
    "ConfigurationError",
    "ValidationError",
    "configure_logging",
    "__version__",
]
