r"""Recursive object construction from key/value input.

`ObjectBuilder.build` turns a mapping of field names to raw values into an
instance of a target class:

1. Read the target's parameter descriptors from the metadata cache.
2. For each parameter in declared order, cast the input value under the
   exact parameter name, else use the declared default, else fail with
   `MissingRequiredParameterError`.
3. Call the constructor with the arguments in declared order.

Nested objects and collection elements recurse through the same builder via
`NestedObjectCaster` and `CollectionCaster`. Failures below the top level
carry the field path in ``error.path`` (``"items[0].qty"``).

Usage::

    builder = ObjectBuilder()
    order = builder.build(CreateOrder, {"customer": {...}, "items": [...]})

    strict = ObjectBuilder(settings=MapperSettings(max_depth=8, max_items=500))
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Type, TypeVar

from .cache import MetadataCache
from .casters.registry import CasterRegistry, default_registry
from .config import MapperSettings
from .descriptor import TypeDescriptor
from .utils import (
    CastError,
    InstantiationError,
    LimitExceededError,
    MappingError,
    MissingRequiredParameterError,
    NoConstructorError,
    get_type_name,
)

logger = logging.getLogger(__name__)

__all__ = ["ObjectBuilder"]

T = TypeVar("T")


class ObjectBuilder:
    """Builds objects from mappings using a caster registry.

    Args:
        registry: Casters to use. Defaults to the standard casters bound to
            this builder.
        cache: Metadata cache. Defaults to a private cache.
        settings: Limits to enforce. Defaults to no limits.
    """

    def __init__(
        self,
        registry: Optional[CasterRegistry] = None,
        cache: Optional[MetadataCache] = None,
        settings: Optional[MapperSettings] = None,
    ):
        self.settings = settings if settings is not None else MapperSettings()
        self.cache = cache if cache is not None else MetadataCache()
        self.registry = registry if registry is not None else default_registry(self)
        self._local = threading.local()

    def build(self, target: Type[T], data: Mapping[str, Any]) -> T:
        """Build an instance of `target` from `data`.

        Keys in `data` that match no parameter are ignored.

        Raises:
            TypeNotConstructibleError: If `target` cannot be introspected.
            NoConstructorError: If `target` declares no constructor.
            MissingRequiredParameterError: For the first required parameter
                absent from `data`.
            CastError: If a value is incompatible with its parameter type.
            InstantiationError: If the constructor itself raises.
            LimitExceededError: If a configured depth or size limit is hit.
        """
        name = get_type_name(target)
        if not isinstance(data, Mapping):
            raise CastError(
                name, data, "expected a mapping of field names to values"
            )

        descriptors = self.cache.parameters_of(target)
        if not self.cache.has_constructor(target):
            raise NoConstructorError(
                f'Type "{name}" has no constructor',
                ["Declare an __init__ or make it a dataclass"],
                {"target_type": name},
            )

        with self._descend(name):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Building %s from keys %s at depth %d",
                    name,
                    sorted(map(str, data)),
                    self.depth,
                )
            args = [self._argument(name, d, data) for d in descriptors]

        try:
            return self.cache.instantiate(target, args)
        except Exception as e:
            raise InstantiationError(name, e) from e

    def _argument(
        self, target_name: str, descriptor: TypeDescriptor, data: Mapping[str, Any]
    ) -> Any:
        if descriptor.name in data:
            return self._cast(descriptor, data[descriptor.name])
        if descriptor.has_default:
            return descriptor.default_value()
        raise MissingRequiredParameterError(target_name, descriptor.name)

    def _cast(self, descriptor: TypeDescriptor, raw: Any) -> Any:
        caster = self.registry.resolve(descriptor)
        if caster is None:
            return raw
        try:
            return caster.cast(raw, descriptor)
        except MappingError as e:
            e.prefix_path(descriptor.name)
            raise
        except Exception as e:
            error = CastError(descriptor.type_name, raw, str(e))
            error.prefix_path(descriptor.name)
            raise error from e

    # -------------------------------------------------------------------------
    # Limits
    # -------------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Nesting depth of the build running on this thread (0 when idle)."""
        return getattr(self._local, "depth", 0)

    @contextmanager
    def _descend(self, target_name: str) -> Iterator[int]:
        depth = self.depth + 1
        limit = self.settings.max_depth
        if limit is not None and depth > limit:
            raise LimitExceededError(
                f"Nesting depth {depth} exceeds the limit of {limit} at {target_name}",
                ["Flatten the input", "Raise max_depth in MapperSettings"],
                {"target_type": target_name, "limit": limit},
            )
        self._local.depth = depth
        try:
            yield depth
        finally:
            self._local.depth = depth - 1

    def check_items(self, descriptor: TypeDescriptor, count: int) -> None:
        """Fail when a collection of `count` items exceeds the configured limit.

        Raises:
            LimitExceededError: If `count` exceeds ``settings.max_items``.
        """
        limit = self.settings.max_items
        if limit is not None and count > limit:
            raise LimitExceededError(
                f"Collection '{descriptor.name}' has {count} items, more than the limit of {limit}",
                ["Send fewer items", "Raise max_items in MapperSettings"],
                {"parameter": descriptor.name, "limit": limit},
            )

    def __repr__(self) -> str:
        return f"<ObjectBuilder(registry={self.registry!r}, cache={self.cache!r})>"
