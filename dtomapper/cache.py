r"""Process-lifetime cache of constructor metadata per target type.

The first request for a type introspects its signature and derives one
`TypeDescriptor` per parameter. Later requests return the same tuple object.
Population runs under the storage lock, so concurrent first use of a type
stores a single descriptor sequence.

Usage::

    cache = MetadataCache()
    for descriptor in cache.parameters_of(CreateOrder):
        print(descriptor.name, descriptor.type_name)
    order = cache.instantiate(CreateOrder, args)
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from typing_extensions import Annotated, get_type_hints

from .descriptor import TypeDescriptor, build_descriptor
from .storage import ThreadSafeLocalStorage
from .utils import TypeNotConstructibleError, get_type_name

logger = logging.getLogger(__name__)

__all__ = ["MetadataCache"]

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def has_own_constructor(cls: type) -> bool:
    """Return True when `cls` or a base other than ``object`` defines a constructor."""
    return cls.__init__ is not object.__init__ or cls.__new__ is not object.__new__


def _is_model(cls: type) -> bool:
    return not dataclasses.is_dataclass(cls) and isinstance(
        getattr(cls, "model_fields", None), dict
    )


def _model_hints(cls: type) -> Dict[str, Any]:
    hints = {}
    for name, info in cls.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        hints[name] = annotation
    return hints


def _resolve_hints(cls: type) -> Dict[str, Any]:
    if _is_model(cls):
        return _model_hints(cls)
    init = getattr(cls, "__init__", None)
    from_init = inspect.isfunction(init) and not dataclasses.is_dataclass(cls)
    try:
        hints = get_type_hints(init if from_init else cls, include_extras=True)
    except (NameError, TypeError, AttributeError) as e:
        raise TypeNotConstructibleError(
            f"Cannot resolve annotations of {get_type_name(cls)}: {e}",
            ["Import every annotated type at module level"],
            {"target_type": get_type_name(cls)},
        ) from e
    hints.pop("return", None)
    return hints


def _default_factories(cls: type) -> Dict[str, Callable[[], Any]]:
    if dataclasses.is_dataclass(cls):
        return {
            f.name: f.default_factory
            for f in dataclasses.fields(cls)
            if f.default_factory is not dataclasses.MISSING
        }
    model_fields = getattr(cls, "model_fields", None)
    if isinstance(model_fields, dict):
        return {
            name: info.default_factory
            for name, info in model_fields.items()
            if getattr(info, "default_factory", None) is not None
        }
    return {}


class _Entry:
    __slots__ = ("descriptors", "constructor")

    def __init__(self, descriptors: Tuple[TypeDescriptor, ...], constructor: bool):
        self.descriptors = descriptors
        self.constructor = constructor


class MetadataCache:
    """Memoizes the constructor descriptors of target types.

    Types without a constructor of their own yield an empty descriptor
    sequence; whether a constructor exists is reported by `has_constructor`.
    """

    def __init__(self) -> None:
        self._entries: ThreadSafeLocalStorage[type, _Entry] = ThreadSafeLocalStorage()

    def parameters_of(self, target: type) -> Tuple[TypeDescriptor, ...]:
        """Return the ordered descriptors for `target`'s constructor.

        Raises:
            TypeNotConstructibleError: If `target` is not a class or cannot be
                introspected.
        """
        return self._entry(target).descriptors

    def has_constructor(self, target: type) -> bool:
        return self._entry(target).constructor

    def is_constructible(self, target: Any) -> bool:
        """Return True when `target` is a class the builder can instantiate."""
        if not inspect.isclass(target):
            return False
        try:
            return self._entry(target).constructor
        except TypeNotConstructibleError:
            return False

    def instantiate(self, target: type, args: Sequence[Any]) -> Any:
        """Call `target` with `args` given in declared parameter order.

        Keyword-only parameters are passed by name.
        """
        descriptors = self.parameters_of(target)
        positional = []
        keywords = {}
        for descriptor, value in zip(descriptors, args):
            if descriptor.keyword_only:
                keywords[descriptor.name] = value
            else:
                positional.append(value)
        return target(*positional, **keywords)

    def has(self, target: type) -> bool:
        return target in self._entries

    def clear(self) -> None:
        """Drop every cached entry."""
        self._entries.clear()
        logger.info("Metadata cache cleared")

    def stats(self) -> Dict[str, int]:
        entries = list(self._entries.values())
        return {
            "type_count": len(entries),
            "parameter_count": sum(len(e.descriptors) for e in entries),
        }

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def _entry(self, target: Any) -> _Entry:
        if not inspect.isclass(target):
            raise TypeNotConstructibleError(
                f"{target!r} is not a class",
                ["Pass the class itself, not an instance or a name"],
                {"target_type": str(target)},
            )
        return self._entries.get_or_create(target, lambda: self._introspect(target))

    def _introspect(self, target: type) -> _Entry:
        name = get_type_name(target)
        if not has_own_constructor(target):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Cached %s: no constructor", name)
            return _Entry((), False)

        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as e:
            raise TypeNotConstructibleError(
                f"Cannot read the constructor signature of {name}: {e}",
                ["Define an __init__ with named, annotated parameters"],
                {"target_type": name},
            ) from e

        hints = _resolve_hints(target)
        factories = _default_factories(target)
        descriptors = tuple(
            build_descriptor(
                target,
                parameter,
                hints.get(parameter.name, parameter.annotation),
                factories.get(parameter.name),
            )
            for parameter in signature.parameters.values()
            if parameter.kind not in _VARIADIC
        )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Cached %s: %s",
                name,
                ", ".join(f"{d.name}: {d.type_name}" for d in descriptors),
            )
        return _Entry(descriptors, True)

    def __repr__(self) -> str:
        return f"<MetadataCache(types={len(self._entries)})>"


def describe(target: type, cache: Optional[MetadataCache] = None) -> str:
    """Render the descriptors of `target` one per line, for diagnostics."""
    cache = cache or MetadataCache()
    lines = [get_type_name(target, qualname=True)]
    for d in cache.parameters_of(target):
        parts = [f"  {d.name}: {d.type_name}"]
        if d.nullable:
            parts.append("nullable")
        if d.element_type is not None:
            parts.append(f"of {d.element_type.name}")
        if d.has_default:
            parts.append("default=<factory>" if d.default_factory else f"default={d.default!r}")
        if d.explicit_caster is not None:
            parts.append(f"cast_with={get_type_name(d.explicit_caster.caster)}")
        lines.append(" ".join(parts))
    return "\n".join(lines)
