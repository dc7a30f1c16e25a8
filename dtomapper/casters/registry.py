r"""Caster registry and its resolution protocol.

For a parameter descriptor, `CasterRegistry.resolve` picks a caster with
this priority:

1. The explicit ``CastWith`` override on the parameter.
2. The caster bound to the declared class or enum by ``register(..., for_type=)``.
3. The first registered caster whose ``supports`` accepts the descriptor,
   in registration order.
4. ``None``: the raw value is used as-is.

Primitive types can never be bound; they only resolve through the scan.

Doxygen Dot Graph of Resolution:
--------------------------------
\dot
digraph Resolution {
    node [shape=rectangle];
    "descriptor" -> "CastWith?" -> "explicit caster";
    "CastWith?" -> "bound type?" -> "bound caster";
    "bound type?" -> "ordered scan" -> "first supporting caster";
    "ordered scan" -> "None";
}
\enddot

Usage::

    registry = CasterRegistry()
    registry.register(ScalarCaster())
    registry.register(MoneyCaster(), for_type=Money)
    caster = registry.resolve(descriptor)
"""

from __future__ import annotations

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from ..descriptor import TypeDescriptor, element_tag
from ..storage import ThreadSafeLocalStorage
from ..utils import RegistryError, get_type_name
from .base import Caster
from .collection import CollectionCaster
from .enumeration import EnumCaster
from .identifier import UuidCaster
from .nested import NestedObjectCaster
from .scalar import ScalarCaster
from .temporal import DateTimeCaster

if TYPE_CHECKING:
    from ..builder import ObjectBuilder

logger = logging.getLogger(__name__)

__all__ = ["CasterRegistry", "default_registry", "register_defaults"]


def _is_caster(obj: Any) -> bool:
    return callable(getattr(obj, "supports", None)) and callable(
        getattr(obj, "cast", None)
    )


class CasterRegistry:
    """Ordered set of casters plus type bindings.

    Registration order is the scan order. Each registry is independent;
    sharing one between builders is the caller's choice.
    """

    def __init__(self) -> None:
        self._casters: List[Caster] = []
        self._bound: ThreadSafeLocalStorage[type, Caster] = ThreadSafeLocalStorage()
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, caster: Caster, for_type: Optional[type] = None) -> Caster:
        """Append `caster` to the scan order, optionally binding it to a type.

        Args:
            caster: Any object with ``supports`` and ``cast`` methods.
            for_type: A class or enum to bind `caster` to. Bound casters win
                over the ordered scan for parameters declared with that type.

        Returns:
            The registered caster, so registration can be chained.

        Raises:
            RegistryError: If `caster` is not a caster or `for_type` is a
                primitive or otherwise non-bindable type.
        """
        if not _is_caster(caster):
            raise RegistryError(
                f"{caster!r} is not a caster",
                ["Implement supports(descriptor) and cast(value, descriptor)"],
                {"actual_type": get_type_name(type(caster))},
            )

        if for_type is not None:
            if not inspect.isclass(for_type) or not element_tag(for_type).is_reference:
                raise RegistryError(
                    f"Cannot bind a caster to {get_type_name(for_type)}",
                    [
                        "Bind casters to classes or enums only",
                        "Primitive and collection types resolve through the ordered scan",
                    ],
                    {"target_type": get_type_name(for_type)},
                )
            self._bound[for_type] = caster

        with self._lock:
            self._casters.append(caster)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Registered %r%s",
                caster,
                f" for {get_type_name(for_type)}" if for_type is not None else "",
            )
        return caster

    def unregister(self, caster: Caster) -> None:
        """Remove `caster` from the scan order and drop its bindings."""
        with self._lock:
            if caster not in self._casters:
                raise RegistryError(
                    f"{caster!r} is not registered",
                    ["Check the registry the caster was added to"],
                )
            self._casters.remove(caster)
            for bound_type, bound in self._bound.items():
                if bound is caster:
                    del self._bound[bound_type]

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, descriptor: TypeDescriptor) -> Optional[Caster]:
        """Pick the caster for `descriptor`, or ``None`` when nothing applies.

        Raises:
            RegistryError: If the explicit caster cannot be created.
        """
        if descriptor.explicit_caster is not None:
            return self._create_explicit(descriptor)

        tag = descriptor.declared_type
        if tag.is_reference and tag.type in self._bound:
            return self._bound[tag.type]

        for caster in self.casters:
            if caster.supports(descriptor):
                return caster

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "No caster for %s: %s, using raw value",
                descriptor.qualified_name,
                descriptor.type_name,
            )
        return None

    def _create_explicit(self, descriptor: TypeDescriptor) -> Caster:
        override = descriptor.explicit_caster
        try:
            caster = override.create()
        except TypeError as e:
            raise RegistryError(
                f"Cannot create caster {get_type_name(override.caster)} "
                f"for parameter '{descriptor.qualified_name}': {e}",
                ["Give the caster a no-argument constructor, or pass an instance"],
                {"parameter": descriptor.qualified_name},
            ) from e
        if not _is_caster(caster):
            raise RegistryError(
                f"CastWith on '{descriptor.qualified_name}' names {caster!r}, which is not a caster",
                ["Implement supports(descriptor) and cast(value, descriptor)"],
                {"parameter": descriptor.qualified_name},
            )
        return caster

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def casters(self) -> Tuple[Caster, ...]:
        """Snapshot of the registered casters in scan order."""
        with self._lock:
            return tuple(self._casters)

    def bound_caster(self, target: type) -> Caster:
        if target not in self._bound:
            raise RegistryError(
                f"No caster bound to {get_type_name(target)}",
                ["Register one with register(caster, for_type=...)"],
                {"target_type": get_type_name(target)},
            )
        return self._bound[target]

    def __len__(self) -> int:
        with self._lock:
            return len(self._casters)

    def __contains__(self, caster: object) -> bool:
        with self._lock:
            return caster in self._casters

    def __repr__(self) -> str:
        names = ", ".join(type(c).__name__ for c in self.casters)
        return f"<CasterRegistry([{names}], bound={len(self._bound)})>"


def register_defaults(
    registry: CasterRegistry, builder: "ObjectBuilder"
) -> CasterRegistry:
    """Register the standard casters on `registry` in their scan order."""
    registry.register(ScalarCaster())
    registry.register(DateTimeCaster())
    registry.register(UuidCaster())
    registry.register(EnumCaster())
    registry.register(NestedObjectCaster(builder))
    registry.register(CollectionCaster(builder))
    return registry


def default_registry(builder: "ObjectBuilder") -> CasterRegistry:
    """Return a new registry holding the standard casters bound to `builder`."""
    return register_defaults(CasterRegistry(), builder)
