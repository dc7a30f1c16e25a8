r"""Caster contract.

A caster answers two questions about a parameter: can it handle the declared
type (`supports`), and how to turn a raw input value into that type (`cast`).

`supports` must be pure and cheap enough to call speculatively. `cast` raises
`CastError` on incompatible input and returns already-typed values unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..descriptor import TypeDescriptor

__all__ = ["Caster"]


class Caster(ABC):
    """Strategy converting a raw value into a parameter's declared type."""

    @abstractmethod
    def supports(self, descriptor: TypeDescriptor) -> bool:
        """Return True if this caster can handle `descriptor`'s declared type."""

    @abstractmethod
    def cast(self, value: Any, descriptor: TypeDescriptor) -> Any:
        """Convert `value` into `descriptor`'s declared type.

        Raises:
            CastError: If `value` is incompatible with the declared type.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
