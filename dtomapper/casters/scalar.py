r"""Scalar caster for ``str``, ``int``, ``float``, ``bool`` and untyped parameters.

Numeric conversion only happens for numeric-looking input; anything else is
passed through unchanged so a later check can report it instead of a silent
zero. Boolean conversion follows truthiness, with ``""`` and ``"0"`` false.
"""

from __future__ import annotations

import math
import re
from typing import Any

from ..descriptor import TypeDescriptor, TypeKind
from .base import Caster

__all__ = ["ScalarCaster", "coerce_scalar", "is_numeric"]

_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")
_INTEGER_RE = re.compile(r"\s*[+-]?\d+\s*")
_FALSY_STRINGS = frozenset({"", "0"})


def is_numeric(value: Any) -> bool:
    """Return True for real numbers and numeric-looking strings (not bools)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and _NUMERIC_RE.fullmatch(value) is not None


def _to_int(value: Any) -> Any:
    if not is_numeric(value):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value):
        return int(value)
    number = float(value)
    if not math.isfinite(number):
        return value
    return int(number)


def _to_float(value: Any) -> Any:
    if not is_numeric(value):
        return value
    return float(value)


def _to_str(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)):
        return str(value)
    return value


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value not in _FALSY_STRINGS
    return bool(value)


_COERCIONS = {
    TypeKind.STRING: _to_str,
    TypeKind.INT: _to_int,
    TypeKind.FLOAT: _to_float,
    TypeKind.BOOL: _to_bool,
}


def coerce_scalar(value: Any, kind: TypeKind) -> Any:
    """Coerce `value` to the scalar `kind`; other kinds pass through."""
    coercion = _COERCIONS.get(kind)
    if coercion is None:
        return value
    return coercion(value)


class ScalarCaster(Caster):
    """Casts to ``str``, ``int``, ``float`` and ``bool``; passes ``Any`` through."""

    def supports(self, descriptor: TypeDescriptor) -> bool:
        return descriptor.declared_type.kind.is_scalar

    def cast(self, value: Any, descriptor: TypeDescriptor) -> Any:
        if value is None and descriptor.nullable:
            return None
        return coerce_scalar(value, descriptor.declared_type.kind)
