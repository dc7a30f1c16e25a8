r"""Date and datetime caster.

Strings are parsed as ISO 8601 through pydantic's datetime parser. Integers
are always read as Unix timestamps in seconds (UTC); a ``date`` target takes
the UTC calendar day of the timestamp.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from ..descriptor import TypeDescriptor, TypeKind
from ..utils import CastError, UnsupportedCastTargetError
from ._pydantic import PydanticValidationError, first_error_message, type_adapter
from .base import Caster

logger = logging.getLogger(__name__)

__all__ = ["DateTimeCaster"]


def _is_temporal(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, date)


class DateTimeCaster(Caster):
    """Casts ISO 8601 strings and Unix timestamps to ``datetime``/``date``."""

    def supports(self, descriptor: TypeDescriptor) -> bool:
        tag = descriptor.declared_type
        return tag.kind is TypeKind.CLASS and _is_temporal(tag.type)

    def cast(self, value: Any, descriptor: TypeDescriptor) -> Any:
        target = descriptor.declared_type.type
        if not _is_temporal(target):
            raise UnsupportedCastTargetError(
                descriptor.type_name, value, "not a date or datetime type"
            )

        if isinstance(value, target):
            return value

        if value is None and descriptor.nullable:
            return None

        base = datetime if issubclass(target, datetime) else date
        if isinstance(value, int) and not isinstance(value, bool):
            return self._from_timestamp(value, base)

        if isinstance(value, str):
            try:
                return type_adapter(base).validate_python(value)
            except PydanticValidationError as e:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Rejected %r for %s: %s", value, base.__name__, e)
                raise CastError(
                    base.__name__,
                    value,
                    first_error_message(e),
                    ["Use ISO 8601, e.g. 2024-11-25T10:00:00+00:00"],
                ) from e

        raise CastError(
            base.__name__, value, "expected an ISO 8601 string or a Unix timestamp"
        )

    @staticmethod
    def _from_timestamp(value: int, base: type) -> Any:
        # Seconds at any magnitude; no millisecond guessing.
        try:
            moment = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise CastError(
                base.__name__,
                value,
                f"timestamp out of range: {e}",
                ["Send the timestamp in seconds since 1970-01-01 UTC"],
            ) from e
        return moment if base is datetime else moment.date()
