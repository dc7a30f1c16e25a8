r"""Post-construction validation of built objects.

A validator inspects an already built object and raises `ValidationError`
with every failing field, keyed by dotted path. `NullValidator` accepts
everything; `PydanticValidator` re-validates dataclasses, pydantic models and
NamedTuples against their own field constraints (``Annotated[int, Field(gt=0)]``
and the like).
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, Iterable, Tuple, Union

from pydantic import BaseModel
from pydantic.errors import PydanticSchemaGenerationError
from typing_extensions import Protocol, runtime_checkable

from .casters._pydantic import PydanticValidationError, type_adapter
from .utils import ConfigurationError, ValidationError, get_type_name

logger = logging.getLogger(__name__)

__all__ = ["Validator", "NullValidator", "PydanticValidator", "format_loc"]


@runtime_checkable
class Validator(Protocol):
    """Anything with a ``validate(obj)`` method raising `ValidationError`."""

    def validate(self, obj: Any) -> None: ...


class NullValidator:
    """Validator that accepts every object."""

    def validate(self, obj: Any) -> None:
        return None


def format_loc(loc: Iterable[Union[str, int]]) -> str:
    """Render a pydantic error location as ``items[0].qty``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def _payload(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, tuple) and hasattr(obj, "_fields"):
        return tuple(obj)
    raise ConfigurationError(
        f"Cannot validate {get_type_name(type(obj))} with pydantic",
        ["Use a dataclass, a pydantic model or a NamedTuple", "Use NullValidator"],
        {"target_type": get_type_name(type(obj))},
    )


class PydanticValidator:
    """Validates built objects against their pydantic-visible constraints.

    Raises:
        ValidationError: With one entry per failing field path. When a path
            fails more than once, the first message is kept.
        ConfigurationError: If the object's type has no pydantic schema.
    """

    def validate(self, obj: Any) -> None:
        cls = type(obj)
        name = get_type_name(cls)
        payload = _payload(obj)
        try:
            adapter = type_adapter(cls)
        except PydanticSchemaGenerationError as e:
            raise ConfigurationError(
                f"Cannot validate {name}: {e}",
                ["Annotate every field with a type pydantic understands"],
                {"target_type": name},
            ) from e

        try:
            adapter.validate_python(payload)
        except PydanticValidationError as e:
            errors = self._collect(e.errors())
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s failed validation: %s", name, errors)
            raise ValidationError(errors, f"{name} failed validation") from e

    @staticmethod
    def _collect(details: Iterable[Dict[str, Any]]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for detail in details:
            loc: Tuple[Any, ...] = tuple(detail.get("loc", ()))
            errors.setdefault(format_loc(loc) or "__root__", detail["msg"])
        return errors
