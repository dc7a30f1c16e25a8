r"""Request mapping: merge request inputs, build the target, then validate.

Usage::

    mapper = RequestMapper(validator=PydanticValidator())
    data = merge_sources(query=request.query, body=request.json, path=route.params)
    order = mapper.map(CreateOrder, data)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from .builder import ObjectBuilder
from .config import MapperSettings
from .utils import CastError
from .validator import NullValidator, Validator

logger = logging.getLogger(__name__)

__all__ = ["RequestMapper", "merge_sources", "INTERNAL_KEYS"]

T = TypeVar("T")

# Routing bookkeeping that must never reach a target object.
INTERNAL_KEYS = frozenset({"request-target", "middleware-matched"})


def _check_source(name: str, source: Any) -> Mapping[str, Any]:
    if source is None:
        return {}
    if not isinstance(source, Mapping):
        raise CastError(
            "mapping",
            source,
            f"request {name} must be a mapping",
            ["Decode the request body to an object before mapping"],
        )
    return source


def merge_sources(
    query: Optional[Mapping[str, Any]] = None,
    body: Optional[Mapping[str, Any]] = None,
    path: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge request inputs into one mapping.

    Later sources win on key conflicts: path parameters over the body, the
    body over the query string. Keys in `INTERNAL_KEYS` are skipped.
    """
    merged: Dict[str, Any] = {}
    for name, source in (("query", query), ("body", body), ("path", path)):
        for key, value in _check_source(name, source).items():
            if key in INTERNAL_KEYS:
                continue
            merged[key] = value
    return merged


class RequestMapper:
    """Builds a target object from request data and validates it.

    Args:
        validator: Run on every built object. Defaults to `NullValidator`.
        builder: Builder to use. Defaults to a builder with `settings`.
        settings: Used only when no `builder` is given.
    """

    def __init__(
        self,
        validator: Optional[Validator] = None,
        builder: Optional[ObjectBuilder] = None,
        settings: Optional[MapperSettings] = None,
    ):
        self.validator = validator if validator is not None else NullValidator()
        self.builder = builder if builder is not None else ObjectBuilder(settings=settings)

    @classmethod
    def from_env(cls, validator: Optional[Validator] = None) -> "RequestMapper":
        """Create a mapper from ``DTOMAPPER_*`` settings and apply the log level."""
        settings = MapperSettings.from_env()
        settings.apply_logging()
        return cls(validator=validator, settings=settings)

    def map(self, target: Type[T], data: Mapping[str, Any]) -> T:
        """Build `target` from `data`, then validate the result.

        Raises:
            MappingError: From building (see `ObjectBuilder.build`).
            ValidationError: If the validator rejects the built object.
        """
        obj = self.builder.build(target, data)
        self.validator.validate(obj)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Mapped %s", type(obj).__name__)
        return obj

    def map_request(
        self,
        target: Type[T],
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        path: Optional[Mapping[str, Any]] = None,
    ) -> T:
        """Merge request inputs with `merge_sources` and map them onto `target`."""
        return self.map(target, merge_sources(query=query, body=body, path=path))
