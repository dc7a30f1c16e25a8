r"""Mapper settings.

`MapperSettings` holds the limits a builder enforces and the package log
level. Settings are immutable once created; build them directly or read them
from the environment::

    DTOMAPPER_MAX_DEPTH=16
    DTOMAPPER_MAX_ITEMS=1000
    DTOMAPPER_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .utils import ConfigurationError, configure_logging

logger = logging.getLogger(__name__)

__all__ = ["MapperSettings", "ENV_PREFIX"]

ENV_PREFIX = "DTOMAPPER_"

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class MapperSettings(BaseModel):
    """Limits and logging options of a builder.

    Attributes:
        max_depth: Maximum nesting depth of built objects, the top-level
            object counting as depth 1. ``None`` disables the check.
        max_items: Maximum number of elements in any single collection.
            ``None`` disables the check.
        log_level: Level applied to the ``dtomapper`` logger by
            `apply_logging`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_depth: Optional[int] = Field(default=None, ge=1)
    max_items: Optional[int] = Field(default=None, ge=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "MapperSettings":
        """Validate `values` into settings.

        Raises:
            ConfigurationError: If any value is malformed.
        """
        try:
            return cls.model_validate(dict(values))
        except PydanticValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigurationError(
                "Invalid mapper settings", problems, {"keys": sorted(values)}
            ) from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MapperSettings":
        """Read settings from ``DTOMAPPER_*`` environment variables.

        Unset or empty variables keep their defaults.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip() != "":
                values[name] = raw.strip()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Settings from environment: %s", values)
        return cls.from_mapping(values)

    def apply_logging(self) -> logging.Logger:
        """Set the ``dtomapper`` logger to `log_level`."""
        return configure_logging(self.log_level)
