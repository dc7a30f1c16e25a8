r"""Exceptions and small helpers shared by the mapping engine.

Every exception carries a human-readable `message`, a list of short remedial
`suggestions` and a free-form `context` dict that is safe to log.

Doxygen Dot Graph of Exception Hierarchy:
------------------------------------------
\dot
digraph ExceptionHierarchy {
    node [shape=rectangle];
    "Exception" -> "MappingError";
    "MappingError" -> "TypeNotConstructibleError";
    "MappingError" -> "NoConstructorError";
    "MappingError" -> "MissingRequiredParameterError";
    "MappingError" -> "InstantiationError";
    "MappingError" -> "CastError";
    "CastError" -> "UnsupportedCastTargetError";
    "MappingError" -> "LimitExceededError";
    "MappingError" -> "RegistryError";
    "MappingError" -> "ConfigurationError";
    "MappingError" -> "ValidationError";
}
\enddot
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, List, Optional

__all__ = [
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
    "get_type_name",
    "get_debug_type",
    "configure_logging",
]

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Exception Classes
# -----------------------------------------------------------------------------


class MappingError(Exception):
    """Base exception for the mapping engine with structured context.

    Attributes:
        message: Human-readable error text.
        suggestions: List of short, imperative hints for remediation.
        context: Free-form key/value details safe to log and render.
    """

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.suggestions = suggestions or []
        self.context = context or {}
        super().__init__(self._build_enhanced_message())

    def _build_enhanced_message(self) -> str:
        """Embed key context and suggestions into the exception string."""
        lines = [self.message]

        if self.context:
            if "expected_type" in self.context and "actual_type" in self.context:
                lines.append(f"  Expected: {self.context['expected_type']}")
                lines.append(f"  Actual: {self.context['actual_type']}")
            if "target_type" in self.context:
                lines.append(f"  Target: {self.context['target_type']}")

        if self.suggestions:
            lines.append("  Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"    • {suggestion}")

        return "\n".join(lines)

    @property
    def path(self) -> Optional[str]:
        """Dotted field path of the failure, when raised during a build."""
        return self.context.get("path")

    def prefix_path(self, segment: str) -> None:
        """Prepend `segment` to the recorded field path."""
        current = self.context.get("path")
        if current is None:
            self.context["path"] = segment
        elif current.startswith("["):
            self.context["path"] = f"{segment}{current}"
        else:
            self.context["path"] = f"{segment}.{current}"


class TypeNotConstructibleError(MappingError):
    """Raised when a target type cannot be found or introspected at all."""


class NoConstructorError(MappingError):
    """Raised when a target type declares no constructor of its own."""


class MissingRequiredParameterError(MappingError):
    """Raised for the first required parameter absent from the input map."""

    def __init__(self, target_type: str, parameter: str):
        self.target_type = target_type
        self.parameter = parameter
        super().__init__(
            f'Required parameter "{parameter}" for "{target_type}" is missing from input',
            [
                f"Provide a value for '{parameter}'",
                "Declare a default value for the parameter",
            ],
            {"target_type": target_type, "parameter": parameter, "path": parameter},
        )


class InstantiationError(MappingError):
    """Raised when the target constructor itself raises.

    The underlying exception is available as `__cause__`.
    """

    def __init__(self, target_type: str, cause: BaseException):
        self.target_type = target_type
        super().__init__(
            f'Failed to instantiate "{target_type}": {cause}',
            ["Check the constructor's own argument checks"],
            {
                "target_type": target_type,
                "cause_type": get_debug_type(cause),
            },
        )


class CastError(MappingError):
    """Raised when a raw value is incompatible with its target type.

    Attributes:
        target_type: Name of the type the value was cast to.
        actual_type: Debug description of the input's type.
        reason: Why the cast failed.
    """

    def __init__(
        self,
        target_type: str,
        value: Any,
        reason: str,
        suggestions: Optional[List[str]] = None,
    ):
        self.target_type = target_type
        self.actual_type = get_debug_type(value)
        self.reason = reason
        super().__init__(
            f'Cannot cast value of type "{self.actual_type}" to "{target_type}": {reason}',
            suggestions,
            {
                "expected_type": target_type,
                "actual_type": self.actual_type,
                "reason": reason,
            },
        )


class UnsupportedCastTargetError(CastError):
    """Raised when a caster is asked to handle a type shape it cannot express."""


class LimitExceededError(MappingError):
    """Raised when input nesting depth or collection size exceeds configured limits."""


class RegistryError(MappingError):
    """Raised for misuse of the caster registry."""


class ConfigurationError(MappingError):
    """Raised for malformed mapper settings."""


class ValidationError(MappingError):
    """Raised by validators after construction; aggregates every field failure.

    Attributes:
        errors: Mapping of field path to error message.
    """

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        self.errors = dict(errors)
        super().__init__(
            message,
            [f"{path}: {msg}" for path, msg in self.errors.items()],
            {"error_count": len(self.errors)},
        )


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------


def get_type_name(cls: Any, qualname: bool = False) -> str:
    """Return a readable name for a type.

    Args:
        cls: The class or type object.
        qualname: If True, return the qualified name when available.

    Returns:
        The type's `__qualname__`, `__name__`, or a string fallback.
    """
    if qualname and hasattr(cls, "__qualname__"):
        return getattr(cls, "__qualname__")
    elif inspect.isclass(cls) and hasattr(cls, "__name__"):
        return getattr(cls, "__name__")
    return str(cls)


def get_debug_type(value: Any) -> str:
    """Describe the runtime type of `value` for diagnostics.

    Builtins render by bare name (``"str"``, ``"dict"``), ``None`` renders as
    ``"None"`` and everything else by its module-qualified class name.
    """
    if value is None:
        return "None"
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def configure_logging(level: Any = "WARNING") -> logging.Logger:
    """Set the level of the package logger and return it.

    Args:
        level: A level name (``"DEBUG"``) or number (``logging.DEBUG``).
    """
    package_logger = logging.getLogger("dtomapper")
    if isinstance(level, str):
        level = level.upper()
    package_logger.setLevel(level)
    return package_logger
