r"""Input file loaders keyed by file extension.

Each loader takes a path and returns the decoded document. New formats are
added with `register_loader`::

    @register_loader("toml")
    def toml(filepath: Path) -> Any:
        with open(filepath, "rb") as f:
            return tomllib.load(f)
"""

from __future__ import annotations

import json as json_lib
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List

import yaml as yaml_lib

from .utils import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = ["register_loader", "get_loader", "load_input", "supported_extensions"]

Loader = Callable[[Path], Any]

_LOADERS: Dict[str, Loader] = {}


def register_loader(*extensions: str) -> Callable[[Loader], Loader]:
    """Register the decorated function for each of `extensions`."""

    def decorator(func: Loader) -> Loader:
        for ext in extensions:
            _LOADERS[ext.lower().lstrip(".")] = func
        return func

    return decorator


def supported_extensions() -> List[str]:
    return sorted(_LOADERS)


def get_loader(filepath: Path) -> Loader:
    """Return the loader for `filepath`'s extension.

    Raises:
        ConfigurationError: If the extension has no loader.
    """
    ext = filepath.suffix.lstrip(".").lower()
    if ext not in _LOADERS:
        raise ConfigurationError(
            f"Unsupported input file type: {filepath.suffix or filepath.name}",
            [f"Use one of: {', '.join('.' + e for e in supported_extensions())}"],
            {"path": str(filepath)},
        )
    return _LOADERS[ext]


def load_input(filepath: Path) -> Any:
    """Load and decode `filepath` with the loader for its extension."""
    filepath = Path(filepath)
    loader = get_loader(filepath)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Loading %s with %s", filepath, loader.__name__)
    return loader(filepath)


# ============================================================================
# Default Loaders
# ============================================================================


@register_loader("json")
def json(filepath: Path) -> Any:
    """Load a JSON document."""
    with open(filepath, "r", encoding="utf-8") as f:
        return json_lib.load(f)


@register_loader("yaml", "yml")
def yaml(filepath: Path) -> Any:
    """Load a YAML document."""
    with open(filepath, "r", encoding="utf-8") as f:
        return yaml_lib.safe_load(f)
