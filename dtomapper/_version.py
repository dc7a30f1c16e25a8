"""Version and system information for dtomapper.

This module provides version information and system diagnostics useful for:
- Bug reports and error reporting
- Debugging environment issues

Usage:
    from dtomapper import __version__
    from dtomapper._version import get_version_info, print_version_info

CLI Usage:
    python -m dtomapper --version
    python -m dtomapper info
"""

from __future__ import annotations

import importlib
import importlib.metadata
import importlib.util
import platform
import sys
from typing import Any, Dict, Optional

# Version components
VERSION_MAJOR = 1
VERSION_MINOR = 2
VERSION_PATCH = 0
VERSION_SUFFIX = ""  # e.g., "alpha", "beta", "rc1"

__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}{'-' + VERSION_SUFFIX if VERSION_SUFFIX else ''}"


def get_version() -> str:
    """Get the version string.

    Returns:
        Version string in format "X.Y.Z" or "X.Y.Z-suffix".
    """
    if VERSION_SUFFIX:
        return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}-{VERSION_SUFFIX}"
    return f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_PATCH}"


def get_python_info() -> Dict[str, str]:
    """Get Python interpreter information."""
    return {
        "version": platform.python_version(),
        "implementation": platform.python_implementation(),
        "executable": sys.executable,
    }


def get_platform_info() -> Dict[str, str]:
    """Get platform/OS information."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
    }


def _get_package_version(
    module_name: str, distribution: Optional[str] = None
) -> Optional[str]:
    """Get an installed package version without importing it when possible.

    Args:
        module_name: Name of the module to look up.
        distribution: Distribution name on the index (defaults to module_name).

    Returns:
        Version string or None if not installed.
    """
    if importlib.util.find_spec(module_name) is None:
        return None
    try:
        return importlib.metadata.version(distribution or module_name)
    except importlib.metadata.PackageNotFoundError:
        module = importlib.import_module(module_name)
        return getattr(module, "__version__", None)


def get_dependency_versions() -> Dict[str, Optional[str]]:
    """Get versions of the runtime dependencies."""
    return {
        "pydantic": _get_package_version("pydantic"),
        "pydantic_core": _get_package_version("pydantic_core", "pydantic-core"),
        "typing_extensions": _get_package_version("typing_extensions"),
        "pyyaml": _get_package_version("yaml", "PyYAML"),
    }


def get_version_info() -> Dict[str, Any]:
    """Get comprehensive version and system information.

    Example:
        >>> info = get_version_info()
        >>> info["dtomapper"]
        '1.2.0'
    """
    return {
        "dtomapper": __version__,
        "python": get_python_info(),
        "platform": get_platform_info(),
        "dependencies": get_dependency_versions(),
    }


def format_version_info(info: Optional[Dict[str, Any]] = None) -> str:
    """Format version info as a human-readable string with aligned colons.

    Args:
        info: Version info dict from get_version_info(). If None, fetches it.

    Returns:
        Formatted multi-line string suitable for bug reports.
    """
    if info is None:
        info = get_version_info()

    py_info = info["python"]
    py_fields = [
        ("Version", py_info["version"]),
        ("Implementation", py_info["implementation"]),
        ("Executable", py_info["executable"]),
    ]

    plat_info = info["platform"]
    plat_fields = [
        ("System", plat_info["system"]),
        ("Release", plat_info["release"]),
        ("Machine", plat_info["machine"]),
    ]

    dep_items = [
        (pkg, ver if ver else "not installed")
        for pkg, ver in info["dependencies"].items()
    ]

    width = max(len(label) for label, _ in py_fields + plat_fields + dep_items)

    lines = [f"dtomapper: {info['dtomapper']}", "", "Python:"]
    for label, value in py_fields:
        lines.append(f"  {label:>{width}} : {value}")

    lines.append("")
    lines.append("Platform:")
    for label, value in plat_fields:
        lines.append(f"  {label:>{width}} : {value}")

    lines.append("")
    lines.append("Dependencies:")
    for pkg, ver in dep_items:
        lines.append(f"  {pkg:>{width}} : {ver}")

    return "\n".join(lines)


def print_version_info() -> None:
    """Print version and system information to stdout."""
    print(format_version_info())
