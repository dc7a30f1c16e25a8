#!/usr/bin/env python3
r"""dtomapper CLI.

Commands:
    python -m dtomapper --version           Show version
    python -m dtomapper info                Show detailed version and system info
    python -m dtomapper inspect TARGET      Show the parameter descriptors of a type
    python -m dtomapper build TARGET FILE   Build a type from a JSON/YAML file

TARGET is an import path, ``package.module:ClassName``.

Examples:
    python -m dtomapper inspect shop.dto:CreateOrder
    python -m dtomapper build shop.dto:CreateOrder order.json --validate
"""

from __future__ import annotations

import argparse
import dataclasses
import enum
import importlib
import json
import sys
from pathlib import Path
from typing import Any, List, Optional


def import_target(path: str) -> type:
    """Import ``module:Qualified.Name`` (or ``module.Name``) and return the object."""
    if ":" in path:
        module_name, _, qualname = path.partition(":")
    else:
        module_name, _, qualname = path.rpartition(".")
    if not module_name or not qualname:
        raise ValueError(f"Invalid target {path!r}, expected 'module:ClassName'")

    obj: Any = importlib.import_module(module_name)
    for attr in qualname.split("."):
        obj = getattr(obj, attr)
    return obj


def to_jsonable(obj: Any) -> Any:
    """Convert a built object into JSON-friendly data for display."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, tuple) and hasattr(obj, "_asdict"):
        return {k: to_jsonable(v) for k, v in obj._asdict().items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, enum.Enum):
        return obj.value
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if hasattr(obj, "__dict__"):
        return {k: to_jsonable(v) for k, v in vars(obj).items() if not k.startswith("_")}
    return str(obj)


def cmd_info(args: argparse.Namespace) -> int:
    """Show detailed version and system information."""
    from ._version import print_version_info

    print_version_info()
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Print the parameter descriptors of a target type."""
    from .cache import describe
    from .utils import MappingError

    try:
        target = import_target(args.target)
    except (ImportError, AttributeError, ValueError) as e:
        print(f"Error importing target: {e}", file=sys.stderr)
        return 1

    try:
        print(describe(target))
    except MappingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Build a target type from an input file and print the result as JSON."""
    from .config import MapperSettings
    from .engines import load_input
    from .mapper import RequestMapper
    from .utils import MappingError
    from .validator import NullValidator, PydanticValidator

    try:
        target = import_target(args.target)
    except (ImportError, AttributeError, ValueError) as e:
        print(f"Error importing target: {e}", file=sys.stderr)
        return 1

    filepath = Path(args.input_file)
    if not filepath.exists():
        print(f"Error: Input file not found: {filepath}", file=sys.stderr)
        return 1

    try:
        values = MapperSettings.from_env().model_dump()
        overrides = {
            "max_depth": args.max_depth,
            "max_items": args.max_items,
            "log_level": args.log_level,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        settings = MapperSettings.from_mapping(values)
        settings.apply_logging()
        data = load_input(filepath)
    except MappingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error loading input: {e}", file=sys.stderr)
        return 1

    validator = PydanticValidator() if args.validate else NullValidator()
    mapper = RequestMapper(validator=validator, settings=settings)
    try:
        obj = mapper.map(target, data)
    except MappingError as e:
        print(f"Error building {args.target}: {e}", file=sys.stderr)
        if e.path:
            print(f"  Path: {e.path}", file=sys.stderr)
        return 1

    print(json.dumps(to_jsonable(obj), indent=2, default=str))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for dtomapper."""
    from ._version import __version__

    parser = argparse.ArgumentParser(
        prog="python -m dtomapper",
        description="dtomapper - build typed objects from request data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m dtomapper --version                       Show version
  python -m dtomapper info                            Show detailed system info
  python -m dtomapper inspect shop.dto:CreateOrder    Show parameter descriptors
        """,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"dto-mapper {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show detailed version and system information",
        description="Display version, Python, platform, and dependency information.",
    )
    info_parser.set_defaults(func=cmd_info)

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show the parameter descriptors of a type",
        description="Introspect a type's constructor the way the builder sees it.",
    )
    inspect_parser.add_argument("target", help="Import path, module:ClassName")
    inspect_parser.set_defaults(func=cmd_inspect)

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build a type from an input file",
        description="Load a JSON/YAML document and build the target type from it.",
    )
    build_parser.add_argument("target", help="Import path, module:ClassName")
    build_parser.add_argument("input_file", help="Path to input file (json, yaml)")
    build_parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the built object with pydantic",
    )
    build_parser.add_argument("--max-depth", type=int, help="Maximum nesting depth")
    build_parser.add_argument("--max-items", type=int, help="Maximum collection size")
    build_parser.add_argument("--log-level", help="Log level (default: WARNING)")
    build_parser.set_defaults(func=cmd_build)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
