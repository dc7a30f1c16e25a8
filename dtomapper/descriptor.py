r"""Parameter descriptors and the annotation model they are derived from.

A `TypeDescriptor` is the read-only view of one constructor parameter that
casters and the builder work against. Its `declared_type` is a `TypeTag`
classifying the parameter annotation into one of the `TypeKind` shapes.

Collection element types are taken from the generic arguments of the
annotation (``list[Item]``, ``Sequence[Item]``, ``tuple[Item, ...]``). A bare
``list`` may instead carry a legacy element-type string, matched against
`ELEMENT_TYPE_PATTERNS` in order::

    array<int, Item>      # key-typed (int|string|mixed keys)
    array<Item>
    Item[]

The string can sit inside ``Annotated[list, "array<Item>"]`` or on a
``:type items: array<Item>`` line of the constructor or class docstring.
"""

from __future__ import annotations

import builtins
import collections.abc
import enum
import importlib
import inspect
import re
import sys
import types
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple, Union

from typing_extensions import Annotated, get_args, get_origin

__all__ = [
    "TypeKind",
    "TypeTag",
    "TypeDescriptor",
    "CastWith",
    "ELEMENT_TYPE_PATTERNS",
    "parse_element_type",
    "resolve_type_name",
    "classify_annotation",
]

_NoneType = type(None)
_UnionType = getattr(types, "UnionType", None)

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Collection,
    collections.abc.Iterable,
)
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

_IDENT = r"\\?([A-Za-z_][A-Za-z0-9_.\\]*)"

ELEMENT_TYPE_PATTERNS: Tuple["re.Pattern[str]", ...] = (
    re.compile(r"array<(?:int|string|mixed),\s*" + _IDENT + r">"),
    re.compile(r"array<" + _IDENT + r">"),
    re.compile(_IDENT + r"\[\]"),
)

_SCALAR_ALIASES = {
    "string": str,
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "mixed": Any,
}


class TypeKind(str, enum.Enum):
    """Shape of a declared parameter type."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    MIXED = "mixed"
    CLASS = "class"
    ENUM = "enum"
    COLLECTION = "collection"

    @property
    def is_scalar(self) -> bool:
        return self in _SCALAR_KINDS


_SCALAR_KINDS = frozenset(
    {TypeKind.STRING, TypeKind.INT, TypeKind.FLOAT, TypeKind.BOOL, TypeKind.MIXED}
)

_PRIMITIVES = {
    str: TypeKind.STRING,
    bool: TypeKind.BOOL,
    int: TypeKind.INT,
    float: TypeKind.FLOAT,
}


@dataclass(frozen=True)
class TypeTag:
    """Classified declared type.

    Attributes:
        kind: Shape of the type.
        type: The Python class behind the tag (``None`` for ``MIXED``). For
            collections this is the container produced, ``list`` or ``tuple``.
        nullable: Whether ``None`` is an accepted value.
    """

    kind: TypeKind
    type: Optional[type] = None
    nullable: bool = False

    @classmethod
    def mixed(cls, nullable: bool = False) -> "TypeTag":
        return cls(TypeKind.MIXED, None, nullable)

    @property
    def is_reference(self) -> bool:
        """True for class and enum references, the only bindable kinds."""
        return self.kind in (TypeKind.CLASS, TypeKind.ENUM)

    @property
    def name(self) -> str:
        if self.kind.is_scalar or self.type is None:
            return self.kind.value
        return getattr(self.type, "__name__", str(self.type))


@dataclass(frozen=True)
class CastWith:
    """Per-parameter override naming the caster to use.

    Example::

        @dataclass(frozen=True)
        class Invoice:
            total: Annotated[Money, CastWith(MoneyCaster)]

    Attributes:
        caster: A caster class (instantiated without arguments on each
            resolution) or a ready caster instance.
    """

    caster: Any

    def create(self) -> Any:
        if inspect.isclass(self.caster):
            return self.caster()
        return self.caster


@dataclass(frozen=True)
class TypeDescriptor:
    """Read-only view of a single constructor parameter."""

    name: str
    declared_type: TypeTag
    has_default: bool = False
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None
    element_type: Optional[TypeTag] = None
    explicit_caster: Optional[CastWith] = None
    keyword_only: bool = False
    owner: Optional[type] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        is_collection = self.declared_type.kind is TypeKind.COLLECTION
        if is_collection != (self.element_type is not None):
            raise ValueError(
                f"Parameter {self.name!r}: element_type must be set exactly for collections"
            )

    @property
    def nullable(self) -> bool:
        return self.declared_type.nullable

    @property
    def type_name(self) -> str:
        return self.declared_type.name

    @property
    def qualified_name(self) -> str:
        """``Owner.parameter`` when the owning type is known, else the bare name."""
        if self.owner is None:
            return self.name
        return f"{getattr(self.owner, '__name__', self.owner)}.{self.name}"

    def default_value(self) -> Any:
        """Return the declared default, calling its factory when it has one."""
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


# -----------------------------------------------------------------------------
# Annotation classification
# -----------------------------------------------------------------------------


def _split_annotated(annotation: Any) -> Tuple[Any, List[Any]]:
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        inner, inner_meta = _split_annotated(base)
        return inner, inner_meta + list(metadata)
    return annotation, []


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or (_UnionType is not None and origin is _UnionType)


def classify_annotation(
    annotation: Any,
) -> Tuple[TypeTag, Optional[Any], List[Any]]:
    """Classify a parameter annotation.

    Returns:
        ``(tag, element_annotation, metadata)`` where `element_annotation` is the
        generic element argument of a collection (``None`` when the collection is
        bare) and `metadata` collects every ``Annotated`` extra seen on the way.
    """
    annotation, metadata = _split_annotated(annotation)

    if annotation is inspect.Parameter.empty or annotation is Any:
        return TypeTag.mixed(), None, metadata
    if annotation is None or annotation is _NoneType:
        return TypeTag.mixed(nullable=True), None, metadata

    if _is_union(annotation):
        members = [a for a in get_args(annotation) if a is not _NoneType]
        nullable = len(members) != len(get_args(annotation))
        if len(members) == 1:
            tag, element, inner_meta = classify_annotation(members[0])
            tag = TypeTag(tag.kind, tag.type, tag.nullable or nullable)
            return tag, element, metadata + inner_meta
        return TypeTag.mixed(nullable), None, metadata

    if annotation in _PRIMITIVES:
        return TypeTag(_PRIMITIVES[annotation], annotation), None, metadata

    origin = get_origin(annotation) or annotation
    if origin in _SEQUENCE_ORIGINS:
        container = tuple if origin is tuple else list
        args = get_args(annotation)
        element: Optional[Any] = None
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                element = args[0]
            elif args:
                element = Any
        elif args:
            element = args[0]
        return TypeTag(TypeKind.COLLECTION, container), element, metadata

    if origin in _MAPPING_ORIGINS:
        return TypeTag.mixed(), None, metadata

    if inspect.isclass(annotation):
        if issubclass(annotation, enum.Enum):
            return TypeTag(TypeKind.ENUM, annotation), None, metadata
        return TypeTag(TypeKind.CLASS, annotation), None, metadata

    return TypeTag.mixed(), None, metadata


def element_tag(annotation: Any) -> TypeTag:
    """Classify a collection element annotation (metadata is ignored)."""
    tag, _, _ = classify_annotation(annotation)
    return tag


# -----------------------------------------------------------------------------
# Legacy element-type grammar
# -----------------------------------------------------------------------------


def parse_element_type(text: str) -> Optional[str]:
    """Return the element type name declared by `text`, or ``None``.

    The first matching pattern of `ELEMENT_TYPE_PATTERNS` wins.
    """
    for pattern in ELEMENT_TYPE_PATTERNS:
        match = pattern.search(text)
        if match is not None:
            return match.group(1).lstrip("\\").replace("\\", ".")
    return None


def _docstring_type(owner: type, param_name: str) -> Optional[str]:
    line = re.compile(
        r"^\s*:type\s+" + re.escape(param_name) + r"\s*:\s*(.+?)\s*$", re.MULTILINE
    )
    init = owner.__dict__.get("__init__")
    for doc in (getattr(init, "__doc__", None), owner.__doc__):
        if not doc:
            continue
        match = line.search(doc)
        if match is not None:
            return match.group(1)
    return None


def declared_element_text(
    owner: type, param_name: str, metadata: List[Any]
) -> Optional[str]:
    """Find the legacy element-type string for a bare collection parameter."""
    for item in metadata:
        if isinstance(item, str) and parse_element_type(item) is not None:
            return item
    return _docstring_type(owner, param_name)


def resolve_type_name(name: str, owner: Optional[type] = None) -> Optional[Any]:
    """Resolve an element type name to a Python type.

    Looks at scalar aliases, the owner's namespace, its module globals,
    builtins and finally a dotted import path.
    """
    if name in _SCALAR_ALIASES:
        return _SCALAR_ALIASES[name]

    if owner is not None:
        if "." not in name and name in owner.__dict__:
            candidate = owner.__dict__[name]
            if inspect.isclass(candidate):
                return candidate
        module = sys.modules.get(owner.__module__)
        if module is not None and "." not in name:
            candidate = getattr(module, name, None)
            if inspect.isclass(candidate):
                return candidate

    candidate = getattr(builtins, name, None)
    if inspect.isclass(candidate):
        return candidate

    if "." in name:
        module_name, _, attr = name.rpartition(".")
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            return None
        candidate = getattr(module, attr, None)
        if inspect.isclass(candidate):
            return candidate
    return None


def build_descriptor(
    owner: type,
    parameter: inspect.Parameter,
    annotation: Any,
    default_factory: Optional[Callable[[], Any]] = None,
) -> TypeDescriptor:
    """Derive the descriptor for one constructor parameter of `owner`."""
    tag, element_annotation, metadata = classify_annotation(annotation)

    explicit = next((m for m in metadata if isinstance(m, CastWith)), None)

    element: Optional[TypeTag] = None
    if tag.kind is TypeKind.COLLECTION:
        if element_annotation is None:
            text = declared_element_text(owner, parameter.name, metadata)
            name = parse_element_type(text) if text else None
            element_annotation = resolve_type_name(name, owner) if name else None
        element = (
            element_tag(element_annotation)
            if element_annotation is not None
            else TypeTag.mixed()
        )

    has_default = parameter.default is not inspect.Parameter.empty or (
        default_factory is not None
    )
    default = None
    if parameter.default is not inspect.Parameter.empty and default_factory is None:
        default = parameter.default

    return TypeDescriptor(
        name=parameter.name,
        declared_type=tag,
        has_default=has_default,
        default=default,
        default_factory=default_factory,
        element_type=element,
        explicit_caster=explicit,
        keyword_only=parameter.kind is inspect.Parameter.KEYWORD_ONLY,
        owner=owner,
    )
