"""Target types shared by the test suite."""

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from dtomapper import Caster, CastError, CastWith, TypeDescriptor

# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class Status(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Priority(enum.IntEnum):
    LOW = 1
    HIGH = 2


class Color(enum.Enum):
    """Not value-backed: member values are tuples."""

    RED = (255, 0, 0)
    GREEN = (0, 255, 0)


# -----------------------------------------------------------------------------
# Dataclass targets
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Order:
    id: UUID
    created_at: datetime
    status: Status


@dataclass(frozen=True)
class LineItem:
    sku: str
    qty: int


@dataclass(frozen=True)
class Container:
    items: List[LineItem]


@dataclass(frozen=True)
class Thing:
    name: str


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    zip_code: Optional[str] = None


@dataclass(frozen=True)
class Customer:
    name: str
    address: Address
    tags: Tuple[str, ...] = ()
    backup_address: Optional[Address] = None


@dataclass(frozen=True)
class Event:
    day: date
    at: Optional[datetime] = None
    ref: Optional[UUID] = None
    priority: Priority = Priority.LOW


@dataclass(frozen=True)
class Flags:
    enabled: bool
    ratio: float = 1.0
    label: str = ""
    extra: Any = None


@dataclass(frozen=True)
class Node:
    value: int
    children: List["Node"] = field(default_factory=list)


@dataclass(frozen=True)
class Palette:
    primary: Color


@dataclass(frozen=True)
class Schedule:
    priorities: Sequence[Priority]
    statuses: Optional[List[Status]] = None
    slots: List[Optional[int]] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Value type with custom casters
# -----------------------------------------------------------------------------


class Money:
    def __init__(self, amount: int, currency: str):
        self.amount = amount
        self.currency = currency

    def __eq__(self, other):
        return (
            isinstance(other, Money)
            and self.amount == other.amount
            and self.currency == other.currency
        )

    def __repr__(self):
        return f"Money({self.amount}, {self.currency!r})"


class MoneyCaster(Caster):
    """Parses ``"12.50 EUR"`` into ``Money(1250, "EUR")``."""

    def supports(self, descriptor: TypeDescriptor) -> bool:
        return descriptor.declared_type.type is Money

    def cast(self, value, descriptor):
        if isinstance(value, Money):
            return value
        if isinstance(value, str) and " " in value:
            amount, currency = value.split(" ", 1)
            return Money(round(float(amount) * 100), currency)
        raise CastError("Money", value, "expected '<amount> <currency>'")


class CentsCaster(Caster):
    """Reads integers as US cents."""

    def supports(self, descriptor: TypeDescriptor) -> bool:
        return False

    def cast(self, value, descriptor):
        if isinstance(value, Money):
            return value
        return Money(int(value), "USD")


@dataclass(frozen=True)
class Invoice:
    total: Money


@dataclass(frozen=True)
class PricedInvoice:
    total: Annotated[Money, CastWith(CentsCaster)]


@dataclass(frozen=True)
class Shout:
    word: Annotated[str, CastWith(lambda: None)]


# -----------------------------------------------------------------------------
# Plain classes
# -----------------------------------------------------------------------------


class Legacy:
    """Record declared with untyped lists.

    :type tags: string[]
    """

    def __init__(
        self,
        tags: list,
        items: Annotated[list, "array<int, LineItem>"],
        levels: Annotated[list, "array<Priority>"] = None,
        raw: list = None,
    ):
        self.tags = tags
        self.items = items
        self.levels = levels
        self.raw = raw


class Empty:
    pass


class NoArgs:
    def __init__(self):
        self.created = True


class Strict:
    def __init__(self, n: int):
        if n < 0:
            raise ValueError("n must be non-negative")
        self.n = n


class Search:
    def __init__(self, query: str, *, limit: int = 10, **options):
        self.query = query
        self.limit = limit
        self.options = options


class Loose:
    def __init__(self, anything, maybe: Optional[int] = None):
        self.anything = anything
        self.maybe = maybe


class Broken:
    def __init__(self, value: "DoesNotExist"):  # noqa: F821
        self.value = value


class Coords(NamedTuple):
    lat: float
    lng: float


# -----------------------------------------------------------------------------
# Pydantic targets and validation
# -----------------------------------------------------------------------------


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    age: int = 0
    tags: List[str] = Field(default_factory=list)
    home: Optional[Address] = None


@dataclass(frozen=True)
class Signup:
    email: str
    age: Annotated[int, Field(ge=18)]
    address: Optional[Address] = None


@dataclass(frozen=True)
class CheckedItem:
    sku: Annotated[str, Field(min_length=2)]
    qty: Annotated[int, Field(gt=0)]


@dataclass(frozen=True)
class Basket:
    owner: Annotated[str, Field(min_length=1)]
    items: List[CheckedItem] = field(default_factory=list)
