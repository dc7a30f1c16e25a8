#!/usr/bin/env python
"""Example 01: Building Typed Objects from Request Data.

An `ObjectBuilder` reads the constructor of a target type once, then turns
loosely typed input (query strings, JSON bodies) into instances of it:

- Scalars are coerced: ``"3"`` becomes ``3`` for an ``int`` parameter
- Enums, UUIDs and ISO 8601 date-times are parsed
- Nested records and lists of records are built recursively
- Failures name the field path that caused them

This example demonstrates:
1. Building a flat record
2. Building nested records and collections
3. Reading error paths
4. Limiting depth and collection size
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from dtomapper import (
    LimitExceededError,
    MapperSettings,
    MissingRequiredParameterError,
    ObjectBuilder,
)

# =============================================================================
# Part 1: A Flat Record
# =============================================================================

print("=" * 60)
print("Part 1: A Flat Record")
print("=" * 60)


class Status(str, enum.Enum):
    PENDING = "pending"
    SHIPPED = "shipped"


@dataclass
class OrderRef:
    id: UUID
    created_at: datetime
    status: Status = Status.PENDING


builder = ObjectBuilder()
ref = builder.build(
    OrderRef,
    {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "created_at": "2024-11-25T10:00:00+00:00",
        "status": "shipped",
    },
)
print(f"\n{ref}")

# =============================================================================
# Part 2: Nested Records and Collections
# =============================================================================

print("\n" + "=" * 60)
print("Part 2: Nested Records and Collections")
print("=" * 60)


@dataclass
class Address:
    street: str
    city: str


@dataclass
class LineItem:
    sku: str
    qty: int


@dataclass
class CreateOrder:
    customer: str
    shipping: Address
    items: List[LineItem] = field(default_factory=list)
    billing: Optional[Address] = None


order = builder.build(
    CreateOrder,
    {
        "customer": "Ada",
        "shipping": {"street": "Main St 1", "city": "Berlin"},
        "items": [{"sku": "A1", "qty": "2"}, {"sku": "B7", "qty": 1}],
    },
)
print(f"\nShipping: {order.shipping}")
for item in order.items:
    print(f"  - {item.sku} x {item.qty}")

print("\nParameters as the builder sees them:")
for descriptor in builder.cache.parameters_of(CreateOrder):
    print(f"  {descriptor.name}: {descriptor.type_name} (nullable={descriptor.nullable})")

# =============================================================================
# Part 3: Error Paths
# =============================================================================

print("\n" + "=" * 60)
print("Part 3: Error Paths")
print("=" * 60)

try:
    builder.build(
        CreateOrder,
        {
            "customer": "Ada",
            "shipping": {"street": "Main St 1", "city": "Berlin"},
            "items": [{"sku": "A1", "qty": 2}, {"sku": "B7"}],
        },
    )
except MissingRequiredParameterError as e:
    print(f"\nFailed at {e.path!r}: {e.message}")

# =============================================================================
# Part 4: Limits
# =============================================================================

print("\n" + "=" * 60)
print("Part 4: Limits")
print("=" * 60)

guarded = ObjectBuilder(settings=MapperSettings(max_items=10))
try:
    guarded.build(
        CreateOrder,
        {
            "customer": "Ada",
            "shipping": {"street": "Main St 1", "city": "Berlin"},
            "items": [{"sku": "A1", "qty": 1}] * 50,
        },
    )
except LimitExceededError as e:
    print(f"\nRejected {e.path!r}: {e.message}")
