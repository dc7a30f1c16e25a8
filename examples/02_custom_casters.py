#!/usr/bin/env python
"""Example 02: Custom Casters and Validation.

Casters decide how a raw value becomes a parameter value. A registry picks
one per parameter in this order:

1. An explicit ``CastWith`` override on the parameter
2. A caster bound to the parameter's class
3. The first registered caster whose ``supports`` accepts the parameter

This example demonstrates:
1. Binding a caster to a value class
2. Overriding the caster for a single parameter
3. Mapping a request with pydantic validation
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from typing_extensions import Annotated

from dtomapper import (
    Caster,
    CastError,
    CastWith,
    ObjectBuilder,
    PydanticValidator,
    RequestMapper,
    TypeDescriptor,
    ValidationError,
    merge_sources,
)

# =============================================================================
# Part 1: Binding a Caster to a Class
# =============================================================================

print("=" * 60)
print("Part 1: Binding a Caster to a Class")
print("=" * 60)


class Money:
    def __init__(self, cents: int, currency: str):
        self.cents = cents
        self.currency = currency

    def __repr__(self):
        return f"Money({self.cents / 100:.2f} {self.currency})"


class MoneyCaster(Caster):
    """Parses ``"12.50 EUR"``."""

    def supports(self, descriptor: TypeDescriptor) -> bool:
        return descriptor.declared_type.type is Money

    def cast(self, value, descriptor):
        if isinstance(value, Money):
            return value
        if isinstance(value, str) and " " in value:
            amount, currency = value.split(" ", 1)
            return Money(round(float(amount) * 100), currency)
        raise CastError("Money", value, "expected '<amount> <currency>'")


class CentsCaster(MoneyCaster):
    """Reads bare integers as US cents."""

    def cast(self, value, descriptor):
        if isinstance(value, int):
            return Money(value, "USD")
        return super().cast(value, descriptor)


@dataclass
class Invoice:
    total: Money
    shipping: Annotated[Money, CastWith(CentsCaster)]


builder = ObjectBuilder()
builder.registry.register(MoneyCaster(), for_type=Money)

invoice = builder.build(Invoice, {"total": "12.50 EUR", "shipping": 499})
print(f"\nTotal: {invoice.total}")
print(f"Shipping: {invoice.shipping}")

# =============================================================================
# Part 2: Mapping a Request with Validation
# =============================================================================

print("\n" + "=" * 60)
print("Part 2: Mapping a Request with Validation")
print("=" * 60)


@dataclass
class Signup:
    email: Annotated[str, Field(pattern=r".+@.+")]
    age: Annotated[int, Field(ge=18)]


mapper = RequestMapper(validator=PydanticValidator())

data = merge_sources(query={"age": "30"}, body={"email": "ada@example.com"})
print(f"\n{mapper.map(Signup, data)}")

try:
    mapper.map(Signup, {"email": "nobody", "age": "16"})
except ValidationError as e:
    print("\nRejected:")
    for path, message in e.errors.items():
        print(f"  {path}: {message}")
