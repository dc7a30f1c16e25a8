# tests/property_based/test_cast_properties.py
"""Property-based tests for caster behaviour."""

from datetime import datetime, timezone
from uuid import UUID

import hypothesis.strategies as st
from hypothesis import given, settings

from dtomapper import (
    DateTimeCaster,
    ObjectBuilder,
    TypeDescriptor,
    TypeKind,
    TypeTag,
    UuidCaster,
)
from dtomapper.casters import cast_to_enum, coerce_scalar, is_numeric
from fixtures import LineItem, Node, Priority, Schedule, Status

# Shared builder; descriptors and registry are read-only in these tests
BUILDER = ObjectBuilder()

SCALAR_KINDS = st.sampled_from([TypeKind.STRING, TypeKind.INT, TypeKind.FLOAT, TypeKind.BOOL])

raw_values = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False),
    st.text(max_size=20),
    st.lists(st.integers(), max_size=3),
)

UUID_DESCRIPTOR = TypeDescriptor("id", TypeTag(TypeKind.CLASS, UUID))
DATETIME_DESCRIPTOR = TypeDescriptor("at", TypeTag(TypeKind.CLASS, datetime))


def descriptor_of(target, name):
    return next(d for d in BUILDER.cache.parameters_of(target) if d.name == name)


class TestScalarProperties:
    """Scalar coercion is stable under repetition."""

    @given(value=raw_values, kind=SCALAR_KINDS)
    @settings(max_examples=200)
    def test_idempotent(self, value, kind):
        once = coerce_scalar(value, kind)
        assert coerce_scalar(once, kind) == once

    @given(n=st.integers())
    def test_integer_text_round_trips(self, n):
        assert is_numeric(str(n))
        assert coerce_scalar(str(n), TypeKind.INT) == n

    @given(value=st.one_of(st.text(alphabet="abcxyz", min_size=1), st.lists(st.integers())))
    def test_non_numeric_passes_through(self, value):
        assert coerce_scalar(value, TypeKind.INT) is value
        assert coerce_scalar(value, TypeKind.FLOAT) is value

    @given(value=raw_values)
    def test_bool_always_bool(self, value):
        assert isinstance(coerce_scalar(value, TypeKind.BOOL), bool)


class TestIdentityProperties:
    """Enum, UUID and date-time casts accept their own output."""

    @given(member=st.sampled_from(list(Status)))
    def test_str_enum(self, member):
        assert cast_to_enum(member.value, Status) is member
        assert cast_to_enum(member, Status) is member

    @given(member=st.sampled_from(list(Priority)))
    def test_int_enum_from_text(self, member):
        assert cast_to_enum(str(member.value), Priority) is member

    @given(value=st.uuids())
    def test_uuid(self, value):
        caster = UuidCaster()
        once = caster.cast(str(value), UUID_DESCRIPTOR)
        assert once == value
        assert caster.cast(once, UUID_DESCRIPTOR) is once

    @given(
        value=st.datetimes(
            min_value=datetime(1970, 1, 1),
            max_value=datetime(2100, 1, 1),
            timezones=st.just(timezone.utc),
        )
    )
    @settings(max_examples=50)
    def test_datetime_iso_format(self, value):
        caster = DateTimeCaster()
        once = caster.cast(value.isoformat(), DATETIME_DESCRIPTOR)
        assert once == value
        assert caster.cast(once, DATETIME_DESCRIPTOR) is once


class TestCollectionProperties:
    """Collections keep order and length."""

    @given(values=st.lists(st.one_of(st.none(), st.integers()), max_size=30))
    @settings(max_examples=50)
    def test_order_and_length(self, values):
        result = BUILDER.build(Schedule, {"priorities": [], "slots": values})
        assert result.slots == values

    @given(
        items=st.lists(
            st.fixed_dictionaries({"sku": st.text(max_size=5), "qty": st.integers()}),
            max_size=10,
        )
    )
    @settings(max_examples=50)
    def test_nested_elements(self, items):
        caster = BUILDER.registry.resolve(descriptor_of(Node, "children"))
        nodes = caster.cast([{"value": item["qty"]} for item in items], descriptor_of(Node, "children"))
        assert [n.value for n in nodes] == [item["qty"] for item in items]
        assert [LineItem(**item) for item in items] == [
            BUILDER.build(LineItem, item) for item in items
        ]
