"""Tests for the MetadataCache."""

from __future__ import annotations

import threading
from dataclasses import dataclass

import pytest

from dtomapper import MetadataCache, TypeKind, TypeNotConstructibleError
from dtomapper.cache import describe
from fixtures import (
    Broken,
    Coords,
    Customer,
    Empty,
    Legacy,
    LineItem,
    Loose,
    NoArgs,
    Node,
    Priority,
    Profile,
    Search,
)


class TestParametersOf:
    """Tests for constructor introspection."""

    def test_declared_order(self, cache):
        names = [d.name for d in cache.parameters_of(Customer)]
        assert names == ["name", "address", "tags", "backup_address"]

    def test_defaults_and_nullability(self, descriptor_of):
        tags = descriptor_of(Customer, "tags")
        assert tags.has_default and tags.default == ()
        assert tags.declared_type.type is tuple
        assert tags.element_type.kind is TypeKind.STRING

        backup = descriptor_of(Customer, "backup_address")
        assert backup.nullable
        assert backup.has_default and backup.default is None

        name = descriptor_of(Customer, "name")
        assert not name.has_default and not name.nullable

    def test_default_factory(self, descriptor_of):
        children = descriptor_of(Node, "children")
        assert children.has_default
        assert children.default_value() == []
        assert children.element_type.type is Node

    def test_repeated_calls_are_identity_stable(self, cache):
        first = cache.parameters_of(LineItem)
        assert cache.parameters_of(LineItem) is first

    def test_concurrent_first_use_stores_one_sequence(self):
        @dataclass(frozen=True)
        class Fresh:
            a: int
            b: str

        cache = MetadataCache()
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(cache.parameters_of(Fresh))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert cache.stats() == {"type_count": 1, "parameter_count": 2}

    def test_keyword_only_and_variadic(self, cache):
        descriptors = cache.parameters_of(Search)
        assert [d.name for d in descriptors] == ["query", "limit"]
        assert descriptors[1].keyword_only

    def test_unannotated_is_mixed(self, descriptor_of):
        assert descriptor_of(Loose, "anything").declared_type.kind is TypeKind.MIXED
        maybe = descriptor_of(Loose, "maybe")
        assert maybe.declared_type.kind is TypeKind.INT and maybe.nullable

    def test_legacy_element_types(self, descriptor_of):
        assert descriptor_of(Legacy, "tags").element_type.kind is TypeKind.STRING
        assert descriptor_of(Legacy, "items").element_type.type is LineItem
        assert descriptor_of(Legacy, "levels").element_type.type is Priority
        assert descriptor_of(Legacy, "raw").element_type.kind is TypeKind.MIXED

    def test_named_tuple(self, cache):
        assert [d.name for d in cache.parameters_of(Coords)] == ["lat", "lng"]

    def test_pydantic_model(self, cache, descriptor_of):
        descriptors = cache.parameters_of(Profile)
        assert [d.name for d in descriptors] == ["username", "age", "tags", "home"]
        assert all(d.keyword_only for d in descriptors)
        assert descriptor_of(Profile, "tags").default_value() == []
        assert descriptor_of(Profile, "home").nullable


class TestConstructors:
    """Tests for constructor presence and failures."""

    def test_no_constructor(self, cache):
        assert cache.parameters_of(Empty) == ()
        assert not cache.has_constructor(Empty)
        assert not cache.is_constructible(Empty)

    def test_zero_parameters(self, cache):
        assert cache.parameters_of(NoArgs) == ()
        assert cache.has_constructor(NoArgs)

    def test_not_a_class(self, cache):
        with pytest.raises(TypeNotConstructibleError):
            cache.parameters_of("LineItem")
        assert not cache.is_constructible(42)

    def test_unresolvable_annotation(self, cache):
        with pytest.raises(TypeNotConstructibleError) as exc_info:
            cache.parameters_of(Broken)
        assert "DoesNotExist" in str(exc_info.value)
        assert not cache.is_constructible(Broken)

    def test_instantiate_in_declared_order(self, cache):
        item = cache.instantiate(LineItem, ["A1", 3])
        assert item == LineItem("A1", 3)

    def test_instantiate_keyword_only(self, cache):
        search = cache.instantiate(Search, ["shoes", 5])
        assert search.query == "shoes"
        assert search.limit == 5


class TestCacheManagement:
    """Tests for has/clear/stats and diagnostics."""

    def test_has_and_clear(self, cache):
        assert not cache.has(LineItem)
        cache.parameters_of(LineItem)
        assert cache.has(LineItem)
        cache.clear()
        assert not cache.has(LineItem)
        assert cache.stats() == {"type_count": 0, "parameter_count": 0}

    def test_stats(self, cache):
        cache.parameters_of(LineItem)
        cache.parameters_of(Customer)
        assert cache.stats() == {"type_count": 2, "parameter_count": 6}

    def test_describe(self, cache):
        text = describe(Customer, cache)
        assert text.splitlines()[0] == "Customer"
        assert "  address: Address" in text
        assert "backup_address: Address nullable default=None" in text
        assert "tags: tuple of string default=()" in text
