"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging

import pytest

from dtomapper import (
    CasterRegistry,
    MapperSettings,
    MetadataCache,
    ObjectBuilder,
    RequestMapper,
)

# =============================================================================
# Fixtures: Engine Components
# =============================================================================


@pytest.fixture
def builder() -> ObjectBuilder:
    """A builder with the standard casters and a private cache."""
    return ObjectBuilder()


@pytest.fixture
def cache(builder) -> MetadataCache:
    return builder.cache


@pytest.fixture
def registry(builder) -> CasterRegistry:
    return builder.registry


@pytest.fixture
def empty_registry() -> CasterRegistry:
    return CasterRegistry()


@pytest.fixture
def limited_builder() -> ObjectBuilder:
    """A builder with small depth and size limits."""
    return ObjectBuilder(settings=MapperSettings(max_depth=3, max_items=5))


@pytest.fixture
def mapper() -> RequestMapper:
    return RequestMapper()


@pytest.fixture
def descriptor_of(cache):
    """Return the descriptor of one named parameter of a target type."""

    def _descriptor_of(target, name):
        for descriptor in cache.parameters_of(target):
            if descriptor.name == name:
                return descriptor
        raise KeyError(name)

    return _descriptor_of


# =============================================================================
# Fixtures: Logging
# =============================================================================


@pytest.fixture
def package_logger():
    """Restore the package logger level after a test changes it."""
    logger = logging.getLogger("dtomapper")
    level = logger.level
    yield logger
    logger.setLevel(level)
