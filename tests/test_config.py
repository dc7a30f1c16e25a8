"""Tests for MapperSettings."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from dtomapper import ConfigurationError, MapperSettings
from dtomapper.config import ENV_PREFIX


class TestMapperSettings:
    """Tests for defaults and field validation."""

    def test_defaults(self):
        settings = MapperSettings()
        assert settings.max_depth is None
        assert settings.max_items is None
        assert settings.log_level == "WARNING"

    def test_level_is_normalized(self):
        assert MapperSettings(log_level="debug").log_level == "DEBUG"

    def test_frozen(self):
        settings = MapperSettings()
        with pytest.raises(PydanticValidationError):
            settings.max_depth = 3

    @pytest.mark.parametrize(
        "values",
        [
            {"max_depth": 0},
            {"max_items": -1},
            {"log_level": "chatty"},
            {"max_depth": "deep"},
            {"unknown": 1},
        ],
    )
    def test_from_mapping_rejects(self, values):
        with pytest.raises(ConfigurationError) as exc_info:
            MapperSettings.from_mapping(values)
        assert exc_info.value.message == "Invalid mapper settings"
        assert exc_info.value.suggestions
        assert isinstance(exc_info.value.__cause__, PydanticValidationError)

    def test_from_mapping_accepts_zero_items(self):
        assert MapperSettings.from_mapping({"max_items": 0}).max_items == 0


class TestFromEnv:
    """Tests for reading DTOMAPPER_* variables."""

    def test_reads_prefixed_variables(self):
        environ = {
            f"{ENV_PREFIX}MAX_DEPTH": "8",
            f"{ENV_PREFIX}MAX_ITEMS": " 100 ",
            f"{ENV_PREFIX}LOG_LEVEL": "info",
            "MAX_DEPTH": "1",
        }
        settings = MapperSettings.from_env(environ)
        assert settings == MapperSettings(max_depth=8, max_items=100, log_level="INFO")

    def test_empty_values_keep_defaults(self):
        settings = MapperSettings.from_env({f"{ENV_PREFIX}MAX_DEPTH": "  "})
        assert settings.max_depth is None

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("DTOMAPPER_MAX_DEPTH", "4")
        assert MapperSettings.from_env().max_depth == 4

    def test_malformed_variable(self):
        with pytest.raises(ConfigurationError):
            MapperSettings.from_env({f"{ENV_PREFIX}MAX_ITEMS": "many"})


class TestApplyLogging:
    """Tests for the package log level."""

    def test_sets_package_level(self, package_logger):
        logger = MapperSettings(log_level="error").apply_logging()
        assert logger is package_logger
        assert package_logger.level == logging.ERROR
