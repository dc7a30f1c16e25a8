"""Tests for input file loaders."""

from __future__ import annotations

import json

import pytest
import yaml

from dtomapper import ConfigurationError
from dtomapper import engines
from dtomapper.engines import get_loader, load_input, register_loader, supported_extensions

DOCUMENT = {"name": "Ada", "address": {"street": "s", "city": "c"}, "tags": ["x", "y"]}


class TestLoaders:
    """Tests for the built-in JSON and YAML loaders."""

    def test_supported_extensions(self):
        assert {"json", "yaml", "yml"} <= set(supported_extensions())

    def test_json(self, tmp_path):
        path = tmp_path / "input.json"
        path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
        assert load_input(path) == DOCUMENT

    @pytest.mark.parametrize("suffix", [".yaml", ".yml", ".YAML"])
    def test_yaml(self, tmp_path, suffix):
        path = tmp_path / f"input{suffix}"
        path.write_text(
            "name: Ada\naddress:\n  street: s\n  city: c\ntags: [x, y]\n",
            encoding="utf-8",
        )
        assert load_input(str(path)) == DOCUMENT

    def test_yaml_is_loaded_safely(self, tmp_path):
        path = tmp_path / "input.yaml"
        path.write_text("!!python/object/apply:os.getcwd []\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_input(path)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "input.txt"
        with pytest.raises(ConfigurationError) as exc_info:
            get_loader(path)
        assert ".txt" in exc_info.value.message
        assert exc_info.value.context["path"] == str(path)
        assert any(".json" in s for s in exc_info.value.suggestions)


class TestRegisterLoader:
    """Tests for adding loaders."""

    def test_register(self, tmp_path, monkeypatch):
        monkeypatch.setattr(engines, "_LOADERS", dict(engines._LOADERS))

        @register_loader(".KV")
        def kv(filepath):
            pairs = filepath.read_text(encoding="utf-8").split()
            return dict(pair.split("=", 1) for pair in pairs)

        path = tmp_path / "input.kv"
        path.write_text("name=Ada city=Berlin", encoding="utf-8")
        assert "kv" in supported_extensions()
        assert load_input(path) == {"name": "Ada", "city": "Berlin"}
