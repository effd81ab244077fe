"""Tests for registry configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from formatdata.config import (
    DEFAULT_DATA_DIR,
    DEFAULT_PATTERNS,
    FormatDataConfig,
    parse_bool,
)
from formatdata.errors import ConfigError


class TestParseBool:
    """Test parse_bool."""

    @pytest.mark.parametrize("value", ["true", "YES", "1", " on ", True])
    def test_true_values(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "No", "0", "off", False])
    def test_false_values(self, value):
        assert parse_bool(value) is False

    def test_invalid_value(self):
        with pytest.raises(ConfigError, match="strict"):
            parse_bool("maybe", "strict")


class TestFormatDataConfig:
    """Test the config dataclass."""

    def test_defaults(self):
        config = FormatDataConfig()
        assert config.data_dir == DEFAULT_DATA_DIR
        assert config.strict is True
        assert config.lazy is True
        assert config.patterns == DEFAULT_PATTERNS

    def test_data_dir_converted_to_path(self):
        config = FormatDataConfig(data_dir="/tmp/locales")
        assert config.data_dir == Path("/tmp/locales")

    def test_single_pattern_string(self):
        assert FormatDataConfig(patterns="*.json").patterns == ("*.json",)

    def test_empty_patterns_rejected(self):
        with pytest.raises(ConfigError):
            FormatDataConfig(patterns=())

    def test_with_overrides(self):
        config = FormatDataConfig().with_overrides(strict=False, data_dir=None)
        assert config.strict is False
        assert config.data_dir == DEFAULT_DATA_DIR


class TestFromDict:
    """Test FormatDataConfig.from_dict."""

    def test_values(self):
        config = FormatDataConfig.from_dict({
            "data_dir": "/srv/locales",
            "strict": "no",
            "lazy": False,
            "patterns": "*.yaml, *.json",
        })
        assert config.data_dir == Path("/srv/locales")
        assert config.strict is False
        assert config.lazy is False
        assert config.patterns == ("*.yaml", "*.json")

    def test_unknown_option(self):
        with pytest.raises(ConfigError, match="fallback"):
            FormatDataConfig.from_dict({"fallback": True})


class TestFromEnv:
    """Test FormatDataConfig.from_env."""

    def test_reads_prefixed_variables(self, tmp_path):
        config = FormatDataConfig.from_env({
            "FORMATDATA_DATA_DIR": str(tmp_path),
            "FORMATDATA_STRICT": "false",
            "FORMATDATA_LAZY": "0",
        })
        assert config.data_dir == tmp_path
        assert config.strict is False
        assert config.lazy is False

    def test_ignores_unrelated_and_empty(self):
        config = FormatDataConfig.from_env({
            "FORMATDATA_UNKNOWN": "x",
            "FORMATDATA_STRICT": "",
            "HOME": "/root",
        })
        assert config == FormatDataConfig()

    def test_invalid_boolean(self):
        with pytest.raises(ConfigError):
            FormatDataConfig.from_env({"FORMATDATA_LAZY": "sometimes"})

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("FORMATDATA_STRICT", "off")
        assert FormatDataConfig.from_env().strict is False


class TestFromFile:
    """Test FormatDataConfig.from_file."""

    def test_yaml_section_with_relative_dir(self, tmp_path):
        path = tmp_path / "formatdata.yaml"
        path.write_text(
            "formatdata:\n  data_dir: locales\n  lazy: false\n", encoding="utf-8"
        )
        config = FormatDataConfig.from_file(path)
        assert config.data_dir == tmp_path / "locales"
        assert config.lazy is False

    def test_toml(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[formatdata]\ndata_dir = "/srv/locales"\nstrict = false\n',
            encoding="utf-8",
        )
        config = FormatDataConfig.from_file(path)
        assert config.data_dir == Path("/srv/locales")
        assert config.strict is False

    def test_json_without_section(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"patterns": ["*.json"]}), encoding="utf-8")
        assert FormatDataConfig.from_file(path).patterns == ("*.json",)

    def test_json_unknown_option(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"verbose": True}), encoding="utf-8")
        with pytest.raises(ConfigError, match="Unknown configuration options"):
            FormatDataConfig.from_file(path)

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert FormatDataConfig.from_file(path) == FormatDataConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("formatdata: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to load"):
            FormatDataConfig.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            FormatDataConfig.from_file(tmp_path / "missing.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[formatdata]\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Unsupported"):
            FormatDataConfig.from_file(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            FormatDataConfig.from_file(path)
