"""Configuration for the locale resource registry.

Configuration can be built in code, read from environment variables, or read
from a YAML, JSON or TOML file.

Environment variables:
    FORMATDATA_DATA_DIR: Directory holding the locale documents.
    FORMATDATA_STRICT: Validate tables while loading (default: true).
    FORMATDATA_LAZY: Parse documents on first access (default: true).

Usage:
    >>> from formatdata.config import FormatDataConfig
    >>> config = FormatDataConfig.from_env()
    >>> config = FormatDataConfig.from_file("formatdata.yaml")
    >>> config = config.with_overrides(strict=False)
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from formatdata.errors import ConfigError


ENV_PREFIX = "FORMATDATA_"

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"

DEFAULT_PATTERNS: tuple[str, ...] = ("*.yaml", "*.yml", "*.json")

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


def parse_bool(value: Any, name: str = "value") -> bool:
    """Parse a boolean configuration value.

    Raises:
        ConfigError: If the value is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


@dataclass(frozen=True)
class FormatDataConfig:
    """Registry configuration.

    Attributes:
        data_dir: Directory holding one document per locale.
        strict: Validate every table while it is loaded.
        lazy: Index documents at start-up and parse each on first access.
        patterns: Glob patterns selecting documents in ``data_dir``.
    """

    data_dir: Path = DEFAULT_DATA_DIR
    strict: bool = True
    lazy: bool = True
    patterns: tuple[str, ...] = DEFAULT_PATTERNS

    def __post_init__(self) -> None:
        object.__setattr__(self, "data_dir", Path(self.data_dir))
        if isinstance(self.patterns, str):
            object.__setattr__(self, "patterns", (self.patterns,))
        else:
            object.__setattr__(self, "patterns", tuple(self.patterns))
        if not self.patterns:
            raise ConfigError("At least one document pattern is required")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FormatDataConfig":
        """Create from a mapping of option name to value.

        Raises:
            ConfigError: For unknown options or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration options: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        if data.get("data_dir") is not None:
            kwargs["data_dir"] = Path(data["data_dir"]).expanduser()
        for name in ("strict", "lazy"):
            if data.get(name) is not None:
                kwargs[name] = parse_bool(data[name], name)
        if data.get("patterns") is not None:
            patterns = data["patterns"]
            if isinstance(patterns, str):
                patterns = [p.strip() for p in patterns.split(",") if p.strip()]
            kwargs["patterns"] = tuple(patterns)
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FormatDataConfig":
        """Create from ``FORMATDATA_*`` environment variables."""
        environ = os.environ if environ is None else environ
        data = {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX) and value != ""
        }
        known = {f.name for f in fields(cls)}
        return cls.from_dict({k: v for k, v in data.items() if k in known})

    @classmethod
    def from_file(cls, path: Path | str) -> "FormatDataConfig":
        """Create from a YAML, JSON or TOML file.

        A top-level ``formatdata`` section is used when present.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        suffix = path.suffix.lower()
        try:
            content = path.read_text(encoding="utf-8")
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif suffix == ".json":
                data = json.loads(content)
            elif suffix == ".toml":
                data = tomllib.loads(content)
            else:
                raise ConfigError(f"Unsupported configuration format: {suffix}")
        except (OSError, yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load configuration from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration in {path} must be a mapping")
        section = data.get("formatdata", data)
        if not isinstance(section, dict):
            raise ConfigError(f"'formatdata' section in {path} must be a mapping")

        # relative data directories resolve against the config file
        if section.get("data_dir") is not None:
            data_dir = Path(section["data_dir"]).expanduser()
            if not data_dir.is_absolute():
                data_dir = path.parent / data_dir
            section = {**section, "data_dir": data_dir}
        return cls.from_dict(section)

    def with_overrides(self, **overrides: Any) -> "FormatDataConfig":
        """Return a copy with the given non-None options replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
