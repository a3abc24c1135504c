"""
Configuration loading for protoc-gen-graphql.

Sources, highest precedence first:
1. Command line flags / protoc plugin parameter (`--graphql_opt=template_path=...`)
2. Config file (`protoc-gen-graphql.yaml`)
3. Defaults
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..core.errors import ConfigError


DEFAULT_CONFIG_PATH = "protoc-gen-graphql.yaml"

# Keys accepted in the protoc plugin parameter
PARAMETER_KEYS = {"template_path", "config", "log_level"}


@dataclass
class GeneratorConfig:
    """Generator configuration."""
    template_path: Optional[str] = None  # custom template, falls back to embedded
    log_level: str = "INFO"
    output_dir: str = "."  # only used by `generate`

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorConfig":
        """Create config from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        config = cls(
            template_path=data.get("template_path") or None,
            log_level=str(data.get("log_level", "INFO")).upper(),
            output_dir=str(data.get("output_dir", ".")),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Invalid log_level '{self.log_level}'")

    def merge(self, **overrides: Any) -> "GeneratorConfig":
        """Return a copy with the non-None overrides applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return GeneratorConfig.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for YAML serialization."""
        return {
            "template_path": self.template_path,
            "log_level": self.log_level,
            "output_dir": self.output_dir,
        }

    def save(self, path: Path | str = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> GeneratorConfig | None:
    """
    Load configuration from YAML file.

    Returns:
        GeneratorConfig, or None if the file does not exist

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
    return GeneratorConfig.from_dict(data)


def parse_parameter(parameter: str) -> dict[str, str]:
    """
    Parse a protoc plugin parameter string.

    Examples:
        "template_path=custom.graphql.j2" -> {"template_path": "custom.graphql.j2"}
        "template_path=a.j2,log_level=debug" -> {"template_path": "a.j2", "log_level": "debug"}

    Raises:
        ConfigError: On unknown keys or entries without a value
    """
    result: dict[str, str] = {}
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep:
            raise ConfigError(f"Parameter '{item}' must be key=value")
        if key not in PARAMETER_KEYS:
            raise ConfigError(f"Unknown parameter '{key}', expected one of {sorted(PARAMETER_KEYS)}")
        result[key] = value.strip()
    return result


def resolve_config(
    config_path: Optional[str] = None,
    **overrides: Any,
) -> GeneratorConfig:
    """
    Build the effective configuration.

    An explicitly given config file must exist; the default one is optional.
    """
    if config_path:
        config = load_config(config_path)
        if config is None:
            raise ConfigError(f"Config file {config_path} not found")
    else:
        config = load_config() or GeneratorConfig()
    return config.merge(**overrides)
