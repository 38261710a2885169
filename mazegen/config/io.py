"""Reading and writing configuration files in JSON or YAML."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


def load_config_file(config_path: str | Path) -> dict[str, Any]:
    """
    Load configuration from JSON or YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Dictionary with configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file format is unsupported or cannot be parsed
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported config file format: {suffix}")

    try:
        with open(config_path) as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")
    return data


def save_config_file(config: dict[str, Any], output_path: str | Path) -> Path:
    """
    Save configuration to JSON or YAML file. Unknown suffixes are written as JSON.

    Args:
        config: Configuration dictionary to save
        output_path: Path where to save the configuration

    Returns:
        The path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    suffix = output_path.suffix.lower()

    with open(output_path, "w") as f:
        if suffix in (".yaml", ".yml"):
            yaml.safe_dump(config, f, indent=2, default_flow_style=False)
        else:
            json.dump(config, f, indent=2, default=str)

    return output_path


def merge_configs(base_config: dict[str, Any], override_config: dict[str, Any]) -> dict[str, Any]:
    """
    Merge two configuration dictionaries, with override taking precedence.

    Nested dictionaries are merged recursively; ``None`` overrides are ignored
    so that unset command line options keep file values.
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if value is None:
            continue
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged
