"""Configuration loading and validation."""

from pathlib import Path
from typing import Any, Mapping, Union
import yaml

from jax_cx.input_validation import ValidationError


def load_config(path: Union[str, Path]) -> dict:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValidationError(f"Top level of {path} must be a mapping")
    return config


def save_config(config: dict, path: Union[str, Path]) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def get_section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return a named section of the configuration, or {} if absent."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValidationError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
    return section
