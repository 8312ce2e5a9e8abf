"""Configuration loading."""

from jax_cx.config.loader import load_config, save_config, get_section

__all__ = [
    "load_config",
    "save_config",
    "get_section",
]
