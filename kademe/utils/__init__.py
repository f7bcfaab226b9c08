"""Kademe utilities."""

from .config_loader import load_engine_config, get_available_configs, CONFIG_DIR

__all__ = [
    "load_engine_config",
    "get_available_configs",
    "CONFIG_DIR",
]
