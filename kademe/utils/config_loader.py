"""
Config loader utility for Kademe.

Loads YAML engine configurations from the config/ directory.
"""

from pathlib import Path
from typing import Optional
import yaml

from kademe.schemas import EngineConfig


# Default config directory (relative to project root)
CONFIG_DIR = Path(__file__).parent.parent.parent / "config"
DEFAULT_CONFIG_NAME = "default"


def load_engine_config(name: str = DEFAULT_CONFIG_NAME, config_dir: Optional[Path] = None) -> EngineConfig:
    """
    Load an engine configuration by name.

    Args:
        name: Config name without .yaml extension (e.g., "default")
        config_dir: Optional custom config directory

    Returns:
        EngineConfig with any keys missing from the file left at their defaults

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If values are out of range
    """
    dir_path = config_dir or CONFIG_DIR
    file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise FileNotFoundError(f"Engine config not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return EngineConfig.model_validate(data)


def get_available_configs(config_dir: Optional[Path] = None) -> list[str]:
    """
    List all available engine configurations.

    Args:
        config_dir: Optional custom config directory

    Returns:
        List of config names (without .yaml extension), sorted
    """
    dir_path = config_dir or CONFIG_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))
