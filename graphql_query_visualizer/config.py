"""Configuration management for gqv."""

from dataclasses import dataclass
from typing import Optional

import yaml

from . import utils


@dataclass
class Config:
    """Configuration for gqv."""

    output: str = "console"
    show_ids: bool = True
    detect_envelope: bool = True


def get_default_config_path() -> str:
    """Get default config file path."""
    return utils.expand_path("~/.gqv/config.yaml")


def load(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with defaults for missing values.
    """
    if config_path is None:
        config_path = get_default_config_path()

    # Return defaults if config doesn't exist
    if not utils.exists(config_path):
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    defaults = Config()
    return Config(
        output=data.get("output", defaults.output),
        show_ids=data.get("show_ids", defaults.show_ids),
        detect_envelope=data.get("detect_envelope", defaults.detect_envelope),
    )


def create_example_config(path: Optional[str] = None) -> str:
    """Create an example config file and return its path."""
    if path is None:
        path = get_default_config_path()

    utils.ensure_dir(utils.dirname(path))

    example = {
        "output": "console",
        "show_ids": True,
        "detect_envelope": True,
    }

    with open(path, "w") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    return path
