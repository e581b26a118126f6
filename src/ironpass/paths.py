"""XDG-compliant path helpers for ironpass configuration."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

from ironpass.constants import CONFIG_FILENAME


def get_config_dir() -> Path:
    """Get the config directory for ironpass (config.toml)."""
    override = os.environ.get("IRONPASS_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(user_config_dir("ironpass"))


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / CONFIG_FILENAME
