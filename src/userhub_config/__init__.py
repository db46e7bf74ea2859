"""Configuration for userhub."""

from userhub_config.logging_config import configure_logging
from userhub_config.settings import (
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "Settings",
    "clear_settings_cache",
    "configure_logging",
    "get_config_dir",
    "get_settings",
]
