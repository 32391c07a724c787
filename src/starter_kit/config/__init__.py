"""Configuration loading."""

from starter_kit.config.loader import (
    home_config_exists,
    load_config,
    local_config_exists,
    resolve_answers_path,
    save_config,
)
from starter_kit.config.schema import DEFAULT_CONFIG, StarterKitConfig

__all__ = [
    "DEFAULT_CONFIG",
    "StarterKitConfig",
    "home_config_exists",
    "load_config",
    "local_config_exists",
    "resolve_answers_path",
    "save_config",
]
