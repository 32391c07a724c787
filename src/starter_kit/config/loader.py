"""Configuration file loading and merging."""

import logging
import os
from pathlib import Path

import yaml

from starter_kit.config.schema import DEFAULT_CONFIG, StarterKitConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".starter-kit"
CONFIG_FILENAME = "config.yaml"

ENV_ANSWERS_FILE = "STARTER_KIT_ANSWERS_FILE"
ENV_LOG_LEVEL = "STARTER_KIT_LOG_LEVEL"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.starter-kit/config.yaml."""
    return Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME


def get_local_config_path() -> Path:
    """Get path to local config: ./.starter-kit/config.yaml."""
    return Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME


def home_config_exists() -> bool:
    """Check if the global home config exists."""
    return get_home_config_path().exists()


def local_config_exists() -> bool:
    """Check if the local project config exists."""
    return get_local_config_path().exists()


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found or empty."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
            if data is None:
                return None
            if not isinstance(data, dict):
                logger.warning("Ignoring %s: top level is not a mapping", path)
                return None
            result: dict[str, object] = data
            return result
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid YAML in %s: %s", path, e)
        return None


def load_env_config() -> StarterKitConfig:
    """Build a config from STARTER_KIT_* environment variables."""
    data: dict[str, object] = {}
    answers_file = os.environ.get(ENV_ANSWERS_FILE)
    if answers_file:
        data["answers_file"] = answers_file
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        data["log_level"] = log_level
    return StarterKitConfig.from_dict(data)


def load_config() -> StarterKitConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.starter-kit/config.yaml)
    3. Local config (./.starter-kit/config.yaml)
    4. STARTER_KIT_* environment variables

    Returns merged StarterKitConfig.
    """
    config = DEFAULT_CONFIG

    home_data = load_yaml_config(get_home_config_path())
    if home_data:
        config = config.merge(StarterKitConfig.from_dict(home_data))

    local_data = load_yaml_config(get_local_config_path())
    if local_data:
        config = config.merge(StarterKitConfig.from_dict(local_data))

    return config.merge(load_env_config())


def save_config(config: StarterKitConfig, path: Path) -> None:
    """Save config to a YAML file.

    Creates parent directories if needed.
    Only saves non-None values.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.to_dict()
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def resolve_answers_path(
    config: StarterKitConfig, override: str | Path | None = None
) -> Path:
    """Resolve the answers file location.

    An explicit override wins over the configured value. Relative paths
    are taken relative to the current working directory.
    """
    raw = override if override is not None else config.answers_file
    if raw is None:
        raw = DEFAULT_CONFIG.answers_file
    path = Path(str(raw)).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path
