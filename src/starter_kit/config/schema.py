"""Configuration schema for starter-kit."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
CONFIG_KEYS = ("answers_file", "log_level")


@dataclass
class StarterKitConfig:
    """starter-kit configuration schema.

    None values indicate "not set" and will use defaults or be inherited.
    """

    # Where answers are saved between runs
    answers_file: str | None = None

    # Logging
    log_level: str | None = None

    def merge(self, other: StarterKitConfig) -> StarterKitConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new StarterKitConfig instance.
        """
        return StarterKitConfig(
            answers_file=(
                other.answers_file
                if other.answers_file is not None
                else self.answers_file
            ),
            log_level=(
                other.log_level if other.log_level is not None else self.log_level
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, excluding None values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StarterKitConfig:
        """Create a StarterKitConfig from a dictionary.

        Unknown keys are ignored. Unrecognised log levels are dropped.
        """
        answers_file_raw = data.get("answers_file")
        answers_file = str(answers_file_raw) if answers_file_raw is not None else None

        log_level: str | None = None
        log_level_raw = data.get("log_level")
        if isinstance(log_level_raw, str) and log_level_raw.upper() in LOG_LEVELS:
            log_level = log_level_raw.upper()

        return cls(answers_file=answers_file, log_level=log_level)


# Default configuration values (used when not specified anywhere)
DEFAULT_CONFIG = StarterKitConfig(
    answers_file=".starter-kit-answers.json",
    log_level="WARNING",
)
