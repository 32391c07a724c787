"""Exceptions raised while loading or editing answers."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class AnswersError(Exception):
    """Base class for answer store errors."""


class AnswersDecodeError(AnswersError, ValueError):
    """Raised when an answers file exists but is not a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot decode answers file {path}: {reason}")


class AnswersValidationError(AnswersError, ValueError):
    """Raised when a value does not match the declared type of its token."""

    def __init__(self, token: str, value: Any, expected: str) -> None:
        self.token = token
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid value for '{token}': expected {expected}, "
            f"got {type(value).__name__} {value!r}"
        )


class UnknownTokenError(AnswersError, KeyError):
    """Raised when a token does not name any answer field."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(token)

    def __str__(self) -> str:
        return f"Unknown answer token: {self.token}"
