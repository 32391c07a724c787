"""Answers to questions prompted to the user building a library."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import MISSING, dataclass, field, fields
from pathlib import Path
from typing import Any, get_type_hints

from starter_kit.answers.errors import AnswersDecodeError, UnknownTokenError
from starter_kit.answers.schema import (
    CODE_OF_CONDUCT_DEFAULT,
    LICENSE_DEFAULT,
    coerce_value,
    to_token,
)
from starter_kit.filesystem import Filesystem, LocalFilesystem

logger = logging.getLogger(__name__)


@dataclass(init=False)
class Answers:
    """Answers collected while interviewing the user.

    Every dataclass field is an answer. Its camelCase name is the token used
    as a template placeholder and as the key in the answers file. Field
    declaration order is token order.

    The instance is bound to a file path: construction loads any answers
    already saved there, and `save_to_file` writes them back.
    """

    author_email: str | None = None
    author_holds_copyright: bool = True
    author_name: str | None = None
    author_url: str | None = None
    code_of_conduct: str | None = CODE_OF_CONDUCT_DEFAULT
    code_of_conduct_committee: str | None = None
    code_of_conduct_email: str | None = None
    code_of_conduct_policies_url: str | None = None
    code_of_conduct_reporting_url: str | None = None
    copyright_email: str | None = None
    copyright_holder: str | None = None
    copyright_url: str | None = None
    copyright_year: str | None = None
    github_username: str | None = None
    license: str | None = LICENSE_DEFAULT
    package_description: str | None = None
    package_keywords: list[str] = field(default_factory=list)
    package_name: str | None = None
    package_namespace: str | None = None
    project_name: str | None = None
    security_policy: bool = True
    security_policy_contact_email: str | None = None
    security_policy_contact_form_url: str | None = None
    skip_prompts: bool = False
    vendor_name: str | None = None

    def __init__(
        self, save_to_path: str | Path, filesystem: Filesystem | None = None
    ) -> None:
        self._bind(save_to_path, filesystem)
        self._load_file()

    @classmethod
    def defaults(
        cls, save_to_path: str | Path, filesystem: Filesystem | None = None
    ) -> Answers:
        """Return default answers bound to a path, without reading it."""
        answers = cls.__new__(cls)
        answers._bind(save_to_path, filesystem)
        return answers

    def _bind(self, save_to_path: str | Path, filesystem: Filesystem | None) -> None:
        self.reset()
        self._save_to_path = Path(save_to_path)
        self._filesystem = filesystem if filesystem is not None else LocalFilesystem()

    def reset(self) -> None:
        """Restore every answer to its declared default."""
        for f in fields(self):
            if f.default_factory is not MISSING:
                setattr(self, f.name, f.default_factory())
            else:
                setattr(self, f.name, f.default)

    @property
    def save_to_path(self) -> Path:
        """Path the answers are loaded from and saved to."""
        return self._save_to_path

    @classmethod
    def field_for_token(cls, token: str) -> str:
        """Return the attribute name for a token.

        Raises UnknownTokenError if the token names no answer.
        """
        try:
            return _TOKEN_TO_FIELD[token]
        except KeyError:
            raise UnknownTokenError(token) from None

    @staticmethod
    def token_for_field(name: str) -> str:
        """Return the token for an attribute name."""
        return to_token(name)

    def get_tokens(self) -> list[str]:
        """Return the answer names to use as tokens in templates."""
        return [to_token(f.name) for f in fields(self)]

    def get_values(self) -> list[Any]:
        """Return the answer values, in the same order as `get_tokens`."""
        return [_copy_value(getattr(self, f.name)) for f in fields(self)]

    def to_dict(self) -> dict[str, Any]:
        """Return token -> value pairs for every answer."""
        return {
            to_token(f.name): _copy_value(getattr(self, f.name))
            for f in fields(self)
        }

    def to_json(self) -> str:
        """Render the answers as the JSON document written by `save_to_file`."""
        return json.dumps(self.to_dict(), indent=4, ensure_ascii=False)

    def save_to_file(self) -> None:
        """Store the answers to a JSON file on local disk."""
        self._filesystem.write_text(self._save_to_path, self.to_json())
        logger.debug("Saved answers to %s", self._save_to_path)

    def set(self, token: str, value: Any) -> None:
        """Set a single answer by token, validating the value type."""
        name = self.field_for_token(token)
        setattr(self, name, coerce_value(token, _FIELD_TYPES[name], value))

    def update(self, answers: Mapping[str, Any]) -> None:
        """Set answers from a token -> value mapping.

        Keys that are not tokens are ignored. Every value is validated
        before any answer changes, so a bad value leaves the instance as it
        was.
        """
        coerced: dict[str, Any] = {}
        for token, value in answers.items():
            name = _TOKEN_TO_FIELD.get(token)
            if name is None:
                logger.debug("Ignoring unknown answer key %r", token)
                continue
            coerced[name] = coerce_value(token, _FIELD_TYPES[name], value)

        for name, value in coerced.items():
            setattr(self, name, value)

    def _load_file(self) -> None:
        """If an answers file already exists, hydrate this instance from it."""
        if not self._filesystem.exists(self._save_to_path):
            logger.debug("No answers file at %s, using defaults", self._save_to_path)
            return

        try:
            contents = self._filesystem.read_text(self._save_to_path)
        except UnicodeDecodeError as e:
            raise AnswersDecodeError(self._save_to_path, str(e)) from e

        # ValueError covers JSONDecodeError, NaN/Infinity and the int digit limit
        try:
            data = json.loads(contents, parse_constant=_reject_constant)
        except ValueError as e:
            raise AnswersDecodeError(self._save_to_path, str(e)) from e

        if not isinstance(data, dict):
            raise AnswersDecodeError(
                self._save_to_path,
                f"expected a JSON object, got {type(data).__name__}",
            )

        self.update(data)
        logger.debug("Loaded answers from %s", self._save_to_path)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _copy_value(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    return value


_HINTS = get_type_hints(Answers)
_FIELD_TYPES: dict[str, Any] = {f.name: _HINTS[f.name] for f in fields(Answers)}
_TOKEN_TO_FIELD: dict[str, str] = {to_token(f.name): f.name for f in fields(Answers)}
