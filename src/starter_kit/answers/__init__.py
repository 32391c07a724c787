"""Answer store and its errors."""

from starter_kit.answers.errors import (
    AnswersDecodeError,
    AnswersError,
    AnswersValidationError,
    UnknownTokenError,
)
from starter_kit.answers.schema import CODE_OF_CONDUCT_DEFAULT, LICENSE_DEFAULT
from starter_kit.answers.store import Answers

__all__ = [
    "Answers",
    "AnswersDecodeError",
    "AnswersError",
    "AnswersValidationError",
    "CODE_OF_CONDUCT_DEFAULT",
    "LICENSE_DEFAULT",
    "UnknownTokenError",
]
