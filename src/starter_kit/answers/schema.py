"""Answer field defaults, token naming and type coercion."""

from __future__ import annotations

import logging
import types
from typing import Any, Union, get_args, get_origin

from starter_kit.answers.errors import AnswersValidationError

logger = logging.getLogger(__name__)

# Defaults offered by the license and code of conduct questions
LICENSE_DEFAULT = "Proprietary"
CODE_OF_CONDUCT_DEFAULT = "None"

TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
FALSE_STRINGS = frozenset({"false", "no", "off", "0"})

NoneType = type(None)


def to_token(field_name: str) -> str:
    """Convert a snake_case attribute name to its camelCase token."""
    head, *rest = field_name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def describe_type(hint: Any) -> str:
    """Return a short human-readable name for a field type."""
    if get_origin(hint) is list:
        return "list of strings"
    if _is_optional(hint):
        return f"{_unwrap_optional(hint).__name__} or null"
    return getattr(hint, "__name__", str(hint))


def coerce_value(token: str, hint: Any, value: Any) -> Any:
    """Validate `value` against the declared field type `hint`.

    Returns the (possibly coerced) value. Raises AnswersValidationError
    when the value cannot represent the declared type.
    """
    if get_origin(hint) is list:
        return _coerce_string_list(token, hint, value)

    if _is_optional(hint):
        if value is None:
            return None
        inner = _unwrap_optional(hint)
    else:
        inner = hint

    if inner is bool:
        return _coerce_bool(token, hint, value)
    if inner is str:
        return _coerce_str(token, hint, value)

    raise TypeError(f"Unsupported answer field type for '{token}': {hint!r}")


def _is_optional(hint: Any) -> bool:
    origin = get_origin(hint)
    return origin in (Union, types.UnionType) and NoneType in get_args(hint)


def _unwrap_optional(hint: Any) -> Any:
    args = [arg for arg in get_args(hint) if arg is not NoneType]
    return args[0]


def _coerce_bool(token: str, hint: Any, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            logger.debug("Coerced %r to True for %s", value, token)
            return True
        if lowered in FALSE_STRINGS:
            logger.debug("Coerced %r to False for %s", value, token)
            return False
    raise AnswersValidationError(token, value, describe_type(hint))


def _coerce_str(token: str, hint: Any, value: Any) -> str:
    if isinstance(value, str):
        return value
    text = _number_to_str(value)
    if text is not None:
        logger.debug("Coerced %r to string for %s", value, token)
        return text
    raise AnswersValidationError(token, value, describe_type(hint))


def _coerce_string_list(token: str, hint: Any, value: Any) -> list[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, list):
        raise AnswersValidationError(token, value, describe_type(hint))

    result: list[str] = []
    for item in value:
        if isinstance(item, str):
            result.append(item)
            continue
        text = _number_to_str(item)
        if text is None:
            raise AnswersValidationError(token, value, describe_type(hint))
        result.append(text)
    return result


def _number_to_str(value: Any) -> str | None:
    """Return the text of an integral number, or None for anything else."""
    # bool is an int subclass
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return None
