"""Type guards for repository arguments."""

from typing import Any
from uuid import UUID

from chatstore.domain.exceptions import ValidationError


def require_int(value: Any, name: str) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    return value


def require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


def optional_str(value: Any, name: str) -> str | None:
    if value is None:
        return None
    return require_str(value, name)


def optional_bool(value: Any, name: str) -> bool | None:
    if value is not None and not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean")
    return value


def require_uuid(value: Any, name: str) -> UUID:
    """Accept a UUID or its string form."""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            pass
    raise ValidationError(f"{name} must be a valid UUID")
