"""Argument validation shared by permission lists and the registry."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .exceptions import ValidationError


def _is_identifier(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def require_subject(subject: Any, field: str = "subject") -> str:
    """Return subject if it is a non-empty string.

    Raises:
        ValidationError: If subject is not a non-empty string
    """
    if not _is_identifier(subject):
        raise ValidationError(field, "must be a non-empty string", subject)
    return subject


def require_permission_name(name: Any, field: str = "permission") -> str:
    """Return name if it is a non-empty string.

    Raises:
        ValidationError: If name is not a non-empty string
    """
    if not _is_identifier(name):
        raise ValidationError(field, "must be a non-empty string", name)
    return name


def is_sequence(value: Any) -> bool:
    """Check for a list-like value; strings, bytes and mappings do not count."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, Mapping))


def require_subjects(subjects: Any, field: str) -> list[str]:
    """Validate a sequence of subjects and return it as a new list.

    Raises:
        ValidationError: If subjects is not a sequence, or holds anything
            but non-empty strings
    """
    if not is_sequence(subjects):
        raise ValidationError(field, "must be a sequence of strings", subjects)
    for subject in subjects:
        require_subject(subject, field)
    return list(subjects)


def require_flag(value: Any, field: str) -> bool:
    """Return value if it is a bool."""
    if not isinstance(value, bool):
        raise ValidationError(field, "must be a boolean", value)
    return value


def normalize_names(names: Any, field: str = "names") -> list[str]:
    """Turn a permission name or a sequence of names into a list of names.

    Every name is checked before the list is returned, so callers can
    rely on the result before touching any state.

    Raises:
        ValidationError: If names is absent, empty, or holds an invalid name
    """
    if names is None:
        raise ValidationError(field, "is required")
    if isinstance(names, str):
        names = [names]
    elif not is_sequence(names):
        raise ValidationError(field, "must be a string or a sequence of strings", names)
    if len(names) == 0:
        raise ValidationError(field, "must not be empty")
    return [require_permission_name(name, field) for name in names]
