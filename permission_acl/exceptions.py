"""
Custom exceptions for the access-control model.

Every error raised by the library derives from ACLError so callers
can catch them in one place.
"""

from typing import Any


class ACLError(Exception):
    """Base exception for all access-control errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ACLError):
    """Raised when an argument fails its type or shape contract."""

    def __init__(self, field: str, reason: str, value: Any = None):
        details = {"field": field, "reason": reason}
        if value is not None:
            details["value"] = repr(value)
        super().__init__(f"Validation failed for {field}: {reason}", details)
        self.field = field
        self.reason = reason
        self.value = value


class PermissionNotFoundError(ACLError):
    """Raised when an operation targets a permission with no list."""

    def __init__(self, name: str):
        super().__init__(f"Permission not found: {name}", {"permission": name})
        self.name = name


class SnapshotDecodeError(ACLError):
    """Raised when snapshot text or a policy file cannot be decoded."""

    def __init__(self, fmt: str, reason: str, cause: Exception | None = None):
        details = {"format": fmt, "reason": reason}
        if cause:
            details["cause"] = str(cause)
        super().__init__(f"Cannot decode {fmt} snapshot: {reason}", details)
        self.fmt = fmt
        self.reason = reason
        self.cause = cause
