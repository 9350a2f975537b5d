"""
Permission lists: the authorization policy of a single permission.

A permission list holds the subjects explicitly authorized, the subjects
explicitly blocked, and a public flag. Decisions are taken in order:

1. a blocked subject is always denied
2. a public permission allows everyone else
3. a private permission allows only authorized subjects
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from . import set_utils
from .exceptions import ValidationError
from .validation import require_flag, require_subject, require_subjects

# Decision reasons
REASON_BLOCKED = "blocked"
REASON_PUBLIC = "public"
REASON_AUTHORIZED = "authorized"
REASON_NOT_AUTHORIZED = "not_authorized"
REASON_UNKNOWN_PERMISSION = "unknown_permission"


@dataclass(frozen=True)
class AccessDecision:
    """Result of an access check, with the rule that produced it."""

    allowed: bool
    reason: str


class PermissionList:
    """Authorization state for one permission.

    Example:
        >>> delete = PermissionList(blocked=["u1"], public=True)
        >>> delete.is_allowed("u1")
        False
        >>> delete.is_allowed("u2")
        True
    """

    def __init__(
        self,
        authorized: Sequence[str] | None = None,
        blocked: Sequence[str] | None = None,
        public: bool | None = None,
    ):
        """Initialize a permission list.

        Args:
            authorized: Subjects allowed while the permission is private
            blocked: Subjects always denied
            public: Whether every non-blocked subject is allowed

        Raises:
            ValidationError: If authorized/blocked are not sequences of
                non-empty strings, or public is not a boolean
        """
        authorized = [] if authorized is None else require_subjects(authorized, "authorized")
        blocked = [] if blocked is None else require_subjects(blocked, "blocked")

        self._authorized: list[str] = set_utils.unique(authorized)
        self._blocked: list[str] = set_utils.unique(blocked)
        self._public: bool = False if public is None else require_flag(public, "public")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PermissionList:
        """Create from an exported record.

        Missing fields take their defaults; a None record is an empty list.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValidationError("permission_list", "must be a mapping", data)
        return cls(
            authorized=data.get("authorized"),
            blocked=data.get("blocked"),
            public=data.get("public"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to an exportable record.

        The returned lists are copies; mutating them does not affect
        this permission list.
        """
        return {
            "authorized": list(self._authorized),
            "blocked": list(self._blocked),
            "public": self._public,
        }

    def copy(self) -> PermissionList:
        """Return an independent copy."""
        return PermissionList.from_dict(self.to_dict())

    @property
    def authorized(self) -> tuple[str, ...]:
        return tuple(self._authorized)

    @property
    def blocked(self) -> tuple[str, ...]:
        return tuple(self._blocked)

    # -------------------------------------------------------------------------
    # Authorized subjects
    # -------------------------------------------------------------------------

    def authorize(self, subject: str) -> None:
        """Add subject to the authorized subjects (no-op if present)."""
        require_subject(subject)
        self._authorized = set_utils.add_unique(self._authorized, subject)

    def unauthorize(self, subject: str) -> None:
        """Remove subject from the authorized subjects (no-op if absent)."""
        require_subject(subject)
        self._authorized = set_utils.remove_item(self._authorized, subject)

    def is_authorized(self, subject: str) -> bool:
        require_subject(subject)
        return set_utils.contains(self._authorized, subject)

    # -------------------------------------------------------------------------
    # Blocked subjects
    # -------------------------------------------------------------------------

    def block(self, subject: str) -> None:
        """Add subject to the blocked subjects (no-op if present)."""
        require_subject(subject)
        self._blocked = set_utils.add_unique(self._blocked, subject)

    def unblock(self, subject: str) -> None:
        """Remove subject from the blocked subjects (no-op if absent)."""
        require_subject(subject)
        self._blocked = set_utils.remove_item(self._blocked, subject)

    def is_blocked(self, subject: str) -> bool:
        require_subject(subject)
        return set_utils.contains(self._blocked, subject)

    # -------------------------------------------------------------------------
    # Visibility
    # -------------------------------------------------------------------------

    def make_public(self) -> None:
        """Allow every subject that is not blocked."""
        self._public = True

    def make_private(self) -> None:
        """Allow only subjects that are authorized and not blocked."""
        self._public = False

    def is_public(self) -> bool:
        return self._public

    # -------------------------------------------------------------------------
    # Decisions
    # -------------------------------------------------------------------------

    def decide(self, subject: str) -> AccessDecision:
        """Decide whether subject may perform this permission.

        Args:
            subject: Subject requesting access

        Returns:
            AccessDecision with allowed status and the deciding rule
        """
        if self.is_blocked(subject):
            return AccessDecision(allowed=False, reason=REASON_BLOCKED)

        if self.is_public():
            return AccessDecision(allowed=True, reason=REASON_PUBLIC)

        if self.is_authorized(subject):
            return AccessDecision(allowed=True, reason=REASON_AUTHORIZED)

        return AccessDecision(allowed=False, reason=REASON_NOT_AUTHORIZED)

    def is_allowed(self, subject: str) -> bool:
        return self.decide(subject).allowed

    def is_any_allowed(self, subjects: Sequence[str]) -> bool:
        """Check whether at least one of subjects is allowed."""
        subjects = require_subjects(subjects, "subjects")
        return any(self.is_allowed(subject) for subject in subjects)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionList):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"PermissionList(authorized={self._authorized!r}, "
            f"blocked={self._blocked!r}, public={self._public!r})"
        )
