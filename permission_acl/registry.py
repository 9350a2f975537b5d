"""
Access control list: a registry of permission lists keyed by name.

Mutations require the named permission to exist (catching typos early),
while queries treat an unknown permission as "not allowed" so callers can
ask about permissions that have not been provisioned yet.

Bulk operations accept a single permission name or a sequence of names.
They are not transactional: names are processed in order, and an unknown
name raises after the names before it have already been updated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from .exceptions import PermissionNotFoundError, ValidationError
from .logging_utils import get_acl_logger
from .permissions import REASON_UNKNOWN_PERMISSION, AccessDecision, PermissionList
from .validation import (
    normalize_names,
    require_permission_name,
    require_subject,
    require_subjects,
)

logger = get_acl_logger("registry")

PermissionNames = str | Sequence[str]


class AccessControlList:
    """Registry mapping permission names to their permission lists.

    The registry owns its lists: lists passed to the constructor, raw or
    not, are copied so later changes never reach the caller's data.

    Example:
        >>> acl = AccessControlList({"read": {"authorized": ["u1"]}, "write": {}})
        >>> acl.authorize("u1", "write")
        >>> acl.is_allowed("u1", ["read", "write"])
        True
        >>> acl.is_allowed("u1", "delete")
        False
    """

    def __init__(
        self,
        lists: Mapping[str, PermissionList | Mapping[str, Any] | None] | None = None,
    ):
        """Initialize the registry.

        Args:
            lists: Optional mapping of permission name to a PermissionList,
                an exported record, or None for an empty list

        Raises:
            ValidationError: If a name or an entry is invalid
        """
        self._lists: dict[str, PermissionList] = {}

        if lists is None:
            return
        if not isinstance(lists, Mapping):
            raise ValidationError("lists", "must be a mapping", lists)

        for name, entry in lists.items():
            require_permission_name(name)
            if isinstance(entry, PermissionList):
                self._lists[name] = entry.copy()
            else:
                self._lists[name] = PermissionList.from_dict(entry)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AccessControlList:
        """Create from an exported mapping."""
        return cls(data)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Convert to an exportable mapping of permission name to record."""
        return {name: permission_list.to_dict() for name, permission_list in self._lists.items()}

    def copy(self) -> AccessControlList:
        """Return an independent copy."""
        return AccessControlList(self._lists)

    # -------------------------------------------------------------------------
    # Permission lists
    # -------------------------------------------------------------------------

    def get_permission_list(self, name: str) -> PermissionList:
        """Get the permission list for name.

        Raises:
            ValidationError: If name is not a non-empty string
            PermissionNotFoundError: If no list exists for name
        """
        require_permission_name(name)
        try:
            return self._lists[name]
        except KeyError:
            raise PermissionNotFoundError(name) from None

    def ensure_permission_list(self, name: str) -> PermissionList:
        """Get the permission list for name, creating an empty one if absent."""
        require_permission_name(name)
        permission_list = self._lists.get(name)
        if permission_list is None:
            permission_list = self._lists[name] = PermissionList()
            logger.info("Permission list created", permission=name)
        return permission_list

    def remove_permission_list(self, name: str) -> PermissionList:
        """Remove and return the permission list for name.

        Raises:
            PermissionNotFoundError: If no list exists for name
        """
        permission_list = self.get_permission_list(name)
        del self._lists[name]
        logger.info("Permission list removed", permission=name)
        return permission_list

    def has_permission_list(self, name: str) -> bool:
        require_permission_name(name)
        return name in self._lists

    def permission_names(self) -> list[str]:
        """Permission names in insertion order."""
        return list(self._lists)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._lists

    def __len__(self) -> int:
        return len(self._lists)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lists))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessControlList):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"AccessControlList({self.permission_names()!r})"

    # -------------------------------------------------------------------------
    # Bulk mutations
    # -------------------------------------------------------------------------

    def _apply(
        self,
        names: PermissionNames,
        operation: Callable[[PermissionList], None],
        action: str,
        subject: str | None = None,
    ) -> None:
        """Run operation on the list of every name, in order."""
        log = logger.bind(subject=subject, action=action)
        for name in normalize_names(names):
            operation(self.get_permission_list(name))
            log.debug("Permission %s", action, permission=name)

    def authorize(self, subject: str, names: PermissionNames) -> None:
        """Authorize subject on one or more permissions."""
        require_subject(subject)
        self._apply(names, lambda pl: pl.authorize(subject), "authorized", subject)

    def unauthorize(self, subject: str, names: PermissionNames) -> None:
        """Remove subject from the authorized subjects of one or more permissions."""
        require_subject(subject)
        self._apply(names, lambda pl: pl.unauthorize(subject), "unauthorized", subject)

    def block(self, subject: str, names: PermissionNames) -> None:
        """Block subject on one or more permissions."""
        require_subject(subject)
        self._apply(names, lambda pl: pl.block(subject), "blocked", subject)

    def unblock(self, subject: str, names: PermissionNames) -> None:
        """Unblock subject on one or more permissions."""
        require_subject(subject)
        self._apply(names, lambda pl: pl.unblock(subject), "unblocked", subject)

    def make_public(self, names: PermissionNames) -> None:
        """Make one or more permissions public."""
        self._apply(names, PermissionList.make_public, "made public")

    def make_private(self, names: PermissionNames) -> None:
        """Make one or more permissions private."""
        self._apply(names, PermissionList.make_private, "made private")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def explain(self, subject: str, name: str) -> AccessDecision:
        """Decide whether subject may perform a single permission.

        Returns:
            AccessDecision; an unknown permission is denied with
            reason "unknown_permission"
        """
        require_subject(subject)
        require_permission_name(name)
        permission_list = self._lists.get(name)
        if permission_list is None:
            return AccessDecision(allowed=False, reason=REASON_UNKNOWN_PERMISSION)
        return permission_list.decide(subject)

    def is_allowed(self, subject: str, names: PermissionNames) -> bool:
        """Check whether subject is allowed every one of names.

        Raises:
            ValidationError: If subject is invalid, or names is absent,
                empty or holds an invalid name
        """
        require_subject(subject)
        return self._allowed_all(subject, normalize_names(names))

    def is_any_allowed(self, subjects: Sequence[str], names: PermissionNames) -> bool:
        """Check whether at least one of subjects is allowed every one of names."""
        subjects = require_subjects(subjects, "subjects")
        names = normalize_names(names)
        return any(self._allowed_all(subject, names) for subject in subjects)

    def _allowed_all(self, subject: str, names: list[str]) -> bool:
        for name in names:
            permission_list = self._lists.get(name)
            if permission_list is None or not permission_list.is_allowed(subject):
                return False
        return True
