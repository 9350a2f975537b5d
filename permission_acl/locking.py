"""
Thread-safe access to an access control list.

AccessControlList itself is not synchronized. Share this wrapper instead
when several threads read and mutate the same registry.
"""

from __future__ import annotations

from collections.abc import Sequence
from threading import RLock
from typing import Any

from .permissions import AccessDecision, PermissionList
from .registry import AccessControlList, PermissionNames


class ThreadSafeAccessControlList:
    """Serializes every registry call behind a single lock.

    Permission lists returned by this wrapper are copies: mutate through
    the wrapper, never through a returned list.
    """

    def __init__(self, acl: AccessControlList | None = None):
        """Initialize the wrapper.

        Args:
            acl: Registry to guard. The wrapper takes ownership; defaults
                to a new empty registry
        """
        self._acl = acl if acl is not None else AccessControlList()
        self._lock = RLock()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ThreadSafeAccessControlList:
        return cls(AccessControlList(data))

    def snapshot(self) -> dict[str, dict[str, Any]]:
        """Export the registry as one consistent mapping."""
        with self._lock:
            return self._acl.to_dict()

    def get_permission_list(self, name: str) -> PermissionList:
        with self._lock:
            return self._acl.get_permission_list(name).copy()

    def ensure_permission_list(self, name: str) -> PermissionList:
        with self._lock:
            return self._acl.ensure_permission_list(name).copy()

    def remove_permission_list(self, name: str) -> PermissionList:
        with self._lock:
            return self._acl.remove_permission_list(name)

    def has_permission_list(self, name: str) -> bool:
        with self._lock:
            return self._acl.has_permission_list(name)

    def permission_names(self) -> list[str]:
        with self._lock:
            return self._acl.permission_names()

    def authorize(self, subject: str, names: PermissionNames) -> None:
        with self._lock:
            self._acl.authorize(subject, names)

    def unauthorize(self, subject: str, names: PermissionNames) -> None:
        with self._lock:
            self._acl.unauthorize(subject, names)

    def block(self, subject: str, names: PermissionNames) -> None:
        with self._lock:
            self._acl.block(subject, names)

    def unblock(self, subject: str, names: PermissionNames) -> None:
        with self._lock:
            self._acl.unblock(subject, names)

    def make_public(self, names: PermissionNames) -> None:
        with self._lock:
            self._acl.make_public(names)

    def make_private(self, names: PermissionNames) -> None:
        with self._lock:
            self._acl.make_private(names)

    def explain(self, subject: str, name: str) -> AccessDecision:
        with self._lock:
            return self._acl.explain(subject, name)

    def is_allowed(self, subject: str, names: PermissionNames) -> bool:
        with self._lock:
            return self._acl.is_allowed(subject, names)

    def is_any_allowed(self, subjects: Sequence[str], names: PermissionNames) -> bool:
        with self._lock:
            return self._acl.is_any_allowed(subjects, names)
