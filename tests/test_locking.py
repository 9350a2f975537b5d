"""Tests for the thread-safe registry wrapper."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from permission_acl import (
    AccessControlList,
    PermissionNotFoundError,
    ThreadSafeAccessControlList,
    ValidationError,
)


class TestThreadSafeAccessControlList:
    def test_delegates(self) -> None:
        acl = ThreadSafeAccessControlList.from_dict({"read": {}, "write": {}})

        acl.authorize("subject-1", ["read", "write"])
        acl.block("subject-2", "read")
        acl.make_public("read")

        assert acl.is_allowed("subject-1", ["read", "write"]) is True
        assert acl.is_allowed("subject-2", "read") is False
        assert acl.is_allowed("subject-3", "read") is True
        assert acl.is_any_allowed(["subject-2", "subject-3"], "read") is True
        assert acl.explain("subject-2", "read").reason == "blocked"

        acl.unblock("subject-2", "read")
        acl.unauthorize("subject-1", "write")
        acl.make_private("read")

        assert acl.snapshot() == {
            "read": {"authorized": ["subject-1"], "blocked": [], "public": False},
            "write": {"authorized": [], "blocked": [], "public": False},
        }

    def test_returned_lists_are_copies(self) -> None:
        acl = ThreadSafeAccessControlList()

        acl.ensure_permission_list("read").authorize("subject-1")
        acl.get_permission_list("read").make_public()

        assert acl.has_permission_list("read") is True
        assert acl.is_allowed("subject-1", "read") is False

    def test_errors_propagate(self) -> None:
        acl = ThreadSafeAccessControlList(AccessControlList({"read": {}}))

        with pytest.raises(PermissionNotFoundError):
            acl.authorize("subject-1", "write")
        with pytest.raises(ValidationError):
            acl.is_allowed("subject-1", [])

    def test_remove(self) -> None:
        acl = ThreadSafeAccessControlList.from_dict({"read": {}, "write": {}})

        acl.remove_permission_list("read")

        assert acl.permission_names() == ["write"]

    def test_concurrent_authorize(self) -> None:
        acl = ThreadSafeAccessControlList.from_dict({"read": {}})
        subjects = [f"subject-{i}" for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda s: acl.authorize(s, "read"), subjects))

        authorized = acl.snapshot()["read"]["authorized"]
        assert sorted(authorized) == sorted(subjects)
        assert acl.is_any_allowed(subjects, "read") is True
