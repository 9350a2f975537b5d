"""
Shared test configuration and fixtures.
"""

import pytest

from permission_acl import AccessControlList


@pytest.fixture
def crud_acl() -> AccessControlList:
    """Registry with empty, private read/write/delete permissions."""
    return AccessControlList({"read": {}, "write": {}, "delete": {}})


@pytest.fixture
def mixed_acl() -> AccessControlList:
    """Registry with two authorized lists and a public list blocking subject-1."""
    return AccessControlList(
        {
            "read": {"authorized": ["subject-1", "subject-2"]},
            "write": {"authorized": ["subject-1", "subject-2"]},
            "delete": {"blocked": ["subject-1"], "public": True},
        }
    )
