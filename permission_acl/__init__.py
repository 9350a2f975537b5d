"""
Permission ACL

In-memory access-control model for named permissions.

Provides:
- PermissionList: authorized subjects, blocked subjects and a public flag
  for one permission
- AccessControlList: registry of permission lists with bulk mutations and
  an "allowed all of these permissions" query
- ThreadSafeAccessControlList: lock-guarded wrapper for shared registries
- Snapshot codecs (JSON / YAML) for the exported record format

Usage:

    >>> from permission_acl import AccessControlList
    >>> acl = AccessControlList({
    ...     "read": {"authorized": ["u1"]},
    ...     "delete": {"blocked": ["u1"], "public": True},
    ... })
    >>> acl.is_allowed("u1", "read")
    True
    >>> acl.is_allowed("u1", ["read", "delete"])
    False
    >>> acl.to_dict()["delete"]
    {'authorized': [], 'blocked': ['u1'], 'public': True}

Decisions follow a fixed precedence: blocked subjects are always denied,
public permissions allow everyone else, private permissions allow only
authorized subjects.
"""

from .config import ACLConfig
from .exceptions import (
    ACLError,
    PermissionNotFoundError,
    SnapshotDecodeError,
    ValidationError,
)
from .locking import ThreadSafeAccessControlList
from .logging_utils import (
    PolicyLoggerAdapter,
    StructuredJsonFormatter,
    configure_structured_logging,
    get_acl_logger,
)
from .permissions import AccessDecision, PermissionList
from .registry import AccessControlList
from .snapshot import dumps, load_policy_file, loads

__all__ = [
    # Core
    "AccessControlList",
    "AccessDecision",
    "PermissionList",
    "ThreadSafeAccessControlList",
    # Snapshots
    "dumps",
    "loads",
    "load_policy_file",
    # Configuration and logging
    "ACLConfig",
    "PolicyLoggerAdapter",
    "StructuredJsonFormatter",
    "configure_structured_logging",
    "get_acl_logger",
    # Exceptions
    "ACLError",
    "PermissionNotFoundError",
    "SnapshotDecodeError",
    "ValidationError",
]

__version__ = "0.1.0"
