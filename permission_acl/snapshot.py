"""
Text codecs for registry snapshots.

A snapshot is the registry's exported mapping:

```yaml
read:
  authorized: [u1, u2]
  blocked: []
  public: false
delete:
  authorized: []
  blocked: [u1]
  public: true
```

Storing the text is left to the caller; this module only converts
between text and AccessControlList.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from .exceptions import SnapshotDecodeError, ValidationError
from .registry import AccessControlList

logger = logging.getLogger(__name__)

FORMAT_JSON = "json"
FORMAT_YAML = "yaml"
SUPPORTED_FORMATS = (FORMAT_JSON, FORMAT_YAML)

_SUFFIX_FORMATS = {
    ".json": FORMAT_JSON,
    ".yaml": FORMAT_YAML,
    ".yml": FORMAT_YAML,
}


def _check_format(fmt: str) -> None:
    if fmt not in SUPPORTED_FORMATS:
        raise ValidationError("fmt", f"must be one of {SUPPORTED_FORMATS}", fmt)


def dumps(acl: AccessControlList, fmt: str = FORMAT_JSON) -> str:
    """Serialize a registry snapshot to text.

    Args:
        acl: Registry to export
        fmt: "json" or "yaml"

    Returns:
        Snapshot text, permissions in insertion order
    """
    _check_format(fmt)
    data = acl.to_dict()
    if fmt == FORMAT_JSON:
        return json.dumps(data, indent=2)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


def loads(text: str, fmt: str = FORMAT_JSON) -> AccessControlList:
    """Rebuild a registry from snapshot text.

    Args:
        text: Snapshot text
        fmt: "json" or "yaml"

    Raises:
        SnapshotDecodeError: If the text is not valid JSON/YAML
        ValidationError: If the document is not a mapping of valid records
    """
    _check_format(fmt)
    try:
        if fmt == FORMAT_JSON:
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotDecodeError(fmt, "malformed document", e) from e

    # An empty YAML document loads as None
    return AccessControlList.from_dict(data)


def load_policy_file(path: str | Path) -> AccessControlList:
    """Load a registry from a JSON or YAML policy file.

    The format is chosen from the file suffix (.json, .yaml, .yml).

    Raises:
        SnapshotDecodeError: If the suffix is unknown, the file cannot be
            read, or its content is malformed
    """
    path = Path(path)
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise SnapshotDecodeError(path.suffix or "unknown", f"unsupported policy file: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotDecodeError(fmt, f"cannot read policy file: {path}", e) from e

    acl = loads(text, fmt)
    logger.info(f"Loaded {len(acl)} permission lists from {path}")
    return acl
