"""
Configuration for embedding the access-control model in an application.

Settings come from environment variables or from the ``acl`` section of
a YAML settings file:

```yaml
acl:
  policy_path: /etc/myapp/policy.yaml
  log_level: DEBUG
  json_logs: true
```
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .exceptions import SnapshotDecodeError, ValidationError
from .logging_utils import ROOT_LOGGER_NAME, configure_structured_logging
from .registry import AccessControlList
from .snapshot import load_policy_file

logger = logging.getLogger(__name__)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes", "on")


@dataclass
class ACLConfig:
    """Configuration for the access-control model."""

    policy_path: Path | None = None  # Initial policy file (.json/.yaml/.yml)
    log_level: str = "INFO"
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> ACLConfig:
        """Create config from environment variables.

        Environment variables:
            PERMISSION_ACL_POLICY_PATH: Path to the initial policy file
            PERMISSION_ACL_LOG_LEVEL: 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            PERMISSION_ACL_JSON_LOGS: '0', '1', 'true', 'false'
        """
        policy_path = os.environ.get("PERMISSION_ACL_POLICY_PATH")
        return cls(
            policy_path=Path(policy_path) if policy_path else None,
            log_level=os.environ.get("PERMISSION_ACL_LOG_LEVEL", "INFO").upper(),
            json_logs=_parse_bool(os.environ.get("PERMISSION_ACL_JSON_LOGS", "false")),
        )

    @classmethod
    def from_settings_file(cls, path: str | Path) -> ACLConfig:
        """Create config from the ``acl`` section of a YAML settings file.

        A missing file or section yields the defaults. A relative
        policy_path is resolved against the settings file's directory.

        Raises:
            SnapshotDecodeError: If the file cannot be read or is not valid YAML
            ValidationError: If the document or its ``acl`` section is not a mapping
        """
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            settings = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise SnapshotDecodeError("yaml", f"cannot load settings file: {path}", e) from e

        if not isinstance(settings, dict):
            raise ValidationError("settings", "must be a mapping", settings)
        section: dict[str, Any] = settings.get("acl") or {}
        if not isinstance(section, dict):
            raise ValidationError("acl", "must be a mapping", section)

        policy_path = section.get("policy_path")
        if policy_path:
            policy_path = Path(policy_path)
            if not policy_path.is_absolute():
                policy_path = path.parent / policy_path

        return cls(
            policy_path=policy_path or None,
            log_level=str(section.get("log_level", "INFO")).upper(),
            json_logs=_parse_bool(section.get("json_logs", False)),
        )

    def configure_logging(self) -> logging.Logger:
        """Apply the log settings to the package logger."""
        level = logging.getLevelName(self.log_level)
        if not isinstance(level, int):
            raise ValidationError("log_level", "unknown log level", self.log_level)

        if self.json_logs:
            return configure_structured_logging(level=level, logger_name=ROOT_LOGGER_NAME)

        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.setLevel(level)
        return package_logger

    def load_registry(self) -> AccessControlList:
        """Load the registry from policy_path, or return an empty one."""
        if self.policy_path is None:
            logger.debug("No policy file configured, starting with an empty registry")
            return AccessControlList()
        return load_policy_file(self.policy_path)
