"""Tests for ACLConfig."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from permission_acl import (
    ACLConfig,
    AccessControlList,
    SnapshotDecodeError,
    StructuredJsonFormatter,
    ValidationError,
)


@pytest.fixture
def package_logger():
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger("permission_acl")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestFromEnv:
    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "PERMISSION_ACL_POLICY_PATH",
            "PERMISSION_ACL_LOG_LEVEL",
            "PERMISSION_ACL_JSON_LOGS",
        ):
            monkeypatch.delenv(name, raising=False)

        config = ACLConfig.from_env()

        assert config == ACLConfig(policy_path=None, log_level="INFO", json_logs=False)

    def test_values(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("PERMISSION_ACL_POLICY_PATH", str(tmp_path / "policy.yaml"))
        monkeypatch.setenv("PERMISSION_ACL_LOG_LEVEL", "debug")
        monkeypatch.setenv("PERMISSION_ACL_JSON_LOGS", "true")

        config = ACLConfig.from_env()

        assert config.policy_path == tmp_path / "policy.yaml"
        assert config.log_level == "DEBUG"
        assert config.json_logs is True


class TestFromSettingsFile:
    def test_missing_file(self, tmp_path) -> None:
        assert ACLConfig.from_settings_file(tmp_path / "settings.yaml") == ACLConfig()

    def test_missing_section(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"identity": {"user_id": "u1"}}))

        assert ACLConfig.from_settings_file(path) == ACLConfig()

    def test_section(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            yaml.safe_dump(
                {"acl": {"policy_path": "policy.yaml", "log_level": "warning", "json_logs": True}}
            )
        )

        config = ACLConfig.from_settings_file(path)

        assert config.policy_path == tmp_path / "policy.yaml"
        assert config.log_level == "WARNING"
        assert config.json_logs is True

    def test_absolute_policy_path(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"acl": {"policy_path": "/etc/acl/policy.yaml"}}))

        assert ACLConfig.from_settings_file(path).policy_path == Path("/etc/acl/policy.yaml")

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("acl: [unclosed\n")

        with pytest.raises(SnapshotDecodeError) as exc_info:
            ACLConfig.from_settings_file(path)
        assert exc_info.value.fmt == "yaml"

    def test_document_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValidationError) as exc_info:
            ACLConfig.from_settings_file(path)
        assert exc_info.value.field == "settings"

    def test_section_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"acl": ["policy.yaml"]}))

        with pytest.raises(ValidationError) as exc_info:
            ACLConfig.from_settings_file(path)
        assert exc_info.value.field == "acl"


class TestConfigureLogging:
    def test_plain(self, package_logger) -> None:
        logger = ACLConfig(log_level="DEBUG").configure_logging()

        assert logger is package_logger
        assert logger.level == logging.DEBUG

    def test_json(self, package_logger) -> None:
        logger = ACLConfig(log_level="WARNING", json_logs=True).configure_logging()

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredJsonFormatter)

    def test_unknown_level(self, package_logger) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ACLConfig(log_level="LOUD").configure_logging()
        assert exc_info.value.field == "log_level"


class TestLoadRegistry:
    def test_without_policy(self) -> None:
        assert ACLConfig().load_registry() == AccessControlList()

    def test_with_policy(self, tmp_path) -> None:
        policy = tmp_path / "policy.yaml"
        policy.write_text(yaml.safe_dump({"read": {"authorized": ["u1"]}, "write": {}}))

        acl = ACLConfig(policy_path=policy).load_registry()

        assert acl.permission_names() == ["read", "write"]
        assert acl.is_allowed("u1", "read") is True
