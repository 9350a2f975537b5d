"""
Logging helpers for the access-control model.

Log records emitted by the registry carry ``permission`` and ``subject``
attributes. StructuredJsonFormatter turns those into JSON fields, so an
application can route ``permission_acl`` records to a log aggregator and
query policy changes by permission or subject.
"""

import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER_NAME = "permission_acl"

# Context attributes the registry attaches to its records
CONTEXT_FIELDS = ("permission", "subject", "action")

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class StructuredJsonFormatter(logging.Formatter):
    """
    Formats records as single-line JSON objects.

    Fields: ``timestamp`` (UTC, ISO 8601, from the record's creation time),
    ``level``, ``logger``, ``message``, ``exception`` when present, then
    the policy context (``permission``, ``subject``, ``action``) and any
    other ``extra`` attributes. Context fields set to None are omitted.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        for key in CONTEXT_FIELDS:
            value = extras.pop(key, None)
            if value is not None:
                entry[key] = _json_safe(value)
        entry.update((key, _json_safe(value)) for key, value in extras.items())

        return json.dumps(entry)


class PolicyLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that stamps policy context on every record.

    Bind the permission (and optionally the subject) once, then log
    without repeating them:

        >>> log = get_acl_logger("registry").bind(permission="read")
        >>> log.debug("Permission updated", action="authorized", subject="u1")
    """

    def __init__(self, logger: logging.Logger, **context: Any):
        super().__init__(logger, {k: v for k, v in context.items() if v is not None})

    def bind(self, **context: Any) -> "PolicyLoggerAdapter":
        """Return an adapter with additional context."""
        return PolicyLoggerAdapter(self.logger, **{**self.extra, **context})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Merge bound context with per-call context fields and ``extra``."""
        extra = dict(self.extra)
        for key in CONTEXT_FIELDS:
            if key in kwargs:
                value = kwargs.pop(key)
                if value is not None:
                    extra[key] = value
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def configure_structured_logging(
    level: int = logging.INFO,
    logger_name: str | None = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """
    Send a logger's records to stdout as JSON.

    Existing handlers on that logger are replaced, so calling this twice
    does not duplicate output.

    Args:
        level: Logging level (default: INFO)
        logger_name: Logger to configure (default: the package logger,
            None for the root logger)
    """
    logger = logging.getLogger(logger_name)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredJsonFormatter())
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    return logger


def get_acl_logger(name: str, **context: Any) -> PolicyLoggerAdapter:
    """
    Get a component logger, optionally bound to policy context.

    Args:
        name: Component name (e.g., 'registry', 'snapshot')
        **context: permission/subject/action to stamp on every record

    Returns:
        Adapter over the logger named 'permission_acl.{name}'
    """
    return PolicyLoggerAdapter(logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"), **context)
