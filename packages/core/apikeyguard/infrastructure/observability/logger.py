"""structlog configuration and log sanitizing."""

import logging
from typing import Any

import structlog

REDACTED = "[REDACTED]"

# Payload and query keys whose values never reach the logs.
SENSITIVE_KEYS = frozenset({"secret", "apiKeySecret", "encryptionKeySalt", "password"})


def sanitize_for_logging(data: Any) -> Any:
    """Sanitize data to remove sensitive information before logging.

    Replaces the values of secret-bearing keys in dictionaries and nested
    structures with ``[REDACTED]``.

    Args:
        data: Data structure to sanitize (dict, list, or primitive).

    Returns:
        Sanitized copy of the data structure.
    """
    if isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if key in SENSITIVE_KEYS:
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_for_logging(value)
        return sanitized
    elif isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item) for item in data]
    return data


def _redact_event(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor applying :func:`sanitize_for_logging` to every event."""
    return sanitize_for_logging(event_dict)


def configure_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """Configure structlog over the standard library logging module.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, render JSON lines for machine consumption.
            If False, use the human-readable console renderer (development).
    """
    processors: list[Any] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _redact_event,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(message)s"
        if json_format
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
