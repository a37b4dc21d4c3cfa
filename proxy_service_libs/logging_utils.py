"""
Structured logging for the proxy service, built on structlog.

Log lines go to stdout, rendered for humans in development and as JSON lines
in production. Request-scoped values bound with structlog contextvars (the
correlation ID) are merged into every line. Credentials that pass through the
proxy are masked before rendering.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

REDACTED = "***"
SENSITIVE_KEYS = frozenset({"authorization", "password", "token", "github_api_token"})

DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp ``service.name`` and ``deployment.environment`` on every line.

    Both values come from the environment (SERVICE_NAME, ENVIRONMENT), which
    configure_service_logging() seeds at startup.
    """
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def _mask(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_KEYS else _mask(item)
            for key, item in value.items()
        }
    return value


def redact_secrets(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask credential-like keys at the top level and inside nested mappings."""
    return _mask(event_dict)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("true", "1", "yes")


def _file_handler(service_name: str, log_file_path: str | None) -> logging.Handler:
    path = Path(log_file_path or os.getenv("LOG_FILE_PATH", f"logs/{service_name}.log"))
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=int(os.getenv("LOG_MAX_BYTES", str(DEFAULT_MAX_BYTES))),
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", str(DEFAULT_BACKUP_COUNT))),
        encoding="utf-8",
    )


def _renderer(environment: str) -> list[Processor]:
    # Explicit LOG_FORMAT wins; otherwise only production renders JSON
    log_format = os.getenv("LOG_FORMAT", "").lower()
    if log_format == "json" or (not log_format and environment == "production"):
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=True)]


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
    log_to_file: bool | None = None,
    log_file_path: str | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger for the service.

    Args:
        service_name: Name of the service (e.g., "gas-proxy-service")
        environment: Environment name (defaults to ENVIRONMENT env var)
        log_level: Root logging level
        log_to_file: Also write to a rotating file (defaults to LOG_TO_FILE)
        log_file_path: Log file location (defaults to LOG_FILE_PATH or
            logs/{service_name}.log)

    Environment Variables:
        LOG_FORMAT: "json" or "console"; unset means JSON only in production
        LOG_TO_FILE, LOG_FILE_PATH: Optional file output
        LOG_MAX_BYTES, LOG_BACKUP_COUNT: Rotation of the log file
    """
    environment = environment or os.getenv("ENVIRONMENT", "development")
    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    if log_to_file is None:
        log_to_file = _env_flag("LOG_TO_FILE")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        handlers.append(_file_handler(service_name, log_file_path))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    processors: list[Processor] = [
        merge_contextvars,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        redact_secrets,
        *_renderer(environment),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_service_logger(name: str | None = None) -> Any:
    """Return a structlog logger, bound to ``logger_name`` when a name is given."""
    logger = structlog.get_logger()
    return logger.bind(logger_name=name) if name else logger
