"""structlog setup shared by the relay services.

Every log line carries the service name, the deployment environment and, while a
request is in flight, its correlation ID, method and path. Output is JSON in
production (or when ``LOG_FORMAT=json``) and a colored console rendering
elsewhere. A rotating log file can be added through ``LOG_TO_FILE``.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import Processor


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp ``service.name`` and ``deployment.environment`` onto the event.

    Both are read from the environment, which ``configure_service_logging``
    seeds with the values it was given.
    """
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
    log_to_file: bool | None = None,
    log_file_path: str | None = None,
) -> None:
    """Install the processor chain and stdlib handlers for this process.

    Call once at startup, before the first log line; reconfiguring replaces the
    root handlers.

    Args:
        service_name: Value logged as ``service.name``
        environment: Deployment environment; falls back to ``ENVIRONMENT``
        log_level: Root level name such as ``"DEBUG"``
        log_to_file: Also write to a rotating file; falls back to ``LOG_TO_FILE``
        log_file_path: File location; falls back to ``LOG_FILE_PATH``, then
            ``logs/<service_name>.log``

    ``LOG_FORMAT`` (``json`` or ``console``) overrides the environment-based
    renderer choice. ``LOG_MAX_BYTES`` and ``LOG_BACKUP_COUNT`` size the
    rotation and default to 10 MiB and 5 files.
    """
    if environment is None:
        environment = os.getenv("ENVIRONMENT", "development")

    # add_service_context reads these
    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    if log_to_file is None:
        log_to_file = os.getenv("LOG_TO_FILE", "false").lower() in ("true", "1", "yes")

    log_format = os.getenv("LOG_FORMAT", "").lower()
    use_json = log_format == "json" or (not log_format and environment == "production")

    shared_processors: list[Processor] = [
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
    ]

    if use_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_to_file:
        if log_file_path is None:
            log_file_path = os.getenv("LOG_FILE_PATH", f"logs/{service_name}.log")

        log_file = Path(log_file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        max_bytes = int(os.getenv("LOG_MAX_BYTES", "10485760"))
        backup_count = int(os.getenv("LOG_BACKUP_COUNT", "5"))

        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def create_service_logger(name: str | None = None) -> Any:
    """Module-level logger; ``name`` is emitted as ``logger_name`` on every line."""
    # Initial values keep the proxy lazy; configuration applied later still takes effect
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()


def bind_request_context(correlation_id: str, method: str, path: str) -> None:
    """Reset the contextvars and bind the identity of the current request."""
    clear_contextvars()
    bind_contextvars(correlation_id=correlation_id, method=method, path=path)
