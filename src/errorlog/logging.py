# src/errorlog/logging.py
"""Structured logging configuration for applications using errorlog.

Configures BOTH structlog and stdlib logging to emit consistent output
(JSON or console). ProcessorFormatter routes stdlib log records through
structlog's processor chain, so modules using logging.getLogger(__name__)
produce the same output format as modules using structlog.get_logger().

The chain includes ErrorFieldsProcessor, so ``logger.error("...", error=e)``
carries the same error.* fields as log_error().
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.stdlib import ProcessorFormatter

from errorlog.fields import MAX_SOURCE_DEPTH
from errorlog.processors import ErrorFieldsProcessor

if TYPE_CHECKING:
    from errorlog.config import ErrorLogSettings


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Remove internal structlog fields from output.

    ProcessorFormatter always adds _record and _from_structlog when
    processing log records. They are bookkeeping, not output.
    """
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    error_key: str | None = "error",
    max_source_depth: int = MAX_SOURCE_DEPTH,
) -> None:
    """Configure structlog and stdlib logging.

    Args:
        json_output: If True, output JSON. If False, human-readable.
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        error_key: Event dict key expanded into error fields, or None to
            leave error values in the event dict as they are.
        max_source_depth: Maximum causes recorded by the expansion.
    """
    log_level = getattr(logging, level.upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]
    if error_key is not None:
        shared_processors.append(ErrorFieldsProcessor(key=error_key, max_depth=max_source_depth))

    if json_output:
        final_processors: list[Any] = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # configure_logging may run again; cached loggers would keep the old chain
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)

    get_logger(__name__).debug(
        "Logging configured",
        json_output=json_output,
        level=level.upper(),
        error_key=error_key,
    )


def configure_from_settings(settings: "ErrorLogSettings") -> None:
    """Configure logging from loaded settings."""
    configure_logging(
        json_output=settings.json_output,
        level=settings.log_level,
        error_key=settings.error_key,
        max_source_depth=settings.max_source_depth,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
