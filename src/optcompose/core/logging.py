# src/optcompose/core/logging.py
"""Structured logging configuration for optcompose.

Diagnostics are structlog events. configure_logging() sends them, together
with any stdlib records from the host application, through one
ProcessorFormatter so both end up in the same format (JSON or console).
Without configure_logging() structlog's defaults apply, which is what tests
rely on when capturing events.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from optcompose.core.config import LoggingSettings

# Third-party loggers that are excessively verbose at DEBUG level.
_NOISY_LOGGERS: tuple[str, ...] = (
    "dynaconf",
    "pluggy",
)


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop the _record and _from_structlog keys ProcessorFormatter always adds."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


# Applied to structlog events and to foreign stdlib records alike
_SHARED_PROCESSORS: tuple[Any, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
)


def _renderer_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [_remove_internal_fields, structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [_remove_internal_fields, structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route optcompose diagnostics and host stdlib logging to one handler.

    Args:
        json_output: Emit JSON lines instead of console output.
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        stream: Output stream; defaults to sys.stdout at call time.
    """
    log_level = logging.getLevelNamesMapping()[level.upper()]

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure logging; cached loggers would go stale
        cache_logger_on_first_use=False,
    )

    formatter = ProcessorFormatter(
        processors=_renderer_chain(json_output),
        foreign_pre_chain=list(_SHARED_PROCESSORS),
    )
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Never make noisy loggers less restrictive than the configured root level
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(log_level, logging.WARNING))


def configure_logging_from_settings(settings: LoggingSettings) -> None:
    """Configure logging from a validated LoggingSettings block."""
    configure_logging(json_output=settings.json_output, level=settings.level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structlog logger named after the calling module."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
