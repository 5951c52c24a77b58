"""Core infrastructure: settings, logging, diagnostics and naming."""

from optcompose.core.config import ComposeSettings, LoggingSettings, load_settings
from optcompose.core.diagnostics import Diagnostics
from optcompose.core.logging import configure_logging, configure_logging_from_settings, get_logger
from optcompose.core.naming import camelize, capitalize, validate_component_name

__all__ = [
    "ComposeSettings",
    "Diagnostics",
    "LoggingSettings",
    "camelize",
    "capitalize",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "load_settings",
    "validate_component_name",
]
