"""Debug-only diagnostics for configuration misuse.

Malformed configuration never raises. Misuse is reported as a structured
warning through structlog, and only when ``ComposeSettings.debug`` is on.
Callers check ``Diagnostics.enabled`` before doing validation work so that
non-debug runs skip it entirely.
"""

from typing import Any

from optcompose.core.config import ComposeSettings
from optcompose.core.logging import get_logger


class Diagnostics:
    """Warning channel bound to one composer's settings."""

    def __init__(self, settings: ComposeSettings, *, logger_name: str = "optcompose") -> None:
        self._settings = settings
        self._logger = get_logger(logger_name)

    @property
    def enabled(self) -> bool:
        """Whether validation should run at all."""
        return self._settings.debug

    def warn(self, event: str, **fields: Any) -> bool:
        """Emit a diagnostic.

        Returns:
            True if the diagnostic was emitted, False if suppressed.
        """
        if not self._settings.debug or self._settings.silent:
            return False
        self._logger.warning(event, **fields)
        return True
