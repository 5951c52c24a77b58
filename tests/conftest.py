# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Diagnostics are structlog warnings; assert on them with the ``captured``
fixture (structlog.testing.capture_logs) rather than on rendered output.
"""

import os
from collections.abc import Iterator

import pytest
from hypothesis import Phase, Verbosity, settings
from structlog.testing import capture_logs

from optcompose.composer import Composer
from optcompose.core.config import ComposeSettings
from optcompose.core.diagnostics import Diagnostics
from optcompose.options.strategies import StrategyRegistry
from tests.fixtures.logs import CapturedLogs


@pytest.fixture
def compose_settings() -> ComposeSettings:
    """Default settings: debug on, not silent."""
    return ComposeSettings()


@pytest.fixture
def diagnostics(compose_settings: ComposeSettings) -> Diagnostics:
    return Diagnostics(compose_settings)


@pytest.fixture
def registry(compose_settings: ComposeSettings, diagnostics: Diagnostics) -> StrategyRegistry:
    return StrategyRegistry(compose_settings, diagnostics)


@pytest.fixture
def composer(compose_settings: ComposeSettings) -> Composer:
    return Composer(compose_settings)


@pytest.fixture
def captured() -> Iterator[CapturedLogs]:
    """Structured log events emitted while the test runs."""
    with capture_logs() as logs:
        yield CapturedLogs(logs)


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
