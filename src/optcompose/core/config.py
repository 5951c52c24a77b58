# src/optcompose/core/config.py
"""
Configuration schema and loading for optcompose.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from optcompose.contracts.enums import BASE_KEY, LIFECYCLE_HOOKS, RESTRICTED_FIELDS, OptionField

# Field names owned by a dedicated strategy. Hook fields may not reuse them,
# otherwise the hook strategy would silently replace e.g. the data strategy.
_STRUCTURED_FIELDS = frozenset(field.value for field in OptionField) | {BASE_KEY}


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Emit JSON lines instead of human-readable console output",
    )


class ComposeSettings(BaseModel):
    """Top-level optcompose configuration.

    ``debug`` plays the role of a development build: every diagnostic and
    every validation pass is skipped when it is False, and the engine falls
    back to best-effort defaults without reporting anything.
    """

    model_config = {"frozen": True}

    debug: bool = Field(
        default=True,
        description="Run validation and emit diagnostics for misuse",
    )
    silent: bool = Field(
        default=False,
        description="Suppress diagnostic output even when debug is enabled",
    )
    lifecycle_hooks: tuple[str, ...] = Field(
        default=LIFECYCLE_HOOKS,
        description="Field names merged as ordered, deduplicated hook sequences",
    )
    restricted_fields: tuple[str, ...] = Field(
        default=RESTRICTED_FIELDS,
        description="Fields that are only valid while creating an instance",
    )
    builtin_names: frozenset[str] = Field(
        default=frozenset({"slot", "component"}),
        description="Built-in names components may not use (case-insensitive)",
    )
    reserved_names: frozenset[str] = Field(
        default_factory=frozenset,
        description="Additional host-reserved names components may not use",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging output configuration",
    )

    @field_validator("lifecycle_hooks", "restricted_fields")
    @classmethod
    def validate_field_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Field names must be unique identifiers."""
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field name(s): {duplicates}")
        invalid = [name for name in v if not name.isidentifier()]
        if invalid:
            raise ValueError(f"Field names must be identifiers, got: {invalid}")
        return v

    @field_validator("lifecycle_hooks")
    @classmethod
    def validate_hooks_not_structured(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Hook fields cannot shadow a field that has its own strategy."""
        clashes = sorted(set(v) & _STRUCTURED_FIELDS)
        if clashes:
            raise ValueError(f"Lifecycle hook name(s) collide with option fields: {clashes}")
        return v

    @model_validator(mode="after")
    def validate_restricted_not_hooks(self) -> "ComposeSettings":
        """A field is either a hook sequence or instantiation-only, never both."""
        overlap = sorted(set(self.lifecycle_hooks) & set(self.restricted_fields))
        if overlap:
            raise ValueError(f"Field(s) declared both as lifecycle hook and restricted: {overlap}")
        return self


def load_settings(config_path: Path) -> ComposeSettings:
    """Load settings from a YAML or TOML file with environment overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (OPTCOMPOSE_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: OPTCOMPOSE_LOGGING__LEVEL for nested keys.

    Args:
        config_path: Path to the configuration file

    Returns:
        Validated ComposeSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="OPTCOMPOSE",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    if isinstance(raw_config.get("logging"), dict):
        raw_config["logging"] = {k.lower(): v for k, v in raw_config["logging"].items()}

    return ComposeSettings(**raw_config)
