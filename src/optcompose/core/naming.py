# src/optcompose/core/naming.py
"""Name transforms and component-name validation.

Asset lookup tries a requested name as written, then its camelCase form,
then its capitalized camelCase form:

    "my-widget" -> "myWidget" -> "MyWidget"
"""

import re

from optcompose.core.config import ComposeSettings

_CAMELIZE_PATTERN = re.compile(r"-(\w)")

# Letters accepted after the first character besides ASCII letters/digits,
# mirroring the name characters allowed for custom elements.
_UNICODE_NAME_CHARS = (
    "a-zA-Z\u00B7\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u037D\u037F-\u1FFF\u200C-\u200D"
    "\u203F-\u2040\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF\uFDF0-\uFFFD"
)
_COMPONENT_NAME_PATTERN = re.compile(rf"[a-zA-Z][\-.0-9_{_UNICODE_NAME_CHARS}]*")


def camelize(name: str) -> str:
    """Convert a hyphenated name to camelCase ("my-widget" -> "myWidget")."""
    return _CAMELIZE_PATTERN.sub(lambda match: match.group(1).upper(), name)


def capitalize(name: str) -> str:
    """Uppercase the first character only ("myWidget" -> "MyWidget")."""
    return name[:1].upper() + name[1:]


def validate_component_name(name: str, settings: ComposeSettings) -> list[str]:
    """Check a component name against the naming rule and reserved names.

    Args:
        name: Name a component is being registered under.
        settings: Provides the built-in and reserved name sets.

    Returns:
        Human-readable problems; an empty list means the name is valid.
    """
    problems: list[str] = []
    if not _COMPONENT_NAME_PATTERN.fullmatch(name):
        problems.append(
            f'Invalid component name: "{name}". Component names should start with a letter '
            "and contain only letters, digits, '-', '_' or '.'."
        )
    if name.lower() in settings.builtin_names or name in settings.reserved_names:
        problems.append(f"Do not use built-in or reserved names as component id: {name}")
    return problems
