"""Field names and asset kinds shared across the merge engine.

Values are plain strings (StrEnum), so they can be used directly as keys in
definition mappings: ``definition[OptionField.DATA]`` and ``definition["data"]``
address the same field.
"""

from enum import StrEnum


class AssetKind(StrEnum):
    """Kinds of named sub-extensions resolvable by name.

    Each kind is stored in its own option field (the plural form).
    """

    COMPONENT = "component"
    DIRECTIVE = "directive"
    FILTER = "filter"

    @property
    def field(self) -> str:
        """Option field holding the table for this kind."""
        return f"{self.value}s"


class OptionField(StrEnum):
    """Option fields with a dedicated merge strategy or normalizer."""

    DATA = "data"
    PROVIDE = "provide"
    PROPS = "props"
    METHODS = "methods"
    INJECT = "inject"
    COMPUTED = "computed"
    WATCH = "watch"
    COMPONENTS = "components"
    DIRECTIVES = "directives"
    FILTERS = "filters"
    EXTENDS = "extends"
    MIXINS = "mixins"
    NAME = "name"
    EL = "el"
    PROPS_DATA = "props_data"


# Default lifecycle hook fields. The set is open: ComposeSettings.lifecycle_hooks
# decides which field names are merged as hook sequences.
LIFECYCLE_HOOKS: tuple[str, ...] = (
    "before_create",
    "created",
    "before_mount",
    "mounted",
    "before_update",
    "updated",
    "before_destroy",
    "destroyed",
    "activated",
    "deactivated",
    "error_captured",
    "server_prefetch",
)

# Fields that only make sense when an instance is being created.
RESTRICTED_FIELDS: tuple[str, ...] = (OptionField.EL.value, OptionField.PROPS_DATA.value)

# Key marking a mapping as the output of a previous merge.
BASE_KEY = "_base"

# Bookkeeping key owned by the reactive system; never copied by deep-merge.
OBSERVER_KEY = "__ob__"

# Hook names a function-shorthand directive is expanded into.
DIRECTIVE_HOOKS: tuple[str, str] = ("bind", "update")
