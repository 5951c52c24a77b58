# src/optcompose/plugins/__init__.py
"""Plugin system: installation hooks and custom merge strategies via pluggy.

- Hookspecs: pluggy hook definitions (``optcompose_install``,
  ``optcompose_get_strategies``)
- Manager: one-time installation and strategy registration per composer
"""

from optcompose.plugins.hookspecs import PROJECT_NAME, hookimpl, hookspec
from optcompose.plugins.manager import PluginManager

__all__ = [
    "PROJECT_NAME",
    "PluginManager",
    "hookimpl",
    "hookspec",
]
