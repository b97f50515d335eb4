"""
Intent plugins.

Plugins add components and tokens to a design system, run hooks around
validation and generation, and register custom validators and generators.
"""

from .registry import (
    PluginManager,
    define_plugin,
    define_preset,
    get_plugin_manager,
    has_plugin,
    reset_plugin_manager,
    use_plugin,
)
from .types import IntentPlugin, PluginContext, PluginHook, PluginRegistration

__all__ = [
    "IntentPlugin",
    "PluginContext",
    "PluginHook",
    "PluginManager",
    "PluginRegistration",
    "define_plugin",
    "define_preset",
    "get_plugin_manager",
    "has_plugin",
    "reset_plugin_manager",
    "use_plugin",
]
