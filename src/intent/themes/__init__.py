"""
Intent themes.

Named, inheritable token bundles resolved into flat token registries, plus
the built-in ``intent-default`` theme.
"""

from intent.core.ir import ResolvedTheme, Theme, ThemeSettings

from .apply import apply_component_override, apply_theme
from .presets import (
    BUILTIN_THEMES,
    DEFAULT_THEME,
    get_default_registry,
    get_theme_preset,
    reset_default_registry,
)
from .registry import ThemeRegistry, create_theme, deep_merge

__all__ = [
    "BUILTIN_THEMES",
    "DEFAULT_THEME",
    "ResolvedTheme",
    "Theme",
    "ThemeRegistry",
    "ThemeSettings",
    "apply_component_override",
    "apply_theme",
    "create_theme",
    "deep_merge",
    "get_default_registry",
    "get_theme_preset",
    "reset_default_registry",
]
