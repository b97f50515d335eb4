"""
Theme registry and inheritance resolution.

Resolves a theme by walking its ``extends`` graph depth-first and merging
parent tokens, dark tokens, and component overrides beneath its own:

1. Parents, in declaration order (later parents override earlier ones)
2. The theme's own values (highest precedence)

Merges are deep: nested dicts merge key by key, anything else replaces.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

from intent.core.errors import CircularThemeError, ThemeError, ThemeNotFoundError
from intent.core.ir import DEFAULT_CSS_PREFIX, ResolvedTheme, Theme

logger = logging.getLogger(__name__)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in recursively."""
    result = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        existing = result.get(key)
        if isinstance(value, Mapping) and isinstance(existing, Mapping):
            result[key] = deep_merge(existing, value)
        elif isinstance(value, Mapping):
            result[key] = deep_merge({}, value)
        else:
            result[key] = value
    return result


def create_theme(name: str, **partial: Any) -> Theme:
    """
    Create an unregistered theme from keyword fields.

    Example:
        create_theme("brand", extends="intent-default", tokens={"color": {...}})
    """
    return Theme.model_validate({**partial, "name": name})


class ThemeRegistry:
    """Named themes plus resolution over their inheritance graph.

    Registration and removal are serialized by a re-entrant lock; resolution
    works on a snapshot so a concurrent write never tears a resolve.
    """

    def __init__(self, themes: list[Theme] | None = None) -> None:
        self._themes: dict[str, Theme] = {}
        self._lock = threading.RLock()
        for theme in themes or []:
            self.register(theme)

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def register(self, theme: Theme | Mapping[str, Any]) -> Theme:
        """Register (or replace) a theme under its name."""
        if not isinstance(theme, Theme):
            theme = Theme.model_validate(dict(theme))
        with self._lock:
            if theme.name in self._themes:
                logger.debug("Replacing theme %s", theme.name)
            self._themes[theme.name] = theme
        return theme

    def unregister(self, name: str) -> bool:
        with self._lock:
            return self._themes.pop(name, None) is not None

    def get(self, name: str) -> Theme | None:
        return self._themes.get(name)

    def has(self, name: str) -> bool:
        return name in self._themes

    def all(self) -> list[Theme]:
        with self._lock:
            return list(self._themes.values())

    def clear(self) -> None:
        with self._lock:
            self._themes.clear()

    def __len__(self) -> int:
        return len(self._themes)

    def __contains__(self, name: object) -> bool:
        return name in self._themes

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, name: str) -> ResolvedTheme:
        """
        Flatten a theme and all of its ancestors.

        Args:
            name: Registered theme name

        Returns:
            ResolvedTheme with merged tokens, dark tokens, and component
            overrides

        Raises:
            ThemeNotFoundError: if the theme or any ancestor is missing
            CircularThemeError: if inheritance loops back on itself
        """
        with self._lock:
            snapshot = dict(self._themes)
        resolved = _resolve(name, snapshot, resolving=[], done={})
        logger.debug("Resolved theme %s (%d token categories)", name, len(resolved.tokens))
        return resolved

    def compose(self, *names: str) -> ResolvedTheme:
        """Resolve each theme and merge left to right; later themes win."""
        if not names:
            raise ThemeError("At least one theme name is required")

        tokens: dict[str, Any] = {}
        dark_tokens: dict[str, Any] = {}
        overrides: dict[str, Any] = {}
        prefix = DEFAULT_CSS_PREFIX
        for name in names:
            theme = self.resolve(name)
            tokens = deep_merge(tokens, theme.tokens)
            dark_tokens = deep_merge(dark_tokens, theme.dark_tokens)
            overrides = deep_merge(overrides, theme.component_overrides)
            prefix = theme.css_prefix

        return ResolvedTheme(
            name="+".join(names),
            tokens=tokens,
            dark_tokens=dark_tokens,
            component_overrides=overrides,
            css_prefix=prefix,
        )

    def extend(self, base: str, name: str | None = None, **overrides: Any) -> Theme:
        """
        Build (without registering) a child theme of ``base``.

        Raises:
            ThemeNotFoundError: if ``base`` is not registered
        """
        if not self.has(base):
            raise ThemeNotFoundError(base)
        overrides.pop("extends", None)
        return create_theme(name or f"{base}-extended", extends=base, **overrides)


def _resolve(
    name: str,
    themes: dict[str, Theme],
    resolving: list[str],
    done: dict[str, ResolvedTheme],
) -> ResolvedTheme:
    if name in done:
        return done[name]
    if name in resolving:
        raise CircularThemeError([*resolving, name])

    theme = themes.get(name)
    if theme is None:
        raise ThemeNotFoundError(name)

    resolving.append(name)
    tokens: dict[str, Any] = {}
    dark_tokens: dict[str, Any] = {}
    overrides: dict[str, Any] = {}
    prefix = DEFAULT_CSS_PREFIX

    for parent_name in theme.parents:
        parent = _resolve(parent_name, themes, resolving, done)
        tokens = deep_merge(tokens, parent.tokens)
        dark_tokens = deep_merge(dark_tokens, parent.dark_tokens)
        overrides = deep_merge(overrides, parent.component_overrides)
        prefix = parent.css_prefix

    tokens = deep_merge(tokens, theme.tokens)
    dark_tokens = deep_merge(dark_tokens, theme.dark_tokens or {})
    overrides = deep_merge(overrides, theme.components or {})
    if theme.settings and theme.settings.css_prefix:
        prefix = theme.settings.css_prefix

    resolving.pop()
    resolved = ResolvedTheme(
        name=name,
        tokens=tokens,
        dark_tokens=dark_tokens,
        component_overrides=overrides,
        css_prefix=prefix,
    )
    done[name] = resolved
    return resolved
