"""
Apply a resolved theme to a design system.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from intent.core.errors import SchemaDefinitionError
from intent.core.ir import (
    ComponentSchema,
    DesignSystemConfig,
    FlatMapping,
    ResolvedTheme,
    coerce_mapping,
)

from .registry import deep_merge

logger = logging.getLogger(__name__)

_FIELD_ALIASES = {"baseStyles": "base_styles"}


def apply_component_override(schema: ComponentSchema, override: Mapping[str, Any]) -> ComponentSchema:
    """
    Merge a partial schema override into a component.

    ``description`` replaces; ``base_styles`` and ``properties`` merge
    deeply; a style-dict override of a flat mapping merges into its styles,
    any other mapping override replaces the mapping. Constraints are kept.
    """
    override = {_FIELD_ALIASES.get(key, key): value for key, value in override.items()}
    data = schema.model_dump()

    if "description" in override:
        data["description"] = override["description"]
    if override.get("base_styles"):
        data["base_styles"] = deep_merge(data.get("base_styles") or {}, override["base_styles"])
    if override.get("properties"):
        data["properties"] = deep_merge(data["properties"], override["properties"])

    for key, raw in (override.get("mappings") or {}).items():
        existing = schema.mappings.get(key)
        replacement = coerce_mapping(raw)
        if (
            isinstance(existing, FlatMapping)
            and isinstance(replacement, dict)
            and replacement.get("kind") == "flat"
        ):
            data["mappings"][key] = {
                "kind": "flat",
                "styles": {**existing.styles, **replacement.get("styles", {})},
            }
        else:
            data["mappings"][key] = replacement

    try:
        return ComponentSchema.model_validate(data)
    except ValueError as e:
        raise SchemaDefinitionError(f'Invalid theme override for "{schema.name}": {e}') from e


def apply_theme(config: DesignSystemConfig, theme: ResolvedTheme) -> DesignSystemConfig:
    """
    Return a copy of ``config`` with a resolved theme layered on top.

    Theme tokens and dark tokens override the system's own; component
    overrides apply to components of the same name (others are ignored);
    the theme's CSS prefix replaces the system prefix.
    """
    components = dict(config.components)
    for name, override in theme.component_overrides.items():
        schema = components.get(name)
        if schema is None:
            logger.debug("Theme %s overrides unknown component %s", theme.name, name)
            continue
        components[name] = apply_component_override(schema, override)

    dark_tokens = deep_merge(config.dark_tokens or {}, theme.dark_tokens)
    return config.model_copy(
        update={
            "tokens": deep_merge(config.tokens, theme.tokens),
            "dark_tokens": dark_tokens or None,
            "components": components,
            "settings": config.settings.model_copy(update={"css_prefix": theme.css_prefix}),
        }
    )
