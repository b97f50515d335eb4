"""
CSS generator for Intent component schemas.

Emits one rule per mapping key, scoped by a data-attribute selector:

    .intent-button[data-importance="primary"] { ... }
    .intent-button[data-size="lg"] { ... }

A component with properties of arity 3, 3 and 2 therefore compiles to
3 + 3 + 2 rules, never 3 * 3 * 2. Compound selectors appear only where a
schema opts in with an explicit list of conditional mappings.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .ir import (
    DEFAULT_VERSION,
    ComponentSchema,
    ConditionalMappings,
    DesignSystemConfig,
    FlatMapping,
    ResolvedTheme,
    StyleMap,
    StyleValue,
    TokenRegistry,
    parse_mapping_key,
    stringify,
)
from .ir.system import DarkMode
from .tokens import resolve_token, token_variable_name

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


@dataclass(frozen=True)
class CompiledStyles:
    """CSS for one component."""

    css: str
    classes: list[str] = field(default_factory=list)
    rules: list[str] = field(default_factory=list)


def to_kebab_case(name: str) -> str:
    """``backgroundColor`` -> ``background-color``."""
    return _CAMEL_BOUNDARY_RE.sub(r"\1-\2", name).lower()


# =============================================================================
# CSS Variables
# =============================================================================


def _token_declarations(tokens: TokenRegistry, prefix: str, indent: int) -> list[str]:
    pad = " " * indent
    lines: list[str] = []
    for category, values in tokens.items():
        if not values:
            continue
        for name, value in values.items():
            lines.append(f"{pad}{token_variable_name(category, name, prefix)}: {value};")
    return lines


def generate_css_variables(tokens: TokenRegistry, prefix: str = "intent") -> str:
    """
    Generate a ``:root`` block declaring one custom property per token.

    Args:
        tokens: Token registry
        prefix: CSS variable prefix

    Returns:
        CSS text, e.g. ``:root {\\n  --intent-color-primary: #000;\\n}``
    """
    lines = [":root {"]
    lines.extend(_token_declarations(tokens, prefix, indent=2))
    lines.append("}")
    return "\n".join(lines)


def _dark_class_selector(mode: DarkMode) -> str:
    if mode == "class":
        return ":root.dark,\n.dark"
    if mode == "data":
        return '[data-theme="dark"]'
    return ':root.dark,\n.dark,\n[data-theme="dark"]'


def generate_dark_mode_variables(
    dark_tokens: TokenRegistry,
    prefix: str = "intent",
    mode: DarkMode = "auto",
) -> str:
    """
    Generate dark-mode overrides for the dark-token subset of the registry.

    In ``auto`` mode (the default) this is both a
    ``@media (prefers-color-scheme: dark)`` block and a manual-toggle block
    matching ``.dark`` and ``[data-theme="dark"]``. ``media`` emits only the
    media query; ``class`` and ``data`` emit only the toggle block.
    """
    blocks: list[str] = []

    if mode in ("auto", "media"):
        lines = ["@media (prefers-color-scheme: dark) {", "  :root {"]
        lines.extend(_token_declarations(dark_tokens, prefix, indent=4))
        lines.append("  }")
        lines.append("}")
        blocks.append("\n".join(lines))

    if mode in ("auto", "class", "data"):
        lines = [f"{_dark_class_selector(mode)} {{"]
        lines.extend(_token_declarations(dark_tokens, prefix, indent=2))
        lines.append("}")
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)


# =============================================================================
# Style Resolution
# =============================================================================


def _resolve_style_value(
    value: StyleValue,
    tokens: TokenRegistry,
    context: dict[str, str],
    prefix: str,
) -> str:
    if isinstance(value, dict):
        if not value:
            return ""
        # Responsive value: the first branch whose key names a property or a
        # value in the current context wins, else the first declared branch.
        context_values = set(context.values())
        for key, branch in value.items():
            if key in context or key in context_values:
                return resolve_token(stringify(branch), tokens, prefix)
        first = next(iter(value.values()))
        return resolve_token(stringify(first), tokens, prefix)
    return resolve_token(stringify(value), tokens, prefix)


def _css_rule(
    selector: str,
    styles: StyleMap,
    tokens: TokenRegistry,
    context: dict[str, str],
    prefix: str,
) -> str | None:
    declarations = [
        f"  {to_kebab_case(prop)}: {_resolve_style_value(value, tokens, context, prefix)};"
        for prop, value in styles.items()
    ]
    if not declarations:
        return None
    return f"{selector} {{\n" + "\n".join(declarations) + "\n}"


def _attribute_selector(prop: str, value: str) -> str:
    return f'[data-{to_kebab_case(prop)}="{value}"]'


# =============================================================================
# Component Compilation
# =============================================================================


def compile_component(schema: ComponentSchema, config: DesignSystemConfig) -> CompiledStyles:
    """
    Compile one component schema to CSS.

    Produces one rule for non-empty base styles, one rule per non-empty flat
    mapping, and one compound rule per conditional entry with a non-empty
    condition.

    Args:
        schema: Component schema
        config: Design system providing tokens and the CSS prefix

    Returns:
        CompiledStyles with CSS text, generated class selectors, and rules
    """
    prefix = config.prefix
    tokens = config.tokens
    base_class = f"{prefix}-{schema.name.lower()}"
    rules: list[str] = []
    classes: list[str] = []

    if schema.base_styles:
        rule = _css_rule(f".{base_class}", schema.base_styles, tokens, {}, prefix)
        if rule:
            rules.append(rule)
            classes.append(base_class)

    for key, mapping in schema.mappings.items():
        pairs = parse_mapping_key(key)
        key_selector = "".join(_attribute_selector(prop, value) for prop, value in pairs)
        selector = f".{base_class}{key_selector}"
        classes.append(f"{base_class}{key_selector}")
        context = dict(pairs)

        if isinstance(mapping, FlatMapping):
            rule = _css_rule(selector, mapping.styles, tokens, context, prefix)
            if rule:
                rules.append(rule)
        elif isinstance(mapping, ConditionalMappings):
            for entry in mapping.entries:
                if not entry.condition:
                    continue
                condition = {prop: stringify(value) for prop, value in entry.condition.items()}
                compound = selector + "".join(
                    _attribute_selector(prop, value) for prop, value in condition.items()
                )
                rule = _css_rule(compound, entry.styles, tokens, {**context, **condition}, prefix)
                if rule:
                    rules.append(rule)

    logger.debug("Compiled %s: %d rules", schema.name, len(rules))
    return CompiledStyles(css="\n\n".join(rules), classes=classes, rules=rules)


# =============================================================================
# Full System Compilation
# =============================================================================


def compile_system(config: DesignSystemConfig, minify: bool = False) -> str:
    """
    Compile a whole design system to a single stylesheet.

    Layout: header comment, ``:root`` variables (if enabled), dark-mode
    overrides (if dark tokens exist), then one comment and rule group per
    component.
    """
    prefix = config.prefix
    settings = config.settings
    lines: list[str] = []

    lines.append(f"/* Intent Design System: {config.name} v{config.version or DEFAULT_VERSION} */")
    lines.append("")

    if settings.generate_css_variables:
        lines.append(generate_css_variables(config.tokens, prefix))
        lines.append("")

        if config.dark_tokens and settings.dark_mode is not False:
            lines.append(generate_dark_mode_variables(config.dark_tokens, prefix, settings.dark_mode))
            lines.append("")

    for name, schema in config.components.items():
        lines.append(f"/* Component: {name} */")
        lines.append(compile_component(schema, config).css)
        lines.append("")

    css = "\n".join(lines)
    if minify:
        css = minify_css(css)
    return css


def minify_css(css: str) -> str:
    """Strip comments and redundant whitespace."""
    css = re.sub(r"/\*.*?\*/", "", css, flags=re.DOTALL)
    css = re.sub(r"\s+", " ", css)
    css = re.sub(r"\s*([{}:;,])\s*", r"\1", css)
    css = css.replace(";}", "}")
    return css.strip()


def generate_theme_css(theme: ResolvedTheme, dark_mode: DarkMode = "auto") -> str:
    """CSS custom properties for a resolved theme, with dark overrides."""
    parts = [generate_css_variables(theme.tokens, theme.css_prefix)]
    if theme.dark_tokens:
        parts.append(generate_dark_mode_variables(theme.dark_tokens, theme.css_prefix, dark_mode))
    return "\n\n".join(parts)
