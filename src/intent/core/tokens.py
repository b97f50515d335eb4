"""
Token reference resolution.

Rewrites schema style values into CSS custom property references:

    "brand-primary"           -> var(--intent-color-brand-primary)
    "radius-md"               -> var(--intent-radius-md)
    "1px solid border-default" -> 1px solid var(--intent-color-border-default)
    "#3B82F6", "1px", "none"  -> unchanged
"""

from __future__ import annotations

import re

from .ir import DEFAULT_CSS_PREFIX, TokenRegistry

# CSS keywords that are never treated as token references, even when a token
# of the same name exists.
LITERAL_VALUES = frozenset({"none", "transparent", "inherit", "initial", "unset", "auto"})

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z][\w-]*$")
_WHITESPACE_RE = re.compile(r"\s+")


def token_variable_name(category: str, name: str, prefix: str = DEFAULT_CSS_PREFIX) -> str:
    """CSS custom property name for a token: ``--{prefix}-{category}-{name}``."""
    return f"--{prefix}-{category}-{name}"


def _var(category: str, name: str, prefix: str) -> str:
    return f"var({token_variable_name(category, name, prefix)})"


def _resolve_word(word: str, tokens: TokenRegistry, prefix: str) -> str:
    if word in LITERAL_VALUES:
        return word

    # Exact token name in any category. Covers names that themselves contain
    # hyphens, e.g. color.border-default.
    for category, token_set in tokens.items():
        if token_set and word in token_set:
            return _var(category, word, prefix)

    # Category-prefixed reference: "radius-md" -> radius.md
    for category, token_set in tokens.items():
        if not token_set:
            continue
        category_prefix = f"{category}-"
        if word.startswith(category_prefix):
            name = word[len(category_prefix) :]
            if name in token_set:
                return _var(category, name, prefix)

    return word


def resolve_token(value: str, tokens: TokenRegistry, prefix: str = DEFAULT_CSS_PREFIX) -> str:
    """
    Resolve a style value against the token registry.

    Args:
        value: Style value from a schema (token reference or CSS literal)
        tokens: Token registry (category -> name -> value)
        prefix: CSS variable prefix

    Returns:
        A ``var(...)`` reference for token references, the value unchanged
        for literals. Multi-word values are resolved word by word.
    """
    if _IDENTIFIER_RE.match(value):
        return _resolve_word(value, tokens, prefix)

    words = _WHITESPACE_RE.split(value.strip())
    if len(words) > 1:
        return " ".join(resolve_token(word, tokens, prefix) for word in words)

    return value
