"""
Theme types.

A Theme is a named, inheritable bundle of tokens, dark-mode tokens, and
component overrides. Resolution flattens the inheritance graph into a
ResolvedTheme.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .system import DEFAULT_CSS_PREFIX, DarkMode, TokenRegistry, normalize_token_registry


class ThemeSettings(BaseModel):
    """Per-theme settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    css_prefix: str | None = Field(default=None, alias="cssPrefix")
    dark_mode: DarkMode | Literal[False] | None = Field(default=None, alias="darkMode")


class Theme(BaseModel):
    """
    Theme definition.

    Example:
        Theme(
            name="brand",
            extends="intent-default",
            tokens={"color": {"brand-primary": "#FF6B6B"}},
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    version: str | None = None
    extends: str | list[str] | None = Field(default=None, description="Parent theme(s)")
    tokens: TokenRegistry = Field(default_factory=dict)
    dark_tokens: TokenRegistry | None = Field(default=None, alias="darkTokens")
    components: dict[str, dict[str, Any]] | None = Field(
        default=None, description="Partial component schema overrides"
    )
    settings: ThemeSettings | None = None

    @field_validator("tokens", "dark_tokens", mode="before")
    @classmethod
    def _normalize_tokens(cls, value: Any) -> Any:
        return normalize_token_registry(value)

    @property
    def parents(self) -> list[str]:
        if self.extends is None:
            return []
        if isinstance(self.extends, str):
            return [self.extends]
        return list(self.extends)


class ResolvedTheme(BaseModel):
    """Inheritance-free result of theme resolution."""

    model_config = ConfigDict(frozen=True)

    name: str
    tokens: TokenRegistry = Field(default_factory=dict)
    dark_tokens: TokenRegistry = Field(default_factory=dict)
    component_overrides: dict[str, dict[str, Any]] = Field(default_factory=dict)
    css_prefix: str = DEFAULT_CSS_PREFIX
