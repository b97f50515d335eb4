"""
Design system configuration types.

A design system bundles a token registry, component schemas, and compiler
settings. It is built once at load time and treated as immutable during a
compilation or validation pass.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .component import ComponentSchema

TokenValue = str | int | float
# category -> token name -> literal CSS value
TokenRegistry = dict[str, dict[str, TokenValue]]

DarkMode = Literal["auto", "media", "class", "data"]

DEFAULT_CSS_PREFIX = "intent"
DEFAULT_VERSION = "0.1.0"


def normalize_token_registry(raw: Any) -> Any:
    """Stringify token names so YAML keys like ``0`` or ``1.5`` load cleanly."""
    if not isinstance(raw, dict):
        return raw
    normalized: dict[str, Any] = {}
    for category, tokens in raw.items():
        if isinstance(tokens, dict):
            normalized[str(category)] = {str(name): value for name, value in tokens.items()}
        else:
            normalized[str(category)] = tokens
    return normalized


class SystemSettings(BaseModel):
    """Compiler settings for a design system."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    css_prefix: str = Field(default=DEFAULT_CSS_PREFIX, alias="cssPrefix")
    generate_css_variables: bool = Field(default=True, alias="generateCSSVariables")
    strict_mode: bool = Field(default=False, alias="strictMode")
    dark_mode: DarkMode | Literal[False] = Field(default="auto", alias="darkMode")


class DesignSystemConfig(BaseModel):
    """
    Complete design system description.

    Example:
        DesignSystemConfig(
            name="acme",
            tokens={"color": {"brand-primary": "#3B82F6"}},
            components={"Button": button_schema},
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Design system name")
    version: str | None = Field(default=None, description="Design system version")
    tokens: TokenRegistry = Field(default_factory=dict)
    dark_tokens: TokenRegistry | None = Field(default=None, alias="darkTokens")
    components: dict[str, ComponentSchema] = Field(default_factory=dict)
    settings: SystemSettings = Field(default_factory=SystemSettings)

    @model_validator(mode="before")
    @classmethod
    def _fill_component_names(cls, data: Any) -> Any:
        # Allow `components: {Button: {...}}` without repeating the name.
        if isinstance(data, dict) and isinstance(data.get("components"), dict):
            components = {}
            for key, schema in data["components"].items():
                if isinstance(schema, dict) and "name" not in schema:
                    schema = {**schema, "name": key}
                components[key] = schema
            data = {**data, "components": components}
        return data

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("tokens", "dark_tokens", mode="before")
    @classmethod
    def _normalize_tokens(cls, value: Any) -> Any:
        return normalize_token_registry(value)

    @property
    def prefix(self) -> str:
        return self.settings.css_prefix or DEFAULT_CSS_PREFIX

    def get_component(self, name: str) -> ComponentSchema | None:
        return self.components.get(name)

    def get_token(self, category: str, name: str) -> TokenValue | None:
        return self.tokens.get(category, {}).get(name)
