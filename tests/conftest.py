"""Shared pytest fixtures for Intent tests."""

from pathlib import Path

import pytest

from intent.core.define import define_component, define_system
from intent.core.ir import ComponentSchema, DesignSystemConfig, TokenRegistry
from intent.plugins import reset_plugin_manager
from intent.themes import reset_default_registry

CONFIG_YAML = """\
name: acme
version: 1.0.0
tokens:
  color:
    brand-primary: "#3B82F6"
    border-default: "#E2E8F0"
    text-inverse: "#FFFFFF"
  space:
    "1": 0.25rem
    "2": 0.5rem
    "4": 1rem
  radius:
    md: 0.375rem
darkTokens:
  color:
    brand-primary: "#60A5FA"
components:
  Button:
    properties:
      importance:
        type: enum
        values: [primary, secondary, ghost]
        required: true
      size:
        type: enum
        values: [sm, md, lg]
        default: md
    constraints:
      - when: {importance: ghost}
        forbid: [size=lg]
        message: Ghost buttons cannot be large
    mappings:
      importance=primary:
        backgroundColor: brand-primary
      importance=secondary:
        border: 1px solid border-default
      importance=ghost:
        backgroundColor: transparent
      size=sm:
        padding: space-1 space-2
      size=md:
        padding: space-2 space-4
      size=lg:
        padding: space-4
    baseStyles:
      display: inline-flex
"""


@pytest.fixture(autouse=True)
def _reset_globals():
    """Fresh global theme registry and plugin manager for every test."""
    reset_default_registry()
    reset_plugin_manager()
    yield
    reset_default_registry()
    reset_plugin_manager()


@pytest.fixture
def tokens() -> TokenRegistry:
    """Return a small token registry."""
    return {
        "color": {
            "brand-primary": "#3B82F6",
            "border-default": "#E2E8F0",
            "text-inverse": "#FFFFFF",
        },
        "space": {"1": "0.25rem", "2": "0.5rem", "4": "1rem"},
        "radius": {"md": "0.375rem", "lg": "0.5rem"},
    }


@pytest.fixture
def button_schema() -> ComponentSchema:
    """Return a Button with enum arities 3, 3 and 2, plus typed extras."""
    return define_component(
        {
            "name": "Button",
            "properties": {
                "importance": {
                    "type": "enum",
                    "values": ["primary", "secondary", "ghost"],
                    "required": True,
                },
                "size": {"type": "enum", "values": ["sm", "md", "lg"], "default": "md"},
                "shape": {"type": "enum", "values": ["rounded", "pill"], "default": "rounded"},
                "disabled": {"type": "boolean"},
                "label": {"type": "string"},
                "count": {"type": "number", "min": 0, "max": 99},
            },
            "constraints": [
                {
                    "when": {"importance": "ghost"},
                    "forbid": ["shape=pill"],
                    "message": "Ghost buttons cannot be pills",
                }
            ],
            "mappings": {
                "importance=primary": {
                    "backgroundColor": "brand-primary",
                    "color": "text-inverse",
                },
                "importance=secondary": {"border": "1px solid border-default"},
                "importance=ghost": {"backgroundColor": "transparent"},
                "size=sm": {"padding": "space-1 space-2"},
                "size=md": {"padding": "space-2 space-4"},
                "size=lg": {"padding": "space-4"},
                "shape=rounded": {"borderRadius": "radius-md"},
                "shape=pill": {"borderRadius": "9999px"},
            },
            "baseStyles": {"display": "inline-flex", "cursor": "pointer"},
        }
    )


@pytest.fixture
def design_system(tokens: TokenRegistry, button_schema: ComponentSchema) -> DesignSystemConfig:
    """Return a design system with one Button component and dark tokens."""
    return define_system(
        {
            "name": "acme",
            "version": "1.0.0",
            "tokens": tokens,
            "darkTokens": {"color": {"brand-primary": "#60A5FA"}},
            "components": {"Button": button_schema},
        }
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write intent.config.yaml into a temporary project and return its path."""
    path = tmp_path / "intent.config.yaml"
    path.write_text(CONFIG_YAML)
    return path
