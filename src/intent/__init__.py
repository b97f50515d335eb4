"""
Intent - schema-first style compiler.

Compiles declarative component schemas (properties, constraints, visual
mappings) and design tokens into CSS, validates component usages, and
emits an AI-readable manifest of the design system.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.compiler import CompileResult, compile_design_system
from .core.css_generator import compile_component, compile_system
from .core.define import define_component, define_system, prop, when
from .core.errors import (
    CircularThemeError,
    ConfigError,
    IntentError,
    PluginError,
    SchemaDefinitionError,
    ThemeNotFoundError,
)
from .core.manifest import generate_ai_manifest, generate_ai_prompt
from .core.validator import validate_all_usages, validate_schema, validate_usage


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("intent-style")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    # Definition
    "define_component",
    "define_system",
    "prop",
    "when",
    # Compilation
    "CompileResult",
    "compile_component",
    "compile_design_system",
    "compile_system",
    # Validation
    "validate_all_usages",
    "validate_schema",
    "validate_usage",
    # AI manifest
    "generate_ai_manifest",
    "generate_ai_prompt",
    # Errors
    "CircularThemeError",
    "ConfigError",
    "IntentError",
    "PluginError",
    "SchemaDefinitionError",
    "ThemeNotFoundError",
]
