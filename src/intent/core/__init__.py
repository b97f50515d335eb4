"""Core Intent functionality: IR, schema definition, token resolution, CSS generation, validation."""

from . import ir
from .constraints import generate_valid_combinations, suggest_valid_alternatives
from .css_generator import CompiledStyles, compile_component, compile_system
from .define import define_component, define_system, prop, when
from .errors import (
    CircularThemeError,
    ConfigError,
    ErrorContext,
    IntentError,
    PluginError,
    SchemaDefinitionError,
    ThemeError,
    ThemeNotFoundError,
)
from .tokens import resolve_token
from .validator import validate_all_usages, validate_schema, validate_usage

__all__ = [
    "ir",
    "CompiledStyles",
    "compile_component",
    "compile_system",
    "define_component",
    "define_system",
    "generate_valid_combinations",
    "prop",
    "resolve_token",
    "suggest_valid_alternatives",
    "validate_all_usages",
    "validate_schema",
    "validate_usage",
    "when",
    # Errors
    "CircularThemeError",
    "ConfigError",
    "ErrorContext",
    "IntentError",
    "PluginError",
    "SchemaDefinitionError",
    "ThemeError",
    "ThemeNotFoundError",
]
