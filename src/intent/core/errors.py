"""
Error types for Intent schema construction, theme resolution, and config loading.

Validation of schemas and usages never raises: issues are accumulated into a
ValidationResult. Only preconditions that make a schema or theme unusable are
exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class IntentError(Exception):
    """Base exception for all Intent errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class SchemaDefinitionError(IntentError):
    """
    Raised when a component or design system cannot be constructed.

    Examples:
    - Component without a name
    - Component without properties
    - Constraint with both (or neither of) forbid and require
    """

    pass


class ThemeError(IntentError):
    """Base class for theme resolution failures."""

    pass


class ThemeNotFoundError(ThemeError):
    """Raised when a theme, or one of its parents, is not registered."""

    def __init__(self, theme_name: str, context: ErrorContext | None = None):
        self.theme_name = theme_name
        super().__init__(f'Theme "{theme_name}" not found', context)


class CircularThemeError(ThemeError):
    """Raised when theme inheritance loops back on itself."""

    def __init__(self, chain: list[str], context: ErrorContext | None = None):
        self.chain = chain
        super().__init__(
            f"Circular theme dependency detected: {' -> '.join(chain)}",
            context,
        )


class PluginError(IntentError):
    """
    Raised for invalid plugin definitions or registry misuse.

    Examples:
    - Plugin without a name or with a non-semver version
    - Registering a plugin twice
    - Unregistering an unknown plugin
    """

    pass


class ConfigError(IntentError):
    """Raised when a config, usage, or theme file cannot be loaded."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the file the error relates to
        line: Line number (1-indexed), if known
        column: Column number (1-indexed), if known
        component: Optional component name the error relates to
    """

    file: Path
    line: int | None = None
    column: int | None = None
    component: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "intent.config.yaml:10:5 in component Button"
        """
        location = str(self.file)
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        if self.component:
            location += f" in component {self.component}"
        return location


def make_config_error(
    message: str,
    file: Path,
    line: int | None = None,
    column: int | None = None,
) -> ConfigError:
    """
    Helper to create a ConfigError with file context.

    Args:
        message: Error description
        file: Config file path
        line: Optional line number
        column: Optional column number

    Returns:
        ConfigError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column)
    return ConfigError(message, context)
