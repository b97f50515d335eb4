"""
Plugin types.

Plugins contribute components and tokens to a design system and hook into
the compile pipeline. Unlike the IR, plugins carry callables, so they are
plain dataclasses rather than pydantic models.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from intent.core.ir import (
    ComponentSchema,
    ComponentUsage,
    DesignSystemConfig,
    TokenRegistry,
    TokenValue,
    ValidationIssue,
)

logger = logging.getLogger("intent.plugins")


class PluginHook(StrEnum):
    """Pipeline points a plugin can hook into."""

    TOKENS = "tokens"
    COMPONENT = "component"
    BEFORE_VALIDATE = "before_validate"
    AFTER_VALIDATE = "after_validate"
    BEFORE_GENERATE = "before_generate"
    GENERATE_COMPONENT = "generate_component"
    AFTER_GENERATE = "after_generate"


@dataclass
class PluginContext:
    """What a hook, validator or generator can see of the registry."""

    config: DesignSystemConfig | None
    tokens: TokenRegistry
    components: dict[str, ComponentSchema]
    options: dict[str, Any] = field(default_factory=dict)
    issues: list[ValidationIssue] = field(default_factory=list)

    def resolve_token(self, category: str, name: str) -> TokenValue | None:
        return (self.tokens.get(category) or {}).get(name)

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def log(self, message: str, *args: Any) -> None:
        logger.info("[plugin] " + message, *args)


# data, context -> replacement data, or None to keep it
HookFn = Callable[[Any, PluginContext], Any]
ValidatorFn = Callable[
    [ComponentUsage, PluginContext], ValidationIssue | list[ValidationIssue] | None
]
GeneratorFn = Callable[[ComponentSchema, PluginContext], Any]


@dataclass
class IntentPlugin:
    """
    A bundle of components, tokens and hooks.

    Example:
        define_plugin(
            name="intent-plugin-brand",
            version="1.0.0",
            tokens={"color": {"brand-primary": "#FF6B6B"}},
            hooks={PluginHook.AFTER_GENERATE: add_banner},
        )
    """

    name: str
    version: str
    description: str | None = None
    components: dict[str, ComponentSchema] = field(default_factory=dict)
    tokens: TokenRegistry = field(default_factory=dict)
    dark_tokens: TokenRegistry = field(default_factory=dict)
    default_options: dict[str, Any] = field(default_factory=dict)
    hooks: dict[str, HookFn] = field(default_factory=dict)
    setup: Callable[[PluginContext], None] | None = None
    teardown: Callable[[PluginContext], None] | None = None


@dataclass
class PluginRegistration:
    """A registered plugin with its merged options."""

    plugin: IntentPlugin
    options: dict[str, Any] = field(default_factory=dict)
    enabled: bool = True
