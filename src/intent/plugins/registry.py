"""
Plugin manager.

Holds registered plugins in registration order together with the
components, tokens, custom validators and custom generators they
contribute. Hooks run synchronously over enabled plugins in that order.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from intent.core.errors import PluginError
from intent.core.ir import (
    ComponentSchema,
    ComponentUsage,
    DesignSystemConfig,
    IssueCode,
    Severity,
    TokenRegistry,
    ValidationIssue,
)

from .types import (
    GeneratorFn,
    IntentPlugin,
    PluginContext,
    PluginHook,
    PluginRegistration,
    ValidatorFn,
)

logger = logging.getLogger(__name__)

SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+(-[\w.-]+)?(\+[\w.-]+)?$")


# =============================================================================
# Definition Helpers
# =============================================================================


def define_plugin(plugin: IntentPlugin | None = None, **fields: Any) -> IntentPlugin:
    """
    Define and validate a plugin.

    Accepts either a ready IntentPlugin or its fields as keywords.

    Raises:
        PluginError: if the name is empty or the version is not semver
    """
    if plugin is None:
        try:
            plugin = IntentPlugin(**fields)
        except TypeError as e:
            raise PluginError(f"Invalid plugin definition: {e}") from e

    if not plugin.name:
        raise PluginError("Plugin must have a name")
    if not plugin.version:
        raise PluginError("Plugin must have a version")
    if not SEMVER_RE.match(plugin.version):
        raise PluginError(
            f"Invalid version format: {plugin.version}. Expected semver (e.g., 1.0.0)"
        )
    return plugin


def define_preset(
    name: str,
    tokens: TokenRegistry | None = None,
    dark_tokens: TokenRegistry | None = None,
    components: Mapping[str, ComponentSchema] | None = None,
    description: str | None = None,
) -> IntentPlugin:
    """A plugin named ``preset-{name}`` that only contributes tokens and components."""
    return define_plugin(
        name=f"preset-{name}",
        version="1.0.0",
        description=description or f"Preset: {name}",
        tokens=dict(tokens or {}),
        dark_tokens=dict(dark_tokens or {}),
        components=dict(components or {}),
    )


# =============================================================================
# Plugin Manager
# =============================================================================


class PluginManager:
    """Registry of plugins, custom validators and custom generators."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._plugins: dict[str, PluginRegistration] = {}
        self._components: dict[str, ComponentSchema] = {}
        self._tokens: TokenRegistry = {}
        self._validators: dict[str, ValidatorFn] = {}
        self._generators: dict[str, GeneratorFn] = {}

    def _context(
        self, options: Mapping[str, Any] | None = None, config: DesignSystemConfig | None = None
    ) -> PluginContext:
        return PluginContext(
            config=config,
            tokens=self._tokens,
            components=self._components,
            options=dict(options or {}),
        )

    def _rebuild(self) -> None:
        """Recompute components and tokens from enabled plugins, later ones winning."""
        components: dict[str, ComponentSchema] = {}
        tokens: TokenRegistry = {}
        for registration in self._plugins.values():
            if not registration.enabled:
                continue
            components.update(registration.plugin.components)
            for category, values in registration.plugin.tokens.items():
                tokens.setdefault(category, {}).update(values or {})
        self._components = components
        self._tokens = tokens

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, plugin: IntentPlugin, options: Mapping[str, Any] | None = None) -> None:
        """
        Register a plugin, merging its components and tokens.

        Options are layered over the plugin's defaults; ``setup`` runs last.

        Raises:
            PluginError: if a plugin of the same name is already registered
        """
        with self._lock:
            if plugin.name in self._plugins:
                raise PluginError(f'Plugin "{plugin.name}" is already registered')

            merged = {**plugin.default_options, **(options or {})}
            self._plugins[plugin.name] = PluginRegistration(plugin=plugin, options=merged)
            self._rebuild()
            logger.debug("Registered plugin %s@%s", plugin.name, plugin.version)

            if plugin.setup is not None:
                plugin.setup(self._context(merged))

    def unregister(self, name: str) -> None:
        """
        Remove a plugin, its components, and its tokens.

        Raises:
            PluginError: if no plugin of that name is registered
        """
        with self._lock:
            registration = self._plugins.get(name)
            if registration is None:
                raise PluginError(f'Plugin "{name}" is not registered')

            if registration.plugin.teardown is not None:
                registration.plugin.teardown(self._context(registration.options))

            del self._plugins[name]
            self._rebuild()
            logger.debug("Unregistered plugin %s", name)

    def enable(self, name: str) -> None:
        self._set_enabled(name, True)

    def disable(self, name: str) -> None:
        self._set_enabled(name, False)

    def _set_enabled(self, name: str, enabled: bool) -> None:
        with self._lock:
            registration = self._plugins.get(name)
            if registration is None:
                return
            registration.enabled = enabled
            self._rebuild()

    def has(self, name: str) -> bool:
        return name in self._plugins

    def get(self, name: str) -> IntentPlugin | None:
        registration = self._plugins.get(name)
        return registration.plugin if registration else None

    def all(self) -> list[IntentPlugin]:
        """Enabled plugins in registration order."""
        return [r.plugin for r in self._plugins.values() if r.enabled]

    def components(self) -> dict[str, ComponentSchema]:
        return dict(self._components)

    def tokens(self) -> TokenRegistry:
        return {category: dict(values) for category, values in self._tokens.items()}

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def execute_hook(
        self, hook: PluginHook | str, data: Any, config: DesignSystemConfig | None = None
    ) -> Any:
        """
        Thread ``data`` through every enabled plugin's ``hook``.

        A hook returning None leaves the data unchanged.
        """
        result = data
        with self._lock:
            registrations = [r for r in self._plugins.values() if r.enabled]
        for registration in registrations:
            fn = registration.plugin.hooks.get(str(hook))
            if fn is None:
                continue
            returned = fn(result, self._context(registration.options, config))
            if returned is not None:
                result = returned
        return result

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    def register_validator(self, name: str, validator: ValidatorFn) -> None:
        with self._lock:
            self._validators[name] = validator

    def unregister_validator(self, name: str) -> None:
        with self._lock:
            self._validators.pop(name, None)

    def execute_validators(
        self, usages: Iterable[ComponentUsage], config: DesignSystemConfig | None = None
    ) -> list[ValidationIssue]:
        """
        Run every custom validator over every usage.

        A validator that raises produces a VALIDATOR_ERROR issue instead of
        aborting the pass.
        """
        context = self._context(config=config)
        with self._lock:
            validators = list(self._validators.items())

        issues: list[ValidationIssue] = []
        for usage in usages:
            for name, validator in validators:
                try:
                    result = validator(usage, context)
                except Exception as e:
                    logger.warning("Validator %s failed on %s: %s", name, usage.component, e)
                    issues.append(
                        ValidationIssue(
                            severity=Severity.ERROR,
                            code=IssueCode.VALIDATOR_ERROR,
                            message=f'Validator "{name}" failed: {e}',
                            path=usage.component,
                        )
                    )
                    continue
                if result is None:
                    continue
                if isinstance(result, list):
                    issues.extend(result)
                else:
                    issues.append(result)

        issues.extend(context.issues)
        return issues

    # -------------------------------------------------------------------------
    # Generators
    # -------------------------------------------------------------------------

    def register_generator(self, name: str, generator: GeneratorFn) -> None:
        with self._lock:
            self._generators[name] = generator

    def unregister_generator(self, name: str) -> None:
        with self._lock:
            self._generators.pop(name, None)

    def execute_generator(
        self, name: str, component: ComponentSchema, config: DesignSystemConfig | None = None
    ) -> Any:
        """Run a named generator; returns None when it is not registered."""
        generator = self._generators.get(name)
        if generator is None:
            return None
        return generator(component, self._context(config=config))

    def clear(self) -> None:
        with self._lock:
            self._plugins.clear()
            self._components.clear()
            self._tokens = {}
            self._validators.clear()
            self._generators.clear()


# =============================================================================
# Global Manager
# =============================================================================

_manager: PluginManager | None = None
_manager_lock = threading.Lock()


def get_plugin_manager() -> PluginManager:
    """Get or create the global PluginManager."""
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                _manager = PluginManager()
    return _manager


def reset_plugin_manager() -> None:
    """Drop the global manager; the next access creates a fresh one."""
    global _manager
    with _manager_lock:
        _manager = None


def use_plugin(plugin: IntentPlugin, options: Mapping[str, Any] | None = None) -> None:
    """Register a plugin with the global manager."""
    get_plugin_manager().register(plugin, options)


def has_plugin(name: str) -> bool:
    return get_plugin_manager().has(name)
