"""
Schema definition helpers.

Two construction paths produce the same ComponentSchema:

- plain data: ``define_component({"name": "Button", "properties": {...}})``
- fluent builder: ``define_component(lambda b: b.name("Button").properties({...}))``

Both run the same precondition check before returning.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from .errors import SchemaDefinitionError
from .ir import (
    BooleanProperty,
    ComponentSchema,
    Constraint,
    DesignSystemConfig,
    EnumProperty,
    NumberProperty,
    StringProperty,
    SystemSettings,
    check_component_preconditions,
)


def _build_component(data: dict[str, Any]) -> ComponentSchema:
    check_component_preconditions(data)
    try:
        return ComponentSchema.model_validate(data)
    except ValidationError as e:
        raise SchemaDefinitionError(f'Invalid component "{data["name"]}": {e}') from e


# =============================================================================
# Component Builder
# =============================================================================


class ComponentBuilder:
    """Fluent builder for ComponentSchema."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {"constraints": [], "mappings": {}}

    def name(self, name: str) -> ComponentBuilder:
        self._data["name"] = name
        return self

    def description(self, description: str) -> ComponentBuilder:
        self._data["description"] = description
        return self

    def properties(self, properties: Mapping[str, Any]) -> ComponentBuilder:
        self._data["properties"] = dict(properties)
        return self

    def constrain(self, *constraints: Constraint | dict[str, Any]) -> ComponentBuilder:
        self._data["constraints"] = [*self._data["constraints"], *constraints]
        return self

    def map(self, mappings: Mapping[str, Any]) -> ComponentBuilder:
        self._data["mappings"] = dict(mappings)
        return self

    def base(self, styles: Mapping[str, Any]) -> ComponentBuilder:
        self._data["base_styles"] = dict(styles)
        return self

    def build(self) -> ComponentSchema:
        return _build_component(dict(self._data))


ComponentFactory = Callable[[ComponentBuilder], ComponentBuilder]


def define_component(
    config: Mapping[str, Any] | ComponentSchema | ComponentFactory,
) -> ComponentSchema:
    """
    Define a component schema from plain data or a builder callback.

    Raises:
        SchemaDefinitionError: if the name or properties are missing, or the
            data does not describe a valid schema.
    """
    if isinstance(config, ComponentSchema):
        return config
    if callable(config):
        return config(ComponentBuilder()).build()
    return _build_component({"constraints": [], "mappings": {}, **config})


# =============================================================================
# System Builder
# =============================================================================


class SystemBuilder:
    """Fluent builder for DesignSystemConfig."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {"name": "", "tokens": {}, "components": {}}

    def name(self, name: str) -> SystemBuilder:
        self._data["name"] = name
        return self

    def version(self, version: str) -> SystemBuilder:
        self._data["version"] = version
        return self

    def tokens(self, tokens: Mapping[str, Any]) -> SystemBuilder:
        self._data["tokens"] = dict(tokens)
        return self

    def dark_tokens(self, tokens: Mapping[str, Any]) -> SystemBuilder:
        self._data["dark_tokens"] = dict(tokens)
        return self

    def component(
        self, name: str, schema: Mapping[str, Any] | ComponentSchema | ComponentFactory
    ) -> SystemBuilder:
        if isinstance(schema, ComponentSchema):
            resolved = schema
        elif callable(schema):
            resolved = schema(ComponentBuilder().name(name)).build()
        else:
            resolved = define_component(schema)
        self._data["components"] = {**self._data["components"], name: resolved}
        return self

    def settings(self, settings: SystemSettings | Mapping[str, Any]) -> SystemBuilder:
        self._data["settings"] = settings
        return self

    def build(self) -> DesignSystemConfig:
        if not self._data["name"]:
            raise SchemaDefinitionError("Design system must have a name")
        return DesignSystemConfig.model_validate(self._data)


def define_system(
    config: Mapping[str, Any] | DesignSystemConfig | Callable[[SystemBuilder], SystemBuilder],
) -> DesignSystemConfig:
    """Define a design system from plain data or a builder callback."""
    if isinstance(config, DesignSystemConfig):
        return config
    if callable(config):
        return config(SystemBuilder()).build()
    if not config.get("name"):
        raise SchemaDefinitionError("Design system must have a name")
    try:
        return DesignSystemConfig.model_validate(dict(config))
    except ValidationError as e:
        raise SchemaDefinitionError(f'Invalid design system "{config["name"]}": {e}') from e


# =============================================================================
# Property Helpers
# =============================================================================


class _PropertyHelpers:
    """Shorthand constructors: ``prop.enum([...], required=True)``."""

    @staticmethod
    def enum(
        values: list[str],
        *,
        required: bool = False,
        default: str | None = None,
        description: str | None = None,
    ) -> EnumProperty:
        return EnumProperty(
            values=values, required=required, default=default, description=description
        )

    @staticmethod
    def boolean(
        *, required: bool = False, default: bool | None = None, description: str | None = None
    ) -> BooleanProperty:
        return BooleanProperty(required=required, default=default, description=description)

    @staticmethod
    def string(
        *, required: bool = False, default: str | None = None, description: str | None = None
    ) -> StringProperty:
        return StringProperty(required=required, default=default, description=description)

    @staticmethod
    def number(
        *,
        required: bool = False,
        default: float | None = None,
        min: float | None = None,
        max: float | None = None,
        description: str | None = None,
    ) -> NumberProperty:
        return NumberProperty(
            required=required, default=default, min=min, max=max, description=description
        )


prop = _PropertyHelpers()


# =============================================================================
# Constraint Helpers
# =============================================================================


class _When:
    def __init__(self, condition: Mapping[str, Any]) -> None:
        self._condition = dict(condition)

    def forbid(self, props: list[str], message: str | None = None) -> Constraint:
        return Constraint(when=self._condition, forbid=props, message=message)

    def require(self, requirements: Mapping[str, list[Any]], message: str | None = None) -> Constraint:
        return Constraint(when=self._condition, require=dict(requirements), message=message)


def when(condition: Mapping[str, Any]) -> _When:
    """Start a constraint: ``when({"importance": "ghost"}).forbid(["loading"])``."""
    return _When(condition)
