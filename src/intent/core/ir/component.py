"""
Component schema type.

A ComponentSchema is the single canonical in-memory description of one
component: its properties, constraints, visual mappings, and base styles.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..errors import SchemaDefinitionError
from .constraints import Constraint
from .mappings import StyleMap, VisualMapping, coerce_mapping, parse_mapping_key
from .properties import PropertyDefinition


def check_component_preconditions(data: Any) -> None:
    """Raise SchemaDefinitionError if a component lacks a name or properties.

    Shared by every construction path (plain data, builder, model_validate).
    """
    if isinstance(data, BaseModel):
        return
    name = data.get("name") if isinstance(data, dict) else None
    if not name:
        raise SchemaDefinitionError("Component must have a name")
    if data.get("properties") is None:
        raise SchemaDefinitionError(f'Component "{name}" must define properties')


class ComponentSchema(BaseModel):
    """
    Component schema.

    Example:
        ComponentSchema(
            name="Button",
            properties={
                "importance": EnumProperty(values=["primary", "ghost"], required=True),
            },
            constraints=[],
            mappings={"importance=primary": {"backgroundColor": "brand-primary"}},
            base_styles={"display": "inline-flex"},
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Component name (PascalCase)")
    description: str | None = Field(default=None, description="Component description")
    properties: dict[str, PropertyDefinition] = Field(description="Declared props")
    constraints: list[Constraint] = Field(default_factory=list)
    mappings: dict[str, VisualMapping] = Field(
        default_factory=dict, description="Mapping key -> visual mapping"
    )
    base_styles: StyleMap | None = Field(default=None, alias="baseStyles")

    @model_validator(mode="before")
    @classmethod
    def _check_preconditions(cls, data: Any) -> Any:
        check_component_preconditions(data)
        return data

    @field_validator("mappings", mode="before")
    @classmethod
    def _coerce_mappings(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: coerce_mapping(mapping) for key, mapping in value.items()}
        return value

    @staticmethod
    def mapping_property(key: str) -> str:
        """Leading property name of a mapping key."""
        return parse_mapping_key(key)[0][0]

    def get_property(self, name: str) -> PropertyDefinition | None:
        return self.properties.get(name)
