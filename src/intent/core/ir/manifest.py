"""
AI manifest types.

A read-only, JSON-serializable view of a design system for downstream
tooling (CLI ``generate``, MCP server). Serialize with
``model_dump(by_alias=True, exclude_none=True)``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .system import TokenRegistry


class PropertyForAI(BaseModel):
    """Property entry in the manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    type: str
    values: list[str] | None = None
    required: bool = False
    default: Any = None
    description: str | None = None
    value_descriptions: dict[str, str] | None = Field(default=None, alias="valueDescriptions")


class ManifestExamples(BaseModel):
    """Illustrative usages."""

    model_config = ConfigDict(frozen=True)

    valid: list[str] = Field(default_factory=list)
    invalid: list[str] = Field(default_factory=list)


class ComponentSchemaForAI(BaseModel):
    """Component entry in the manifest."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    properties: list[PropertyForAI] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    examples: ManifestExamples = Field(default_factory=ManifestExamples)


class AIManifest(BaseModel):
    """Full manifest."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    design_system: str = Field(alias="designSystem")
    tokens: TokenRegistry = Field(default_factory=dict)
    components: list[ComponentSchemaForAI] = Field(default_factory=list)
    semantic_descriptions: dict[str, str] = Field(
        default_factory=dict, alias="semanticDescriptions"
    )

    def get_component(self, name: str) -> ComponentSchemaForAI | None:
        for component in self.components:
            if component.name == name:
                return component
        return None
