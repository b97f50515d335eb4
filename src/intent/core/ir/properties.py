"""
Property definition types for component schemas.

A property is a tagged variant discriminated on ``type``: enum, boolean,
number, or string.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .values import stringify


class EnumProperty(BaseModel):
    """
    Property restricted to a fixed set of string values.

    Example:
        EnumProperty(values=["primary", "secondary", "ghost"], required=True)
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["enum"] = "enum"
    values: list[str] = Field(default_factory=list, description="Allowed values")
    required: bool = Field(default=False, description="Must the prop be present?")
    default: str | None = Field(default=None, description="Default value")
    description: str | None = Field(default=None, description="Human-readable description")

    @field_validator("values", mode="before")
    @classmethod
    def _stringify_values(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [stringify(v) for v in value]
        return value

    @field_validator("default", mode="before")
    @classmethod
    def _stringify_default(cls, value: Any) -> Any:
        return value if value is None else stringify(value)

    def default_satisfies_domain(self) -> bool:
        return self.default is None or self.default in self.values


class BooleanProperty(BaseModel):
    """Boolean flag property."""

    model_config = ConfigDict(frozen=True)

    type: Literal["boolean"] = "boolean"
    required: bool = False
    default: bool | None = None
    description: str | None = None

    def default_satisfies_domain(self) -> bool:
        return self.default is None or isinstance(self.default, bool)


class NumberProperty(BaseModel):
    """Numeric property with an optional inclusive range."""

    model_config = ConfigDict(frozen=True)

    type: Literal["number"] = "number"
    required: bool = False
    default: int | float | None = None
    min: int | float | None = Field(default=None, description="Inclusive lower bound")
    max: int | float | None = Field(default=None, description="Inclusive upper bound")
    description: str | None = None

    def default_satisfies_domain(self) -> bool:
        if self.default is None:
            return True
        if self.min is not None and self.default < self.min:
            return False
        if self.max is not None and self.default > self.max:
            return False
        return True


class StringProperty(BaseModel):
    """Free-form string property."""

    model_config = ConfigDict(frozen=True)

    type: Literal["string"] = "string"
    required: bool = False
    default: str | None = None
    description: str | None = None

    def default_satisfies_domain(self) -> bool:
        return True


PropertyDefinition = Annotated[
    EnumProperty | BooleanProperty | NumberProperty | StringProperty,
    Field(discriminator="type"),
]
