"""
Component usage types.

Usages are produced by an external source extractor (e.g. a JSX parser);
the compiler only ever receives already-extracted records.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .values import LiteralValue, PropValue, coerce_prop_value


class SourceLocation(BaseModel):
    """Position of a usage in a source file."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int = 0
    column: int = 0

    def format(self) -> str:
        """``file:line:column``, or just ``file`` when the line is unknown."""
        if not self.line:
            return self.file
        return f"{self.file}:{self.line}:{self.column}"


class ComponentUsage(BaseModel):
    """
    One concrete instantiation of a component.

    Example:
        ComponentUsage(
            component="Button",
            props={"importance": "primary", "onClick": {"__dynamic": "handle"}},
            location=SourceLocation(file="src/App.tsx", line=12, column=5),
        )
    """

    model_config = ConfigDict(frozen=True)

    component: str = Field(description="Component name")
    props: dict[str, PropValue] = Field(default_factory=dict)
    location: SourceLocation | None = None

    @field_validator("props", mode="before")
    @classmethod
    def _coerce_props(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {name: coerce_prop_value(raw) for name, raw in value.items()}
        return value

    def literal_props(self) -> dict[str, Any]:
        """Statically known prop values, unwrapped."""
        return {
            name: prop.value for name, prop in self.props.items() if isinstance(prop, LiteralValue)
        }

    def path(self, prop: str | None = None) -> str:
        """Issue path: ``file:line:column`` when located, else ``Component[.prop]``."""
        if self.location is not None:
            return self.location.format()
        return f"{self.component}.{prop}" if prop else self.component


class UsageBatch(BaseModel):
    """All usages extracted from one file."""

    model_config = ConfigDict(frozen=True)

    file: str
    usages: list[ComponentUsage] = Field(default_factory=list)
