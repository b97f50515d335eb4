"""
Prop value types for component usages.

A usage extracted from source code carries one of three value kinds:

- LiteralValue: a statically known scalar (string, number, boolean)
- DynamicValue: an expression that cannot be analyzed statically
- NestedValue: an object literal
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ScalarValue = str | bool | int | float

# Key an extractor uses to mark a value as computed at runtime.
DYNAMIC_MARKER = "__dynamic"


class LiteralValue(BaseModel):
    """A statically known prop value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    value: Any = Field(description="The literal value as written in source")


class DynamicValue(BaseModel):
    """A prop value computed at runtime (e.g. ``size={props.size}``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["dynamic"] = "dynamic"
    placeholder: str = Field(default="", description="Source text of the expression")


class NestedValue(BaseModel):
    """An object-literal prop value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["nested"] = "nested"
    value: dict[str, Any] = Field(default_factory=dict)


PropValue = Annotated[LiteralValue | DynamicValue | NestedValue, Field(discriminator="kind")]


def coerce_prop_value(raw: Any) -> Any:
    """Convert raw extractor output into a PropValue (or its dict form).

    A dict carrying the ``__dynamic`` marker becomes a DynamicValue, any other
    dict a NestedValue, and everything else a LiteralValue. Already-typed
    values and their serialized dict forms pass through unchanged.
    """
    if isinstance(raw, LiteralValue | DynamicValue | NestedValue):
        return raw
    if isinstance(raw, dict):
        if DYNAMIC_MARKER in raw:
            marker = raw[DYNAMIC_MARKER]
            placeholder = marker if isinstance(marker, str) else ""
            return DynamicValue(placeholder=placeholder)
        if raw.get("kind") in ("literal", "dynamic", "nested") and set(raw) <= {
            "kind",
            "value",
            "placeholder",
        }:
            return raw
        return NestedValue(value=raw)
    return LiteralValue(value=raw)


def stringify(value: Any) -> str:
    """String form of a scalar, as used for enum and condition comparison.

    Booleans render lowercase and integral floats drop their fraction, so
    ``True`` compares equal to ``"true"`` and ``2.0`` to ``"2"``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None:
        return "null"
    return str(value)
