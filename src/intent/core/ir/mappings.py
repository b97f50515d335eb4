"""
Visual mapping types.

A mapping key (``"importance=primary"``) maps to either a flat style object
or an ordered list of conditional style objects. The two shapes are an
explicit tagged union so the CSS generator can branch exhaustively.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .values import ScalarValue

StyleLiteral = str | int | float
# Literal, or Responsive: another property's value -> literal
StyleValue = StyleLiteral | dict[str, StyleLiteral]
StyleMap = dict[str, StyleValue]


class ConditionalMapping(BaseModel):
    """Styles applied when extra property conditions also hold."""

    model_config = ConfigDict(frozen=True)

    condition: dict[str, ScalarValue] = Field(default_factory=dict)
    styles: StyleMap = Field(default_factory=dict)


class FlatMapping(BaseModel):
    """Plain CSS property -> style value map."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["flat"] = "flat"
    styles: StyleMap = Field(default_factory=dict)


class ConditionalMappings(BaseModel):
    """Explicit compound-selector opt-in: one rule per entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["conditional"] = "conditional"
    entries: list[ConditionalMapping] = Field(default_factory=list)


VisualMapping = Annotated[FlatMapping | ConditionalMappings, Field(discriminator="kind")]

_SERIALIZED_KEYS = {"kind", "styles", "entries"}


def coerce_mapping(raw: Any) -> Any:
    """Normalize authoring shapes into the tagged form.

    A list of ``{condition, styles}`` objects becomes ConditionalMappings and
    any other dict a FlatMapping. Typed values and their serialized dict
    forms pass through.
    """
    if isinstance(raw, FlatMapping | ConditionalMappings):
        return raw
    if isinstance(raw, list):
        return {"kind": "conditional", "entries": raw}
    if isinstance(raw, dict):
        if raw.get("kind") in ("flat", "conditional") and set(raw) <= _SERIALIZED_KEYS:
            return raw
        return {"kind": "flat", "styles": raw}
    return raw


def parse_mapping_key(key: str) -> list[tuple[str, str]]:
    """Parse ``"prop=value"`` or ``"propA=x,propB=y"`` into (prop, value) pairs."""
    pairs: list[tuple[str, str]] = []
    for part in key.split(","):
        prop, _, value = part.partition("=")
        pairs.append((prop.strip(), value.strip()))
    return pairs
