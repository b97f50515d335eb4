"""
Constraint types for component schemas.

A constraint couples a ``when`` condition with exactly one consequence:

- forbid: properties (or ``prop=value`` pairs) that must not appear
- require: properties that must be present with one of the allowed values
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .values import ScalarValue


class ConstraintOperator(StrEnum):
    """Comparison operators usable in a ``when`` condition."""

    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    NIN = "nin"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"


class OperatorCondition(BaseModel):
    """
    Operator-based condition value.

    Example:
        OperatorCondition(op="gte", value=3)
    """

    model_config = ConfigDict(frozen=True)

    op: ConstraintOperator
    value: Any


ConditionValue = OperatorCondition | list[ScalarValue] | ScalarValue


class Constraint(BaseModel):
    """
    Cross-property rule over a component's props.

    Example:
        Constraint(
            when={"importance": "ghost"},
            forbid=["focusVariant=none"],
            message="Ghost buttons need a visible focus ring",
        )
    """

    model_config = ConfigDict(frozen=True)

    when: dict[str, ConditionValue] = Field(description="Triggering condition")
    forbid: list[str] | None = Field(
        default=None, description="Props, or prop=value pairs, not allowed when fired"
    )
    require: dict[str, list[ScalarValue]] | None = Field(
        default=None, description="Props required when fired, with allowed values"
    )
    suggest: dict[str, str] | None = Field(default=None, description="Suggested values")
    message: str | None = Field(default=None, description="Human-readable explanation")

    @model_validator(mode="after")
    def _check_single_consequence(self) -> Constraint:
        if (self.forbid is None) == (self.require is None):
            raise ValueError("Constraint must define exactly one of 'forbid' or 'require'")
        return self

    def referenced_properties(self) -> set[str]:
        """All property names mentioned by this constraint."""
        names = set(self.when)
        for entry in self.forbid or []:
            names.add(split_forbid_entry(entry)[0])
        names.update(self.require or {})
        return names


def split_forbid_entry(entry: str) -> tuple[str, str | None]:
    """Split a forbid entry into (property, value).

    ``"loading"`` forbids the prop outright and yields ``("loading", None)``;
    ``"focusVariant=none"`` yields ``("focusVariant", "none")``.
    """
    prop, sep, value = entry.partition("=")
    return prop.strip(), (value.strip() if sep else None)
