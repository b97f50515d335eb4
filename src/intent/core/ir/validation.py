"""
Validation result types.

Every check is accumulative: a pass collects all issues and ``valid`` is
computed from their severities rather than raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Severity(StrEnum):
    """Issue severity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCode(StrEnum):
    """Known issue codes."""

    # Schema structure (errors)
    UNKNOWN_CONSTRAINT_PROPERTY = "UNKNOWN_CONSTRAINT_PROPERTY"
    UNKNOWN_FORBIDDEN_PROPERTY = "UNKNOWN_FORBIDDEN_PROPERTY"
    UNKNOWN_REQUIRED_PROPERTY = "UNKNOWN_REQUIRED_PROPERTY"
    UNKNOWN_MAPPING_PROPERTY = "UNKNOWN_MAPPING_PROPERTY"
    EMPTY_ENUM = "EMPTY_ENUM"
    EMPTY_TOKEN_VALUE = "EMPTY_TOKEN_VALUE"
    INVALID_DEFAULT = "INVALID_DEFAULT"
    INVALID_RANGE = "INVALID_RANGE"

    # Naming (warnings)
    INVALID_TOKEN_NAME = "INVALID_TOKEN_NAME"
    INVALID_PROPERTY_NAME = "INVALID_PROPERTY_NAME"
    COMPONENT_NAME_MISMATCH = "COMPONENT_NAME_MISMATCH"

    # Usage
    MISSING_REQUIRED_PROP = "MISSING_REQUIRED_PROP"
    UNKNOWN_PROPERTY = "UNKNOWN_PROPERTY"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    UNKNOWN_COMPONENT = "UNKNOWN_COMPONENT"

    # Constraints
    CONSTRAINT_FORBIDDEN_PROP = "CONSTRAINT_FORBIDDEN_PROP"
    CONSTRAINT_MISSING_REQUIRED = "CONSTRAINT_MISSING_REQUIRED"
    CONSTRAINT_INVALID_VALUE = "CONSTRAINT_INVALID_VALUE"

    # Informational
    DYNAMIC_VALUE = "DYNAMIC_VALUE"

    # Plugins
    VALIDATOR_ERROR = "VALIDATOR_ERROR"


class ValidationIssue(BaseModel):
    """A single validation finding."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    code: str = Field(description="Issue code (see IssueCode)")
    message: str
    path: str = Field(description="Schema path or file:line:column")
    suggestion: str | None = None


class ValidationResult(BaseModel):
    """Outcome of a validation pass."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: Iterable[ValidationIssue], strict: bool = False) -> ValidationResult:
        """Build a result; strict mode also treats warnings as invalidating."""
        collected = list(issues)
        failing = {Severity.ERROR, Severity.WARNING} if strict else {Severity.ERROR}
        return cls(
            valid=not any(issue.severity in failing for issue in collected),
            issues=collected,
        )

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]
