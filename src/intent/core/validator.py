"""
Semantic validation for Intent design systems and component usages.

Validates schemas for internal consistency (token naming, property
definitions, dangling references) and concrete usages for required props,
unknown props, value types and ranges, and constraint violations.

All checks accumulate: a pass collects every issue instead of stopping at the
first, and ``valid`` is computed from issue severities.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable

from .constraints import check_constraint_references, validate_constraints
from .ir import (
    BooleanProperty,
    ComponentSchema,
    ComponentUsage,
    DesignSystemConfig,
    DynamicValue,
    EnumProperty,
    IssueCode,
    LiteralValue,
    NumberProperty,
    PropertyDefinition,
    PropValue,
    Severity,
    SourceLocation,
    StringProperty,
    UsageBatch,
    ValidationIssue,
    ValidationResult,
    stringify,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Validation Constants
# =============================================================================

TOKEN_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9.-]*$")
PROPERTY_NAME_RE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
ENUM_VALUE_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")

# Props handled by the host framework rather than the schema
PASSTHROUGH_PROPS = frozenset({"children", "key", "ref"})
PASSTHROUGH_PREFIXES = ("on", "data-")


# =============================================================================
# Schema Validation
# =============================================================================


def _validate_tokens(config: DesignSystemConfig) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for category, tokens in config.tokens.items():
        for name, value in (tokens or {}).items():
            path = f"tokens.{category}.{name}"
            if not TOKEN_NAME_RE.match(name):
                issues.append(
                    ValidationIssue(
                        severity=Severity.WARNING,
                        code=IssueCode.INVALID_TOKEN_NAME,
                        message=f'Token name "{name}" in category "{category}" should be kebab-case',
                        path=path,
                    )
                )
            if value is None or (isinstance(value, str) and not value.strip()):
                issues.append(
                    ValidationIssue(
                        severity=Severity.ERROR,
                        code=IssueCode.EMPTY_TOKEN_VALUE,
                        message=f'Token "{category}.{name}" has empty value',
                        path=path,
                    )
                )
    return issues


def validate_property_definition(
    name: str, definition: PropertyDefinition, path: str
) -> list[ValidationIssue]:
    """
    Validate one property definition.

    Checks:
    - Property name is camelCase
    - Enum has at least one value, values are lowercase kebab-case
    - Default lies in the property's domain
    - Number range is not inverted
    """
    issues: list[ValidationIssue] = []

    if not PROPERTY_NAME_RE.match(name):
        issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                code=IssueCode.INVALID_PROPERTY_NAME,
                message=f'Property name "{name}" should be camelCase',
                path=path,
            )
        )

    if isinstance(definition, EnumProperty):
        if not definition.values:
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.EMPTY_ENUM,
                    message=f'Enum property "{name}" has no values',
                    path=path,
                )
            )
        for value in definition.values:
            if not ENUM_VALUE_RE.match(value):
                issues.append(
                    ValidationIssue(
                        severity=Severity.WARNING,
                        code=IssueCode.INVALID_ENUM_VALUE,
                        message=f'Enum value "{value}" should be lowercase and kebab-case',
                        path=f"{path}.values",
                    )
                )

    if isinstance(definition, NumberProperty):
        if (
            definition.min is not None
            and definition.max is not None
            and definition.min > definition.max
        ):
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.INVALID_RANGE,
                    message=f"Min ({definition.min}) cannot be greater than max ({definition.max})",
                    path=path,
                )
            )

    if not definition.default_satisfies_domain():
        issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.INVALID_DEFAULT,
                message=(
                    f'Default value "{stringify(definition.default)}" is outside the domain '
                    f'of {definition.type} property "{name}"'
                ),
                path=f"{path}.default",
            )
        )

    return issues


def validate_component_schema(key: str, schema: ComponentSchema) -> list[ValidationIssue]:
    """Validate one component schema registered under ``key``."""
    issues: list[ValidationIssue] = []
    path = f"components.{key}"

    if schema.name != key:
        issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                code=IssueCode.COMPONENT_NAME_MISMATCH,
                message=f'Component key "{key}" does not match schema name "{schema.name}"',
                path=path,
            )
        )

    for prop_name, definition in schema.properties.items():
        issues.extend(
            validate_property_definition(prop_name, definition, f"{path}.properties.{prop_name}")
        )

    issues.extend(check_constraint_references(schema, path))
    return issues


def validate_schema(config: DesignSystemConfig, strict: bool | None = None) -> ValidationResult:
    """
    Validate a design system for internal consistency.

    Args:
        config: Design system
        strict: Treat warnings as failures (defaults to settings.strict_mode)

    Returns:
        ValidationResult with every issue found
    """
    if strict is None:
        strict = config.settings.strict_mode

    issues = _validate_tokens(config)
    for key, schema in config.components.items():
        issues.extend(validate_component_schema(key, schema))

    logger.debug("Schema validation for %s: %d issues", config.name, len(issues))
    return ValidationResult.from_issues(issues, strict=strict)


# =============================================================================
# Usage Validation
# =============================================================================


def _is_passthrough(prop: str) -> bool:
    return prop in PASSTHROUGH_PROPS or prop.startswith(PASSTHROUGH_PREFIXES)


def _default_suggestion(definition: PropertyDefinition) -> str:
    if isinstance(definition, EnumProperty):
        if definition.default is not None:
            return definition.default
        return definition.values[0] if definition.values else "..."
    if isinstance(definition, BooleanProperty):
        return stringify(definition.default if definition.default is not None else True)
    if isinstance(definition, NumberProperty) and definition.default is not None:
        return stringify(definition.default)
    return "..."


def _as_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            number = float(value.strip()) if value.strip() else math.nan
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def validate_property_value(
    name: str, definition: PropertyDefinition, value: PropValue, path: str
) -> list[ValidationIssue]:
    """Type and range checks for a single prop value."""
    if isinstance(value, DynamicValue):
        return [
            ValidationIssue(
                severity=Severity.INFO,
                code=IssueCode.DYNAMIC_VALUE,
                message=f'Property "{name}" has dynamic value that cannot be statically validated',
                path=path,
            )
        ]

    if isinstance(definition, StringProperty):
        return []

    if not isinstance(value, LiteralValue):
        return [
            ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.TYPE_MISMATCH,
                message=f'Property "{name}" must be a {definition.type}, got object',
                path=path,
            )
        ]

    raw = value.value
    issues: list[ValidationIssue] = []

    if isinstance(definition, EnumProperty):
        text = stringify(raw)
        if text not in definition.values:
            options = ", ".join(definition.values)
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.INVALID_ENUM_VALUE,
                    message=f'Invalid value "{text}" for property "{name}". Valid values: {options}',
                    path=path,
                    suggestion=f"Use one of: {options}",
                )
            )

    elif isinstance(definition, BooleanProperty):
        if not isinstance(raw, bool):
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.TYPE_MISMATCH,
                    message=f'Property "{name}" must be a boolean, got {type(raw).__name__}',
                    path=path,
                )
            )

    elif isinstance(definition, NumberProperty):
        number = _as_number(raw)
        if number is None:
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.TYPE_MISMATCH,
                    message=f'Property "{name}" must be a number, got {type(raw).__name__}',
                    path=path,
                )
            )
        else:
            if definition.min is not None and number < definition.min:
                issues.append(
                    ValidationIssue(
                        severity=Severity.ERROR,
                        code=IssueCode.VALUE_OUT_OF_RANGE,
                        message=f'Property "{name}" must be >= {definition.min}, got {stringify(number)}',
                        path=path,
                    )
                )
            if definition.max is not None and number > definition.max:
                issues.append(
                    ValidationIssue(
                        severity=Severity.ERROR,
                        code=IssueCode.VALUE_OUT_OF_RANGE,
                        message=f'Property "{name}" must be <= {definition.max}, got {stringify(number)}',
                        path=path,
                    )
                )

    return issues


def collect_usage_issues(schema: ComponentSchema, usage: ComponentUsage) -> list[ValidationIssue]:
    """Every issue for one usage, in check order."""
    issues: list[ValidationIssue] = []
    props = usage.props

    # 1. Required props
    for prop_name, definition in schema.properties.items():
        if definition.required and prop_name not in props:
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.MISSING_REQUIRED_PROP,
                    message=f'Required property "{prop_name}" is missing',
                    path=usage.path(),
                    suggestion=f'Add {prop_name}="{_default_suggestion(definition)}"',
                )
            )

    # 2. Unknown props
    for prop_name in props:
        if _is_passthrough(prop_name) or prop_name in schema.properties:
            continue
        issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.UNKNOWN_PROPERTY,
                message=f'Unknown property "{prop_name}" on component "{schema.name}"',
                path=usage.path(),
                suggestion=f"Valid properties: {', '.join(schema.properties)}",
            )
        )

    # 3. Values
    for prop_name, value in props.items():
        definition = schema.properties.get(prop_name)
        if definition is None:
            continue
        issues.extend(validate_property_value(prop_name, definition, value, usage.path(prop_name)))

    # 4. Constraints
    issues.extend(validate_constraints(schema, usage))
    return issues


def validate_usage(
    schema: ComponentSchema, usage: ComponentUsage, strict: bool = False
) -> ValidationResult:
    """
    Validate one component usage against its schema.

    Returns:
        ValidationResult; ``valid`` is false iff an error is present (or,
        under strict, a warning)
    """
    return ValidationResult.from_issues(collect_usage_issues(schema, usage), strict=strict)


def validate_all_usages(
    config: DesignSystemConfig,
    batches: Iterable[UsageBatch],
    strict: bool | None = None,
) -> ValidationResult:
    """
    Validate every usage in every batch.

    Usages of components the design system does not declare are reported as
    UNKNOWN_COMPONENT and not checked further.
    """
    if strict is None:
        strict = config.settings.strict_mode

    issues: list[ValidationIssue] = []
    usage_count = 0
    for batch in batches:
        for usage in batch.usages:
            usage_count += 1
            if usage.location is None:
                usage = usage.model_copy(update={"location": SourceLocation(file=batch.file)})
            schema = config.get_component(usage.component)
            if schema is None:
                issues.append(
                    ValidationIssue(
                        severity=Severity.ERROR,
                        code=IssueCode.UNKNOWN_COMPONENT,
                        message=f'Unknown component "{usage.component}"',
                        path=batch.file,
                    )
                )
                continue
            issues.extend(collect_usage_issues(schema, usage))

    logger.debug("Validated %d usages: %d issues", usage_count, len(issues))
    return ValidationResult.from_issues(issues, strict=strict)
