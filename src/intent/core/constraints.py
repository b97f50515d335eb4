"""
Constraint engine.

Evaluates ``when`` / ``forbid`` / ``require`` rules for three purposes:

- usage validation: which constraints does a concrete prop map violate?
- schema validity: do constraints and mappings only mention declared props?
- enumeration: which enum-value combinations satisfy every constraint?

A constraint fires when every key in ``when`` matches the usage value
(scalar equality, list membership, or an operator). A fired forbid is
violated by any listed prop present in the usage (or, for a ``prop=value``
entry, by that prop having that value). A fired require is violated by a
listed prop that is missing or whose value is outside the allowed set.
"""

from __future__ import annotations

import itertools
import json
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from .ir import (
    ComponentSchema,
    ComponentUsage,
    ConditionalMappings,
    ConditionValue,
    Constraint,
    ConstraintOperator,
    DynamicValue,
    EnumProperty,
    IssueCode,
    LiteralValue,
    OperatorCondition,
    PropValue,
    Severity,
    ValidationIssue,
    parse_mapping_key,
    split_forbid_entry,
    stringify,
)

logger = logging.getLogger(__name__)

_MISSING = object()


# =============================================================================
# Condition Evaluation
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _strict_equal(actual: Any, expected: Any) -> bool:
    if isinstance(actual, bool) != isinstance(expected, bool):
        return False
    return actual == expected


def evaluate_operator(op: ConstraintOperator, actual: Any, expected: Any) -> bool:
    """Apply a comparison operator; ``actual`` may be the missing sentinel."""
    if op == ConstraintOperator.EQ:
        return actual is not _MISSING and _strict_equal(actual, expected)
    if op == ConstraintOperator.NEQ:
        return actual is _MISSING or not _strict_equal(actual, expected)
    if op in (ConstraintOperator.IN, ConstraintOperator.NIN):
        if not isinstance(expected, list):
            return False
        member = actual is not _MISSING and stringify(actual) in {stringify(v) for v in expected}
        return member if op == ConstraintOperator.IN else not member
    if not (_is_number(actual) and _is_number(expected)):
        return False
    if op == ConstraintOperator.GT:
        return actual > expected
    if op == ConstraintOperator.LT:
        return actual < expected
    if op == ConstraintOperator.GTE:
        return actual >= expected
    if op == ConstraintOperator.LTE:
        return actual <= expected
    return False


def _condition_matches(expected: ConditionValue, prop: PropValue | None) -> bool:
    # Dynamic values never fire a rule
    if isinstance(prop, DynamicValue):
        return False
    actual = prop.value if prop is not None else _MISSING

    if isinstance(expected, OperatorCondition):
        return evaluate_operator(expected.op, actual, expected.value)
    if actual is _MISSING:
        return False
    if isinstance(expected, list):
        return stringify(actual) in {stringify(v) for v in expected}
    return stringify(actual) == stringify(expected)


def evaluate_condition(when: Mapping[str, ConditionValue], props: Mapping[str, PropValue]) -> bool:
    """True if every key of ``when`` matches the corresponding prop value."""
    return all(_condition_matches(expected, props.get(key)) for key, expected in when.items())


# =============================================================================
# Formatting
# =============================================================================


def _format_condition_value(key: str, value: ConditionValue) -> str:
    if isinstance(value, OperatorCondition):
        return f"{key} {value.op} {json.dumps(value.value)}"
    if isinstance(value, list):
        return f"{key} is [{', '.join(stringify(v) for v in value)}]"
    return f'{key}="{stringify(value)}"'


def format_condition(when: Mapping[str, ConditionValue]) -> str:
    """``importance="ghost" and size is [sm, md]``"""
    return " and ".join(_format_condition_value(key, value) for key, value in when.items())


def describe_constraint(constraint: Constraint) -> str:
    """One-line human description, e.g. for the AI manifest."""
    when = ", ".join(
        f"{key} {value.op} {json.dumps(value.value)}"
        if isinstance(value, OperatorCondition)
        else f"{key}={json.dumps(value)}"
        for key, value in constraint.when.items()
    )
    if constraint.forbid:
        return f"When {when}: cannot use {', '.join(constraint.forbid)}"
    if constraint.require:
        requirements = ", ".join(
            f"{key} in [{', '.join(stringify(v) for v in allowed)}]"
            for key, allowed in constraint.require.items()
        )
        return f"When {when}: requires {requirements}"
    return f"When {when}: constraint applies"


# =============================================================================
# Usage Validation
# =============================================================================


def _forbid_issues(
    constraint: Constraint, props: Mapping[str, PropValue], path: str
) -> Iterator[ValidationIssue]:
    condition = format_condition(constraint.when)
    for entry in constraint.forbid or []:
        prop, forbidden_value = split_forbid_entry(entry)
        actual = props.get(prop)
        if actual is None:
            continue

        if forbidden_value is None:
            yield ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.CONSTRAINT_FORBIDDEN_PROP,
                message=constraint.message
                or f'Property "{prop}" is not allowed when {condition}',
                path=path,
                suggestion=f'Remove "{prop}" or change {condition}',
            )
        elif isinstance(actual, LiteralValue) and stringify(actual.value) == forbidden_value:
            yield ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.CONSTRAINT_FORBIDDEN_PROP,
                message=constraint.message
                or f'Property "{prop}" cannot be "{forbidden_value}" when {condition}',
                path=path,
                suggestion=f'Change "{prop}" or change {condition}',
            )


def _require_issues(
    constraint: Constraint, props: Mapping[str, PropValue], path: str
) -> Iterator[ValidationIssue]:
    condition = format_condition(constraint.when)
    suggested = constraint.suggest or {}
    for prop, allowed in (constraint.require or {}).items():
        allowed_strings = [stringify(v) for v in allowed]
        hint = suggested.get(prop) or (allowed_strings[0] if allowed_strings else "")
        actual = props.get(prop)

        if actual is None:
            yield ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.CONSTRAINT_MISSING_REQUIRED,
                message=constraint.message or f'Property "{prop}" is required when {condition}',
                path=path,
                suggestion=f'Add {prop}="{hint}"',
            )
        elif isinstance(actual, DynamicValue):
            continue
        elif not isinstance(actual, LiteralValue) or stringify(actual.value) not in allowed_strings:
            shown = stringify(actual.value) if isinstance(actual, LiteralValue) else "{...}"
            yield ValidationIssue(
                severity=Severity.ERROR,
                code=IssueCode.CONSTRAINT_INVALID_VALUE,
                message=constraint.message
                or (
                    f'Property "{prop}" must be one of [{", ".join(allowed_strings)}] '
                    f'when {condition}, got "{shown}"'
                ),
                path=path,
                suggestion=f'Change to {prop}="{hint}"',
            )


def check_constraints(
    constraints: list[Constraint], props: Mapping[str, PropValue], path: str
) -> list[ValidationIssue]:
    """Issues for every fired and violated constraint."""
    issues: list[ValidationIssue] = []
    for constraint in constraints:
        if not evaluate_condition(constraint.when, props):
            continue
        issues.extend(_forbid_issues(constraint, props, path))
        issues.extend(_require_issues(constraint, props, path))
    return issues


def validate_constraints(schema: ComponentSchema, usage: ComponentUsage) -> list[ValidationIssue]:
    """
    Validate a usage against the schema's constraints.

    Returns:
        One issue per violated forbid entry or require entry of each fired
        constraint, carrying the constraint's message when it has one.
    """
    return check_constraints(schema.constraints, usage.props, usage.path())


# =============================================================================
# Schema Validity
# =============================================================================


def check_constraint_references(schema: ComponentSchema, path_prefix: str) -> list[ValidationIssue]:
    """
    Check that constraints and mappings only reference declared properties.

    Args:
        schema: Component schema
        path_prefix: Schema path of the component, e.g. ``components.Button``

    Returns:
        UNKNOWN_*_PROPERTY errors, one per dangling reference
    """
    issues: list[ValidationIssue] = []
    declared = schema.properties

    def _error(code: IssueCode, message: str, path: str) -> None:
        issues.append(
            ValidationIssue(severity=Severity.ERROR, code=code, message=message, path=path)
        )

    for index, constraint in enumerate(schema.constraints):
        path = f"{path_prefix}.constraints.{index}"
        for prop in constraint.when:
            if prop not in declared:
                _error(
                    IssueCode.UNKNOWN_CONSTRAINT_PROPERTY,
                    f'Constraint references unknown property "{prop}"',
                    path,
                )
        for entry in constraint.forbid or []:
            prop, _ = split_forbid_entry(entry)
            if prop not in declared:
                _error(
                    IssueCode.UNKNOWN_FORBIDDEN_PROPERTY,
                    f'Constraint forbids unknown property "{prop}"',
                    path,
                )
        for prop in constraint.require or {}:
            if prop not in declared:
                _error(
                    IssueCode.UNKNOWN_REQUIRED_PROPERTY,
                    f'Constraint requires unknown property "{prop}"',
                    path,
                )

    for key, mapping in schema.mappings.items():
        path = f"{path_prefix}.mappings.{key}"
        referenced = [prop for prop, _ in parse_mapping_key(key)]
        if isinstance(mapping, ConditionalMappings):
            for entry in mapping.entries:
                referenced.extend(entry.condition)
        for prop in dict.fromkeys(referenced):
            if prop not in declared:
                _error(
                    IssueCode.UNKNOWN_MAPPING_PROPERTY,
                    f'Mapping references unknown property "{prop}"',
                    path,
                )

    return issues


# =============================================================================
# Valid Combinations
# =============================================================================


def iter_valid_combinations(schema: ComponentSchema) -> Iterator[dict[str, str]]:
    """Lazily yield enum-value combinations that violate no constraint.

    Enum properties are combined in declaration order; every combination
    assigns a value to every enum property.
    """
    enum_props = [
        (name, definition.values)
        for name, definition in schema.properties.items()
        if isinstance(definition, EnumProperty)
    ]
    names = [name for name, _ in enum_props]

    for values in itertools.product(*(values for _, values in enum_props)):
        combo = dict(zip(names, values, strict=True))
        props = {name: LiteralValue(value=value) for name, value in combo.items()}
        if not check_constraints(schema.constraints, props, schema.name):
            yield combo


def generate_valid_combinations(
    schema: ComponentSchema, limit: int | None = None
) -> list[dict[str, str]]:
    """All (or the first ``limit``) valid enum-value combinations."""
    combos = iter_valid_combinations(schema)
    if limit is not None:
        combos = itertools.islice(combos, limit)
    result = list(combos)
    logger.debug("%s: %d valid combinations", schema.name, len(result))
    return result


def suggest_valid_alternatives(
    schema: ComponentSchema, invalid_props: Mapping[str, Any], count: int = 3
) -> list[dict[str, str]]:
    """Valid combinations closest to ``invalid_props`` (most shared values first)."""
    wanted = {key: stringify(value) for key, value in invalid_props.items()}
    scored = [
        (sum(1 for key, value in wanted.items() if combo.get(key) == value), combo)
        for combo in iter_valid_combinations(schema)
    ]
    scored.sort(key=lambda item: item[0], reverse=True)
    return [combo for _, combo in scored[:count]]
