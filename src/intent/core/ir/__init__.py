"""
Intent intermediate representation (IR) types.

All schema, usage, validation, theme, and manifest types are re-exported
from this package.
"""

# Component Schemas
from .component import ComponentSchema, check_component_preconditions

# Constraints
from .constraints import (
    ConditionValue,
    Constraint,
    ConstraintOperator,
    OperatorCondition,
    split_forbid_entry,
)

# AI Manifest
from .manifest import AIManifest, ComponentSchemaForAI, ManifestExamples, PropertyForAI

# Visual Mappings
from .mappings import (
    ConditionalMapping,
    ConditionalMappings,
    FlatMapping,
    StyleMap,
    StyleValue,
    VisualMapping,
    coerce_mapping,
    parse_mapping_key,
)

# Properties
from .properties import (
    BooleanProperty,
    EnumProperty,
    NumberProperty,
    PropertyDefinition,
    StringProperty,
)

# Design System
from .system import (
    DEFAULT_CSS_PREFIX,
    DEFAULT_VERSION,
    DesignSystemConfig,
    SystemSettings,
    TokenRegistry,
    TokenValue,
    normalize_token_registry,
)

# Themes
from .theme import ResolvedTheme, Theme, ThemeSettings

# Usages
from .usage import ComponentUsage, SourceLocation, UsageBatch

# Validation
from .validation import IssueCode, Severity, ValidationIssue, ValidationResult
from .values import (
    DynamicValue,
    LiteralValue,
    NestedValue,
    PropValue,
    ScalarValue,
    coerce_prop_value,
    stringify,
)

__all__ = [
    # Properties
    "BooleanProperty",
    "EnumProperty",
    "NumberProperty",
    "PropertyDefinition",
    "StringProperty",
    # Constraints
    "ConditionValue",
    "Constraint",
    "ConstraintOperator",
    "OperatorCondition",
    "split_forbid_entry",
    # Mappings
    "ConditionalMapping",
    "ConditionalMappings",
    "FlatMapping",
    "StyleMap",
    "StyleValue",
    "VisualMapping",
    "coerce_mapping",
    "parse_mapping_key",
    # Components
    "ComponentSchema",
    "check_component_preconditions",
    # Design System
    "DEFAULT_CSS_PREFIX",
    "DEFAULT_VERSION",
    "DesignSystemConfig",
    "SystemSettings",
    "TokenRegistry",
    "TokenValue",
    "normalize_token_registry",
    # Values and Usages
    "ComponentUsage",
    "DynamicValue",
    "LiteralValue",
    "NestedValue",
    "PropValue",
    "ScalarValue",
    "SourceLocation",
    "UsageBatch",
    "coerce_prop_value",
    "stringify",
    # Validation
    "IssueCode",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    # Themes
    "ResolvedTheme",
    "Theme",
    "ThemeSettings",
    # Manifest
    "AIManifest",
    "ComponentSchemaForAI",
    "ManifestExamples",
    "PropertyForAI",
]
