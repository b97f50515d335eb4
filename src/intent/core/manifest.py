"""
AI manifest generation.

Builds a machine-readable description of a design system (components,
props, allowed values, constraints, examples) plus a markdown rules prompt
for code-generating assistants.
"""

from __future__ import annotations

import logging

from .constraints import check_constraints, describe_constraint, generate_valid_combinations
from .ir import (
    DEFAULT_VERSION,
    AIManifest,
    ComponentSchema,
    ComponentSchemaForAI,
    DesignSystemConfig,
    EnumProperty,
    LiteralValue,
    ManifestExamples,
    OperatorCondition,
    PropertyForAI,
    split_forbid_entry,
    stringify,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Description Tables
# =============================================================================

COMPONENT_DESCRIPTIONS: dict[str, str] = {
    "Button": "An interactive element that triggers an action when clicked or pressed.",
    "Stack": (
        "A layout component that distributes children along a vertical or horizontal "
        "axis with consistent spacing."
    ),
    "Surface": "A container that provides visual elevation and background treatment.",
    "Text": "A typography component for displaying text with consistent styling.",
    "Input": "A form control for accepting user text input.",
    "Card": "A container for grouping related content and actions.",
    "Dialog": "A modal window that interrupts the user flow to display important content.",
    "Avatar": "A visual representation of a user or entity, typically as an image or initials.",
    "Badge": "A small label for displaying status, count, or category.",
    "Divider": "A visual separator between content sections.",
    "Icon": "A symbolic visual element representing an action, object, or concept.",
    "List": "A vertical grouping of related items.",
    "Grid": "A two-dimensional layout system for arranging content in rows and columns.",
}

PROPERTY_DESCRIPTIONS: dict[str, dict[str, str]] = {
    "Button": {
        "importance": "Visual prominence level indicating the action significance",
        "size": "Physical dimensions of the button",
        "state": "Interactive state affecting appearance and behavior",
    },
    "Stack": {
        "direction": "Axis along which children are arranged",
        "gap": "Space between child elements",
        "align": "Cross-axis alignment of children",
        "justify": "Main-axis distribution of children",
    },
    "Surface": {
        "elevation": "Visual depth indicating hierarchy level",
        "padding": "Internal spacing from content to edges",
        "background": "Background color treatment",
    },
    "Text": {
        "size": "Typography scale level",
        "weight": "Font thickness",
        "color": "Text color variant",
        "align": "Horizontal text alignment",
    },
}

VALUE_DESCRIPTIONS: dict[str, dict[str, dict[str, str]]] = {
    "Button": {
        "importance": {
            "primary": "The main call-to-action, highest prominence",
            "secondary": "Alternative action, medium prominence",
            "ghost": "Low emphasis, blends with background",
            "danger": "Destructive action requiring caution",
        },
        "size": {
            "sm": "Compact size for dense UIs",
            "md": "Standard size for most use cases",
            "lg": "Large size for emphasis or touch targets",
        },
    },
    "Stack": {
        "direction": {
            "row": "Horizontal layout, left to right",
            "column": "Vertical layout, top to bottom",
        },
        "gap": {
            "tight": "Minimal spacing, 4px",
            "normal": "Standard spacing, 8px",
            "relaxed": "Comfortable spacing, 16px",
            "loose": "Generous spacing, 32px",
        },
        "align": {
            "start": "Align to start of cross axis",
            "center": "Center along cross axis",
            "end": "Align to end of cross axis",
            "stretch": "Fill available cross-axis space",
        },
    },
}

UTILITY_CLASS_ANTI_PATTERN = (
    '<{name} className="flex items-center">Bad</{name}>'
    "  <!-- Error: Use Intent props, not Tailwind utilities -->"
)


def describe_component(name: str, schema: ComponentSchema) -> str:
    return schema.description or COMPONENT_DESCRIPTIONS.get(name) or f"{name} component"


# =============================================================================
# Examples
# =============================================================================


def _jsx(name: str, props: dict[str, str], content: str) -> str:
    attrs = " ".join(f'{key}="{value}"' for key, value in props.items())
    return f"<{name} {attrs}>{content}</{name}>" if attrs else f"<{name}>{content}</{name}>"


def _is_valid_variant(schema: ComponentSchema, props: dict[str, str]) -> bool:
    for key, value in props.items():
        definition = schema.properties.get(key)
        if isinstance(definition, EnumProperty) and value not in definition.values:
            return False
    literal_props = {key: LiteralValue(value=value) for key, value in props.items()}
    return not check_constraints(schema.constraints, literal_props, schema.name)


def generate_examples(name: str, schema: ComponentSchema) -> ManifestExamples:
    """
    Illustrative usages for a component.

    Valid examples are the first three valid enum combinations, plus a
    ``size="lg"`` variant of the first when the component has a size prop
    and that variant is itself valid.
    Invalid examples violate the first two forbid constraints, followed by
    a utility-class anti-pattern.
    """
    combinations = generate_valid_combinations(schema, limit=3)
    valid = [_jsx(name, combo, "Content") for combo in combinations]

    if "size" in schema.properties and combinations:
        larger = {**combinations[0], "size": "lg"}
        if _is_valid_variant(schema, larger):
            valid.append(_jsx(name, larger, "Larger variant"))

    invalid: list[str] = []
    for constraint in schema.constraints[:2]:
        if not constraint.forbid:
            continue
        props: dict[str, str] = {}
        for key, expected in constraint.when.items():
            if isinstance(expected, OperatorCondition) or expected == []:
                break
            props[key] = stringify(expected[0] if isinstance(expected, list) else expected)
        else:
            prop, value = split_forbid_entry(constraint.forbid[0])
            definition = schema.properties.get(prop)
            if value is None and isinstance(definition, EnumProperty) and definition.values:
                value = definition.values[0]
            if value is None:
                continue
            message = constraint.message or "Constraint violation"
            example = _jsx(name, {**props, prop: value}, "Invalid")
            invalid.append(f"{example}  <!-- Error: {message} -->")

    invalid.append(UTILITY_CLASS_ANTI_PATTERN.format(name=name))
    return ManifestExamples(valid=valid, invalid=invalid)


# =============================================================================
# Manifest
# =============================================================================


def _component_for_ai(name: str, schema: ComponentSchema) -> ComponentSchemaForAI:
    prop_descriptions = PROPERTY_DESCRIPTIONS.get(name, {})
    value_descriptions = VALUE_DESCRIPTIONS.get(name, {})

    properties = [
        PropertyForAI(
            name=prop_name,
            type=definition.type,
            values=definition.values if isinstance(definition, EnumProperty) else None,
            required=definition.required,
            default=definition.default,
            description=definition.description or prop_descriptions.get(prop_name),
            value_descriptions=value_descriptions.get(prop_name),
        )
        for prop_name, definition in schema.properties.items()
    ]

    return ComponentSchemaForAI(
        name=name,
        description=describe_component(name, schema),
        properties=properties,
        constraints=[describe_constraint(c) for c in schema.constraints],
        examples=generate_examples(name, schema),
    )


def generate_semantic_descriptions(config: DesignSystemConfig) -> dict[str, str]:
    """Flat lookup keyed ``token:cat:name``, ``component:X``, ``prop:X:p``, ``value:X:p:v``."""
    descriptions: dict[str, str] = {}

    for category, tokens in config.tokens.items():
        for name, value in (tokens or {}).items():
            descriptions[f"token:{category}:{name}"] = f"{category} token with value {value}"

    for name, schema in config.components.items():
        descriptions[f"component:{name}"] = describe_component(name, schema)
        for prop_name, definition in schema.properties.items():
            descriptions[f"prop:{name}:{prop_name}"] = (
                PROPERTY_DESCRIPTIONS.get(name, {}).get(prop_name) or f"{prop_name} property"
            )
            if isinstance(definition, EnumProperty):
                known = VALUE_DESCRIPTIONS.get(name, {}).get(prop_name, {})
                for value in definition.values:
                    descriptions[f"value:{name}:{prop_name}:{value}"] = (
                        known.get(value) or f"{value} option"
                    )

    return descriptions


def generate_ai_manifest(config: DesignSystemConfig) -> AIManifest:
    """
    Generate the AI manifest for a design system.

    Args:
        config: Design system

    Returns:
        AIManifest; serialize with ``model_dump(by_alias=True, exclude_none=True)``
    """
    manifest = AIManifest(
        version=config.version or DEFAULT_VERSION,
        design_system=config.name,
        tokens=config.tokens,
        components=[_component_for_ai(name, schema) for name, schema in config.components.items()],
        semantic_descriptions=generate_semantic_descriptions(config),
    )
    logger.debug("Generated AI manifest for %s (%d components)", config.name, len(manifest.components))
    return manifest


# =============================================================================
# Prompt
# =============================================================================


def _component_section(component: ComponentSchemaForAI) -> list[str]:
    lines = [f"## Component: {component.name}", "", component.description, ""]

    lines += ["### Properties", ""]
    for prop in component.properties:
        required = " (required)" if prop.required else ""
        default = f" [default: {stringify(prop.default)}]" if prop.default is not None else ""
        values = f" = {' | '.join(prop.values)}" if prop.values else ""
        lines.append(f"- **{prop.name}**{required}{default}{values}")
        if prop.description:
            lines.append(f"  - {prop.description}")
    lines.append("")

    if component.constraints:
        lines += ["### Constraints", ""]
        lines += [f"- {constraint}" for constraint in component.constraints]
        lines.append("")

    lines += ["### Examples", "", "**Valid:**"]
    for example in component.examples.valid:
        lines += ["```tsx", example, "```"]
    lines.append("")

    if component.examples.invalid:
        lines.append("**Invalid:**")
        for example in component.examples.invalid:
            lines += ["```tsx", example, "```"]
        lines.append("")

    return lines


def _overview_section(manifest: AIManifest) -> list[str]:
    lines = ["## Available Components", ""]
    lines += [f"- **{c.name}**: {c.description}" for c in manifest.components]
    lines.append("")

    lines += ["## Design Tokens", ""]
    for category, tokens in manifest.tokens.items():
        if not tokens:
            continue
        lines.append(f"### {category}")
        lines += [f"- {name}" for name in tokens]
        lines.append("")
    return lines


def generate_ai_prompt(manifest: AIManifest, component: str | None = None) -> str:
    """
    Render the manifest as markdown rules for a code-generating assistant.

    With ``component`` set (and present in the manifest) the prompt
    documents that component in detail; otherwise it gives a system
    overview of components and tokens.
    """
    lines = [
        "# Intent Framework Rules",
        "",
        "You are coding with Intent, a schema-first styling system.",
        "",
        "## Critical Constraints",
        "",
        "1. **NEVER use arbitrary values** (e.g., `pt-[7px]`). Use only schema tokens.",
        "2. **NEVER use Tailwind utility classes directly**. "
        "Use Intent components: `<Stack>`, `<Button>`, `<Surface>`",
        "3. **Check valid prop combinations** in the schema before using",
        "4. **Prefer semantic props** over visual descriptions: "
        '`importance="primary"` not `color="blue"`',
        "",
    ]

    if component is not None:
        entry = manifest.get_component(component)
        if entry is not None:
            lines += _component_section(entry)
    else:
        lines += _overview_section(manifest)

    lines += [
        "## When Generating UI",
        "",
        "1. Import components from 'intent-react'",
        "2. Check the schema for valid enum values",
        "3. If design calls for custom styling, ask to add token to schema first",
        "4. Run `intent validate` before finishing",
        "",
    ]
    return "\n".join(lines)
