"""
Unit tests for AI manifest and prompt generation.
"""

from intent.core.define import define_component, define_system
from intent.core.manifest import (
    describe_component,
    generate_ai_manifest,
    generate_ai_prompt,
    generate_examples,
    generate_semantic_descriptions,
)


class TestDescriptions:
    """Tests for component and semantic descriptions."""

    def test_known_component(self, button_schema):
        """Test known components use the built-in description."""
        assert describe_component("Button", button_schema).startswith("An interactive element")

    def test_schema_description_wins(self):
        """Test an explicit schema description is preferred."""
        schema = define_component({"name": "Button", "description": "Custom", "properties": {}})
        assert describe_component("Button", schema) == "Custom"

    def test_unknown_component_fallback(self):
        """Test unknown components get a generic description."""
        schema = define_component({"name": "Tile", "properties": {}})
        assert describe_component("Tile", schema) == "Tile component"

    def test_semantic_keys(self, design_system):
        """Test every token, component, prop and enum value has an entry."""
        descriptions = generate_semantic_descriptions(design_system)
        assert descriptions["token:color:brand-primary"] == "color token with value #3B82F6"
        assert descriptions["component:Button"].startswith("An interactive element")
        assert descriptions["prop:Button:size"] == "Physical dimensions of the button"
        assert descriptions["prop:Button:shape"] == "shape property"
        assert descriptions["value:Button:importance:ghost"] == "Low emphasis, blends with background"
        assert descriptions["value:Button:shape:pill"] == "pill option"
        assert "value:Button:disabled:true" not in descriptions


class TestExamples:
    """Tests for generated examples."""

    def test_valid_examples(self, button_schema):
        """Test the first combinations plus a larger variant."""
        examples = generate_examples("Button", button_schema)
        assert examples.valid == [
            '<Button importance="primary" size="sm" shape="rounded">Content</Button>',
            '<Button importance="primary" size="sm" shape="pill">Content</Button>',
            '<Button importance="primary" size="md" shape="rounded">Content</Button>',
            '<Button importance="primary" size="lg" shape="rounded">Larger variant</Button>',
        ]

    def test_invalid_examples(self, button_schema):
        """Test forbid constraints and the utility-class anti-pattern."""
        examples = generate_examples("Button", button_schema)
        assert examples.invalid == [
            '<Button importance="ghost" shape="pill">Invalid</Button>'
            "  <!-- Error: Ghost buttons cannot be pills -->",
            '<Button className="flex items-center">Bad</Button>'
            "  <!-- Error: Use Intent props, not Tailwind utilities -->",
        ]

    def test_bare_forbid_uses_first_value(self):
        """Test a bare forbidden enum prop is shown with its first value."""
        schema = define_component(
            {
                "name": "Stack",
                "properties": {
                    "direction": {"type": "enum", "values": ["row", "column"]},
                    "wrap": {"type": "enum", "values": ["nowrap", "wrap"]},
                },
                "constraints": [{"when": {"direction": "column"}, "forbid": ["wrap"]}],
            }
        )
        invalid = generate_examples("Stack", schema).invalid
        assert invalid[0] == (
            '<Stack direction="column" wrap="nowrap">Invalid</Stack>'
            "  <!-- Error: Constraint violation -->"
        )

    def test_no_enum_props(self):
        """Test a component without enums still gets one valid example."""
        schema = define_component({"name": "Divider", "properties": {}})
        assert generate_examples("Divider", schema).valid == ["<Divider>Content</Divider>"]

    def test_larger_variant_respects_constraints(self):
        """Test the larger variant is dropped when a constraint forbids it."""
        schema = define_component(
            {
                "name": "Button",
                "properties": {
                    "importance": {"type": "enum", "values": ["ghost", "primary"]},
                    "size": {"type": "enum", "values": ["sm", "lg"]},
                },
                "constraints": [{"when": {"importance": "ghost"}, "forbid": ["size=lg"]}],
            }
        )
        valid = generate_examples("Button", schema).valid
        assert valid == [
            '<Button importance="ghost" size="sm">Content</Button>',
            '<Button importance="primary" size="sm">Content</Button>',
            '<Button importance="primary" size="lg">Content</Button>',
        ]
        assert not any("Larger variant" in example for example in valid)

    def test_larger_variant_requires_lg_value(self):
        """Test the larger variant is dropped when lg is not a size value."""
        schema = define_component(
            {
                "name": "Spacer",
                "properties": {"size": {"type": "enum", "values": ["xs", "sm"]}},
            }
        )
        assert generate_examples("Spacer", schema).valid == [
            '<Spacer size="xs">Content</Spacer>',
            '<Spacer size="sm">Content</Spacer>',
        ]


class TestManifest:
    """Tests for generate_ai_manifest."""

    def test_structure(self, design_system):
        """Test the manifest mirrors the design system."""
        manifest = generate_ai_manifest(design_system)
        assert manifest.version == "1.0.0"
        assert manifest.design_system == "acme"
        assert manifest.tokens == design_system.tokens

        button = manifest.get_component("Button")
        assert [p.name for p in button.properties] == [
            "importance",
            "size",
            "shape",
            "disabled",
            "label",
            "count",
        ]
        assert button.constraints == ['When importance="ghost": cannot use shape=pill']

    def test_property_entries(self, design_system):
        """Test enum values, defaults and descriptions are carried over."""
        button = generate_ai_manifest(design_system).get_component("Button")
        size = next(p for p in button.properties if p.name == "size")
        assert size.values == ["sm", "md", "lg"]
        assert size.default == "md"
        assert size.value_descriptions["lg"] == "Large size for emphasis or touch targets"
        disabled = next(p for p in button.properties if p.name == "disabled")
        assert disabled.values is None

    def test_default_version(self):
        """Test a system without a version reports the default."""
        assert generate_ai_manifest(define_system({"name": "bare"})).version == "0.1.0"

    def test_serialized_keys(self, design_system):
        """Test the JSON form uses camelCase keys and omits empty fields."""
        data = generate_ai_manifest(design_system).model_dump(by_alias=True, exclude_none=True)
        assert data["designSystem"] == "acme"
        assert "semanticDescriptions" in data
        importance = data["components"][0]["properties"][0]
        assert "valueDescriptions" in importance
        assert "description" in importance
        shape = data["components"][0]["properties"][2]
        assert "valueDescriptions" not in shape


class TestPrompt:
    """Tests for generate_ai_prompt."""

    def test_overview(self, design_system):
        """Test the overview lists components and token names."""
        prompt = generate_ai_prompt(generate_ai_manifest(design_system))
        assert prompt.startswith("# Intent Framework Rules")
        assert "## Critical Constraints" in prompt
        assert "- **Button**: An interactive element" in prompt
        assert "### color\n- brand-primary" in prompt
        assert prompt.rstrip().endswith("4. Run `intent validate` before finishing")

    def test_component_section(self, design_system):
        """Test the component prompt documents props, constraints and examples."""
        prompt = generate_ai_prompt(generate_ai_manifest(design_system), component="Button")
        assert "## Component: Button" in prompt
        assert "- **importance** (required) = primary | secondary | ghost" in prompt
        assert "- **size** [default: md] = sm | md | lg" in prompt
        assert '- When importance="ghost": cannot use shape=pill' in prompt
        assert "**Invalid:**" in prompt
        assert "## Available Components" not in prompt

    def test_unknown_component(self, design_system):
        """Test an unknown component yields only the shared rules."""
        prompt = generate_ai_prompt(generate_ai_manifest(design_system), component="Card")
        assert "## Component:" not in prompt
        assert "## When Generating UI" in prompt
