"""
Unit tests for theme registration, inheritance, and application.
"""

import pytest

from intent.core.css_generator import compile_system
from intent.core.errors import CircularThemeError, SchemaDefinitionError, ThemeError, ThemeNotFoundError
from intent.core.ir import ConditionalMappings, FlatMapping
from intent.themes import (
    BUILTIN_THEMES,
    DEFAULT_THEME,
    ThemeRegistry,
    apply_component_override,
    apply_theme,
    create_theme,
    deep_merge,
    get_default_registry,
    get_theme_preset,
    reset_default_registry,
)


@pytest.fixture
def registry():
    """A registry with a small inheritance chain: base <- brand <- campaign."""
    return ThemeRegistry(
        [
            create_theme(
                "base",
                tokens={"color": {"primary": "#000000", "surface": "#FFFFFF"}},
                darkTokens={"color": {"surface": "#111111"}},
            ),
            create_theme(
                "brand",
                extends="base",
                tokens={"color": {"primary": "#FF6B6B"}},
                settings={"cssPrefix": "brand"},
            ),
            create_theme("campaign", extends="brand", tokens={"space": {"4": "1.25rem"}}),
        ]
    )


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_merge(self):
        """Test nested dicts merge key by key."""
        merged = deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}, "b": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 4}

    def test_none_values_skipped(self):
        """Test None in the override never erases a base value."""
        assert deep_merge({"a": 1}, {"a": None}) == {"a": 1}

    def test_inputs_unchanged(self):
        """Test neither argument is mutated."""
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestThemeResolution:
    """Tests for ThemeRegistry.resolve."""

    def test_child_overrides_parent(self, registry):
        """Test a child's tokens win over its parent's."""
        resolved = registry.resolve("brand")
        assert resolved.tokens["color"] == {"primary": "#FF6B6B", "surface": "#FFFFFF"}
        assert resolved.dark_tokens == {"color": {"surface": "#111111"}}

    def test_grandchild_inherits_prefix(self, registry):
        """Test the CSS prefix is inherited through the chain."""
        resolved = registry.resolve("campaign")
        assert resolved.css_prefix == "brand"
        assert resolved.tokens["space"] == {"4": "1.25rem"}
        assert resolved.tokens["color"]["primary"] == "#FF6B6B"

    def test_root_theme_default_prefix(self, registry):
        """Test a theme with no prefix anywhere gets the default."""
        assert registry.resolve("base").css_prefix == "intent"

    def test_multiple_parents_later_wins(self, registry):
        """Test later parents override earlier ones."""
        registry.register(create_theme("dark-accent", tokens={"color": {"primary": "#222222"}}))
        registry.register(create_theme("mixed", extends=["brand", "dark-accent"]))
        resolved = registry.resolve("mixed")
        assert resolved.tokens["color"]["primary"] == "#222222"
        assert resolved.tokens["color"]["surface"] == "#FFFFFF"

    def test_circular_inheritance(self):
        """Test a cycle is reported with its full chain."""
        registry = ThemeRegistry(
            [create_theme("a", extends="b"), create_theme("b", extends="a")]
        )
        with pytest.raises(CircularThemeError, match="a -> b -> a") as exc_info:
            registry.resolve("a")
        assert exc_info.value.chain == ["a", "b", "a"]

    def test_self_reference(self):
        """Test a theme extending itself is circular."""
        registry = ThemeRegistry([create_theme("loop", extends="loop")])
        with pytest.raises(CircularThemeError):
            registry.resolve("loop")

    def test_missing_theme(self, registry):
        """Test resolving an unknown theme."""
        with pytest.raises(ThemeNotFoundError, match='Theme "nope" not found'):
            registry.resolve("nope")

    def test_missing_parent(self):
        """Test a missing ancestor is reported by its own name."""
        registry = ThemeRegistry([create_theme("child", extends="ghost")])
        with pytest.raises(ThemeNotFoundError) as exc_info:
            registry.resolve("child")
        assert exc_info.value.theme_name == "ghost"

    def test_diamond_inheritance(self, registry):
        """Test a shared ancestor is not mistaken for a cycle."""
        registry.register(create_theme("left", extends="base"))
        registry.register(create_theme("right", extends="base"))
        registry.register(create_theme("diamond", extends=["left", "right"]))
        assert registry.resolve("diamond").tokens["color"]["primary"] == "#000000"

    def test_component_overrides_merge(self):
        """Test component overrides merge down the chain."""
        registry = ThemeRegistry(
            [
                create_theme("p", components={"Button": {"baseStyles": {"display": "flex"}}}),
                create_theme(
                    "c", extends="p", components={"Button": {"baseStyles": {"gap": "space-2"}}}
                ),
            ]
        )
        overrides = registry.resolve("c").component_overrides
        assert overrides == {"Button": {"baseStyles": {"display": "flex", "gap": "space-2"}}}


class TestRegistryOperations:
    """Tests for registry storage, compose, and extend."""

    def test_register_replaces(self, registry):
        """Test re-registering a name replaces the theme."""
        registry.register({"name": "base", "tokens": {"color": {"primary": "#123456"}}})
        assert len(registry) == 3
        assert registry.resolve("brand").tokens["color"] == {"primary": "#FF6B6B"}

    def test_unregister(self, registry):
        """Test unregister reports whether anything was removed."""
        assert registry.unregister("campaign") is True
        assert registry.unregister("campaign") is False
        assert "campaign" not in registry
        assert not registry.has("campaign")

    def test_clear(self, registry):
        """Test clear empties the registry."""
        registry.clear()
        assert registry.all() == []

    def test_compose(self, registry):
        """Test compose merges resolved themes left to right."""
        registry.register(create_theme("accent", tokens={"color": {"surface": "#FAFAFA"}}))
        composed = registry.compose("brand", "accent")
        assert composed.name == "brand+accent"
        assert composed.tokens["color"] == {"primary": "#FF6B6B", "surface": "#FAFAFA"}
        assert composed.css_prefix == "intent"

    def test_compose_requires_names(self, registry):
        """Test compose with no themes is an error."""
        with pytest.raises(ThemeError):
            registry.compose()

    def test_extend(self, registry):
        """Test extend builds an unregistered child theme."""
        child = registry.extend("brand", tokens={"color": {"primary": "#00FF00"}})
        assert child.name == "brand-extended"
        assert child.extends == "brand"
        assert "brand-extended" not in registry

        registry.register(child)
        resolved = registry.resolve("brand-extended")
        assert resolved.tokens["color"]["primary"] == "#00FF00"
        assert resolved.css_prefix == "brand"

    def test_extend_missing_base(self, registry):
        """Test extending an unknown theme."""
        with pytest.raises(ThemeNotFoundError):
            registry.extend("nope", name="child")


class TestPresets:
    """Tests for built-in themes and the default registry."""

    def test_default_theme_registered(self):
        """Test the default registry is seeded with built-in themes."""
        registry = get_default_registry()
        assert set(BUILTIN_THEMES) <= {theme.name for theme in registry.all()}
        assert get_theme_preset("intent-default") is DEFAULT_THEME
        assert get_theme_preset("unknown") is None

    def test_default_theme_tokens(self):
        """Test the default theme resolves with color, space and dark tokens."""
        resolved = get_default_registry().resolve("intent-default")
        assert resolved.tokens["color"]["brand-primary"] == "#3B82F6"
        assert resolved.tokens["space"]["4"] == "1rem"
        assert resolved.dark_tokens["color"]["brand-primary"] == "#60A5FA"
        assert resolved.css_prefix == "intent"

    def test_default_registry_is_singleton(self):
        """Test repeated access returns the same registry until reset."""
        first = get_default_registry()
        assert get_default_registry() is first
        reset_default_registry()
        assert get_default_registry() is not first

    def test_extend_default_theme(self):
        """Test a brand theme built on the default theme."""
        registry = get_default_registry()
        registry.register(
            registry.extend("intent-default", name="acme", tokens={"color": {"brand-primary": "#FF6B6B"}})
        )
        resolved = registry.resolve("acme")
        assert resolved.tokens["color"]["brand-primary"] == "#FF6B6B"
        assert resolved.tokens["color"]["neutral-0"] == "#FFFFFF"


class TestApplyTheme:
    """Tests for layering a resolved theme onto a design system."""

    def test_tokens_and_prefix(self, design_system, registry):
        """Test theme tokens override and the prefix is replaced."""
        themed = apply_theme(design_system, registry.resolve("brand"))
        assert themed.tokens["color"]["primary"] == "#FF6B6B"
        assert themed.tokens["color"]["brand-primary"] == "#3B82F6"
        assert themed.prefix == "brand"
        assert themed.dark_tokens["color"] == {"brand-primary": "#60A5FA", "surface": "#111111"}
        assert design_system.prefix == "intent"

    def test_component_override(self, design_system):
        """Test overrides apply to matching components only."""
        registry = ThemeRegistry(
            [
                create_theme(
                    "t",
                    components={
                        "Button": {
                            "description": "Themed button",
                            "baseStyles": {"gap": "space-2"},
                            "mappings": {"importance=primary": {"color": "brand-primary"}},
                        },
                        "Card": {"description": "Ignored"},
                    },
                )
            ]
        )
        themed = apply_theme(design_system, registry.resolve("t"))
        button = themed.components["Button"]
        assert button.description == "Themed button"
        assert button.base_styles == {"display": "inline-flex", "cursor": "pointer", "gap": "space-2"}
        assert button.mappings["importance=primary"].styles == {
            "backgroundColor": "brand-primary",
            "color": "brand-primary",
        }
        assert "Card" not in themed.components
        assert button.constraints == design_system.components["Button"].constraints

    def test_mapping_override_replaces_shape(self, button_schema):
        """Test a conditional override replaces a flat mapping."""
        override = {
            "mappings": {
                "size=lg": [{"condition": {"importance": "primary"}, "styles": {"padding": "space-4"}}]
            }
        }
        updated = apply_component_override(button_schema, override)
        assert isinstance(updated.mappings["size=lg"], ConditionalMappings)
        assert isinstance(updated.mappings["size=sm"], FlatMapping)

    def test_invalid_override(self, button_schema):
        """Test an override producing an invalid schema is rejected."""
        with pytest.raises(SchemaDefinitionError):
            apply_component_override(button_schema, {"properties": {"size": {"type": "color"}}})

    def test_compiled_with_theme(self, design_system):
        """Test a themed system compiles with the theme's variable names."""
        registry = ThemeRegistry([create_theme("t", settings={"cssPrefix": "acme"})])
        css = compile_system(apply_theme(design_system, registry.resolve("t")))
        assert ".acme-button" in css
        assert "--acme-color-brand-primary: #3B82F6;" in css
