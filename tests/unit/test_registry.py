"""Tests for the component registry."""

import pytest

from schema_engine.registry import ComponentDefinition, ComponentRegistry, create_default_registry
from schema_engine.schema import ComponentCategory, ComponentKind


# ============================================================================
# Registry Tests
# ============================================================================

@pytest.mark.unit
def test_default_registry_covers_builtin_kinds(registry):
    """Every built-in kind is registered."""
    for kind in ComponentKind:
        assert registry.exists(kind.value), kind
    assert len(registry) == len(ComponentKind)


@pytest.mark.unit
def test_default_registry_categories(registry):
    """Built-in kinds span the five categories."""
    assert registry.get_categories() == ["data-display", "feedback", "input", "layout", "navigation"]

    layout = registry.list_definitions(ComponentCategory.LAYOUT)
    assert {d.type for d in layout} >= {"card", "container", "grid"}


@pytest.mark.unit
def test_resolve_unknown(registry):
    """Unknown types neither exist nor resolve."""
    assert not registry.exists("unknown-widget")
    assert registry.resolve("unknown-widget") is None
    assert "unknown-widget" not in registry


@pytest.mark.unit
def test_register_custom_kind():
    """Custom kinds register with a predicate of their own."""
    registry = ComponentRegistry()
    registry.register(ComponentDefinition(
        type="map",
        description="Geographic map",
        props_validator=lambda props: "center" in props,
    ))

    definition = registry.resolve("map")
    assert definition.category is ComponentCategory.CUSTOM
    assert definition.validate_props({"center": [0, 0]})
    assert not definition.validate_props({})


@pytest.mark.unit
def test_register_duplicate_keeps_original():
    """Re-registering a type is ignored unless replacing."""
    registry = ComponentRegistry()
    first = ComponentDefinition(type="map", description="first")
    second = ComponentDefinition(type="map", description="second")

    registry.register(first)
    registry.register(second)
    assert registry.resolve("map") is first

    registry.register(second, replace=True)
    assert registry.resolve("map") is second


@pytest.mark.unit
def test_unregister():
    """Unregistered types stop resolving."""
    registry = create_default_registry()
    registry.unregister("chart")
    registry.unregister("chart")

    assert not registry.exists("chart")


@pytest.mark.unit
def test_definition_excludes_predicate_from_dump(registry):
    """The predicate is not part of the serialized definition."""
    data = registry.resolve("table").model_dump()

    assert "props_validator" not in data
    assert data["default_props"]["pageSize"] == 10


# ============================================================================
# Typed Props Tests
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "component_type,props,accepted",
    [
        ("stat-card", {"label": "Revenue", "value": 1200}, True),
        ("stat-card", {"label": "Revenue"}, False),
        ("stat-card", {"label": "Revenue", "value": 1, "trend": "sideways"}, False),
        ("table", {"columns": ["name"]}, True),
        ("table", {"columns": []}, False),
        ("slider", {"min": 0, "max": 10}, True),
        ("slider", {"min": 10, "max": 10}, False),
        ("progress", {"value": 101}, False),
        ("button", {"label": "Go", "onHover": "x"}, True),
        ("button", {}, False),
        ("card", {"anything": [1, 2]}, True),
    ],
)
def test_props_predicates(registry, component_type, props, accepted):
    """Typed kinds check prop shape, untyped kinds accept any mapping."""
    assert registry.resolve(component_type).validate_props(props) is accepted
