"""
Navigation Components
Buttons, links and wayfinding.
"""

from typing import TYPE_CHECKING

from ...schema.kinds import ComponentCategory, ComponentKind, predicate_for

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def register_navigation_components(registry: "ComponentRegistry", ComponentDefinition: type) -> None:
    """Register navigation components."""
    category = ComponentCategory.NAVIGATION

    registry.register(ComponentDefinition(
        type=ComponentKind.BUTTON.value,
        category=category,
        description="Clickable action trigger",
        default_props={"variant": "primary", "disabled": False},
        variants=[
            {"name": "secondary", "props": {"variant": "secondary"}},
            {"name": "danger", "props": {"variant": "danger"}},
        ],
        props_validator=predicate_for(ComponentKind.BUTTON),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.LINK.value,
        category=category,
        description="Hyperlink",
        default_props={"external": False},
        props_validator=predicate_for(ComponentKind.LINK),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.BREADCRUMB.value,
        category=category,
        description="Path of parent locations",
        default_props={"separator": "/"},
        props_validator=predicate_for(ComponentKind.BREADCRUMB),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.PAGINATION.value,
        category=category,
        description="Page selector for long collections",
        props_validator=predicate_for(ComponentKind.PAGINATION),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.MENU.value,
        category=category,
        description="List of navigation entries",
        default_props={"orientation": "vertical"},
        props_validator=predicate_for(ComponentKind.MENU),
    ))
