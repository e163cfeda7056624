"""
Layout Components
Containers that arrange their children.
"""

from typing import TYPE_CHECKING

from ...schema.kinds import ComponentCategory, ComponentKind, predicate_for

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def register_layout_components(registry: "ComponentRegistry", ComponentDefinition: type) -> None:
    """Register layout components."""
    category = ComponentCategory.LAYOUT

    registry.register(ComponentDefinition(
        type=ComponentKind.CARD.value,
        category=category,
        description="Bordered surface with optional title",
        default_props={"elevation": 1},
        props_validator=predicate_for(ComponentKind.CARD),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.TABS.value,
        category=category,
        description="Tabbed panels, one child per tab",
        default_props={"activeIndex": 0},
        props_validator=predicate_for(ComponentKind.TABS),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.ACCORDION.value,
        category=category,
        description="Collapsible sections",
        default_props={"allowMultiple": False},
        props_validator=predicate_for(ComponentKind.ACCORDION),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.GRID.value,
        category=category,
        description="Children on a fixed column grid",
        default_props={"columns": 3, "gap": "1rem"},
        props_validator=predicate_for(ComponentKind.GRID),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.SPLIT_VIEW.value,
        category=category,
        description="Two resizable panes",
        default_props={"orientation": "horizontal", "ratio": 0.5},
        props_validator=predicate_for(ComponentKind.SPLIT_VIEW),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.CONTAINER.value,
        category=category,
        description="Generic wrapper",
        default_props={"layout": "vertical"},
        props_validator=predicate_for(ComponentKind.CONTAINER),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.DIVIDER.value,
        category=category,
        description="Visual separator",
        props_validator=predicate_for(ComponentKind.DIVIDER),
    ))
