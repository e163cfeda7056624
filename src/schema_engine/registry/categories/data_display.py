"""
Data Display Components
Cards, tables, charts and other read-only views of data.
"""

from typing import TYPE_CHECKING

from ...schema.kinds import ComponentCategory, ComponentKind, predicate_for

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def register_data_display_components(registry: "ComponentRegistry", ComponentDefinition: type) -> None:
    """Register data display components."""
    category = ComponentCategory.DATA_DISPLAY

    registry.register(ComponentDefinition(
        type=ComponentKind.STAT_CARD.value,
        category=category,
        description="Single metric with label, value and optional trend",
        default_props={"trend": "flat"},
        variants=[
            {"name": "compact", "props": {"size": "sm"}},
            {"name": "highlighted", "props": {"emphasis": True}},
        ],
        props_validator=predicate_for(ComponentKind.STAT_CARD),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.TABLE.value,
        category=category,
        description="Tabular rows with named columns",
        default_props={"rows": [], "pageSize": 10, "sortable": True},
        props_validator=predicate_for(ComponentKind.TABLE),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.CHART.value,
        category=category,
        description="Line, bar, pie, area or scatter chart",
        default_props={"chartType": "bar", "showLegend": True},
        props_validator=predicate_for(ComponentKind.CHART),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.TIMELINE.value,
        category=category,
        description="Chronological list of events",
        default_props={"orientation": "vertical"},
        props_validator=predicate_for(ComponentKind.TIMELINE),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.KANBAN.value,
        category=category,
        description="Board of columns holding cards",
        default_props={"draggable": True},
        props_validator=predicate_for(ComponentKind.KANBAN),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.LIST.value,
        category=category,
        description="Ordered or unordered list of items",
        default_props={"ordered": False},
        props_validator=predicate_for(ComponentKind.LIST),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.BADGE.value,
        category=category,
        description="Short status label",
        default_props={"tone": "neutral"},
        props_validator=predicate_for(ComponentKind.BADGE),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.AVATAR.value,
        category=category,
        description="User picture or initials",
        default_props={"size": "md"},
        props_validator=predicate_for(ComponentKind.AVATAR),
    ))
