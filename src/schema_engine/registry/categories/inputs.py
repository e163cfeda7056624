"""
Input Components
Forms and individual controls that collect user input.
"""

from typing import TYPE_CHECKING

from ...schema.kinds import ComponentCategory, ComponentKind, predicate_for

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def register_input_components(registry: "ComponentRegistry", ComponentDefinition: type) -> None:
    """Register input components."""
    category = ComponentCategory.INPUT

    registry.register(ComponentDefinition(
        type=ComponentKind.FORM.value,
        category=category,
        description="Group of fields with a submit action",
        default_props={"submitLabel": "Submit"},
        props_validator=predicate_for(ComponentKind.FORM),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.SEARCH_BAR.value,
        category=category,
        description="Free-text search box",
        default_props={"placeholder": "Search..."},
        props_validator=predicate_for(ComponentKind.SEARCH_BAR),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.FILTER_PANEL.value,
        category=category,
        description="Set of filters applied to a data view",
        default_props={"collapsible": True},
        props_validator=predicate_for(ComponentKind.FILTER_PANEL),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.COMMAND_PALETTE.value,
        category=category,
        description="Keyboard-driven command launcher",
        default_props={"shortcut": "mod+k"},
        props_validator=predicate_for(ComponentKind.COMMAND_PALETTE),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.INPUT.value,
        category=category,
        description="Single-line text input",
        default_props={"inputType": "text"},
        props_validator=predicate_for(ComponentKind.INPUT),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.SELECT.value,
        category=category,
        description="Dropdown choice from a list of options",
        default_props={"multiple": False},
        props_validator=predicate_for(ComponentKind.SELECT),
    ))

    for kind in (ComponentKind.CHECKBOX, ComponentKind.RADIO):
        registry.register(ComponentDefinition(
            type=kind.value,
            category=category,
            description=f"{kind.value.capitalize()} control",
            default_props={"checked": False},
            props_validator=predicate_for(kind),
        ))

    registry.register(ComponentDefinition(
        type=ComponentKind.SLIDER.value,
        category=category,
        description="Numeric range control",
        default_props={"step": 1},
        props_validator=predicate_for(ComponentKind.SLIDER),
    ))
