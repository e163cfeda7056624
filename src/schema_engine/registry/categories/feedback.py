"""
Feedback Components
Status, progress and interruption surfaces.
"""

from typing import TYPE_CHECKING

from ...schema.kinds import ComponentCategory, ComponentKind, predicate_for

if TYPE_CHECKING:
    from ..registry import ComponentRegistry


def register_feedback_components(registry: "ComponentRegistry", ComponentDefinition: type) -> None:
    """Register feedback components."""
    category = ComponentCategory.FEEDBACK

    registry.register(ComponentDefinition(
        type=ComponentKind.ALERT.value,
        category=category,
        description="Inline message with severity",
        default_props={"severity": "info", "dismissible": False},
        props_validator=predicate_for(ComponentKind.ALERT),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.MODAL.value,
        category=category,
        description="Dialog over the page",
        default_props={"open": False},
        props_validator=predicate_for(ComponentKind.MODAL),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.TOAST.value,
        category=category,
        description="Transient notification",
        default_props={"duration": 4000},
        props_validator=predicate_for(ComponentKind.TOAST),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.SKELETON.value,
        category=category,
        description="Placeholder shown while content loads",
        default_props={"lines": 3},
        props_validator=predicate_for(ComponentKind.SKELETON),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.EMPTY_STATE.value,
        category=category,
        description="Shown when a view has no data",
        default_props={"title": "Nothing here yet"},
        props_validator=predicate_for(ComponentKind.EMPTY_STATE),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.LOADING.value,
        category=category,
        description="Spinner",
        default_props={"size": "md"},
        props_validator=predicate_for(ComponentKind.LOADING),
    ))

    registry.register(ComponentDefinition(
        type=ComponentKind.PROGRESS.value,
        category=category,
        description="Determinate progress bar (0-100)",
        default_props={"showLabel": True},
        props_validator=predicate_for(ComponentKind.PROGRESS),
    ))
