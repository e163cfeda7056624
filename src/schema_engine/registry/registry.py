"""Component Registry - lookup authority for component kinds."""

from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..core import get_logger
from ..schema.kinds import ComponentCategory, PropsValidator, accept_any_props

logger = get_logger(__name__)


# ============================================================================
# Registry Schema
# ============================================================================


class ComponentVariant(BaseModel):
    """Named preset of props for a component kind."""

    name: str
    props: dict[str, Any] = Field(default_factory=dict)


class ComponentDefinition(BaseModel):
    """What the engine knows about one component type."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., min_length=1, description="Type tag used on nodes")
    category: ComponentCategory = Field(default=ComponentCategory.CUSTOM)
    description: str = Field(default="", description="What the component shows")
    default_props: dict[str, Any] = Field(default_factory=dict)
    variants: list[ComponentVariant] = Field(default_factory=list)
    props_validator: PropsValidator = Field(default=accept_any_props, exclude=True)

    def validate_props(self, props: Mapping[str, Any]) -> bool:
        return bool(self.props_validator(props))


class RegistryView(Protocol):
    """Read-only lookup contract consumed by the validator and engine."""

    def exists(self, component_type: str) -> bool:
        ...

    def resolve(self, component_type: str) -> ComponentDefinition | None:
        ...


# ============================================================================
# Registry
# ============================================================================


class ComponentRegistry:
    """
    In-memory registry of component definitions.

    The engine only reads from it; registration happens at wiring time.
    """

    def __init__(self) -> None:
        self.definitions: dict[str, ComponentDefinition] = {}

    def register(self, definition: ComponentDefinition, replace: bool = False) -> None:
        """Register a definition. Existing types are kept unless ``replace`` is set."""
        if definition.type in self.definitions and not replace:
            logger.warning("component_already_registered", type=definition.type)
            return

        self.definitions[definition.type] = definition
        logger.debug("component_registered", type=definition.type, category=definition.category.value)

    def unregister(self, component_type: str) -> None:
        if self.definitions.pop(component_type, None) is not None:
            logger.debug("component_unregistered", type=component_type)

    def exists(self, component_type: str) -> bool:
        return component_type in self.definitions

    def resolve(self, component_type: str) -> ComponentDefinition | None:
        return self.definitions.get(component_type)

    def get_categories(self) -> list[str]:
        """Get sorted list of categories in use."""
        return sorted({d.category.value for d in self.definitions.values()})

    def list_definitions(self, category: ComponentCategory | None = None) -> list[ComponentDefinition]:
        """List definitions, optionally filtered by category."""
        definitions = list(self.definitions.values())
        if category:
            definitions = [d for d in definitions if d.category == category]
        return definitions

    def __len__(self) -> int:
        return len(self.definitions)

    def __contains__(self, component_type: str) -> bool:
        return self.exists(component_type)


def create_default_registry() -> ComponentRegistry:
    """Registry populated with every built-in component kind."""
    from .categories import (
        register_data_display_components,
        register_input_components,
        register_layout_components,
        register_feedback_components,
        register_navigation_components,
    )

    registry = ComponentRegistry()
    register_data_display_components(registry, ComponentDefinition)
    register_input_components(registry, ComponentDefinition)
    register_layout_components(registry, ComponentDefinition)
    register_feedback_components(registry, ComponentDefinition)
    register_navigation_components(registry, ComponentDefinition)

    logger.info(
        "registry_initialized",
        components=len(registry),
        categories=len(registry.get_categories()),
    )
    return registry


__all__ = [
    "ComponentVariant",
    "ComponentDefinition",
    "RegistryView",
    "ComponentRegistry",
    "create_default_registry",
]
