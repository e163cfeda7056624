"""Component Registry - lookup contract plus built-in kinds."""

from .registry import (
    ComponentDefinition,
    ComponentRegistry,
    ComponentVariant,
    RegistryView,
    create_default_registry,
)

__all__ = [
    "ComponentDefinition",
    "ComponentRegistry",
    "ComponentVariant",
    "RegistryView",
    "create_default_registry",
]
