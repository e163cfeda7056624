"""UI schema document model."""

from .frozen import FrozenDict, FrozenList, freeze, thaw
from .kinds import ComponentCategory, ComponentKind, PROPS_MODELS
from .models import (
    ROOT_TARGET,
    ActionBinding,
    AnimationConfig,
    ComponentNode,
    ConditionBinding,
    EvolutionOperation,
    FeedbackConfig,
    LayoutConfig,
    NodePatch,
    ResponsiveConfig,
    ResponsiveLayout,
    Schema,
    SchemaMetadata,
    StyleConfig,
    ThemeConfig,
    ValidationRule,
)
from .serialization import schema_from_json, schema_to_dict, schema_to_json
from .traversal import (
    Reference,
    collect_ids,
    dangling_targets,
    find_node,
    first_duplicate,
    iter_nodes,
    iter_references,
)

__all__ = [
    "FrozenDict",
    "FrozenList",
    "freeze",
    "thaw",
    "ComponentCategory",
    "ComponentKind",
    "PROPS_MODELS",
    "ROOT_TARGET",
    "ActionBinding",
    "AnimationConfig",
    "ComponentNode",
    "ConditionBinding",
    "EvolutionOperation",
    "FeedbackConfig",
    "LayoutConfig",
    "NodePatch",
    "ResponsiveConfig",
    "ResponsiveLayout",
    "Schema",
    "SchemaMetadata",
    "StyleConfig",
    "ThemeConfig",
    "ValidationRule",
    "schema_from_json",
    "schema_to_dict",
    "schema_to_json",
    "Reference",
    "collect_ids",
    "dangling_targets",
    "find_node",
    "first_duplicate",
    "iter_nodes",
    "iter_references",
]
