"""UI Schema Data Models.

Documents are frozen pydantic models. Input accepts camelCase keys (as
produced by the model layer) or snake_case; output is camelCase.
"""

from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .frozen import FrozenDict, FrozenObject, FrozenValue, freeze, thaw
from .kinds import ComponentKind

LayoutMode = Literal["grid", "flex", "stack", "masonry", "split"]
OperationType = Literal["add", "remove", "update", "morph", "reorder"]
ActionType = Literal["click", "submit", "change", "hover", "focus", "custom"]
ConditionType = Literal["visibility", "enabled", "style"]
AnimationType = Literal["fade", "slide", "scale", "morph", "none"]

ROOT_TARGET = "root"
"""Target alias for the document root when no node carries this id."""


class SchemaModel(BaseModel):
    """Base for all document models: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# Presentation
# ============================================================================


class AnimationConfig(SchemaModel):
    """Renderer animation directive. Carried, never interpreted."""

    type: AnimationType = "fade"
    duration: float | None = Field(default=None, ge=0)
    delay: float | None = Field(default=None, ge=0)
    easing: str | None = None
    stagger: float | None = Field(default=None, ge=0)


class StyleConfig(SchemaModel):
    class_name: str | None = None
    css: Annotated[dict[str, str], AfterValidator(freeze), PlainSerializer(thaw)] | None = None
    animation: AnimationConfig | None = None


class ResponsiveLayout(SchemaModel):
    """Partial layout override for one breakpoint."""

    mode: LayoutMode | None = None
    columns: int | None = Field(default=None, gt=0)
    rows: int | None = Field(default=None, gt=0)
    gap: str | int | None = None
    padding: str | int | None = None


class ResponsiveConfig(SchemaModel):
    mobile: ResponsiveLayout | None = None
    tablet: ResponsiveLayout | None = None
    desktop: ResponsiveLayout | None = None


class LayoutConfig(SchemaModel):
    """Top-level layout of a document."""

    mode: LayoutMode
    columns: int | None = Field(default=None, gt=0)
    rows: int | None = Field(default=None, gt=0)
    gap: str | int | None = None
    padding: str | int | None = None
    responsive: ResponsiveConfig | None = None
    areas: tuple[tuple[str, ...], ...] | None = None


class ThemeConfig(SchemaModel):
    mode: Literal["light", "dark", "auto"] = "auto"
    primary_color: str | None = None
    accent_color: str | None = None
    font_family: str | None = None


class SchemaMetadata(SchemaModel):
    """Provenance of a document."""

    intent: str = ""
    timestamp: str = ""
    conversation_id: str = ""
    user_id: str | None = None
    processed_at: str | None = None
    engine_version: str | None = None
    tags: tuple[str, ...] = ()


# ============================================================================
# Interaction
# ============================================================================


class ValidationRule(SchemaModel):
    """Client-side input rule attached to an action."""

    type: Literal["required", "pattern", "min", "max", "custom"]
    value: FrozenValue = None
    message: str


class FeedbackConfig(SchemaModel):
    success: str | None = None
    error: str | None = None
    loading: str | None = None


class ActionBinding(SchemaModel):
    """Reaction of a node to an interaction: an intent and/or declarative updates."""

    id: str = Field(min_length=1)
    type: ActionType
    intent: str = ""
    handler: str | None = None
    updates: tuple["EvolutionOperation", ...] = ()
    validation: tuple[ValidationRule, ...] = ()
    feedback: FeedbackConfig | None = None


class ConditionBinding(SchemaModel):
    """Visibility/enablement/style condition evaluated by the renderer."""

    id: str = Field(min_length=1)
    type: ConditionType
    expression: str
    true_value: FrozenValue = None
    false_value: FrozenValue = None
    target: str | None = None


# ============================================================================
# Tree
# ============================================================================


class ComponentNode(SchemaModel):
    """One element of the component tree."""

    id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    props: FrozenObject = Field(default_factory=FrozenDict)
    children: tuple["ComponentNode", ...] = ()
    actions: tuple[ActionBinding, ...] = ()
    conditions: tuple[ConditionBinding, ...] = ()
    style: StyleConfig | None = None

    @property
    def kind(self) -> ComponentKind | None:
        """Built-in kind for this node, or None for a custom type."""
        return ComponentKind.from_type(self.type)


class NodePatch(SchemaModel):
    """Partial node definition for ``update``. Present fields replace, props merge."""

    id: str | None = None
    type: str | None = Field(default=None, min_length=1)
    props: FrozenObject | None = None
    children: tuple[ComponentNode, ...] | None = None
    actions: tuple[ActionBinding, ...] | None = None
    conditions: tuple[ConditionBinding, ...] | None = None
    style: StyleConfig | None = None

    @model_serializer(mode="wrap")
    def _keep_explicit_nulls(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, Any]:
        """An explicit ``style: null`` clears the style, so it survives ``exclude_none``."""
        data = handler(self)
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                alias = type(self).model_fields[name].alias
                data.setdefault(alias if info.by_alias and alias else name, None)
        return data


class EvolutionOperation(SchemaModel):
    """A discrete transformation of a document."""

    type: OperationType
    target: str | None = None
    node: ComponentNode | None = Field(default=None, alias="schema")
    patch: NodePatch | None = None
    position: int | None = Field(default=None, ge=0)
    order: tuple[str, ...] | None = None
    animation: AnimationConfig | None = None

    @model_validator(mode="before")
    @classmethod
    def _route_update_payload(cls, data: Any) -> Any:
        """An ``update`` carries its partial definition under ``schema`` on the wire."""
        if isinstance(data, dict) and data.get("type") == "update":
            if "schema" in data and "patch" not in data:
                data = dict(data)
                data["patch"] = data.pop("schema")
        return data

    @model_validator(mode="after")
    def _check_shape(self) -> "EvolutionOperation":
        if self.type in ("remove", "update", "morph") and not self.target:
            raise ValueError(f"'{self.type}' requires a target")
        if self.type in ("add", "morph") and self.node is None:
            raise ValueError(f"'{self.type}' requires a schema")
        if self.type == "update" and self.patch is None:
            raise ValueError("'update' requires a schema")
        if self.type == "reorder" and self.order is None:
            raise ValueError("'reorder' requires an order")
        return self


class Schema(SchemaModel):
    """The authoritative UI description at one point in time."""

    id: str = Field(min_length=1)
    version: int = 0
    type: Literal["screen", "component"] = "screen"
    layout: LayoutConfig
    components: tuple[ComponentNode, ...]
    metadata: SchemaMetadata = Field(default_factory=SchemaMetadata)
    theme: ThemeConfig | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _ignore_foreign_version(cls, v: Any) -> int:
        # Versions are stamped by the engine; "1.0.0" and friends are dropped
        if isinstance(v, bool) or not isinstance(v, int):
            return 0
        return v


ActionBinding.model_rebuild()
ComponentNode.model_rebuild()
NodePatch.model_rebuild()
EvolutionOperation.model_rebuild()
Schema.model_rebuild()


__all__ = [
    "ROOT_TARGET",
    "SchemaModel",
    "AnimationConfig",
    "StyleConfig",
    "ResponsiveLayout",
    "ResponsiveConfig",
    "LayoutConfig",
    "ThemeConfig",
    "SchemaMetadata",
    "ValidationRule",
    "FeedbackConfig",
    "ActionBinding",
    "ConditionBinding",
    "ComponentNode",
    "NodePatch",
    "EvolutionOperation",
    "Schema",
]
