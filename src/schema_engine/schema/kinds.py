"""Known component kinds and their typed prop shapes.

The type tag on a node is an open string. The kinds below are the ones the
built-in registry knows; a subset carries a strongly-typed props model.
Anything else is a custom kind, accepted only when a registry entry exists
for it and its predicate approves the props.
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel


class ComponentCategory(str, Enum):
    """Component categories for organization."""

    DATA_DISPLAY = "data-display"
    INPUT = "input"
    LAYOUT = "layout"
    FEEDBACK = "feedback"
    NAVIGATION = "navigation"
    CUSTOM = "custom"


class ComponentKind(str, Enum):
    """Built-in component type tags."""

    # Data display
    STAT_CARD = "stat-card"
    TABLE = "table"
    CHART = "chart"
    TIMELINE = "timeline"
    KANBAN = "kanban"
    LIST = "list"
    BADGE = "badge"
    AVATAR = "avatar"
    # Input
    FORM = "form"
    SEARCH_BAR = "search-bar"
    FILTER_PANEL = "filter-panel"
    COMMAND_PALETTE = "command-palette"
    INPUT = "input"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SLIDER = "slider"
    # Layout
    CARD = "card"
    TABS = "tabs"
    ACCORDION = "accordion"
    GRID = "grid"
    SPLIT_VIEW = "split-view"
    CONTAINER = "container"
    DIVIDER = "divider"
    # Feedback
    ALERT = "alert"
    MODAL = "modal"
    TOAST = "toast"
    SKELETON = "skeleton"
    EMPTY_STATE = "empty-state"
    LOADING = "loading"
    PROGRESS = "progress"
    # Navigation
    BUTTON = "button"
    LINK = "link"
    BREADCRUMB = "breadcrumb"
    PAGINATION = "pagination"
    MENU = "menu"

    @classmethod
    def from_type(cls, type_tag: str) -> "ComponentKind | None":
        try:
            return cls(type_tag)
        except ValueError:
            return None


# ============================================================================
# Typed props
# ============================================================================


class KindProps(BaseModel):
    """Base for typed props. Extra keys are allowed and left untouched."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class StatCardProps(KindProps):
    label: str
    value: str | int | float
    trend: Literal["up", "down", "flat"] | None = None
    change: str | int | float | None = None


class TableProps(KindProps):
    columns: list[str | dict[str, Any]] = Field(min_length=1)
    rows: list[Any] = Field(default_factory=list)
    page_size: int | None = Field(default=None, gt=0)


class ChartProps(KindProps):
    chart_type: Literal["line", "bar", "pie", "area", "scatter"] = "bar"
    data: list[Any]


class TimelineProps(KindProps):
    events: list[Any]


class KanbanProps(KindProps):
    columns: list[Any] = Field(min_length=1)


class ListProps(KindProps):
    items: list[Any]


class BadgeProps(KindProps):
    label: str


class FormProps(KindProps):
    fields: list[Any] = Field(min_length=1)
    submit_label: str | None = None


class SelectProps(KindProps):
    options: list[Any] = Field(min_length=1)


class SliderProps(KindProps):
    min: float = 0
    max: float = 100
    step: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_range(self) -> "SliderProps":
        if self.min >= self.max:
            raise ValueError("slider min must be below max")
        return self


class TabsProps(KindProps):
    tabs: list[Any] = Field(min_length=1)


class AlertProps(KindProps):
    message: str
    severity: Literal["info", "success", "warning", "error"] = "info"


class ProgressProps(KindProps):
    value: float = Field(ge=0, le=100)


class ButtonProps(KindProps):
    label: str
    variant: str | None = None


class LinkProps(KindProps):
    href: str
    label: str | None = None


class PaginationProps(KindProps):
    page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=1, ge=1)


PROPS_MODELS: dict[ComponentKind, type[KindProps]] = {
    ComponentKind.STAT_CARD: StatCardProps,
    ComponentKind.TABLE: TableProps,
    ComponentKind.CHART: ChartProps,
    ComponentKind.TIMELINE: TimelineProps,
    ComponentKind.KANBAN: KanbanProps,
    ComponentKind.LIST: ListProps,
    ComponentKind.BADGE: BadgeProps,
    ComponentKind.FORM: FormProps,
    ComponentKind.SELECT: SelectProps,
    ComponentKind.SLIDER: SliderProps,
    ComponentKind.TABS: TabsProps,
    ComponentKind.ALERT: AlertProps,
    ComponentKind.PROGRESS: ProgressProps,
    ComponentKind.BUTTON: ButtonProps,
    ComponentKind.LINK: LinkProps,
    ComponentKind.PAGINATION: PaginationProps,
}


PropsValidator = Callable[[Mapping[str, Any]], bool]


def accept_any_props(props: Mapping[str, Any]) -> bool:
    """Predicate for kinds without a typed shape."""
    return isinstance(props, Mapping)


def props_predicate(model: type[KindProps]) -> PropsValidator:
    """Build a registry predicate from a typed props model."""

    def _validate(props: Mapping[str, Any]) -> bool:
        try:
            model.model_validate(props)
        except ValidationError:
            return False
        return True

    _validate.__name__ = f"validate_{model.__name__}"
    return _validate


def predicate_for(kind: ComponentKind) -> PropsValidator:
    """Typed predicate for a built-in kind, or the permissive one."""
    model = PROPS_MODELS.get(kind)
    return props_predicate(model) if model else accept_any_props


__all__ = [
    "ComponentCategory",
    "ComponentKind",
    "KindProps",
    "PROPS_MODELS",
    "PropsValidator",
    "accept_any_props",
    "props_predicate",
    "predicate_for",
]
