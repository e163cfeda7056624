"""Read-only containers for JSON-like values held by committed documents.

``FrozenDict`` and ``FrozenList`` subclass ``dict`` and ``list`` so they
compare equal to plain containers and encode the same way, but every
in-place mutation raises ``TypeError``.
"""

from collections.abc import Mapping
from typing import Annotated, Any, NoReturn

from pydantic import AfterValidator, PlainSerializer


def _readonly(self: Any, *args: Any, **kwargs: Any) -> NoReturn:
    raise TypeError(f"{type(self).__name__} is read-only")


class FrozenDict(dict):
    """A dict that cannot be changed after construction."""

    __slots__ = ()

    __setitem__ = _readonly
    __delitem__ = _readonly
    __ior__ = _readonly
    clear = _readonly
    pop = _readonly
    popitem = _readonly
    setdefault = _readonly
    update = _readonly

    def __copy__(self) -> "FrozenDict":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "FrozenDict":
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (FrozenDict, (dict(self),))


class FrozenList(list):
    """A list that cannot be changed after construction."""

    __slots__ = ()

    __setitem__ = _readonly
    __delitem__ = _readonly
    __iadd__ = _readonly
    __imul__ = _readonly
    append = _readonly
    extend = _readonly
    insert = _readonly
    pop = _readonly
    remove = _readonly
    clear = _readonly
    sort = _readonly
    reverse = _readonly

    def __copy__(self) -> "FrozenList":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "FrozenList":
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (FrozenList, (list(self),))


def freeze(value: Any) -> Any:
    """Deep read-only copy of mappings and sequences; scalars pass through."""
    if isinstance(value, Mapping):
        return FrozenDict((key, freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return FrozenList(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Plain mutable copy of a frozen value."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


FrozenObject = Annotated[dict[str, Any], AfterValidator(freeze), PlainSerializer(thaw)]
"""Model field type for a read-only JSON object (props, css)."""

FrozenValue = Annotated[Any, AfterValidator(freeze), PlainSerializer(thaw)]
"""Model field type for a read-only JSON value."""


__all__ = ["FrozenDict", "FrozenList", "FrozenObject", "FrozenValue", "freeze", "thaw"]
