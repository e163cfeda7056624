"""Allow-list sanitization for untrusted prop values."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..schema.frozen import FrozenDict, FrozenList

MAX_STRING_LENGTH = 10_000
MAX_PROP_DEPTH = 10

_STRIP = object()


@dataclass(frozen=True)
class Sanitizer:
    """
    Narrows arbitrary values to JSON-safe data.

    Kept: None, bool, int, finite float, str, and lists/dicts of those.
    Removed: callables, arbitrary objects, non-finite floats, non-string
    dict keys, containers nested deeper than ``max_depth``.
    Truncated: strings longer than ``max_string_length``.

    Containers are always rebuilt as read-only copies, so the result never
    aliases the input and cannot be edited once committed.
    """

    max_string_length: int = MAX_STRING_LENGTH
    max_depth: int = MAX_PROP_DEPTH

    def sanitize_mapping(self, values: Mapping[str, Any], path: str = "props") -> tuple[dict[str, Any], list[str]]:
        """
        Sanitize a mapping.

        Returns:
            (sanitized copy, notes describing each narrowing)
        """
        notes: list[str] = []
        cleaned = self._clean(dict(values), path, 0, notes)
        return cleaned, notes

    def sanitize_value(self, value: Any, path: str) -> tuple[Any, list[str]]:
        """Sanitize a single value; a stripped value becomes None."""
        notes: list[str] = []
        cleaned = self._clean(value, path, 0, notes)
        return (None if cleaned is _STRIP else cleaned), notes

    def _clean(self, value: Any, path: str, depth: int, notes: list[str]) -> Any:
        if value is None or isinstance(value, (bool, int)):
            return value

        if isinstance(value, float):
            if math.isfinite(value):
                return value
            notes.append(f"{path}: non-finite number removed")
            return _STRIP

        if isinstance(value, str):
            if len(value) > self.max_string_length:
                notes.append(f"{path}: string truncated to {self.max_string_length} characters")
                return value[: self.max_string_length]
            return value

        if isinstance(value, (Mapping, list, tuple)):
            if depth > self.max_depth:
                notes.append(f"{path}: nesting deeper than {self.max_depth} removed")
                return _STRIP

            if isinstance(value, Mapping):
                result: dict[str, Any] = {}
                for key, item in value.items():
                    if not isinstance(key, str):
                        notes.append(f"{path}: non-string key {key!r} removed")
                        continue
                    cleaned = self._clean(item, f"{path}.{key}", depth + 1, notes)
                    if cleaned is not _STRIP:
                        result[key] = cleaned
                return FrozenDict(result)

            items: list[Any] = []
            for index, item in enumerate(value):
                cleaned = self._clean(item, f"{path}[{index}]", depth + 1, notes)
                if cleaned is not _STRIP:
                    items.append(cleaned)
            return FrozenList(items)

        if callable(value):
            notes.append(f"{path}: function value removed")
        else:
            notes.append(f"{path}: unsupported {type(value).__name__} value removed")
        return _STRIP


__all__ = ["Sanitizer", "MAX_STRING_LENGTH", "MAX_PROP_DEPTH"]
