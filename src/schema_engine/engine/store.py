"""Version Store - bounded undo/redo history of committed documents."""

from dataclasses import dataclass
from typing import Any

from ..schema import Schema


@dataclass
class StoreStats:
    """History statistics."""

    size: int = 0
    max_depth: int = 0
    commits: int = 0
    rewinds: int = 0
    advances: int = 0
    evictions: int = 0
    truncations: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Export as dictionary."""
        return {
            "size": self.size,
            "max_depth": self.max_depth,
            "commits": self.commits,
            "rewinds": self.rewinds,
            "advances": self.advances,
            "evictions": self.evictions,
            "truncations": self.truncations,
        }


class VersionStore:
    """
    Append-only history with a cursor.

    The document at the cursor is the current one. Committing after a
    rewind discards everything beyond the cursor. When the history grows
    past ``max_depth`` the oldest entries are evicted.

    Not thread-safe on its own; the engine serializes access.

    Examples:
        >>> store = VersionStore(max_depth=10)
        >>> store.commit(doc_v1)
        >>> store.commit(doc_v2)
        >>> store.rewind() is doc_v1
        True
        >>> store.advance() is doc_v2
        True
    """

    def __init__(self, max_depth: int = 50) -> None:
        if max_depth <= 0:
            raise ValueError("max_depth must be positive")

        self.max_depth = max_depth
        self._history: list[Schema] = []
        self._cursor = -1
        self._last_version: int | None = None
        self._stats = StoreStats(max_depth=max_depth)

    @property
    def current(self) -> Schema | None:
        if self._cursor < 0:
            return None
        return self._history[self._cursor]

    @property
    def can_rewind(self) -> bool:
        return self._cursor > 0

    @property
    def can_advance(self) -> bool:
        return 0 <= self._cursor < len(self._history) - 1

    @property
    def history(self) -> tuple[Schema, ...]:
        """Snapshot of retained documents, oldest first."""
        return tuple(self._history)

    @property
    def stats(self) -> StoreStats:
        return self._stats

    def commit(self, document: Schema) -> Schema:
        """
        Make ``document`` the current document.

        Raises:
            ValueError: If the version does not increase over every earlier commit
        """
        if self._last_version is not None and document.version <= self._last_version:
            raise ValueError(
                f"version {document.version} does not follow committed version {self._last_version}"
            )

        forward = len(self._history) - (self._cursor + 1)
        if forward:
            del self._history[self._cursor + 1 :]
            self._stats.truncations += forward

        self._history.append(document)

        overflow = len(self._history) - self.max_depth
        if overflow > 0:
            del self._history[:overflow]
            self._stats.evictions += overflow

        self._cursor = len(self._history) - 1
        self._last_version = document.version
        self._stats.commits += 1
        self._stats.size = len(self._history)
        return document

    def rewind(self) -> Schema | None:
        """Step back one document; None (and no move) at the oldest entry."""
        if not self.can_rewind:
            return None
        self._cursor -= 1
        self._stats.rewinds += 1
        return self._history[self._cursor]

    def advance(self) -> Schema | None:
        """Step forward one document; None (and no move) at the newest entry."""
        if not self.can_advance:
            return None
        self._cursor += 1
        self._stats.advances += 1
        return self._history[self._cursor]

    def __len__(self) -> int:
        return len(self._history)


__all__ = ["StoreStats", "VersionStore"]
