"""Engine error taxonomy.

Every failure the engine surfaces is an ``EngineError`` subclass with a
stable ``code``. None of them leave the current document modified.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation finding."""

    code: str
    message: str
    node_id: str | None = None
    path: str | None = None

    def __str__(self) -> str:
        if self.node_id:
            return f"[{self.code}] {self.node_id}: {self.message}"
        return f"[{self.code}] {self.message}"


class EngineError(Exception):
    """Base class for engine failures."""

    code = "ENGINE_ERROR"

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class SchemaValidationError(EngineError):
    """Candidate or evolved document failed validation."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        issues: list[ValidationIssue] | None = None,
        warnings: list[ValidationIssue] | None = None,
    ) -> None:
        super().__init__(message, details=issues)
        self.issues = list(issues or [])
        self.warnings = list(warnings or [])

    @property
    def node_ids(self) -> list[str]:
        """Node ids named by the issues, in report order."""
        return [issue.node_id for issue in self.issues if issue.node_id]


class EvolutionError(EngineError):
    """An evolution operation could not be applied."""

    code = "EVOLUTION_ERROR"

    def __init__(self, message: str, target: str | None = None, details: Any | None = None) -> None:
        super().__init__(message, details)
        self.target = target


class TargetNotFound(EvolutionError):
    code = "TARGET_NOT_FOUND"


class InvalidReorder(EvolutionError):
    code = "INVALID_REORDER"


class DuplicateId(EvolutionError):
    code = "DUPLICATE_ID"


class InvalidOperation(EvolutionError):
    """Operation is well-formed but its payload is not acceptable here."""

    code = "INVALID_OPERATION"


class BusyError(EngineError):
    """Submission queue is saturated; retry or drop the request."""

    code = "BUSY"


class SubmissionCancelled(EngineError):
    """A queued submission was cancelled before its turn."""

    code = "CANCELLED"


class NoDocumentError(EngineError):
    """An evolution was submitted before any document was committed."""

    code = "NO_DOCUMENT"


class ListenerError(EngineError):
    """A subscriber raised while being notified. Logged, never propagated."""

    code = "LISTENER_ERROR"

    def __init__(self, message: str, listener: Any, original: BaseException) -> None:
        super().__init__(message, details=original)
        self.listener = listener
        self.original = original


__all__ = [
    "ValidationIssue",
    "EngineError",
    "SchemaValidationError",
    "EvolutionError",
    "TargetNotFound",
    "InvalidReorder",
    "DuplicateId",
    "InvalidOperation",
    "BusyError",
    "SubmissionCancelled",
    "NoDocumentError",
    "ListenerError",
]
