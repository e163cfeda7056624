"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    extract_json,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
)
from .id import new_token_id
from .errors import (
    ValidationIssue,
    EngineError,
    SchemaValidationError,
    EvolutionError,
    TargetNotFound,
    InvalidReorder,
    DuplicateId,
    InvalidOperation,
    BusyError,
    SubmissionCancelled,
    NoDocumentError,
    ListenerError,
)


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    # IDs
    "new_token_id",
    # Errors
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
    # DI
    "create_container",
]
