"""
Schema Engine
Validation, evolution and versioning of generated UI documents.
"""

from .version import __version__
from .core import (
    Settings,
    get_settings,
    configure_logging,
    create_container,
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
    ValidationIssue,
)
from .schema import (
    ActionBinding,
    ComponentNode,
    ConditionBinding,
    EvolutionOperation,
    LayoutConfig,
    NodePatch,
    Schema,
    SchemaMetadata,
    schema_from_json,
    schema_to_json,
)
from .registry import ComponentDefinition, ComponentRegistry, create_default_registry
from .validation import Sanitizer, ValidationResult, Validator
from .evolution import EvolutionApplier
from .engine import ActionOutcome, CancellationToken, Engine, EngineState, VersionStore

__all__ = [
    "__version__",
    # Config / wiring
    "Settings",
    "get_settings",
    "configure_logging",
    "create_container",
    # Errors
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
    "ValidationIssue",
    # Documents
    "ActionBinding",
    "ComponentNode",
    "ConditionBinding",
    "EvolutionOperation",
    "LayoutConfig",
    "NodePatch",
    "Schema",
    "SchemaMetadata",
    "schema_from_json",
    "schema_to_json",
    # Components
    "ComponentDefinition",
    "ComponentRegistry",
    "create_default_registry",
    "Sanitizer",
    "ValidationResult",
    "Validator",
    "EvolutionApplier",
    "ActionOutcome",
    "CancellationToken",
    "Engine",
    "EngineState",
    "VersionStore",
]
