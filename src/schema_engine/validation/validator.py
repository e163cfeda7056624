"""Schema Validator - candidate document to validated document or issues."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

from ..core import get_logger
from ..core.errors import SchemaValidationError, ValidationIssue
from ..registry import RegistryView
from ..schema import ROOT_TARGET, ComponentNode, Schema
from ..schema.traversal import collect_ids, first_duplicate, iter_nodes, iter_references
from .sanitize import Sanitizer

logger = get_logger(__name__)

MAX_DOCUMENT_DEPTH = 64


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a whole document."""

    valid: bool
    document: Schema | None = None
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()

    def as_result(self) -> Result[Schema, SchemaValidationError]:
        """Result pattern view: the document, or an error carrying the issues."""
        if self.valid and self.document is not None:
            return Success(self.document)
        return Failure(
            SchemaValidationError(
                _summarize(self.errors),
                issues=list(self.errors),
                warnings=list(self.warnings),
            )
        )


@dataclass(frozen=True)
class NodeValidationResult:
    """Outcome of validating a single subtree."""

    valid: bool
    node: ComponentNode | None = None
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()


def _summarize(errors: Iterable[ValidationIssue]) -> str:
    errors = list(errors)
    if not errors:
        return "Validation failed"
    head = str(errors[0])
    if len(errors) > 1:
        return f"{head} (+{len(errors) - 1} more)"
    return head


def _node_id_at(candidate: Any, loc: tuple[Any, ...]) -> str | None:
    """Id of the deepest node object along a pydantic error location."""
    found = None
    current = candidate
    key = None
    for part in loc:
        if isinstance(current, Mapping):
            key = part
            current = current.get(part)
        elif isinstance(current, (list, tuple)) and isinstance(part, int) and 0 <= part < len(current):
            current = current[part]
            if key in ("components", "children") and isinstance(current, Mapping):
                node_id = current.get("id")
                if isinstance(node_id, str):
                    found = node_id
        else:
            break
    return found


def _tree_too_deep(candidate: Mapping[str, Any], max_depth: int) -> ValidationIssue | None:
    """
    Depth guard over the component tree only.

    Prop and condition values are left to the sanitizer, which narrows them
    instead of rejecting the document.
    """
    stack = [(candidate, 0)]
    while stack:
        current, depth = stack.pop()
        for key in ("components", "children"):
            nodes = current.get(key)
            if not isinstance(nodes, (list, tuple)):
                continue
            for node in nodes:
                if not isinstance(node, Mapping):
                    continue
                if depth + 1 > max_depth:
                    node_id = node.get("id")
                    return ValidationIssue(
                        "structure",
                        f"component tree deeper than {max_depth} levels",
                        node_id if isinstance(node_id, str) else None,
                    )
                stack.append((node, depth + 1))
    return None


def _structure_issues(error: PydanticValidationError, candidate: Any, prefix: str = "") -> list[ValidationIssue]:
    issues = []
    for detail in error.errors():
        loc = tuple(detail.get("loc", ()))
        path = prefix + ".".join(str(part) for part in loc)
        issues.append(
            ValidationIssue(
                code="structure",
                message=f"{path or '<root>'}: {detail.get('msg', 'invalid')}",
                node_id=_node_id_at(candidate, loc),
                path=path or None,
            )
        )
    return issues


class Validator:
    """
    Validates and sanitizes UI documents against a component registry.

    Checks run in order: structure, id uniqueness (both short-circuit),
    then type resolution, prop shape and cross references (accumulated).
    Prop values are sanitized before the prop predicates run, so the
    predicate sees exactly what would be committed.

    Never raises for bad input: every finding comes back in the result.
    """

    def __init__(
        self,
        registry: RegistryView,
        sanitizer: Sanitizer | None = None,
        max_document_depth: int = MAX_DOCUMENT_DEPTH,
    ) -> None:
        self.registry = registry
        self.sanitizer = sanitizer or Sanitizer()
        self.max_document_depth = max_document_depth

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def validate(self, candidate: Any, *, tolerated_refs: Iterable[str] = ()) -> ValidationResult:
        """
        Validate a candidate document.

        Args:
            candidate: Mapping (untrusted model output) or Schema
            tolerated_refs: Ids whose dangling references are warnings, not errors

        Returns:
            ValidationResult with the sanitized document when valid
        """
        document, structural = self._parse(candidate, Schema)
        if document is None:
            return ValidationResult(valid=False, errors=tuple(structural))

        duplicate = first_duplicate(document.components)
        if duplicate is not None:
            return ValidationResult(
                valid=False,
                errors=(ValidationIssue("duplicate_id", f"id '{duplicate}' is used more than once", duplicate),),
            )

        components, warnings = self._sanitize_nodes(document.components)
        document = document.model_copy(update={"components": components})

        errors: list[ValidationIssue] = []
        for node in iter_nodes(document.components):
            errors.extend(self._check_node(node))

        ref_errors, ref_warnings = self._check_references(document, set(tolerated_refs))
        errors.extend(ref_errors)
        warnings.extend(ref_warnings)

        if errors:
            logger.debug("validation_failed", schema_id=document.id, errors=len(errors))
            return ValidationResult(valid=False, errors=tuple(errors), warnings=tuple(warnings))

        return ValidationResult(valid=True, document=document, warnings=tuple(warnings))

    # ------------------------------------------------------------------
    # Subtrees
    # ------------------------------------------------------------------

    def validate_node(self, candidate: Any) -> NodeValidationResult:
        """
        Validate a single subtree (structure, uniqueness, types, props).

        References are not checked here; they only make sense against a
        whole document.
        """
        node, structural = self._parse(candidate, ComponentNode)
        if node is None:
            return NodeValidationResult(valid=False, errors=tuple(structural))

        duplicate = first_duplicate((node,))
        if duplicate is not None:
            return NodeValidationResult(
                valid=False,
                errors=(ValidationIssue("duplicate_id", f"id '{duplicate}' is used more than once", duplicate),),
            )

        (node,), warnings = self._sanitize_nodes((node,))

        errors: list[ValidationIssue] = []
        for child in iter_nodes((node,)):
            errors.extend(self._check_node(child))

        if errors:
            return NodeValidationResult(valid=False, errors=tuple(errors), warnings=tuple(warnings))
        return NodeValidationResult(valid=True, node=node, warnings=tuple(warnings))

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _parse(self, candidate: Any, model: type) -> tuple[Any, list[ValidationIssue]]:
        if isinstance(candidate, model):
            return candidate, []

        if not isinstance(candidate, Mapping):
            return None, [
                ValidationIssue("structure", f"expected an object, got {type(candidate).__name__}")
            ]

        too_deep = _tree_too_deep(candidate, self.max_document_depth)
        if too_deep is not None:
            return None, [too_deep]

        try:
            return model.model_validate(candidate), []
        except PydanticValidationError as e:
            return None, _structure_issues(e, candidate)

    def _check_node(self, node: ComponentNode) -> list[ValidationIssue]:
        if not self.registry.exists(node.type):
            return [ValidationIssue("unknown_type", f"component type '{node.type}' is not registered", node.id)]

        definition = self.registry.resolve(node.type)
        if definition is None:
            return [ValidationIssue("unknown_type", f"component type '{node.type}' did not resolve", node.id)]

        try:
            accepted = definition.validate_props(node.props)
        except Exception as e:  # predicates are third-party code
            logger.warning("props_validator_raised", type=node.type, node_id=node.id, error=str(e))
            accepted = False

        if not accepted:
            return [ValidationIssue("invalid_props", f"props rejected for type '{node.type}'", node.id)]
        return []

    def _check_references(
        self, document: Schema, tolerated: set[str]
    ) -> tuple[list[ValidationIssue], list[ValidationIssue]]:
        known = set(collect_ids(document.components))
        known.add(ROOT_TARGET)

        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        for ref in iter_references(document.components):
            if ref.target in known:
                continue
            issue = ValidationIssue(
                "dangling_reference",
                f"{ref.via} '{ref.binding_id}' targets missing node '{ref.target}'",
                ref.source_id,
            )
            (warnings if ref.target in tolerated else errors).append(issue)
        return errors, warnings

    # ------------------------------------------------------------------
    # Sanitization
    # ------------------------------------------------------------------

    def _sanitize_nodes(
        self, nodes: tuple[ComponentNode, ...]
    ) -> tuple[tuple[ComponentNode, ...], list[ValidationIssue]]:
        warnings: list[ValidationIssue] = []
        return tuple(self._sanitize_node(node, warnings) for node in nodes), warnings

    def _sanitize_node(self, node: ComponentNode, warnings: list[ValidationIssue]) -> ComponentNode:
        props, notes = self.sanitizer.sanitize_mapping(node.props)

        conditions = []
        for condition in node.conditions:
            true_value, true_notes = self.sanitizer.sanitize_value(
                condition.true_value, f"conditions.{condition.id}.trueValue"
            )
            false_value, false_notes = self.sanitizer.sanitize_value(
                condition.false_value, f"conditions.{condition.id}.falseValue"
            )
            notes.extend(true_notes + false_notes)
            conditions.append(
                condition.model_copy(update={"true_value": true_value, "false_value": false_value})
            )

        for note in notes:
            warnings.append(ValidationIssue("sanitized", note, node.id))

        children = tuple(self._sanitize_node(child, warnings) for child in node.children)
        return node.model_copy(
            update={"props": props, "conditions": tuple(conditions), "children": children}
        )


__all__ = ["ValidationResult", "NodeValidationResult", "Validator"]
