"""Evolution Applier - (document, operation) to next document.

Documents are never edited in place. Each operation rebuilds only the path
from the root to the touched node; untouched subtrees are shared with the
previous document.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

from ..core import get_logger
from ..core.errors import (
    DuplicateId,
    EvolutionError,
    InvalidOperation,
    InvalidReorder,
    TargetNotFound,
)
from ..schema import ROOT_TARGET, ComponentNode, EvolutionOperation, Schema
from ..schema.frozen import freeze
from ..schema.traversal import find_node, first_duplicate
from ..validation import Validator

logger = get_logger(__name__)

Nodes = tuple[ComponentNode, ...]

# Patch fields that replace the target's value wholesale
_REPLACED_FIELDS = ("type", "children", "actions", "conditions", "style")


def _rewrite(
    nodes: Nodes, target: str, fn: Callable[[ComponentNode], Nodes]
) -> tuple[Nodes, bool]:
    """
    Replace the first preorder match of ``target`` with ``fn(match)``.

    Returns:
        (new sibling tuple, whether the target was found)
    """
    for index, node in enumerate(nodes):
        if node.id == target:
            return (*nodes[:index], *fn(node), *nodes[index + 1 :]), True

        children, found = _rewrite(node.children, target, fn)
        if found:
            rebuilt = node.model_copy(update={"children": children})
            return (*nodes[:index], rebuilt, *nodes[index + 1 :]), True

    return nodes, False


def _insert(siblings: Nodes, node: ComponentNode, position: int | None) -> Nodes:
    index = len(siblings) if position is None else min(position, len(siblings))
    return (*siblings[:index], node, *siblings[index:])


def _permute(siblings: Nodes, order: tuple[str, ...], target: str | None) -> Nodes:
    current = [node.id for node in siblings]
    label = target or ROOT_TARGET

    if len(order) != len(set(order)):
        raise InvalidReorder(f"reorder of '{label}' repeats an id", target=target)

    unknown = [node_id for node_id in order if node_id not in current]
    if unknown:
        raise InvalidReorder(
            f"reorder of '{label}' names ids that are not children: {', '.join(unknown)}",
            target=target,
            details={"unknown": unknown},
        )

    missing = [node_id for node_id in current if node_id not in order]
    if missing:
        raise InvalidReorder(
            f"reorder of '{label}' omits children: {', '.join(missing)}",
            target=target,
            details={"missing": missing},
        )

    by_id = {node.id: node for node in siblings}
    return tuple(by_id[node_id] for node_id in order)


class EvolutionApplier:
    """
    Applies add / remove / update / morph / reorder operations.

    Pure: the input document is never modified and failures are returned
    as ``Failure(EvolutionError)``.
    """

    def __init__(self, validator: Validator) -> None:
        self.validator = validator
        self._handlers: dict[str, Callable[[Nodes, EvolutionOperation], Nodes]] = {
            "add": self._add,
            "remove": self._remove,
            "update": self._update,
            "morph": self._morph,
            "reorder": self._reorder,
        }

    def apply(
        self, document: Schema, operation: EvolutionOperation | Mapping[str, Any]
    ) -> Result[Schema, EvolutionError]:
        """
        Apply one operation.

        Args:
            document: Current document
            operation: Operation value or its wire mapping

        Returns:
            Success(next document) or Failure(EvolutionError)
        """
        try:
            operation = self.coerce(operation)
            components = self._handlers[operation.type](document.components, operation)
        except EvolutionError as e:
            logger.debug("evolution_rejected", code=e.code, target=e.target)
            return Failure(e)

        duplicate = first_duplicate(components)
        if duplicate is not None:
            return Failure(
                DuplicateId(f"'{operation.type}' would duplicate id '{duplicate}'", target=duplicate)
            )

        return Success(document.model_copy(update={"components": components}))

    def apply_all(
        self, document: Schema, operations: Iterable[EvolutionOperation | Mapping[str, Any]]
    ) -> Result[Schema, EvolutionError]:
        """Apply operations in order; the first failure aborts the whole batch."""
        result: Result[Schema, EvolutionError] = Success(document)
        for operation in operations:
            result = result.bind(lambda current, op=operation: self.apply(current, op))
        return result

    @staticmethod
    def coerce(operation: EvolutionOperation | Mapping[str, Any]) -> EvolutionOperation:
        """Parse a wire mapping into an operation.

        Raises:
            InvalidOperation: If the mapping is not a well-formed operation
        """
        if isinstance(operation, EvolutionOperation):
            return operation
        if not isinstance(operation, Mapping):
            raise InvalidOperation(f"expected an operation, got {type(operation).__name__}")
        try:
            return EvolutionOperation.model_validate(operation)
        except PydanticValidationError as e:
            raise InvalidOperation(f"malformed operation: {e.error_count()} error(s)", details=e.errors()) from e

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _checked_node(self, operation: EvolutionOperation) -> ComponentNode:
        result = self.validator.validate_node(operation.node)
        if not result.valid or result.node is None:
            raise InvalidOperation(
                f"'{operation.type}' node failed validation: {result.errors[0]}",
                target=operation.target,
                details=list(result.errors),
            )
        return result.node

    def _add(self, components: Nodes, operation: EvolutionOperation) -> Nodes:
        node = self._checked_node(operation)
        target = operation.target

        if target is None or (target == ROOT_TARGET and find_node(components, target) is None):
            return _insert(components, node, operation.position)

        def insert_child(parent: ComponentNode) -> Nodes:
            children = _insert(parent.children, node, operation.position)
            return (parent.model_copy(update={"children": children}),)

        rewritten, found = _rewrite(components, target, insert_child)
        if not found:
            raise TargetNotFound(f"add parent '{target}' not found", target=target)
        return rewritten

    def _remove(self, components: Nodes, operation: EvolutionOperation) -> Nodes:
        rewritten, found = _rewrite(components, operation.target, lambda _: ())
        if not found:
            raise TargetNotFound(f"remove target '{operation.target}' not found", target=operation.target)
        return rewritten

    def _update(self, components: Nodes, operation: EvolutionOperation) -> Nodes:
        patch = operation.patch
        if patch.id is not None and patch.id != operation.target:
            raise InvalidOperation(
                f"update may not change id '{operation.target}' to '{patch.id}'",
                target=operation.target,
            )

        def merge(node: ComponentNode) -> Nodes:
            changes: dict[str, Any] = {}
            if patch.props is not None:
                changes["props"] = freeze({**node.props, **patch.props})
            for name in _REPLACED_FIELDS:
                if name not in patch.model_fields_set:
                    continue
                value = getattr(patch, name)
                if value is None and name != "style":
                    continue
                changes[name] = value
            return (node.model_copy(update=changes),)

        rewritten, found = _rewrite(components, operation.target, merge)
        if not found:
            raise TargetNotFound(f"update target '{operation.target}' not found", target=operation.target)
        return rewritten

    def _morph(self, components: Nodes, operation: EvolutionOperation) -> Nodes:
        node = self._checked_node(operation)
        rewritten, found = _rewrite(components, operation.target, lambda _: (node,))
        if not found:
            raise TargetNotFound(f"morph target '{operation.target}' not found", target=operation.target)
        return rewritten

    def _reorder(self, components: Nodes, operation: EvolutionOperation) -> Nodes:
        target = operation.target
        order = operation.order or ()

        if target is None or (target == ROOT_TARGET and find_node(components, target) is None):
            return _permute(components, order, None)

        def permute_children(parent: ComponentNode) -> Nodes:
            return (parent.model_copy(update={"children": _permute(parent.children, order, target)}),)

        rewritten, found = _rewrite(components, target, permute_children)
        if not found:
            raise TargetNotFound(f"reorder target '{target}' not found", target=target)
        return rewritten


__all__ = ["EvolutionApplier"]
