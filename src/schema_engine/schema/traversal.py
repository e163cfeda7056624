"""Depth-first helpers over a component tree."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .models import ComponentNode


@dataclass(frozen=True)
class Reference:
    """A target id named by an action update or a condition."""

    source_id: str
    binding_id: str
    target: str
    via: str  # "action" or "condition"


def iter_nodes(components: Iterable[ComponentNode]) -> Iterator[ComponentNode]:
    """Yield every node in depth-first preorder."""
    stack = list(reversed(tuple(components)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(components: Iterable[ComponentNode], node_id: str) -> ComponentNode | None:
    for node in iter_nodes(components):
        if node.id == node_id:
            return node
    return None


def collect_ids(components: Iterable[ComponentNode]) -> list[str]:
    """Node ids in preorder (duplicates included)."""
    return [node.id for node in iter_nodes(components)]


def first_duplicate(components: Iterable[ComponentNode]) -> str | None:
    """First id seen twice in preorder, or None."""
    seen: set[str] = set()
    for node in iter_nodes(components):
        if node.id in seen:
            return node.id
        seen.add(node.id)
    return None


def iter_references(components: Iterable[ComponentNode]) -> Iterator[Reference]:
    for node in iter_nodes(components):
        for action in node.actions:
            for update in action.updates:
                if update.target:
                    yield Reference(node.id, action.id, update.target, "action")
        for condition in node.conditions:
            if condition.target:
                yield Reference(node.id, condition.id, condition.target, "condition")


def dangling_targets(components: Iterable[ComponentNode], extra_ids: Iterable[str] = ()) -> set[str]:
    """Referenced ids that resolve to no node.

    ``extra_ids`` names ids that resolve without being nodes (the root alias).
    """
    components = tuple(components)
    known = set(collect_ids(components)) | set(extra_ids)
    return {ref.target for ref in iter_references(components) if ref.target not in known}
