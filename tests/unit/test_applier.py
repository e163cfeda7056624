"""Tests for the evolution applier."""

import pytest
from returns.pipeline import is_successful

from schema_engine.core import (
    DuplicateId,
    InvalidOperation,
    InvalidReorder,
    TargetNotFound,
)
from schema_engine.schema import EvolutionOperation, find_node


def ids(nodes):
    return [node.id for node in nodes]


def ok(result):
    assert is_successful(result), result.failure()
    return result.unwrap()


def failure(result):
    assert not is_successful(result)
    return result.failure()


@pytest.fixture
def single(validator, make_candidate, stat_card):
    """Document holding only the stat card."""
    return validator.validate(make_candidate(stat_card)).document


@pytest.fixture
def nested(validator, nested_candidate):
    return validator.validate(nested_candidate).document


# ============================================================================
# Add
# ============================================================================

@pytest.mark.unit
def test_add_at_root(applier, single, table_node):
    """Adding without a target appends to the root list."""
    result = ok(applier.apply(single, {"type": "add", "schema": table_node}))

    assert ids(result.components) == ["a", "b"]
    assert ids(single.components) == ["a"]


@pytest.mark.unit
def test_add_at_root_alias(applier, single, table_node):
    """``root`` addresses the document root."""
    result = ok(applier.apply(single, {"type": "add", "target": "root", "schema": table_node, "position": 0}))

    assert ids(result.components) == ["b", "a"]


@pytest.mark.unit
def test_add_under_parent_at_position(applier, nested, table_node):
    """Adding under a parent inserts at the requested position."""
    table_node["id"] = "t"
    result = ok(applier.apply(nested, {"type": "add", "target": "card", "schema": table_node, "position": 1}))

    assert ids(find_node(result.components, "card").children) == ["a", "t", "refresh"]


@pytest.mark.unit
def test_add_position_clamped(applier, nested, table_node):
    """Positions past the end append."""
    table_node["id"] = "t"
    result = ok(applier.apply(nested, {"type": "add", "target": "card", "schema": table_node, "position": 99}))

    assert ids(find_node(result.components, "card").children) == ["a", "refresh", "t"]


@pytest.mark.unit
def test_add_missing_parent(applier, single, table_node):
    """Unknown parents fail with TargetNotFound."""
    error = failure(applier.apply(single, {"type": "add", "target": "nope", "schema": table_node}))

    assert isinstance(error, TargetNotFound)
    assert error.target == "nope"


@pytest.mark.unit
def test_add_duplicate_id(applier, document, table_node):
    """Adding an id that already exists fails."""
    error = failure(applier.apply(document, {"type": "add", "schema": table_node}))

    assert isinstance(error, DuplicateId)
    assert error.target == "b"


@pytest.mark.unit
def test_add_invalid_node(applier, single):
    """Added nodes are validated on their own."""
    error = failure(applier.apply(single, {"type": "add", "schema": {"id": "w", "type": "unknown-widget"}}))

    assert isinstance(error, InvalidOperation)


# ============================================================================
# Remove
# ============================================================================

@pytest.mark.unit
def test_remove(applier, document):
    """Removing detaches the node; the input document is unchanged."""
    result = ok(applier.apply(document, {"type": "remove", "target": "b"}))

    assert ids(result.components) == ["a"]
    assert ids(document.components) == ["a", "b"]


@pytest.mark.unit
def test_remove_nested_subtree(applier, nested):
    """Removing a parent removes its whole subtree."""
    result = ok(applier.apply(nested, {"type": "remove", "target": "card"}))

    assert ids(result.components) == ["b"]
    assert find_node(result.components, "a") is None


@pytest.mark.unit
def test_remove_missing(applier, document):
    """Unknown targets fail."""
    assert isinstance(failure(applier.apply(document, {"type": "remove", "target": "zzz"})), TargetNotFound)


# ============================================================================
# Update
# ============================================================================

@pytest.mark.unit
def test_update_merges_props(applier, document):
    """Props merge shallowly; other keys are kept."""
    result = ok(applier.apply(
        document, {"type": "update", "target": "a", "schema": {"props": {"value": 5, "trend": "up"}}}
    ))

    assert result.components[0].props == {"label": "Revenue", "value": 5, "trend": "up"}
    assert document.components[0].props["value"] == 1200


@pytest.mark.unit
def test_update_idempotent(applier, document):
    """Applying the same update twice gives the same document as once."""
    op = EvolutionOperation.model_validate(
        {"type": "update", "target": "a", "schema": {"props": {"value": 5}}}
    )
    once = ok(applier.apply(document, op))
    twice = ok(applier.apply(once, op))

    assert once == twice


@pytest.mark.unit
def test_update_replaces_children(applier, nested):
    """Present non-prop fields replace the target's value wholesale."""
    result = ok(applier.apply(
        nested,
        {"type": "update", "target": "card", "schema": {"children": [{"id": "d", "type": "divider"}]}},
    ))

    card = find_node(result.components, "card")
    assert ids(card.children) == ["d"]
    assert card.props == {"title": "Overview"}


@pytest.mark.unit
def test_update_shares_untouched_subtrees(applier, document):
    """Only the path to the updated node is rebuilt."""
    result = ok(applier.apply(document, {"type": "update", "target": "a", "schema": {"props": {"value": 1}}}))

    assert result.components[1] is document.components[1]


@pytest.mark.unit
def test_update_cannot_change_id(applier, document):
    """A patch naming a different id is rejected."""
    error = failure(applier.apply(document, {"type": "update", "target": "a", "schema": {"id": "z"}}))

    assert isinstance(error, InvalidOperation)


@pytest.mark.unit
def test_update_missing(applier, document):
    """Unknown targets fail."""
    error = failure(applier.apply(document, {"type": "update", "target": "zzz", "schema": {"props": {}}}))

    assert isinstance(error, TargetNotFound)


# ============================================================================
# Morph
# ============================================================================

@pytest.mark.unit
def test_morph_replaces_subtree(applier, validator, make_candidate, kanban_node, stat_card):
    """Morph swaps the node in place; the old id no longer resolves."""
    current = validator.validate(make_candidate(stat_card, kanban_node)).document
    timeline = {"id": "t", "type": "timeline", "props": {"events": []}}

    morphed = ok(applier.apply(current, {"type": "morph", "target": "k", "schema": timeline}))

    assert ids(morphed.components) == ["a", "t"]
    error = failure(applier.apply(morphed, {"type": "update", "target": "k", "schema": {"props": {}}}))
    assert isinstance(error, TargetNotFound)


@pytest.mark.unit
def test_morph_invalid_replacement(applier, document):
    """The replacement must be a valid node."""
    error = failure(applier.apply(
        document, {"type": "morph", "target": "b", "schema": {"id": "b", "type": "table", "props": {}}}
    ))

    assert isinstance(error, InvalidOperation)


# ============================================================================
# Reorder
# ============================================================================

@pytest.mark.unit
def test_reorder_root(applier, document):
    """Root children are permuted."""
    result = ok(applier.apply(document, {"type": "reorder", "target": "root", "order": ["b", "a"]}))

    assert ids(result.components) == ["b", "a"]


@pytest.mark.unit
def test_reorder_children(applier, nested):
    """Children of a parent are permuted."""
    result = ok(applier.apply(nested, {"type": "reorder", "target": "card", "order": ["refresh", "a"]}))

    assert ids(find_node(result.components, "card").children) == ["refresh", "a"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "order",
    [["zzz"], ["a"], ["a", "b", "zzz"], ["a", "a", "b"]],
)
def test_reorder_must_be_permutation(applier, document, order):
    """Unknown, missing or repeated ids are rejected."""
    error = failure(applier.apply(document, {"type": "reorder", "target": "root", "order": order}))

    assert isinstance(error, InvalidReorder)


# ============================================================================
# Batches and Wire Form
# ============================================================================

@pytest.mark.unit
def test_apply_all_in_order(applier, single, table_node):
    """Operations apply in sequence."""
    result = ok(applier.apply_all(single, [
        {"type": "add", "schema": table_node},
        {"type": "reorder", "order": ["b", "a"]},
        {"type": "update", "target": "b", "schema": {"props": {"pageSize": 25}}},
    ]))

    assert ids(result.components) == ["b", "a"]
    assert result.components[0].props["pageSize"] == 25


@pytest.mark.unit
def test_apply_all_first_failure_wins(applier, document):
    """A failing operation aborts the batch."""
    error = failure(applier.apply_all(document, [
        {"type": "remove", "target": "a"},
        {"type": "remove", "target": "zzz"},
        {"type": "remove", "target": "b"},
    ]))

    assert isinstance(error, TargetNotFound)
    assert error.target == "zzz"


@pytest.mark.unit
@pytest.mark.parametrize("payload", [{"type": "remove"}, {"type": "bogus"}, "remove a"])
def test_malformed_operation(applier, document, payload):
    """Malformed operations fail as InvalidOperation."""
    assert isinstance(failure(applier.apply(document, payload)), InvalidOperation)
