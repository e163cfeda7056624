"""Tests for the schema validator."""

from copy import deepcopy

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st
from returns.pipeline import is_successful

from schema_engine.core import SchemaValidationError
from schema_engine.registry import ComponentDefinition, create_default_registry
from schema_engine.schema import Schema
from schema_engine.validation import Sanitizer, Validator


def _node(node_id, node_type="container", **extra):
    return {"id": node_id, "type": node_type, "props": {}, **extra}


def _candidate(*components):
    return {"id": "doc", "layout": {"mode": "stack"}, "components": list(components)}


# ============================================================================
# Acceptance
# ============================================================================

@pytest.mark.unit
def test_valid_candidate(validator, make_candidate, stat_card, table_node):
    """A well-formed candidate yields a typed document and no issues."""
    result = validator.validate(make_candidate(stat_card, table_node))

    assert result.valid
    assert result.errors == ()
    assert result.warnings == ()
    assert isinstance(result.document, Schema)
    assert [c.id for c in result.document.components] == ["a", "b"]
    assert result.document.components[0].props == {"label": "Revenue", "value": 1200}


@pytest.mark.unit
def test_accepts_typed_document(validator, document):
    """An already typed document validates to an equal document."""
    result = validator.validate(document)

    assert result.valid
    assert result.document == document


@pytest.mark.unit
def test_candidate_not_modified(validator, make_candidate, stat_card):
    """Validation never edits its input."""
    candidate = make_candidate(stat_card)
    snapshot = deepcopy(candidate)

    validator.validate(candidate)

    assert candidate == snapshot


@pytest.mark.unit
def test_as_result(validator, make_candidate, stat_card):
    """Results convert to the Result pattern."""
    ok = validator.validate(make_candidate(stat_card)).as_result()
    assert is_successful(ok)
    assert ok.unwrap().id == "dashboard"

    bad = validator.validate(make_candidate({"id": "w", "type": "unknown-widget"})).as_result()
    assert not is_successful(bad)
    assert isinstance(bad.failure(), SchemaValidationError)
    assert bad.failure().node_ids == ["w"]


# ============================================================================
# Structure
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize("candidate", ["hello", 42, None, ["a"]])
def test_non_object_candidate(validator, candidate):
    """Anything but an object is a structural error."""
    result = validator.validate(candidate)

    assert not result.valid
    assert result.document is None
    assert [e.code for e in result.errors] == ["structure"]


@pytest.mark.unit
def test_missing_required_fields(validator, make_candidate, stat_card):
    """Missing layout is reported with its path."""
    candidate = make_candidate(stat_card)
    del candidate["layout"]

    result = validator.validate(candidate)

    assert not result.valid
    assert result.errors[0].code == "structure"
    assert result.errors[0].path == "layout"


@pytest.mark.unit
def test_structural_error_names_node(validator, make_candidate, stat_card):
    """A malformed node is identified by its id."""
    broken = {"id": "x", "props": {}}
    result = validator.validate(make_candidate(stat_card, {"id": "card", "type": "card", "children": [broken]}))

    assert not result.valid
    assert result.errors[0].code == "structure"
    assert result.errors[0].node_id == "x"


def _nested(levels):
    value = {"leaf": 1}
    for _ in range(levels):
        value = {"next": value}
    return value


def _depth(value):
    if isinstance(value, dict):
        return 1 + max((_depth(item) for item in value.values()), default=0)
    return 0


@pytest.mark.unit
def test_deep_props_are_sanitized_not_rejected(validator, make_candidate, stat_card):
    """Props nested past the tree depth limit are narrowed, not a structural error."""
    stat_card["props"]["extra"] = _nested(70)

    result = validator.validate(make_candidate(stat_card))

    assert result.valid, result.errors
    assert ("sanitized", "a") in {(w.code, w.node_id) for w in result.warnings}
    props = result.document.components[0].props
    assert props["label"] == "Revenue"
    assert _depth(props["extra"]) <= validator.sanitizer.max_depth


@pytest.mark.unit
def test_deep_component_tree_rejected(registry):
    """Component nesting past the limit is a structural error naming the node."""
    chain = _node("n4")
    for index in (3, 2, 1):
        chain = _node(f"n{index}", children=[chain])

    result = Validator(registry, max_document_depth=3).validate(_candidate(chain))

    assert not result.valid
    assert result.errors[0].code == "structure"
    assert result.errors[0].node_id == "n4"


# ============================================================================
# Uniqueness
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "components,duplicate",
    [
        ([_node("a"), _node("a")], "a"),
        ([_node("p", children=[_node("a")]), _node("a")], "a"),
        ([_node("p", children=[_node("q", children=[_node("x")])]), _node("r", children=[_node("x")])], "x"),
        ([_node("p", children=[_node("p")])], "p"),
    ],
)
def test_duplicate_ids_anywhere(validator, components, duplicate):
    """Ids must be unique across the whole tree, not just among siblings."""
    result = validator.validate(_candidate(*components))

    assert not result.valid
    assert [e.code for e in result.errors] == ["duplicate_id"]
    assert result.errors[0].node_id == duplicate


# ============================================================================
# Types and Props
# ============================================================================

@pytest.mark.unit
def test_unknown_type(validator, make_candidate, stat_card):
    """Unregistered types are rejected and name the offending node."""
    result = validator.validate(make_candidate(stat_card, {"id": "w", "type": "unknown-widget"}))

    assert not result.valid
    assert [(e.code, e.node_id) for e in result.errors] == [("unknown_type", "w")]


@pytest.mark.unit
def test_invalid_props(validator, make_candidate):
    """Props are checked by the registry predicate."""
    result = validator.validate(make_candidate({"id": "a", "type": "stat-card", "props": {"label": "x"}}))

    assert [(e.code, e.node_id) for e in result.errors] == [("invalid_props", "a")]


@pytest.mark.unit
def test_errors_accumulate(validator, make_candidate):
    """Type and prop errors are all reported, in document order."""
    result = validator.validate(
        make_candidate(
            {"id": "a", "type": "stat-card", "props": {}},
            {"id": "card", "type": "card", "children": [{"id": "w", "type": "unknown-widget"}]},
        )
    )

    assert [(e.code, e.node_id) for e in result.errors] == [("invalid_props", "a"), ("unknown_type", "w")]


@pytest.mark.unit
def test_raising_predicate_counts_as_rejection(make_candidate):
    """A predicate that raises rejects the props instead of escaping."""
    registry = create_default_registry()

    def explode(props):
        raise RuntimeError("boom")

    registry.register(ComponentDefinition(type="fragile", props_validator=explode))
    result = Validator(registry).validate(make_candidate({"id": "f", "type": "fragile"}))

    assert [(e.code, e.node_id) for e in result.errors] == [("invalid_props", "f")]


# ============================================================================
# References
# ============================================================================

def _button_targeting(target):
    return {
        "id": "btn",
        "type": "button",
        "props": {"label": "Go"},
        "actions": [
            {"id": "go", "type": "click", "updates": [{"type": "remove", "target": target}]}
        ],
    }


@pytest.mark.unit
def test_action_reference_resolves(validator, make_candidate, stat_card):
    """Action updates targeting existing nodes are fine."""
    assert validator.validate(make_candidate(stat_card, _button_targeting("a"))).valid


@pytest.mark.unit
def test_dangling_action_reference(validator, make_candidate, stat_card):
    """Action updates targeting missing nodes are errors."""
    result = validator.validate(make_candidate(stat_card, _button_targeting("ghost")))

    assert [(e.code, e.node_id) for e in result.errors] == [("dangling_reference", "btn")]


@pytest.mark.unit
def test_dangling_condition_reference(validator, make_candidate, stat_card):
    """Condition targets must resolve as well."""
    node = dict(stat_card, conditions=[{"id": "c", "type": "visibility", "expression": "x", "target": "ghost"}])

    result = validator.validate(make_candidate(node))

    assert [(e.code, e.node_id) for e in result.errors] == [("dangling_reference", "a")]


@pytest.mark.unit
def test_tolerated_reference_is_warning(validator, make_candidate, stat_card):
    """Tolerated targets downgrade dangling references to warnings."""
    result = validator.validate(make_candidate(stat_card, _button_targeting("ghost")), tolerated_refs={"ghost"})

    assert result.valid
    assert [(w.code, w.node_id) for w in result.warnings] == [("dangling_reference", "btn")]


@pytest.mark.unit
def test_root_reference_resolves(validator, make_candidate, stat_card):
    """The root alias is a valid target."""
    node = _button_targeting("root")
    node["actions"][0]["updates"] = [{"type": "reorder", "target": "root", "order": ["btn", "a"]}]

    assert validator.validate(make_candidate(stat_card, node)).valid


# ============================================================================
# Sanitization
# ============================================================================

@pytest.mark.unit
def test_sanitization_warnings(registry):
    """Unsafe prop values are narrowed and reported as warnings."""
    validator = Validator(registry, Sanitizer(max_string_length=8, max_depth=2))
    candidate = _candidate(
        _node(
            "c1",
            props={
                "fn": lambda: 1,
                "title": "x" * 20,
                "deep": {"a": {"b": {"c": 1}}},
                "obj": object(),
                "nan": float("nan"),
            },
        )
    )

    result = validator.validate(candidate)

    assert result.valid
    assert result.document.components[0].props == {"title": "x" * 8, "deep": {"a": {}}}
    assert len(result.warnings) == 5
    assert {(w.code, w.node_id) for w in result.warnings} == {("sanitized", "c1")}
    assert candidate["components"][0]["props"]["title"] == "x" * 20


@pytest.mark.unit
def test_sanitization_before_predicate(registry):
    """Predicates see the sanitized props."""
    seen = []
    registry.register(ComponentDefinition(type="spy", props_validator=lambda props: seen.append(dict(props)) or True))

    Validator(registry).validate(_candidate({"id": "p", "type": "spy", "props": {"fn": print, "x": 1}}))

    assert seen == [{"x": 1}]


# ============================================================================
# Single Nodes
# ============================================================================

@pytest.mark.unit
def test_validate_node(validator, table_node):
    """Subtrees validate on their own."""
    result = validator.validate_node(table_node)

    assert result.valid
    assert result.node.id == "b"


@pytest.mark.unit
def test_validate_node_rejects_unknown_child(validator):
    """Subtree validation covers descendants."""
    result = validator.validate_node(_node("p", children=[{"id": "w", "type": "unknown-widget"}]))

    assert not result.valid
    assert result.errors[0].node_id == "w"


# ============================================================================
# Determinism
# ============================================================================

_VALIDATOR = Validator(create_default_registry())

prop_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=10),
    lambda children: st.lists(children, max_size=3) | st.dictionaries(st.text(max_size=4), children, max_size=3),
    max_leaves=8,
)


@hypothesis_settings(max_examples=50, deadline=None)
@given(
    props=st.dictionaries(st.text(min_size=1, max_size=6), prop_values, max_size=4),
    node_type=st.sampled_from(["container", "stat-card", "unknown-widget"]),
)
def test_validation_deterministic(props, node_type):
    """Property test: the same candidate always yields the same result."""
    candidate = _candidate({"id": "n", "type": node_type, "props": props})

    assert _VALIDATOR.validate(candidate) == _VALIDATOR.validate(candidate)
