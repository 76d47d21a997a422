import copy

import pytest

from response_formatter.entity import Response
from response_formatter.filters import (
    LEAF,
    build_exclusion_table,
    build_inclusion_tree,
    exclusion_filter,
    inclusion_filter,
    prune_by_exclusion,
    prune_by_inclusion,
    select_by_inclusion,
)


def test_inclusion_tree_shares_prefixes():
    tree = build_inclusion_tree(["a.b", "a.c.d", "e"])
    assert tree == {"a": {"b": LEAF, "c": {"d": LEAF}}, "e": LEAF}


def test_inclusion_tree_last_path_wins_on_prefix_overlap():
    assert build_inclusion_tree(["a.b", "a"]) == {"a": LEAF}
    assert build_inclusion_tree(["a", "a.b"]) == {"a": {"b": LEAF}}


def test_prune_keeps_declared_leaf_and_its_ancestry():
    data = {"a": {"b": 1, "c": 2}, "d": 3}
    pruned, discard = prune_by_inclusion(build_inclusion_tree(["a.b"]), data)
    assert pruned is data
    assert discard is False
    assert data == {"a": {"b": 1}}


def test_prune_reports_discard_when_nothing_matches():
    data = {"x": 1}
    _, discard = prune_by_inclusion(build_inclusion_tree(["a.b"]), data)
    assert discard is True


def test_prune_removes_branch_with_no_matching_leaf():
    data = {"a": {"z": 1}, "k": 2}
    _, discard = prune_by_inclusion(build_inclusion_tree(["a.b", "k"]), data)
    assert discard is False
    assert data == {"k": 2}


def test_prune_drops_shape_mismatch():
    data = {"a": [1, 2], "b": 5}
    prune_by_inclusion(build_inclusion_tree(["a.x", "b"]), data)
    assert data == {"b": 5}


def test_leaf_keeps_whole_subtree_untouched():
    data = {"a": {"b": {"c": 1, "d": [1, 2]}}}
    prune_by_inclusion(build_inclusion_tree(["a.b"]), data)
    assert data == {"a": {"b": {"c": 1, "d": [1, 2]}}}


def test_prune_does_not_touch_the_tree():
    tree = build_inclusion_tree(["a.b.c"])
    snapshot = copy.deepcopy(tree)
    prune_by_inclusion(tree, {"a": {"b": {"c": 1, "x": 2}, "y": 3}})
    assert tree == snapshot


def test_deep_partial_match():
    data = {"a": {"b": {"c": 1, "x": 2}, "y": {"z": 3}}, "q": 0}
    prune_by_inclusion(build_inclusion_tree(["a.b.c", "a.y.missing"]), data)
    assert data == {"a": {"b": {"c": 1}}}


def test_exclusion_table_compilation():
    table = build_exclusion_table(["a.b", "a.c", "d", "e.f.g"])
    assert table == {"a": ["b", "c"], "d": [], "e": ["f"]}


def test_exclusion_whole_field_resets_sub_list():
    assert build_exclusion_table(["a.b", "a"]) == {"a": []}
    assert build_exclusion_table(["a", "a.b"]) == {"a": ["b"]}


def test_exclusion_leaves_other_fields_alone():
    data = {"a": {"b": 1, "c": 2}, "d": {"e": [1, 2]}, "f": "x"}
    prune_by_exclusion(build_exclusion_table(["a.b", "f"]), data)
    assert data == {"a": {"c": 2}, "d": {"e": [1, 2]}}


def test_exclusion_keeps_emptied_sub_mapping():
    data = {"a": {"b": 1}}
    prune_by_exclusion(build_exclusion_table(["a.b"]), data)
    assert data == {"a": {}}


@pytest.mark.parametrize("value", [1, "text", [1, 2], None])
def test_exclusion_ignores_non_mapping_parent(value):
    data = {"a": value, "b": 2}
    prune_by_exclusion(build_exclusion_table(["a.x"]), data)
    assert data == {"a": value, "b": 2}


def test_exclusion_missing_parent_is_not_created():
    data = {"b": 2}
    prune_by_exclusion(build_exclusion_table(["a.x"]), data)
    assert data == {"b": 2}


def test_select_leaves_input_untouched():
    data = {"a": {"b": 1, "c": 2}, "d": 3}
    snapshot = copy.deepcopy(data)
    assert select_by_inclusion(["a.b", "a.z", "d.e"], data) == {"a": {"b": 1}}
    assert data == snapshot


@pytest.mark.parametrize(
    "paths,data",
    [
        (["a.b"], {"a": {"b": 1, "c": 2}, "d": 3}),
        (["a.b"], {"x": 1}),
        (["a.b.c", "d"], {"a": {"b": {"c": [1], "e": 0}}, "d": None}),
        (["a.b", "c.d"], {"a": 1, "c": {"d": {"e": 1}}}),
    ],
)
def test_strategies_agree(paths, data):
    deleted = Response(data=copy.deepcopy(data))
    accumulated = Response(data=copy.deepcopy(data))
    inclusion_filter(paths)(deleted)
    inclusion_filter(paths, "accumulate")(accumulated)
    assert deleted.data == accumulated.data


def test_deletion_filter_clears_data_when_nothing_matches():
    entity = Response(data={"x": 1, "a": {"c": 2}})
    inclusion_filter(["a.b"])(entity)
    assert entity.data == {}


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError, match="strategy"):
        inclusion_filter(["a"], "copy")


def test_exclusion_filter_mutates_entity_data():
    entity = Response(data={"a": 1, "b": 2}, is_complete=True)
    exclusion_filter(["a"])(entity)
    assert entity.data == {"b": 2}
    assert entity.is_complete is True
