"""
Tests for tree snapshots.

These tests ensure lossless JSON/YAML round-trip, including unlock state,
using the explicit functions in `techtree.serialization`.
"""

from techtree.examples import build_example_tree
from techtree.model import Technology
from techtree.prerequisites import NoPrerequisite, Or
from techtree.tree import TechnologyTree
from techtree.serialization import (
    prerequisite_from_dict,
    prerequisite_to_dict,
    tree_from_dict,
    tree_from_json,
    tree_from_yaml,
    tree_to_dict,
    tree_to_json,
    tree_to_yaml,
)


def build_sample_tree():
    tree = build_example_tree()
    tree.unlock("pottery")
    tree.unlock("writing")
    return tree


def test_dict_roundtrip():
    tree = build_sample_tree()
    before = tree_to_dict(tree)
    after = tree_to_dict(tree_from_dict(before))
    assert before == after


def test_json_roundtrip():
    tree = build_sample_tree()
    before = tree_to_dict(tree)
    restored = tree_from_json(tree_to_json(tree))
    assert tree_to_dict(restored) == before
    assert restored.unlocked_ids() == {"pottery", "writing"}


def test_yaml_roundtrip():
    tree = build_sample_tree()
    before = tree_to_dict(tree)
    restored = tree_from_yaml(tree_to_yaml(tree))
    assert tree_to_dict(restored) == before
    assert restored.ids() == tree.ids()


def test_prerequisite_dicts():
    assert prerequisite_to_dict(Or(("a", "b"))) == {"kind": "or", "ids": ["a", "b"]}
    assert prerequisite_to_dict(NoPrerequisite()) == {"kind": "none", "ids": []}
    assert prerequisite_from_dict(None) == NoPrerequisite()
    assert prerequisite_from_dict({"kind": "or", "ids": []}) == NoPrerequisite()


def test_technology_defaults():
    tree = tree_from_dict({"technologies": [{"id": "a"}]})
    tech = tree.get("a")
    assert tech == Technology(id="a", name="a")


def test_empty_yaml():
    assert len(tree_from_yaml("")) == 0


def test_snapshot_keeps_unlock_state_but_add_does_not():
    """Restoring a snapshot keeps progress; re-adding its technologies resets it."""
    restored = tree_from_dict(tree_to_dict(build_sample_tree()))
    assert restored.unlocked_ids() == {"pottery", "writing"}
    assert restored.is_unlockable("education") is False

    rebuilt = TechnologyTree(list(restored))
    assert rebuilt.unlocked_ids() == set()
