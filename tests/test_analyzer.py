"""
Tests for the Tree Analyzer.

Tests verify that the analyzer correctly:
    - Finds roots, leaves and depth
    - Detects dangling references and cycles
    - Reports unreachable technologies and unlock progress
"""

from techtree.analyzer import analyze_tree, find_cycle
from techtree.examples import build_example_tree
from techtree.model import Technology
from techtree.prerequisites import And, Or
from techtree.tree import TechnologyTree


def test_example_tree_report():
    """The example tree is clean: no cycles, no dangling ids."""
    report = analyze_tree(build_example_tree())

    assert report.total_technologies == 7
    assert report.total_unlocked == 0
    assert report.roots == ["pottery", "mining"]
    assert report.leaves == ["irrigation", "education", "bronze_working"]
    assert report.max_depth == 2
    assert not report.has_cycles
    assert report.dangling_references == {}
    assert report.unreachable == set()
    assert report.warnings == []


def test_unlock_progress():
    tree = build_example_tree()
    tree.unlock("pottery")
    report = analyze_tree(tree)

    assert report.total_unlocked == 1
    assert report.unlockable == ["mining", "irrigation", "writing", "bronze_working"]
    assert round(report.unlocked_percent, 1) == 14.3


def test_dangling_references():
    tree = TechnologyTree([
        Technology(id="a", name="A"),
        Technology(id="b", name="B", prerequisite=And(("a", "ghost"))),
    ])
    report = analyze_tree(tree)

    assert report.dangling_references == {"b": ["ghost"]}
    assert any("ghost" in w for w in report.warnings)


def test_cycle_detection():
    tree = TechnologyTree([
        Technology(id="root", name="Root"),
        Technology(id="a", name="A", prerequisite=Or(("root", "b"))),
        Technology(id="b", name="B", prerequisite=And(("a",))),
    ])
    report = analyze_tree(tree)

    assert report.has_cycles
    assert report.cycle_example[0] == report.cycle_example[-1]
    assert set(report.cycle_example) == {"a", "b"}
    assert any("Cycle detected" in w for w in report.warnings)


def test_find_cycle_none_for_dag():
    assert find_cycle(build_example_tree()) is None


def test_unreachable_technologies():
    tree = TechnologyTree([
        Technology(id="a", name="A", prerequisite=And(("b",))),
        Technology(id="b", name="B", prerequisite=And(("a",))),
    ])
    report = analyze_tree(tree)

    assert report.unreachable == {"a", "b"}
    assert report.roots == []
    assert any("No root technologies" in w for w in report.warnings)


def test_empty_tree():
    report = analyze_tree(TechnologyTree())
    assert report.total_technologies == 0
    assert report.unlocked_percent == 0.0
    assert report.warnings == []
