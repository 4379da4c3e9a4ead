"""
Tests for prerequisite expressions.

These tests verify:
    - Construction and immutability of the variant
    - AND / OR / none evaluation
    - Empty-list conventions
    - Normalization
"""

import pytest
from techtree.prerequisites import (
    And,
    NoPrerequisite,
    Or,
    Prerequisite,
    PrerequisiteKind,
    evaluate,
    make_prerequisite,
    missing_ids,
    normalize,
    references,
)


class TestConstruction:
    """Test creating prerequisite expressions."""

    def test_variants_are_prerequisites(self):
        assert isinstance(NoPrerequisite(), Prerequisite)
        assert isinstance(And(("a",)), Prerequisite)
        assert isinstance(Or(("a",)), Prerequisite)

    def test_ids_are_tuples(self):
        """Lists passed in should be stored as tuples."""
        prereq = And(["a", "b"])
        assert prereq.required == ("a", "b")
        assert prereq.ids == ("a", "b")

    def test_single_string_is_one_id(self):
        assert Or("pottery").alternatives == ("pottery",)

    def test_kinds(self):
        assert NoPrerequisite().kind == PrerequisiteKind.NONE
        assert And(("a",)).kind == PrerequisiteKind.AND
        assert Or(("a",)).kind == PrerequisiteKind.OR

    def test_immutable(self):
        prereq = And(("a",))
        with pytest.raises(AttributeError):
            prereq.required = ("b",)

    def test_equality_by_value(self):
        assert And(["a", "b"]) == And(("a", "b"))
        assert And(("a",)) != Or(("a",))
        assert NoPrerequisite() == NoPrerequisite()


class TestEvaluate:
    """Test evaluation against an unlocked set."""

    def test_none_always_true(self):
        assert evaluate(NoPrerequisite(), set()) is True

    def test_and_requires_all(self):
        prereq = And(("pottery", "mining"))
        assert not evaluate(prereq, set())
        assert not evaluate(prereq, {"pottery"})
        assert evaluate(prereq, {"pottery", "mining"})

    def test_or_requires_any(self):
        prereq = Or(("pottery", "mining"))
        assert not evaluate(prereq, set())
        assert evaluate(prereq, {"mining"})
        assert evaluate(prereq, {"pottery", "mining"})

    def test_empty_and_is_satisfied(self):
        assert evaluate(And(()), set())

    def test_empty_or_is_satisfied(self):
        """An empty OR means no prerequisites, same as an empty AND."""
        assert evaluate(Or(()), set())

    def test_unknown_ids_count_as_locked(self):
        assert not evaluate(And(("ghost",)), {"pottery"})
        assert evaluate(Or(("ghost", "pottery")), {"pottery"})

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            evaluate("And:pottery", set())


class TestHelpers:
    """Test normalization and inspection helpers."""

    def test_normalize_none(self):
        assert normalize(None) == NoPrerequisite()

    def test_normalize_empty_lists(self):
        assert normalize(And(())) == NoPrerequisite()
        assert normalize(Or(())) == NoPrerequisite()

    def test_normalize_keeps_non_empty(self):
        assert normalize(Or(("a", "b"))) == Or(("a", "b"))

    def test_make_prerequisite(self):
        assert make_prerequisite(PrerequisiteKind.AND, ["a"]) == And(("a",))
        assert make_prerequisite(PrerequisiteKind.OR, []) == NoPrerequisite()

    def test_missing_ids(self):
        assert missing_ids(And(("a", "b")), {"a"}) == ["b"]
        assert missing_ids(Or(("a", "b")), set()) == ["a", "b"]
        assert missing_ids(Or(("a", "b")), {"b"}) == []

    def test_references(self):
        assert references(And(("a", "b")), "b")
        assert not references(NoPrerequisite(), "a")
