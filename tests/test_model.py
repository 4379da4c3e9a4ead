"""
Tests for the Technology model object.
"""

import pytest
from techtree.errors import InvalidCostError
from techtree.model import Technology
from techtree.prerequisites import And, NoPrerequisite, Or


class TestTechnology:
    """Test Technology objects."""

    def test_minimal_technology(self):
        """Should create a locked root technology with defaults."""
        tech = Technology(id="pottery", name="Pottery")
        assert tech.description == ""
        assert tech.prerequisite == NoPrerequisite()
        assert tech.cost == 0
        assert tech.unlocked is False
        assert tech.is_root

    def test_full_technology(self):
        tech = Technology(
            id="irrigation",
            name="Irrigation",
            description="Advanced irrigation techniques.",
            prerequisite=And(("pottery",)),
            cost=10,
        )
        assert tech.prerequisite.ids == ("pottery",)
        assert tech.cost == 10
        assert not tech.is_root

    def test_none_prerequisite_normalized(self):
        tech = Technology(id="a", name="A", prerequisite=None)
        assert tech.prerequisite == NoPrerequisite()

    def test_empty_or_normalized(self):
        """Empty id lists become NoPrerequisite, making the technology a root."""
        tech = Technology(id="a", name="A", prerequisite=Or(()))
        assert tech.prerequisite == NoPrerequisite()
        assert tech.is_root

    def test_negative_cost_rejected(self):
        with pytest.raises(InvalidCostError):
            Technology(id="a", name="A", cost=-1)

    def test_non_integer_cost_rejected(self):
        with pytest.raises(InvalidCostError):
            Technology(id="a", name="A", cost=1.5)
        with pytest.raises(ValueError):
            Technology(id="a", name="A", cost="5")

    def test_technology_is_immutable(self):
        """Fields cannot be reassigned once created."""
        tech = Technology(id="a", name="A")
        with pytest.raises(AttributeError):
            tech.unlocked = True
        with pytest.raises(AttributeError):
            tech.id = "b"
