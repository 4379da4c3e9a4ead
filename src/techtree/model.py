"""
Core Technology Model

A Technology is one node of the dependency graph. It is a plain data
holder: the registry (`techtree.tree.TechnologyTree`) owns the rules for
unlocking it.

ARCHITECTURAL RULE:
    Technology is frozen. A tree stores its own locked copy on add and
    swaps in an unlocked copy on unlock, so `unlocked` only goes from
    False to True, and only inside TechnologyTree.unlock.
"""

from dataclasses import dataclass, field

from .errors import InvalidCostError
from .prerequisites import NoPrerequisite, Prerequisite, normalize


@dataclass(frozen=True)
class Technology:
    """
    A researchable technology.

    Properties:
        id:
            Unique identifier within a tree (e.g. "pottery").
            Immutable, like every other field.

        name:
            Display name (e.g. "Pottery")

        description:
            Free text

        prerequisite:
            Expression gating the unlock. Empty And/Or and None are
            normalized to NoPrerequisite on construction.

        cost:
            Non-negative integer. Stored only; the engine never does
            arithmetic on it.

        unlocked:
            Whether the technology has been unlocked.
    """

    id: str
    name: str
    description: str = ""
    prerequisite: Prerequisite = field(default_factory=NoPrerequisite)
    cost: int = 0
    unlocked: bool = False

    def __post_init__(self):
        object.__setattr__(self, "prerequisite", normalize(self.prerequisite))
        if isinstance(self.cost, bool) or not isinstance(self.cost, int) or self.cost < 0:
            raise InvalidCostError(f"Cost of '{self.id}' must be a non-negative integer, got {self.cost!r}")

    @property
    def is_root(self) -> bool:
        """True when the technology has no prerequisites."""
        return isinstance(self.prerequisite, NoPrerequisite)
