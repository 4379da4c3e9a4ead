"""
Prerequisite Expressions

A prerequisite gates whether a technology may be unlocked. It is a closed
tagged variant:

    NoPrerequisite()       always satisfied
    And(ids)               every id must be unlocked
    Or(ids)                at least one id must be unlocked

An empty id list in And/Or means "no prerequisites" and is satisfied.
`normalize` folds those empty forms into NoPrerequisite.

The expression classes are structure only. Evaluation lives in the
module-level `evaluate` function, which dispatches exhaustively over
the variant.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Iterable, Tuple


class PrerequisiteKind(Enum):
    """
    Kinds of prerequisite, with the keyword used by the line format.

    NONE has no keyword of its own; it is written as an AND with no ids.
    """

    NONE = "None"
    AND = "And"
    OR = "Or"


def _as_ids(ids) -> Tuple[str, ...]:
    # a bare string is one id, not a sequence of characters
    if isinstance(ids, str):
        return (ids,)
    return tuple(ids)


class Prerequisite(ABC):
    """
    Base class for prerequisite expressions.

    Subclasses are frozen dataclasses so they can be shared between
    technologies and compared by value.
    """

    kind: PrerequisiteKind

    @property
    def ids(self) -> Tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class NoPrerequisite(Prerequisite):
    """No prerequisites. A technology gated by this is a root."""

    kind = PrerequisiteKind.NONE


@dataclass(frozen=True)
class And(Prerequisite):
    """
    All of `required` must be unlocked.

    Example:
        And(("pottery", "mining"))
    """

    required: Tuple[str, ...] = ()
    kind = PrerequisiteKind.AND

    def __post_init__(self):
        object.__setattr__(self, "required", _as_ids(self.required))

    @property
    def ids(self) -> Tuple[str, ...]:
        return self.required


@dataclass(frozen=True)
class Or(Prerequisite):
    """
    At least one of `alternatives` must be unlocked.

    Example:
        Or(("pottery", "mining"))
    """

    alternatives: Tuple[str, ...] = ()
    kind = PrerequisiteKind.OR

    def __post_init__(self):
        object.__setattr__(self, "alternatives", _as_ids(self.alternatives))

    @property
    def ids(self) -> Tuple[str, ...]:
        return self.alternatives


def make_prerequisite(kind: PrerequisiteKind, ids: Iterable[str]) -> Prerequisite:
    """Build a normalized prerequisite from a kind and an id list."""
    ids = tuple(ids)
    if kind == PrerequisiteKind.NONE or not ids:
        return NoPrerequisite()
    if kind == PrerequisiteKind.AND:
        return And(ids)
    if kind == PrerequisiteKind.OR:
        return Or(ids)
    raise TypeError(f"Unsupported prerequisite kind: {kind}")


def normalize(prerequisite: Prerequisite | None) -> Prerequisite:
    """Fold None and empty And/Or into NoPrerequisite."""
    if prerequisite is None:
        return NoPrerequisite()
    if not isinstance(prerequisite, Prerequisite):
        raise TypeError(f"Unsupported prerequisite type: {type(prerequisite)}")
    return make_prerequisite(prerequisite.kind, prerequisite.ids)


def evaluate(prerequisite: Prerequisite, unlocked: AbstractSet[str]) -> bool:
    """
    Evaluate a prerequisite against the set of unlocked ids.

    Ids absent from `unlocked` (including ids that name no technology at
    all) count as locked.
    """
    if isinstance(prerequisite, NoPrerequisite):
        return True
    if isinstance(prerequisite, And):
        return all(tech_id in unlocked for tech_id in prerequisite.required)
    if isinstance(prerequisite, Or):
        if not prerequisite.alternatives:
            return True
        return any(tech_id in unlocked for tech_id in prerequisite.alternatives)
    raise TypeError(f"Unsupported prerequisite type: {type(prerequisite)}")


def missing_ids(prerequisite: Prerequisite, unlocked: AbstractSet[str]) -> list:
    """Ids that keep `prerequisite` from being satisfied (empty when satisfied)."""
    if evaluate(prerequisite, unlocked):
        return []
    return [tech_id for tech_id in prerequisite.ids if tech_id not in unlocked]


def references(prerequisite: Prerequisite, tech_id: str) -> bool:
    """True if `tech_id` appears in the prerequisite."""
    return tech_id in prerequisite.ids


__all__ = [
    "PrerequisiteKind",
    "Prerequisite",
    "NoPrerequisite",
    "And",
    "Or",
    "make_prerequisite",
    "normalize",
    "evaluate",
    "missing_ids",
    "references",
]
