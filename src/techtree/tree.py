"""
Technology Tree

The owning registry of Technology nodes, keyed by id in insertion order.

Rules enforced here:
    - ids are unique (add raises DuplicateIdError)
    - unlocking is idempotent and only goes False -> True
    - failed operations leave the tree unchanged

Rules NOT enforced here:
    - acyclicity (see techtree.analyzer for cycle reports)
    - referential integrity: a prerequisite may name an id that is not in
      the tree (a dangling reference). Such an id is never unlocked, so
      anything requiring it stays locked. remove() does not clean up
      references to the removed id.

Not thread-safe. Callers sharing a tree between threads must lock around
every call.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterator, List, Set

from .errors import DuplicateIdError, NotFoundError, PrerequisiteNotMetError
from .model import Technology
from .prerequisites import And, NoPrerequisite, Or, evaluate, missing_ids, references

logger = logging.getLogger(__name__)


class TechnologyTree:
    """Registry of technologies with prerequisite-gated unlocking."""

    def __init__(self, technologies=None):
        self._technologies: Dict[str, Technology] = {}
        for technology in technologies or []:
            self.add(technology)

    @classmethod
    def restore(cls, technologies) -> "TechnologyTree":
        """
        Rebuild a saved tree, keeping each technology's `unlocked` flag.

        Unlike add(), nothing is reset to locked. Meant for snapshots
        written by techtree.serialization.

        Raises:
            DuplicateIdError: if two technologies share an id
        """
        tree = cls()
        for technology in technologies:
            if technology.id in tree._technologies:
                raise DuplicateIdError(technology.id)
            tree._technologies[technology.id] = technology
        return tree

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._technologies)

    def __contains__(self, tech_id: object) -> bool:
        return tech_id in self._technologies

    def __iter__(self) -> Iterator[Technology]:
        return iter(list(self._technologies.values()))

    def __repr__(self) -> str:
        return f"TechnologyTree({len(self)} technologies, {len(self.unlocked_ids())} unlocked)"

    def ids(self) -> List[str]:
        """All ids in insertion order."""
        return list(self._technologies)

    # ------------------------------------------------------------------
    # Registry operations
    # ------------------------------------------------------------------

    def add(self, technology: Technology) -> None:
        """
        Register a technology.

        The tree always starts it locked, whatever its `unlocked` flag
        says; only unlock() can change that.

        Raises:
            DuplicateIdError: if the id is already registered
        """
        if technology.id in self._technologies:
            raise DuplicateIdError(technology.id)
        if technology.unlocked:
            technology = replace(technology, unlocked=False)
        self._technologies[technology.id] = technology
        logger.debug("Added technology %s", technology.id)

    def remove(self, tech_id: str) -> Technology:
        """
        Remove a technology and return it.

        Other technologies that reference `tech_id` are left as they are,
        so their references become dangling.

        Raises:
            NotFoundError: if the id is not registered
        """
        if tech_id not in self._technologies:
            raise NotFoundError(tech_id)
        technology = self._technologies.pop(tech_id)
        logger.debug("Removed technology %s", tech_id)
        return technology

    def get(self, tech_id: str) -> Technology:
        """
        Retrieve a technology by id.

        Raises:
            NotFoundError: if the id is not registered
        """
        try:
            return self._technologies[tech_id]
        except KeyError:
            raise NotFoundError(tech_id) from None

    # ------------------------------------------------------------------
    # Unlock state
    # ------------------------------------------------------------------

    def unlocked_ids(self) -> Set[str]:
        """Ids of every unlocked technology."""
        return {tech.id for tech in self._technologies.values() if tech.unlocked}

    def is_unlockable(self, tech_id: str) -> bool:
        """
        True if the technology is locked and its prerequisite is satisfied.

        Raises:
            NotFoundError: if the id is not registered
        """
        technology = self.get(tech_id)
        if technology.unlocked:
            return False
        return evaluate(technology.prerequisite, self.unlocked_ids())

    def unlock(self, tech_id: str) -> Technology:
        """
        Unlock a technology.

        Unlocking an already unlocked technology succeeds without change.

        Raises:
            NotFoundError: if the id is not registered
            PrerequisiteNotMetError: if the prerequisite is not satisfied
        """
        technology = self.get(tech_id)
        if technology.unlocked:
            return technology

        unlocked = self.unlocked_ids()
        if not evaluate(technology.prerequisite, unlocked):
            raise PrerequisiteNotMetError(tech_id, missing_ids(technology.prerequisite, unlocked))

        technology = replace(technology, unlocked=True)
        self._technologies[tech_id] = technology
        logger.debug("Unlocked technology %s", tech_id)
        return technology

    def unlockable(self) -> List[str]:
        """Ids of all technologies that could be unlocked right now."""
        unlocked = self.unlocked_ids()
        return [
            tech.id
            for tech in self._technologies.values()
            if not tech.unlocked and evaluate(tech.prerequisite, unlocked)
        ]

    # ------------------------------------------------------------------
    # Graph queries
    # ------------------------------------------------------------------

    def roots(self) -> List[Technology]:
        """Technologies without prerequisites, in insertion order."""
        return [tech for tech in self._technologies.values() if tech.is_root]

    def dependents(self, tech_id: str) -> List[Technology]:
        """
        Technologies whose prerequisite directly references `tech_id`.

        `tech_id` does not have to be registered, so this also lists the
        technologies left pointing at a removed id.
        """
        return [
            tech
            for tech in self._technologies.values()
            if references(tech.prerequisite, tech_id)
        ]

    def dangling_references(self) -> Dict[str, List[str]]:
        """Map of technology id -> referenced ids that are not in the tree."""
        dangling: Dict[str, List[str]] = {}
        for tech in self._technologies.values():
            unknown = [ref for ref in tech.prerequisite.ids if ref not in self._technologies]
            if unknown:
                dangling[tech.id] = unknown
        return dangling

    def research_path(self, target: str) -> List[str]:
        """
        Order in which to unlock technologies so that `target` is unlocked.

        Each id in the returned list is unlockable once the ids before it
        are unlocked. The list ends with `target`, or is empty when
        `target` is already unlocked.

        And requires every branch. Or is satisfied by an alternative that
        is already unlocked (or already planned); otherwise the first
        alternative, in declared order, that can itself be reached.

        Raises:
            NotFoundError: if `target` is not registered
            PrerequisiteNotMetError: if no path exists, e.g. because of a
                dangling reference or a cycle
        """
        self.get(target)

        plan: List[str] = []
        planned: Set[str] = self.unlocked_ids()
        in_progress: Set[str] = set()

        def resolve(tech_id: str) -> bool:
            if tech_id in planned:
                return True
            if tech_id not in self._technologies or tech_id in in_progress:
                return False

            in_progress.add(tech_id)
            prerequisite = self._technologies[tech_id].prerequisite
            plan_len = len(plan)
            planned_before = set(planned)

            if isinstance(prerequisite, NoPrerequisite):
                ok = True
            elif isinstance(prerequisite, And):
                ok = all(resolve(dep) for dep in prerequisite.required)
            elif isinstance(prerequisite, Or):
                ok = any(dep in planned for dep in prerequisite.alternatives)
                if not ok:
                    for dep in prerequisite.alternatives:
                        if resolve(dep):
                            ok = True
                            break
            else:
                raise TypeError(f"Unsupported prerequisite type: {type(prerequisite)}")

            in_progress.discard(tech_id)
            if not ok:
                # drop anything a failed branch planned
                del plan[plan_len:]
                planned.intersection_update(planned_before)
                return False

            plan.append(tech_id)
            planned.add(tech_id)
            return True

        if not resolve(target):
            technology = self._technologies[target]
            raise PrerequisiteNotMetError(target, missing_ids(technology.prerequisite, self.unlocked_ids()))
        return plan
