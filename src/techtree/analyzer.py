"""
Tree Analyzer: structural diagnostics for technology trees.

This module provides lightweight analysis of TechnologyTree objects:
    - Roots, leaves and depth of the dependency graph
    - Dangling prerequisite references
    - Cycles (the tree is meant to be acyclic, but add() does not check)
    - Technologies unreachable from any root
    - Unlock progress

IMPORTANT: This is read-only. It never modifies the tree.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from techtree.tree import TechnologyTree


def _find_cycles_dfs(graph: Dict[str, List[str]], start: str, visited: Set[str],
                     rec_stack: Set[str], path: List[str]) -> Optional[List[str]]:
    """DFS to find a cycle starting from a node."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)

    for neighbor in graph.get(start, []):
        if neighbor not in visited:
            cycle = _find_cycles_dfs(graph, neighbor, visited, rec_stack, path[:])
            if cycle:
                return cycle
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    rec_stack.remove(start)
    return None


def _build_edges(tree: TechnologyTree) -> Dict[str, List[str]]:
    """Edges prerequisite -> dependent, restricted to registered ids."""
    outgoing: Dict[str, List[str]] = defaultdict(list)
    for tech in tree:
        for ref in tech.prerequisite.ids:
            if ref in tree:
                outgoing[ref].append(tech.id)
    return outgoing


def find_cycle(tree: TechnologyTree) -> Optional[List[str]]:
    """
    Return one prerequisite cycle as a closed path of ids, or None.

    Example:
        ["a", "b", "a"] when a requires b and b requires a
    """
    outgoing = _build_edges(tree)
    visited: Set[str] = set()
    for tech_id in tree.ids():
        if tech_id not in visited:
            cycle = _find_cycles_dfs(outgoing, tech_id, visited, set(), [])
            if cycle:
                return cycle
    return None


@dataclass
class TreeReport:
    """Analysis report for a technology tree."""

    total_technologies: int = 0
    total_unlocked: int = 0

    # Graph properties
    roots: List[str] = field(default_factory=list)     # No prerequisites
    leaves: List[str] = field(default_factory=list)    # Nothing depends on them
    unreachable: Set[str] = field(default_factory=set)
    max_depth: int = 0
    has_cycles: bool = False
    cycle_example: Optional[List[str]] = None

    # References
    dangling_references: Dict[str, List[str]] = field(default_factory=dict)

    # Progress
    unlockable: List[str] = field(default_factory=list)
    unlocked_percent: float = 0.0

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_tree(tree: TechnologyTree) -> TreeReport:
    """
    Analyze a TechnologyTree.

    Depth is the number of dependency edges on the longest path from a
    root, walking only the acyclic part of the graph.

    Returns a TreeReport with metrics and warnings.
    """
    report = TreeReport()
    report.total_technologies = len(tree)
    report.total_unlocked = len(tree.unlocked_ids())
    if report.total_technologies:
        report.unlocked_percent = report.total_unlocked / report.total_technologies * 100

    outgoing = _build_edges(tree)
    report.roots = [tech.id for tech in tree.roots()]
    report.leaves = [tech_id for tech_id in tree.ids() if not outgoing.get(tech_id)]
    report.dangling_references = tree.dangling_references()
    report.unlockable = tree.unlockable()

    # Breadth-first from the roots. A node's depth is fixed the first
    # time it is reached so a cycle cannot grow it.
    depth: Dict[str, int] = {root: 0 for root in report.roots}
    frontier = list(report.roots)
    while frontier:
        next_frontier = []
        for tech_id in frontier:
            for child in outgoing.get(tech_id, []):
                if child not in depth:
                    depth[child] = depth[tech_id] + 1
                    next_frontier.append(child)
        frontier = next_frontier

    # Longest path over the reachable acyclic part
    longest: Dict[str, int] = {}

    def longest_from_root(tech_id: str, stack: Set[str]) -> int:
        if tech_id in longest:
            return longest[tech_id]
        stack.add(tech_id)
        best = 0
        for parent in tree.get(tech_id).prerequisite.ids:
            if parent in depth and parent not in stack:
                best = max(best, longest_from_root(parent, stack) + 1)
        stack.discard(tech_id)
        longest[tech_id] = best
        return best

    for tech_id in depth:
        report.max_depth = max(report.max_depth, longest_from_root(tech_id, set()))

    report.unreachable = set(tree.ids()) - set(depth)

    cycle = find_cycle(tree)
    if cycle:
        report.has_cycles = True
        report.cycle_example = cycle

    # Warnings
    if report.dangling_references:
        refs = sorted({ref for refs in report.dangling_references.values() for ref in refs})
        report.add_warning(f"Dangling prerequisite references: {', '.join(refs)}")

    if report.has_cycles:
        report.add_warning(f"Cycle detected: {' -> '.join(report.cycle_example)}")

    if report.unreachable:
        report.add_warning(f"Unreachable technologies: {', '.join(sorted(report.unreachable))}")

    if report.total_technologies and not report.roots:
        report.add_warning("No root technologies: nothing can be unlocked")

    return report
