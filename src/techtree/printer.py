"""
Indented forest printer.

Starting from each root (a technology with no prerequisites), writes the
technology and then, one level deeper, every technology that directly
depends on it:

    - Pottery (Cost: 5)
        - Irrigation (Cost: 10)
        - Writing (Cost: 8) [unlocked]

The caller owns the `visited` set. Any id already in it is skipped, so a
technology reachable along two paths is printed once, at the first
position reached, and a cycle cannot recurse forever. Technologies that
are not reachable from a root (for instance ones that only depend on a
dangling id) are not printed.
"""

import sys
from io import StringIO
from typing import Optional, Set, TextIO

from .model import Technology
from .tree import TechnologyTree

INDENT = "    "


def format_entry(technology: Technology, depth: int) -> str:
    """One printed line, without the trailing newline."""
    line = f"{INDENT * depth}- {technology.name} (Cost: {technology.cost})"
    if technology.unlocked:
        line += " [unlocked]"
    return line


def print_branch(
    tree: TechnologyTree,
    technology: Technology,
    visited: Set[str],
    depth: int,
    out: TextIO,
) -> None:
    """Print `technology` and, recursively, its unvisited dependents."""
    if technology.id in visited:
        return
    visited.add(technology.id)

    out.write(format_entry(technology, depth) + "\n")
    for dependent in tree.dependents(technology.id):
        print_branch(tree, dependent, visited, depth + 1, out)


def print_tree(
    tree: TechnologyTree,
    visited: Set[str],
    depth: int = 0,
    out: Optional[TextIO] = None,
) -> None:
    """
    Print the dependency forest.

    Args:
        tree: tree to print
        visited: ids already printed; updated in place
        depth: indentation level of the roots
        out: sink with a `write` method (defaults to sys.stdout)
    """
    if out is None:
        out = sys.stdout
    for root in tree.roots():
        print_branch(tree, root, visited, depth, out)


def render_tree(tree: TechnologyTree, depth: int = 0) -> str:
    """Return what print_tree would write, using a fresh visited set."""
    buffer = StringIO()
    print_tree(tree, set(), depth=depth, out=buffer)
    return buffer.getvalue()


__all__ = ["INDENT", "format_entry", "print_branch", "print_tree", "render_tree"]
