"""
Graphviz DOT diagram generator for technology trees.

Converts a TechnologyTree into Graphviz DOT format for visualization.
Edges run from a prerequisite to the technology that needs it.

Supports two modes:
    - SIMPLE: Names and edges only
    - DETAILED: Cost and description in labels, dangling references
      drawn as placeholder nodes
"""

from enum import Enum
from typing import List

from techtree.prerequisites import Or
from techtree.tree import TechnologyTree


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"          # Names and edges
    DETAILED = "detailed"      # Cost, description, dangling references


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    # Escape backslashes first
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


# DOT keywords are case-insensitive and cannot be bare node ids
_DOT_KEYWORDS = {"node", "edge", "graph", "digraph", "subgraph", "strict"}


def _escape_dot_id(identifier: str) -> str:
    """Escape/quote an identifier for DOT."""
    if identifier.lower() in _DOT_KEYWORDS:
        return _escape_dot_string(identifier)
    if not identifier or identifier[0].isdigit() or not identifier.replace('_', '').isalnum():
        return _escape_dot_string(identifier)
    return identifier


def generate_dot(tree: TechnologyTree, mode: DotMode = DotMode.SIMPLE) -> str:
    """
    Generate Graphviz DOT format for a technology tree.

    Args:
        tree: TechnologyTree to visualize
        mode: Visualization mode (SIMPLE, DETAILED)

    Returns:
        String containing DOT graph definition
    """
    lines: List[str] = []

    lines.append("digraph techtree {")
    lines.append("  rankdir=TB;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    # =========================================================================
    # NODES
    # =========================================================================

    for tech in tree:
        label = tech.name or tech.id
        if mode == DotMode.DETAILED:
            label = f"{label}\nCost: {tech.cost}"
            if tech.description:
                label = f"{label}\n{tech.description}"

        attrs = [f"label={_escape_dot_string(label)}"]
        if tech.unlocked:
            attrs.append("fillcolor=lightgreen")
        elif tech.is_root:
            attrs.append("shape=ellipse")
        lines.append(f"  {_escape_dot_id(tech.id)} [{', '.join(attrs)}];")

    if mode == DotMode.DETAILED:
        missing = sorted({ref for refs in tree.dangling_references().values() for ref in refs})
        for ref in missing:
            lines.append(
                f"  {_escape_dot_id(ref)} [label={_escape_dot_string(ref + ' (missing)')}, "
                "style=dashed, fillcolor=lightgrey];"
            )

    # =========================================================================
    # EDGES
    # =========================================================================

    for tech in tree:
        # OR edges are alternatives, drawn dashed
        style = " [style=dashed]" if isinstance(tech.prerequisite, Or) else ""
        for ref in tech.prerequisite.ids:
            if ref not in tree and mode != DotMode.DETAILED:
                continue
            lines.append(f"  {_escape_dot_id(ref)} -> {_escape_dot_id(tech.id)}{style};")

    lines.append("}")

    return "\n".join(lines)


__all__ = ["DotMode", "generate_dot"]
