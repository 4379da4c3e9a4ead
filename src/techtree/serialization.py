"""
Snapshot helpers for technology trees.

Unlike the line format in `techtree.text_format`, snapshots keep unlock
state, so a game in progress can be saved and restored. Structure goes
through an explicit dict representation shared by JSON and YAML.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from techtree.model import Technology
from techtree.prerequisites import (
    Prerequisite,
    PrerequisiteKind,
    make_prerequisite,
)
from techtree.tree import TechnologyTree

_KIND_TO_KEY = {
    PrerequisiteKind.NONE: "none",
    PrerequisiteKind.AND: "and",
    PrerequisiteKind.OR: "or",
}
_KEY_TO_KIND = {key: kind for kind, key in _KIND_TO_KEY.items()}


def prerequisite_to_dict(p: Prerequisite) -> Dict[str, Any]:
    return {"kind": _KIND_TO_KEY[p.kind], "ids": list(p.ids)}


def prerequisite_from_dict(d: Dict[str, Any] | None) -> Prerequisite:
    if d is None:
        return make_prerequisite(PrerequisiteKind.NONE, [])
    key = d.get("kind", "none")
    if key not in _KEY_TO_KIND:
        raise TypeError(f"Unsupported prerequisite kind: {key}")
    return make_prerequisite(_KEY_TO_KIND[key], d.get("ids", []))


def technology_to_dict(t: Technology) -> Dict[str, Any]:
    return {
        "id": t.id,
        "name": t.name,
        "description": t.description,
        "prerequisite": prerequisite_to_dict(t.prerequisite),
        "cost": t.cost,
        "unlocked": t.unlocked,
    }


def technology_from_dict(d: Dict[str, Any]) -> Technology:
    return Technology(
        id=d["id"],
        name=d.get("name", d["id"]),
        description=d.get("description", ""),
        prerequisite=prerequisite_from_dict(d.get("prerequisite")),
        cost=d.get("cost", 0),
        unlocked=bool(d.get("unlocked", False)),
    )


def tree_to_dict(tree: TechnologyTree) -> Dict[str, Any]:
    return {"technologies": [technology_to_dict(t) for t in tree]}


def tree_from_dict(d: Dict[str, Any]) -> TechnologyTree:
    return TechnologyTree.restore(technology_from_dict(t) for t in d.get("technologies", []))


def tree_to_json(tree: TechnologyTree) -> str:
    return json.dumps(tree_to_dict(tree), sort_keys=True)


def tree_from_json(s: str) -> TechnologyTree:
    d = json.loads(s)
    return tree_from_dict(d)


def tree_to_yaml(tree: TechnologyTree) -> str:
    return yaml.safe_dump(tree_to_dict(tree), sort_keys=False)


def tree_from_yaml(s: str) -> TechnologyTree:
    d = yaml.safe_load(s)
    return tree_from_dict(d or {})
