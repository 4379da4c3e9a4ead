"""
Line format parser and serializer (text <-> TechnologyTree).

Format, one technology per line:
    id;name;description;Kind:id1,id2,...;cost

    - Kind is "And" or "Or"
    - an empty id list after ':' means no prerequisites, whatever the Kind
    - cost is a non-negative integer

Example:
    pottery;Pottery;Basic pottery techniques.;And:;5
    irrigation;Irrigation;Advanced irrigation techniques.;And:pottery;10

Unlock state is not part of this format: every parsed technology starts
locked. Use techtree.serialization for snapshots that keep it.

The parser is all-or-nothing. The first bad line raises a ParseError and
no tree is returned.
"""

import logging
import re
import warnings
from typing import List

from .errors import (
    DuplicateIdError,
    InvalidCostError,
    MalformedLineError,
    UnknownPrerequisiteKindError,
    UnserializableFieldError,
)
from .model import Technology
from .prerequisites import NoPrerequisite, Prerequisite, PrerequisiteKind, make_prerequisite
from .tree import TechnologyTree

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ";"
KIND_SEPARATOR = ":"
ID_SEPARATOR = ","
FIELD_COUNT = 5

_COST_RE = re.compile(r"^\d+$", re.ASCII)

_KINDS = {
    PrerequisiteKind.AND.value: PrerequisiteKind.AND,
    PrerequisiteKind.OR.value: PrerequisiteKind.OR,
}


def parse_prerequisite(spec: str, line_no=None, raw=None) -> Prerequisite:
    """
    Parse the `Kind:ids` field.

    Raises:
        MalformedLineError: if there is no ':'
        UnknownPrerequisiteKindError: if Kind is not And/Or
    """
    if KIND_SEPARATOR not in spec:
        raise MalformedLineError(
            f"Prerequisite field {spec!r} has no '{KIND_SEPARATOR}'", line_no=line_no, raw=raw
        )

    kind_str, _, ids_str = spec.partition(KIND_SEPARATOR)
    kind_str = kind_str.strip()
    ids = [part.strip() for part in ids_str.split(ID_SEPARATOR)]
    ids = [tech_id for tech_id in ids if tech_id]

    # ":" alone is accepted as "no prerequisites"
    if not kind_str and not ids:
        return NoPrerequisite()

    kind = _KINDS.get(kind_str)
    if kind is None:
        raise UnknownPrerequisiteKindError(
            f"Unknown prerequisite kind {kind_str!r}", line_no=line_no, raw=raw
        )
    return make_prerequisite(kind, ids)


def parse_cost(cost_str: str, line_no=None, raw=None) -> int:
    """
    Parse the cost field.

    Raises:
        InvalidCostError: unless the field is a non-negative integer
    """
    cost_str = cost_str.strip()
    if not _COST_RE.match(cost_str):
        raise InvalidCostError(f"Invalid cost {cost_str!r}", line_no=line_no, raw=raw)
    return int(cost_str)


def parse_line(line: str, line_no=None) -> Technology:
    """Parse a single non-blank record into a Technology."""
    # a lone \r inside a record could not be written back by serialize
    if "\r" in line:
        raise MalformedLineError("Carriage return inside a record", line_no=line_no, raw=line)

    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise MalformedLineError(
            f"Expected {FIELD_COUNT} fields, got {len(fields)}", line_no=line_no, raw=line
        )

    tech_id, name, description, prereq_spec, cost_str = fields
    tech_id = tech_id.strip()
    if not tech_id:
        raise MalformedLineError("Empty technology id", line_no=line_no, raw=line)

    return Technology(
        id=tech_id,
        name=name,
        description=description,
        prerequisite=parse_prerequisite(prereq_spec, line_no=line_no, raw=line),
        cost=parse_cost(cost_str, line_no=line_no, raw=line),
    )


def parse(text: str) -> TechnologyTree:
    """
    Parse the line format into a new TechnologyTree.

    Args:
        text: whole file content, as read by the caller

    Returns:
        TechnologyTree with every technology locked

    Raises:
        ParseError: on the first bad line (MalformedLineError,
            UnknownPrerequisiteKindError or InvalidCostError)
    """
    tree = TechnologyTree()

    for line_no, line in enumerate(text.split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue

        technology = parse_line(line, line_no=line_no)
        try:
            tree.add(technology)
        except DuplicateIdError as e:
            raise MalformedLineError(
                f"Duplicate technology id {technology.id!r}", line_no=line_no, raw=line
            ) from e

    dangling = tree.dangling_references()
    if dangling:
        details = ", ".join(f"{tech_id} -> {', '.join(refs)}" for tech_id, refs in dangling.items())
        warnings.warn(f"Unknown prerequisite ids (treated as locked): {details}", UserWarning, stacklevel=2)

    logger.info("Loaded %d technologies", len(tree))
    return tree


def format_prerequisite(prerequisite: Prerequisite) -> str:
    """Render a prerequisite as `Kind:ids`. No prerequisites renders as 'And:'."""
    if isinstance(prerequisite, NoPrerequisite) or not prerequisite.ids:
        return f"{PrerequisiteKind.AND.value}{KIND_SEPARATOR}"
    return f"{prerequisite.kind.value}{KIND_SEPARATOR}{ID_SEPARATOR.join(prerequisite.ids)}"


def _check_field(tech_id: str, field_name: str, value: str, reserved: str) -> None:
    if any(ch in value for ch in reserved):
        raise UnserializableFieldError(tech_id, field_name, value)
    # ids are stripped on parse, so they must not rely on surrounding whitespace
    if field_name in ("id", "prerequisite") and (not value or value != value.strip()):
        raise UnserializableFieldError(tech_id, field_name, value)


def format_line(technology: Technology) -> str:
    """
    Render one technology as a record.

    Raises:
        UnserializableFieldError: if a field holds a reserved character
    """
    line_breaks = "\n\r"
    id_reserved = FIELD_SEPARATOR + KIND_SEPARATOR + ID_SEPARATOR + line_breaks

    _check_field(technology.id, "id", technology.id, id_reserved)
    _check_field(technology.id, "name", technology.name, FIELD_SEPARATOR + line_breaks)
    _check_field(technology.id, "description", technology.description, FIELD_SEPARATOR + line_breaks)
    for ref in technology.prerequisite.ids:
        _check_field(technology.id, "prerequisite", ref, id_reserved)

    return FIELD_SEPARATOR.join([
        technology.id,
        technology.name,
        technology.description,
        format_prerequisite(technology.prerequisite),
        str(technology.cost),
    ])


def serialize(tree: TechnologyTree) -> str:
    """
    Render a tree in the line format, one record per technology in
    insertion order. Unlock state is not written.
    """
    lines: List[str] = [format_line(technology) for technology in tree]
    return "\n".join(lines)


__all__ = [
    "parse",
    "serialize",
    "parse_line",
    "parse_prerequisite",
    "parse_cost",
    "format_line",
    "format_prerequisite",
]
