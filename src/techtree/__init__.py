"""
Technology Tree Package

A dependency graph of technologies, each gated by a prerequisite
expression (none, AND or OR over other technology ids), with
per-technology cost and unlock state.

ARCHITECTURAL GUARANTEE:
------------------------
This package performs ZERO file I/O.

    text  --parse-->  TechnologyTree  --serialize-->  text

Reading and writing the text is the caller's job.
"""

from .errors import (
    DuplicateIdError,
    InvalidCostError,
    MalformedLineError,
    NotFoundError,
    ParseError,
    PrerequisiteNotMetError,
    TechTreeError,
    UnknownPrerequisiteKindError,
    UnserializableFieldError,
)
from .model import Technology
from .prerequisites import And, NoPrerequisite, Or, Prerequisite, PrerequisiteKind, evaluate
from .printer import print_tree, render_tree
from .text_format import parse, serialize
from .tree import TechnologyTree

__version__ = "0.1.0"

__all__ = [
    "TechnologyTree",
    "Technology",
    "Prerequisite",
    "PrerequisiteKind",
    "NoPrerequisite",
    "And",
    "Or",
    "evaluate",
    "parse",
    "serialize",
    "print_tree",
    "render_tree",
    "TechTreeError",
    "DuplicateIdError",
    "NotFoundError",
    "PrerequisiteNotMetError",
    "UnserializableFieldError",
    "ParseError",
    "MalformedLineError",
    "UnknownPrerequisiteKindError",
    "InvalidCostError",
]
