"""
Error taxonomy for the technology tree.

Every failure the engine can report is one of these classes, so callers
can catch `TechTreeError` to handle all of them at once.

Registry errors:
    DuplicateIdError, NotFoundError, PrerequisiteNotMetError

Format errors (raised by `techtree.text_format.parse`):
    ParseError
        MalformedLineError
        UnknownPrerequisiteKindError
        InvalidCostError

Serializer errors:
    UnserializableFieldError
"""

from typing import Optional


class TechTreeError(Exception):
    """Base class for all technology tree errors."""
    pass


class DuplicateIdError(TechTreeError):
    """Raised when adding a technology whose id is already registered."""

    def __init__(self, tech_id: str):
        super().__init__(f"Technology '{tech_id}' already exists")
        self.tech_id = tech_id


class NotFoundError(TechTreeError, KeyError):
    """Raised when a technology id is not registered in the tree."""

    def __init__(self, tech_id: str):
        super().__init__(f"Technology '{tech_id}' not found")
        self.tech_id = tech_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class PrerequisiteNotMetError(TechTreeError):
    """Raised when unlocking a technology whose prerequisites are locked."""

    def __init__(self, tech_id: str, missing: Optional[list] = None):
        self.tech_id = tech_id
        self.missing = list(missing or [])
        msg = f"Prerequisites for '{tech_id}' are not met"
        if self.missing:
            msg += f" (locked: {', '.join(self.missing)})"
        super().__init__(msg)


class UnserializableFieldError(TechTreeError):
    """Raised when a field holds a character reserved by the line format."""

    def __init__(self, tech_id: str, field_name: str, value: str):
        super().__init__(
            f"Field '{field_name}' of technology '{tech_id}' cannot be serialized: {value!r}"
        )
        self.tech_id = tech_id
        self.field_name = field_name
        self.value = value


class ParseError(TechTreeError):
    """
    Raised when the line format cannot be loaded.

    Properties:
        line_no: 1-based physical line number (None outside a load)
        raw: the offending line as read
    """

    def __init__(self, message: str, line_no: Optional[int] = None, raw: Optional[str] = None):
        self.line_no = line_no
        self.raw = raw
        if line_no is not None:
            message = f"Line {line_no}: {message}"
        super().__init__(message)


class MalformedLineError(ParseError):
    """Wrong field count, missing ':' in the prerequisite field, or duplicate id."""
    pass


class UnknownPrerequisiteKindError(ParseError):
    """Prerequisite kind is neither 'And' nor 'Or'."""
    pass


class InvalidCostError(ParseError, ValueError):
    """Cost is not a non-negative integer."""
    pass


__all__ = [
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
