"""Backends for technology tree output (DOT)."""

from .dot_generator import DotMode, generate_dot

__all__ = ["DotMode", "generate_dot"]
