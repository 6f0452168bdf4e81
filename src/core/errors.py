"""
Base error hierarchy for the line editor.

All errors raised by this package inherit from ``EditorError`` so
callers can catch a single base type.  Out-of-range reads and
undo/redo past either end of the history are clamps, not errors.
"""
from __future__ import annotations

from typing import Optional


class EditorError(Exception):
    """Base class for all line editor errors."""


class DirectiveParseError(EditorError):
    """Raised when directive text cannot be parsed."""

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class InvalidRangeError(EditorError):
    """Raised when a directive violates the core's range contract."""
