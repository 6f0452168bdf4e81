"""
Line — the unit of storage for the editor.

A ``Line`` is written once and never mutated.  The live document, change
records and delete snapshots all hold references to the same ``Line``
objects; nothing ever copies the text.  A line is reclaimed by the
interpreter once the last structure referencing it lets go (after a
redo wipe or a document replacement).
"""
from __future__ import annotations

from dataclasses import dataclass

BLANK = "."


@dataclass(frozen=True, slots=True, eq=False)
class Line:
    """
    Immutable text payload of one document line.

    Attributes:
        text: Opaque line content, stored without a trailing newline.

    Equality is identity: two lines with the same text written by two
    different changes are distinct history values.
    """
    text: str = ""

    def __str__(self) -> str:
        return self.text
