from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DirectiveKind(Enum):
    """One editor directive; values are the protocol command letters."""
    CHANGE = "c"
    DELETE = "d"
    PRINT = "p"
    UNDO = "u"
    REDO = "r"
    QUIT = "q"


@dataclass(frozen=True, slots=True)
class Directive:
    """
    A validated directive as consumed by the core.

    Range directives (change / delete / print) use ``ind1``/``ind2``;
    history directives (undo / redo) use ``count``.  ``payload`` holds the
    text of the lines a change writes.
    """
    kind: DirectiveKind
    ind1: int = 0
    ind2: int = 0
    payload: tuple[str, ...] = ()
    count: int = 0

    @classmethod
    def change(cls, ind1: int, ind2: int, payload) -> "Directive":
        return cls(DirectiveKind.CHANGE, ind1, ind2, payload=tuple(payload))

    @classmethod
    def delete(cls, ind1: int, ind2: int) -> "Directive":
        return cls(DirectiveKind.DELETE, ind1, ind2)

    @classmethod
    def print(cls, ind1: int, ind2: int) -> "Directive":
        return cls(DirectiveKind.PRINT, ind1, ind2)

    @classmethod
    def undo(cls, count: int) -> "Directive":
        return cls(DirectiveKind.UNDO, count=count)

    @classmethod
    def redo(cls, count: int) -> "Directive":
        return cls(DirectiveKind.REDO, count=count)

    @classmethod
    def quit(cls) -> "Directive":
        return cls(DirectiveKind.QUIT)

    @property
    def is_mutation(self) -> bool:
        return self.kind in (DirectiveKind.CHANGE, DirectiveKind.DELETE)

    @property
    def is_history(self) -> bool:
        return self.kind in (DirectiveKind.UNDO, DirectiveKind.REDO)
