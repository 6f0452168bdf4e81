"""
Command log — append-only history of committed mutations.

Two record kinds exist:

- :class:`ChangeRecord` keeps the exact ``Line`` objects it wrote, in
  order, plus the index of the most recent delete at the time it ran.
- :class:`DeleteRecord` keeps a full snapshot of the document as it
  stood right after the delete, which makes every delete a checkpoint
  that reconstruction can start from.

Log indices used by records (``last_delete``) are 1-based, with ``0``
meaning "no delete yet".  Python-side access (``entry``) is 0-based.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from core.line import Line

logger = logging.getLogger(__name__)


class CommandKind(Enum):
    """Kind of a committed mutation."""
    CHANGE = "c"
    DELETE = "d"


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """
    A committed change of lines ``[ind1, ind2]``.

    Attributes:
        ind1, ind2:    1-based inclusive range that was written.
        saved:         The ``ind2 - ind1 + 1`` lines written, in order.
        lines_reached: Document length right after the change.
        last_delete:   1-based log index of the latest delete at or before
                       this change, ``0`` if none.
    """
    ind1: int
    ind2: int
    saved: tuple[Line, ...]
    lines_reached: int
    last_delete: int = 0

    kind = CommandKind.CHANGE


@dataclass(frozen=True, slots=True)
class DeleteRecord:
    """
    A committed delete of the requested range ``[ind1, ind2]``.

    ``ind1``/``ind2`` are the indices as requested, before clamping.
    ``saved`` is the full document right after the delete.
    """
    ind1: int
    ind2: int
    saved: tuple[Line, ...]
    lines_reached: int

    kind = CommandKind.DELETE


CommandRecord = Union[ChangeRecord, DeleteRecord]


class CommandLog:
    """
    Ordered, append-only sequence of command records.

    The only removal is :meth:`truncate_from`, which drops a contiguous
    suffix.  Records hold ``Line`` references; dropping a record releases
    them unless the live document or a surviving snapshot still holds
    the same objects.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[CommandRecord] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CommandRecord]:
        return iter(self._entries)

    def append(self, record: CommandRecord) -> int:
        """Append *record* and return its 1-based log index."""
        self._entries.append(record)
        return len(self._entries)

    def entry(self, index: int) -> CommandRecord:
        """Return the record at 0-based *index*.  Raises IndexError."""
        if not 0 <= index < len(self._entries):
            raise IndexError(f"Log index {index} out of range")
        return self._entries[index]

    def last(self) -> CommandRecord | None:
        return self._entries[-1] if self._entries else None

    def truncate_from(self, index: int) -> list[CommandRecord]:
        """Drop entries ``[index, len)`` and return them."""
        dropped = self._entries[index:]
        del self._entries[index:]
        if dropped:
            logger.debug("Dropped %d log entries from index %d", len(dropped), index)
        return dropped

    def last_delete_index(self) -> int:
        """1-based index of the newest delete in the log, ``0`` if none.

        Derived from the last entry: a delete points at itself, a change
        carries the tracker it was recorded with.
        """
        last = self.last()
        if last is None:
            return 0
        if isinstance(last, DeleteRecord):
            return len(self._entries)
        return last.last_delete
