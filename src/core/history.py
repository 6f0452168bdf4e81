"""
EditHistory — the editing session: live document, command log, cursor.

The session owns one :class:`LineStore`, one :class:`CommandLog` and the
``history_pointer`` (number of active, not-undone log entries).  Entries
``[history_pointer, len(log))`` are the redo suffix.

Snapshots are taken only at deletes.  Changes store just the lines they
wrote, so rebuilding the document for an arbitrary cursor starts from the
nearest delete snapshot (or the empty document) and replays the changes
after it.  The cost of a rebuild is bounded by the distance to that
checkpoint, not by the length of the history.

Two cursors are tracked:

- ``history_pointer``: the committed position.  Mutations append here.
- ``materialized_pointer``: the position the live document currently
  reflects.  :meth:`seek` moves only this one, so a print in the middle
  of an undo/redo run can show an intermediate state without committing
  it.  :meth:`commit` moves both.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from core.command_log import ChangeRecord, CommandLog, CommandRecord, DeleteRecord
from core.errors import InvalidRangeError
from core.line import BLANK, Line
from core.line_store import LineStore

logger = logging.getLogger(__name__)


class EditHistory:
    """
    Session object passed to every core operation.

    Internal invariant: the live document equals the result of taking the
    snapshot of the newest delete at or before ``materialized_pointer``
    (empty if none) and replaying, in log order, every change after it up
    to ``materialized_pointer``.
    """

    __slots__ = ("_store", "_log", "_history_pointer", "_materialized", "_last_delete")

    def __init__(self) -> None:
        self._store = LineStore()
        self._log = CommandLog()
        self._history_pointer: int = 0
        self._materialized: int = 0
        self._last_delete: int = 0

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def history_pointer(self) -> int:
        return self._history_pointer

    @property
    def materialized_pointer(self) -> int:
        return self._materialized

    @property
    def log(self) -> CommandLog:
        return self._log

    @property
    def log_length(self) -> int:
        return len(self._log)

    @property
    def last_delete(self) -> int:
        """1-based log index of the newest delete in the log, ``0`` if none."""
        return self._last_delete

    @property
    def line_count(self) -> int:
        return len(self._store)

    @property
    def can_undo(self) -> bool:
        return self._history_pointer > 0

    @property
    def can_redo(self) -> bool:
        return self._history_pointer < len(self._log)

    @property
    def lines(self) -> tuple[Line, ...]:
        return self._store.lines

    def texts(self) -> list[str]:
        return self._store.texts()

    def get(self, index: int) -> Optional[Line]:
        return self._store.get(index)

    def print_range(self, ind1: int, ind2: int) -> list[str]:
        """Return the text of lines ``[ind1, ind2]`` of the materialized document.

        Indices outside ``[1, line_count]`` yield the ``"."`` placeholder;
        an empty range (``ind1 > ind2``) yields nothing.
        """
        out: list[str] = []
        for index in range(ind1, ind2 + 1):
            line = self._store.get(index)
            out.append(line.text if line is not None else BLANK)
        return out

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def apply_change(
        self, ind1: int, ind2: int, new_lines: Sequence[Union[str, Line]]
    ) -> ChangeRecord:
        """Write *new_lines* into ``[ind1, ind2]``, extending the document as needed."""
        self._sync_to_committed()
        size = len(self._store)
        if ind1 < 1 or ind2 < ind1:
            raise InvalidRangeError(f"Invalid change range {ind1},{ind2}")
        if len(new_lines) != ind2 - ind1 + 1:
            raise InvalidRangeError(
                f"Change {ind1},{ind2} expects {ind2 - ind1 + 1} lines, got {len(new_lines)}"
            )
        if ind1 > size + 1:
            raise InvalidRangeError(
                f"Change {ind1},{ind2} would leave a gap after line {size}"
            )

        if self.can_redo:
            self.wipe_redo()

        saved = tuple(line if isinstance(line, Line) else Line(line) for line in new_lines)
        for offset, line in enumerate(saved):
            self._store.overwrite_or_append(ind1 + offset, line)

        record = ChangeRecord(
            ind1=ind1,
            ind2=ind2,
            saved=saved,
            lines_reached=len(self._store),
            last_delete=self._last_delete,
        )
        self._push(record)
        return record

    def apply_delete(self, ind1: int, ind2: int) -> DeleteRecord:
        """Remove lines ``[ind1, ind2]`` (clamped) and checkpoint the result.

        A history entry is appended even when nothing is removed.
        """
        _check_non_negative(ind1, ind2)
        self._sync_to_committed()
        if self.can_redo:
            self.wipe_redo()

        size = len(self._store)
        removed = 0
        if not (ind1 == 0 and ind2 == 0) and ind1 <= size:
            start = 1 if ind1 <= 0 and ind2 != 0 else ind1
            removed = self._store.remove_range(start, min(ind2, size))

        record = DeleteRecord(
            ind1=ind1,
            ind2=ind2,
            saved=self._store.snapshot(),
            lines_reached=len(self._store),
        )
        self._last_delete = self._push(record)
        logger.debug("Delete %d,%d removed %d lines", ind1, ind2, removed)
        return record

    # ------------------------------------------------------------------
    # History navigation
    # ------------------------------------------------------------------

    def reconstruct(self, target: int) -> None:
        """Rebuild the live document as it stood after log entries ``[0, target)``."""
        if not 0 <= target <= len(self._log):
            raise IndexError(f"History position {target} out of range")

        if target == 0:
            self._store.truncate(0)
        else:
            last = self._log.entry(target - 1)
            if isinstance(last, DeleteRecord):
                self._store.replace_all(last.saved)
            else:
                self._store.replace_all(self._replay_changes(last, target))
        self._materialized = target
        logger.debug("Reconstructed history position %d (%d lines)", target, len(self._store))

    def seek(self, target: int) -> None:
        """Materialize *target* without committing it."""
        if target != self._materialized:
            self.reconstruct(target)

    def commit(self, target: int) -> None:
        """Materialize *target* and make it the committed cursor."""
        self.seek(target)
        self._history_pointer = target

    def undo(self, count: int) -> int:
        """Move the committed cursor back up to *count* steps; return the steps taken."""
        _check_count(count)
        target = self.clamp(self._history_pointer - count)
        moved = self._history_pointer - target
        self.commit(target)
        return moved

    def redo(self, count: int) -> int:
        """Move the committed cursor forward up to *count* steps; return the steps taken."""
        _check_count(count)
        target = self.clamp(self._history_pointer + count)
        moved = target - self._history_pointer
        self.commit(target)
        return moved

    def clamp(self, position: int) -> int:
        """Clamp a cursor position into ``[0, log_length]``."""
        if position < 0:
            logger.debug("Undo past the start of history clamped to 0")
            return 0
        if position > len(self._log):
            logger.debug("Redo past the end of history clamped to %d", len(self._log))
            return len(self._log)
        return position

    def wipe_redo(self) -> list[CommandRecord]:
        """Discard the redo suffix ``[history_pointer, log_length)``."""
        dropped = self._log.truncate_from(self._history_pointer)
        self._last_delete = self._log.last_delete_index()
        logger.debug("Wiped %d redo entries", len(dropped))
        return dropped

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _push(self, record: CommandRecord) -> int:
        index = self._log.append(record)
        self._history_pointer = index
        self._materialized = index
        return index

    def _sync_to_committed(self) -> None:
        self.seek(self._history_pointer)

    def _replay_changes(self, last: ChangeRecord, target: int) -> list[Line]:
        base = last.last_delete
        if base == 0:
            lines: list[Line] = []
        else:
            checkpoint = self._log.entry(base - 1)
            lines = list(checkpoint.saved)

        for index in range(base, target):
            record = self._log.entry(index)
            start = record.ind1 - 1
            lines[start : start + len(record.saved)] = record.saved

        if len(lines) != last.lines_reached:
            raise RuntimeError(
                f"Replay produced {len(lines)} lines, expected {last.lines_reached}"
            )
        return lines


def _check_non_negative(ind1: int, ind2: int) -> None:
    if ind1 < 0 or ind2 < 0:
        raise InvalidRangeError(f"Negative line index in range {ind1},{ind2}")


def _check_count(count: int) -> None:
    if count < 0:
        raise InvalidRangeError(f"Negative history step count {count}")
