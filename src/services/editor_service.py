"""
EditorService — the bridge between entry points and the core domain.

Owns the single editing session (one :class:`EditHistory`).  The CLI
streams protocol text through :meth:`stream`; the API layer submits
whole scripts through :meth:`run_script` and reads the document back.
:meth:`log_script` exports the active history as protocol text.
"""
from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Iterable, Optional

from core import ChangeRecord, CommandRecord, Directive, EditHistory
from infrastructure import format_directive, parse_directives, parse_script, render_output
from services.sequence_processor import SequenceProcessor

logger = logging.getLogger(__name__)


class EditorService:
    """
    Facade that the entry points call. One instance per application.
    """

    def __init__(self, history: Optional[EditHistory] = None) -> None:
        self._history = history or EditHistory()
        self._lock = RLock()

    @property
    def history(self) -> EditHistory:
        return self._history

    # ------------------------------------------------------------------
    # Directive processing
    # ------------------------------------------------------------------

    def run(self, directives: Iterable[Directive]) -> list[str]:
        """Process *directives* and return the printed lines."""
        output: list[str] = []
        with self._lock:
            quit_seen = SequenceProcessor(self._history, output.append).run(directives)
        logger.info(
            "Processed directives: %d lines printed, cursor %d/%d%s",
            len(output),
            self._history.history_pointer,
            self._history.log_length,
            " (quit)" if quit_seen else "",
        )
        return output

    def run_script(self, text: str) -> list[str]:
        """Parse protocol *text* and process it."""
        return self.run(parse_script(text))

    def stream(self, lines: Iterable[str], write: Callable[[str], object]) -> bool:
        """Process protocol *lines* lazily, writing each printed line as it is produced.

        Returns ``True`` if the stream ended with a quit directive.
        """
        def emit(text: str) -> None:
            write(render_output([text]))

        with self._lock:
            return SequenceProcessor(self._history, emit).run(parse_directives(lines))

    def log_script(self) -> str:
        """Return the active (not undone) history as replayable protocol text.

        Running the result against a fresh session rebuilds the current
        document.
        """
        with self._lock:
            history = self._history
            records = [history.log.entry(i) for i in range(history.history_pointer)]
        return "".join(format_directive(_record_directive(record)) for record in records)

    # ------------------------------------------------------------------
    # Document access
    # ------------------------------------------------------------------

    def lines(self) -> list[str]:
        with self._lock:
            return self._history.texts()

    def print_range(self, ind1: int, ind2: int) -> list[str]:
        with self._lock:
            return self._history.print_range(ind1, ind2)

    def history_summary(self) -> dict:
        with self._lock:
            history = self._history
            return {
                "history_pointer": history.history_pointer,
                "log_length": history.log_length,
                "can_undo": history.can_undo,
                "can_redo": history.can_redo,
                "line_count": history.line_count,
            }

    def reset(self) -> None:
        """Discard the document and its whole history."""
        with self._lock:
            self._history = EditHistory()
        logger.info("Editor session reset")


def _record_directive(record: CommandRecord) -> Directive:
    if isinstance(record, ChangeRecord):
        return Directive.change(record.ind1, record.ind2, [line.text for line in record.saved])
    return Directive.delete(record.ind1, record.ind2)
