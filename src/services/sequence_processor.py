"""
SequenceProcessor — drives an :class:`EditHistory` from a directive stream.

Outside an undo/redo run, directives execute one by one.  An undo or
redo starts a *run*: every following undo / redo / print is folded into
a simulated cursor ``h`` (clamped to ``[0, log_length]`` at each step)
until a change, delete or quit ends the run.  Only then is ``h``
committed, so "3u / 2u / 1r" costs one reconstruction at the final
position instead of three.

Prints inside a run materialize the document at ``h`` (only when it
differs from what is already materialized) without committing it.  If
the run fails part way, the committed state is materialized again before
the error propagates.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

from core.directive import Directive, DirectiveKind
from core.errors import InvalidRangeError
from core.history import EditHistory

logger = logging.getLogger(__name__)

OutputSink = Callable[[str], None]


class SequenceProcessor:
    """
    Consumes directives and writes printed line text to *emit*.

    ``emit`` receives one string per printed line, without a newline.
    """

    __slots__ = ("_history", "_emit")

    def __init__(self, history: EditHistory, emit: OutputSink) -> None:
        self._history = history
        self._emit = emit

    def run(self, directives: Iterable[Directive]) -> bool:
        """Process *directives* in order.

        Returns ``True`` if a quit directive ended processing, ``False``
        if the stream was exhausted.  A run still open at the end of the
        stream is committed either way.
        """
        stream = iter(directives)
        for directive in stream:
            if directive.kind is DirectiveKind.QUIT:
                return True
            if directive.is_history:
                if self._run_sequence(directive, stream):
                    return True
            else:
                self._execute(directive)
        return False

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_sequence(self, first: Directive, stream: Iterator[Directive]) -> bool:
        history = self._history
        start = history.history_pointer
        h = self._step(start, first)

        try:
            for directive in stream:
                if directive.is_history:
                    h = self._step(h, directive)
                elif directive.kind is DirectiveKind.PRINT:
                    history.seek(h)
                    self._print(directive)
                else:
                    history.commit(h)
                    logger.debug("History run moved cursor %d -> %d", start, h)
                    if directive.kind is DirectiveKind.QUIT:
                        return True
                    self._execute(directive)
                    return False
        except Exception:
            # A failed run commits nothing; restore the committed document.
            history.seek(history.history_pointer)
            logger.debug("History run aborted, cursor stays at %d", history.history_pointer)
            raise

        history.commit(h)
        logger.debug("History run moved cursor %d -> %d at end of input", start, h)
        return False

    def _step(self, h: int, directive: Directive) -> int:
        if directive.count < 0:
            raise InvalidRangeError(f"Negative history step count {directive.count}")
        if directive.kind is DirectiveKind.UNDO:
            return self._history.clamp(h - directive.count)
        return self._history.clamp(h + directive.count)

    def _execute(self, directive: Directive) -> None:
        kind = directive.kind
        if kind is DirectiveKind.CHANGE:
            self._history.apply_change(directive.ind1, directive.ind2, directive.payload)
        elif kind is DirectiveKind.DELETE:
            self._history.apply_delete(directive.ind1, directive.ind2)
        elif kind is DirectiveKind.PRINT:
            self._print(directive)
        else:
            raise ValueError(f"Cannot execute {kind!r} outside a history run")

    def _print(self, directive: Directive) -> None:
        for text in self._history.print_range(directive.ind1, directive.ind2):
            self._emit(text)
