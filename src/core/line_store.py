"""
LineStore — the live document as an ordered sequence of ``Line`` objects.

External indexing is 1-based.  Reads outside ``[1, len]`` return ``None``
instead of failing so the print path can emit a placeholder.  Writes may
overwrite an existing line or extend the store by exactly one slot;
callers never leave gaps.
"""
from __future__ import annotations

from typing import Iterable, Optional

from core.line import Line


class LineStore:
    """
    Mutable, randomly indexable sequence of lines.

    Only :class:`core.history.EditHistory` mutates a store.  Wholesale
    replacement (``replace_all``) is used by delete application and by
    reconstruction; ``overwrite_or_append`` is used by change application
    and by change replay.
    """

    __slots__ = ("_lines", "_lines_cache")

    def __init__(self, lines: Optional[Iterable[Line]] = None) -> None:
        self._lines: list[Line] = list(lines) if lines is not None else []
        self._lines_cache: tuple[Line, ...] | None = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def lines(self) -> tuple[Line, ...]:
        """Return a cached tuple so callers cannot break internal ordering."""
        if self._lines_cache is None:
            self._lines_cache = tuple(self._lines)
        return self._lines_cache

    def __len__(self) -> int:
        return len(self._lines)

    def get(self, index: int) -> Optional[Line]:
        """Return line *index* (1-based), or ``None`` when out of range."""
        if 1 <= index <= len(self._lines):
            return self._lines[index - 1]
        return None

    def texts(self) -> list[str]:
        return [line.text for line in self._lines]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def overwrite_or_append(self, index: int, line: Line) -> None:
        """Set line *index*; ``len + 1`` appends.  Raises on a gap."""
        size = len(self._lines)
        if 1 <= index <= size:
            self._lines[index - 1] = line
        elif index == size + 1:
            self._lines.append(line)
        else:
            raise IndexError(f"Line {index} is not writable in a {size}-line store")
        self._lines_cache = None

    def remove_range(self, start: int, end: int) -> int:
        """Remove lines ``[start, end]`` (1-based, already clamped).

        Later lines shift left.  Returns the number of removed lines.
        """
        removed = max(0, end - start + 1)
        if removed:
            del self._lines[start - 1 : end]
            self._lines_cache = None
        return removed

    def truncate(self, size: int) -> None:
        """Drop every line after *size*."""
        if size < len(self._lines):
            del self._lines[size:]
            self._lines_cache = None

    def replace_all(self, lines: Iterable[Line]) -> None:
        """Swap the whole backing storage for *lines*."""
        self._lines = list(lines)
        self._lines_cache = None

    def snapshot(self) -> tuple[Line, ...]:
        """Return the current line references (shared, never copied)."""
        return self.lines
