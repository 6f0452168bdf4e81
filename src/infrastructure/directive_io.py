"""
Directive I/O — turn editor protocol text into Directives and back.

Protocol (one directive per line):

    <a>,<b>c    change lines a..b; followed by b-a+1 text lines and "."
    <a>,<b>d    delete lines a..b
    <a>,<b>p    print lines a..b
    <n>u        undo n steps
    <n>r        redo n steps
    q           quit

Parsing is lazy: :func:`parse_directives` yields each directive as soon
as its text (and payload, for a change) has been read, so a stream can
be processed while it is still arriving.
"""
from __future__ import annotations

import gzip
import re
from pathlib import Path
from typing import Iterable, Iterator

from core.directive import Directive, DirectiveKind
from core.errors import DirectiveParseError
from core.line import BLANK

PAYLOAD_TERMINATOR = BLANK
QUIT_COMMAND = "q"

_RANGE_RE = re.compile(r"^(?P<ind1>\d+),(?P<ind2>\d+)(?P<cmd>[cdp])$")
_HISTORY_RE = re.compile(r"^(?P<count>\d+)(?P<cmd>[ur])$")


# ------------------------------------------------------------------
# File helpers (plain text or gzip)
# ------------------------------------------------------------------

def _is_gz(path: Path) -> bool:
    return path.suffix == ".gz"


def read_script(file_path: str | Path) -> str:
    """Read a directive script from a plain or gzip-compressed file."""
    path = Path(file_path)
    if _is_gz(path):
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return f.read()
    return path.read_text(encoding="utf-8")


# ------------------------------------------------------------------
# Parse
# ------------------------------------------------------------------

def parse_header(text: str, line_number: int | None = None) -> Directive:
    """
    Parse one directive line (without payload).

    A change comes back with an empty payload; :func:`parse_directives`
    fills it in.  Raises DirectiveParseError on anything else.
    """
    header = text.strip()
    if header == QUIT_COMMAND:
        return Directive.quit()

    match = _RANGE_RE.match(header)
    if match:
        kind = DirectiveKind(match.group("cmd"))
        return Directive(kind, int(match.group("ind1")), int(match.group("ind2")))

    match = _HISTORY_RE.match(header)
    if match:
        kind = DirectiveKind(match.group("cmd"))
        return Directive(kind, count=int(match.group("count")))

    raise DirectiveParseError(f"Unrecognized directive {header!r}", line_number=line_number)


def parse_directives(lines: Iterable[str]) -> Iterator[Directive]:
    """
    Yield directives from protocol *lines* (with or without newlines).

    Blank directive lines are skipped.  Stops after ``q``; input past it
    is never read.
    """
    numbered = enumerate(lines, start=1)
    for line_number, raw in numbered:
        if not raw.strip():
            continue
        directive = parse_header(raw, line_number)
        if directive.kind is DirectiveKind.CHANGE:
            directive = _read_payload(directive, numbered, line_number)
        yield directive
        if directive.kind is DirectiveKind.QUIT:
            return


def parse_script(text: str) -> Iterator[Directive]:
    return parse_directives(text.splitlines())


def _read_payload(
    header: Directive,
    numbered: Iterator[tuple[int, str]],
    header_line: int,
) -> Directive:
    expected = header.ind2 - header.ind1 + 1
    if expected < 1:
        raise DirectiveParseError(
            f"Change range {header.ind1},{header.ind2} is empty", line_number=header_line
        )

    payload: list[str] = []
    for _ in range(expected):
        item = next(numbered, None)
        if item is None:
            raise DirectiveParseError(
                f"Change expects {expected} lines, input ended after {len(payload)}",
                line_number=header_line,
            )
        payload.append(item[1].rstrip("\r\n"))

    item = next(numbered, None)
    if item is None or item[1].strip() != PAYLOAD_TERMINATOR:
        raise DirectiveParseError(
            f"Missing {PAYLOAD_TERMINATOR!r} after change payload",
            line_number=item[0] if item is not None else header_line,
        )
    return Directive.change(header.ind1, header.ind2, payload)


# ------------------------------------------------------------------
# Format
# ------------------------------------------------------------------

def format_directive(directive: Directive) -> str:
    """Render *directive* as newline-terminated protocol text."""
    kind = directive.kind
    if kind is DirectiveKind.QUIT:
        return f"{QUIT_COMMAND}\n"
    if directive.is_history:
        return f"{directive.count}{kind.value}\n"

    header = f"{directive.ind1},{directive.ind2}{kind.value}\n"
    if kind is not DirectiveKind.CHANGE:
        return header
    body = "".join(f"{line}\n" for line in directive.payload)
    return f"{header}{body}{PAYLOAD_TERMINATOR}\n"


def render_output(lines: Iterable[str]) -> str:
    """Join printed lines, each newline-terminated."""
    return "".join(f"{line}\n" for line in lines)
