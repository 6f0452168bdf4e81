from core.line import BLANK, Line
from core.line_store import LineStore
from core.command_log import (
    ChangeRecord,
    CommandKind,
    CommandLog,
    CommandRecord,
    DeleteRecord,
)
from core.directive import Directive, DirectiveKind
from core.errors import DirectiveParseError, EditorError, InvalidRangeError
from core.history import EditHistory

__all__ = [
    "BLANK",
    "Line",
    "LineStore",
    "ChangeRecord",
    "CommandKind",
    "CommandLog",
    "CommandRecord",
    "DeleteRecord",
    "Directive",
    "DirectiveKind",
    "DirectiveParseError",
    "EditorError",
    "InvalidRangeError",
    "EditHistory",
]
