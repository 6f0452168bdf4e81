"""
Command-line entry point.

    line-editor [SCRIPT]         process directives from SCRIPT (or stdin)
    line-editor --serve          run the HTTP API with uvicorn
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional, Sequence, TextIO

from app.config import LOG_FORMAT, load_settings
from core import EditorError
from infrastructure import read_script
from services.editor_service import EditorService

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = load_settings(default_log_level="WARNING")
    parser = argparse.ArgumentParser(
        prog="line-editor",
        description="Line editor driven by a directive stream, with undo and redo.",
    )
    parser.add_argument(
        "script",
        nargs="?",
        help="Directive script (plain or .gz); reads stdin when omitted",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s, env LINE_EDITOR_LOG_LEVEL)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API instead of processing a script",
    )
    parser.add_argument("--host", default=settings.host, help="API host (default: %(default)s)")
    parser.add_argument("--port", type=int, default=settings.port, help="API port (default: %(default)s)")
    return parser.parse_args(argv)


def run_stream(
    service: EditorService,
    source: Iterable[str],
    sink: TextIO,
) -> int:
    """Process protocol text from *source*, writing printed lines to *sink*."""
    try:
        service.stream(source, sink.write)
    except EditorError as exc:
        sink.flush()
        print(f"line-editor: {exc}", file=sys.stderr)
        return 2
    sink.flush()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT, stream=sys.stderr)

    if args.serve:
        import uvicorn

        logger.info("Serving on %s:%d", args.host, args.port)
        uvicorn.run("app.main:app", host=args.host, port=args.port)
        return 0

    service = EditorService()
    if args.script:
        try:
            text = read_script(args.script)
        except OSError as exc:
            print(f"line-editor: {exc}", file=sys.stderr)
            return 2
        return run_stream(service, iter(text.splitlines()), sys.stdout)
    return run_stream(service, sys.stdin, sys.stdout)


if __name__ == "__main__":
    raise SystemExit(main())
