from infrastructure.directive_io import (
    format_directive,
    parse_directives,
    parse_header,
    parse_script,
    read_script,
    render_output,
)

__all__ = [
    "format_directive",
    "parse_directives",
    "parse_header",
    "parse_script",
    "read_script",
    "render_output",
]
