from .common import (
    exit_with_message,
    format_rows,
    resolve_output_path,
    write_json_outputs,
)

from .handlers import (
    handle_build,
    handle_info,
    handle_query,
    handle_verify,
)

__all__ = [
    "exit_with_message",
    "format_rows",
    "resolve_output_path",
    "write_json_outputs",
    "handle_build",
    "handle_info",
    "handle_query",
    "handle_verify",
]
