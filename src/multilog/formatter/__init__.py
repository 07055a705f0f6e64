"""Record formatting: indented tree rendering, error normalization, line assembly."""

from .chain import (
    ErrorLike,
    ExceptionView,
    HasCode,
    HasFields,
    HasFrames,
    HasLocation,
    as_error,
    is_error,
    walk_chain,
)
from .line import LineFormatter, message_text, stringify
from .multiline import MultilineFormatter, trim_blank_lines
from .normalize import ANONYMOUS_FRAME, Normalizer, render_call, stringify_arg, stringify_args
from .record import LogRecord
from .stdlib import MultilineLoggingFormatter, build_console_handler, to_log_record
from .tree import TreeRenderer, indent_text, is_list_like, render_tree

__all__ = [
    # Records
    "LogRecord",
    # Rendering
    "TreeRenderer", "render_tree", "is_list_like", "indent_text",
    # Errors
    "ErrorLike", "HasCode", "HasLocation", "HasFields", "HasFrames",
    "ExceptionView", "as_error", "is_error", "walk_chain",
    # Normalization
    "Normalizer", "render_call", "stringify_arg", "stringify_args", "ANONYMOUS_FRAME",
    # Assembly
    "LineFormatter", "message_text", "stringify", "MultilineFormatter", "trim_blank_lines",
    # stdlib logging
    "MultilineLoggingFormatter", "build_console_handler", "to_log_record",
]
