"""multilog - human-readable multi-line log record formatting.

Renders one log event into a self-contained text block: a header line with
timestamp, channel, level and message, then context and extra as an indented
tree. Exceptions render with their cause chain and call frames.

Quick Start:
    >>> from multilog import LogRecord, MultilineFormatter
    >>>
    >>> fmt = MultilineFormatter()
    >>> print(fmt.format(LogRecord.create("user signed in", channel="auth",
    ...                                   context={"user": {"id": 7, "roles": ["admin", "ops"]}})), end="")
    [2024-05-01T12:00:00.000000+00:00] auth.INFO: user signed in
    <BLANKLINE>
     |  context:
     |    user:
     |      id: 7
     |      roles:
     |        - admin
     |        - ops

stdlib logging:
    >>> import logging
    >>> from multilog import build_console_handler
    >>> logging.getLogger("billing").addHandler(build_console_handler())

Configuration (env prefix MULTILOG_):
    >>> from multilog import FormatterSettings
    >>> MultilineFormatter(FormatterSettings(include_stacktraces=False, max_depth=8))
"""

from __future__ import annotations

__version__ = "0.1.0"

# Config
from .foundation.config import FormatterSettings, clear_settings_cache, get_settings

# Errors
from .foundation.errors import CallFrame, ErrorCode, InvalidInputError, LoggableError, frame

# Formatting
from .formatter import (
    ErrorLike,
    ExceptionView,
    LineFormatter,
    LogRecord,
    MultilineFormatter,
    MultilineLoggingFormatter,
    Normalizer,
    TreeRenderer,
    build_console_handler,
    is_list_like,
    render_tree,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "FormatterSettings",
    "get_settings",
    "clear_settings_cache",
    # Errors
    "ErrorCode",
    "LoggableError",
    "InvalidInputError",
    "CallFrame",
    "frame",
    # Formatting
    "LogRecord",
    "MultilineFormatter",
    "LineFormatter",
    "Normalizer",
    "TreeRenderer",
    "render_tree",
    "is_list_like",
    "ErrorLike",
    "ExceptionView",
    # stdlib logging
    "MultilineLoggingFormatter",
    "build_console_handler",
]
