"""Bridge to the standard library logging module.

Usage:
    import logging
    from multilog.formatter.stdlib import build_console_handler

    log = logging.getLogger("billing")
    log.addHandler(build_console_handler())
    log.error("charge failed", extra={"context": {"order": 1042}, "request_id": "r-9"}, exc_info=True)

``extra={"context": {...}}`` feeds the record's context; every other custom
attribute lands in extra. An active exception is added to context as
``exception`` and stack info as ``stack_info``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, TextIO

from multilog.foundation.config import FormatterSettings

from .multiline import MultilineFormatter
from .record import LogRecord

# Anything not in this set was injected via ``extra``
_DEFAULT_RECORD_ATTRS: frozenset[str] = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
}


class MultilineLoggingFormatter(logging.Formatter):
    """logging.Formatter rendering records with MultilineFormatter.

    The trailing newline is dropped because handlers append their own terminator.
    """

    def __init__(
        self,
        multiline: MultilineFormatter | None = None,
        *,
        settings: FormatterSettings | None = None,
        **overrides: Any,
    ) -> None:
        super().__init__()
        self.multiline = multiline or MultilineFormatter(settings, **overrides)

    def format(self, record: logging.LogRecord) -> str:
        return self.multiline.format(to_log_record(record))[:-1]


def to_log_record(record: logging.LogRecord) -> LogRecord:
    """Convert a stdlib record: name is the channel, levelname the level, created the timestamp."""
    attrs = vars(record)
    raw_context = attrs.get("context")
    has_context = isinstance(raw_context, Mapping)
    context: dict[str, Any] = dict(raw_context) if has_context else {}
    if record.exc_info and record.exc_info[1] is not None:
        context.setdefault("exception", record.exc_info[1])
    if record.stack_info:
        context.setdefault("stack_info", record.stack_info)
    extra = {
        k: v for k, v in attrs.items()
        if k not in _DEFAULT_RECORD_ATTRS and not (k == "context" and has_context)
    }
    return LogRecord(
        datetime=datetime.fromtimestamp(record.created, tz=UTC),
        channel=record.name,
        level_name=record.levelname,
        message=record.getMessage(),
        context=context,
        extra=extra,
    )


def build_console_handler(
    stream: TextIO | None = None,
    level: str = "DEBUG",
    settings: FormatterSettings | None = None,
    **overrides: Any,
) -> logging.StreamHandler:
    """Build a standalone stream handler (stderr by default) using the multiline formatter."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(getattr(logging, level.upper(), logging.DEBUG))
    handler.setFormatter(MultilineLoggingFormatter(settings=settings, **overrides))
    return handler
