"""Header line formatting: template substitution and date formatting.

Placeholders: ``%datetime%``, ``%channel%``, ``%level_name%``, ``%message%``,
``%context.<key>%`` and ``%extra.<key>%``. Context/extra placeholders naming a
missing key are removed; unknown plain placeholders are left as written.
Substitution is a single pass, so placeholder-like text inside the message stays as is.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import TYPE_CHECKING

import orjson

from multilog.foundation.config import DATE_FORMAT, SIMPLE_FORMAT

from .chain import as_error, is_error

if TYPE_CHECKING:
    from multilog.foundation.config import FormatterSettings

    from .record import LogRecord

_PLACEHOLDER = re.compile(r"%(?:(context|extra)\.([^%\s]+)|(\w+))%")
_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


class LineFormatter:
    """Formats the ``[%datetime%] %channel%.%level_name%: %message%`` header of a record.

    Example:
        >>> from datetime import datetime, UTC
        >>> from multilog.formatter.record import LogRecord
        >>> rec = LogRecord(datetime(2024, 5, 1, 12, 0, tzinfo=UTC), "app", "INFO", "ready")
        >>> LineFormatter().format_header(rec)
        '[2024-05-01T12:00:00.000000+00:00] app.INFO: ready'
    """

    __slots__ = ("template", "date_format", "inline_line_breaks")

    def __init__(
        self,
        template: str = SIMPLE_FORMAT,
        date_format: str = DATE_FORMAT,
        *,
        inline_line_breaks: bool = True,
    ) -> None:
        self.template = template
        self.date_format = date_format
        self.inline_line_breaks = inline_line_breaks

    @classmethod
    def from_settings(cls, settings: FormatterSettings) -> LineFormatter:
        return cls(settings.format, settings.date_format, inline_line_breaks=settings.inline_line_breaks)

    def format_header(self, record: LogRecord) -> str:
        values = {
            "datetime": self.format_date(record.aware_datetime),
            "channel": record.channel,
            "level_name": record.level_name,
            "message": self.replace_newlines(message_text(record.message)),
        }

        def substitute(m: re.Match[str]) -> str:
            if name := m.group(3):
                return values.get(name, m.group(0))
            side = record.context if m.group(1) == "context" else record.extra
            key = m.group(2)
            return self.replace_newlines(stringify(side[key])) if key in side else ""

        return _PLACEHOLDER.sub(substitute, self.template)

    def format_date(self, value: datetime) -> str:
        return value.strftime(self.date_format)

    def replace_newlines(self, text: str) -> str:
        """Keep line breaks, or collapse each to a space when inline line breaks are off."""
        return text if self.inline_line_breaks else _LINE_BREAKS.sub(" ", text)


def message_text(message: object) -> str:
    """Text of a record message; errors contribute their own message."""
    return as_error(message).message if is_error(message) else str(message)


def stringify(value: object) -> str:
    """Scalars as text (``NULL``, ``true``/``false``), anything else as compact JSON."""
    match value:
        case None:
            return "NULL"
        case bool():
            return "true" if value else "false"
        case str() | int() | float():
            return str(value)
        case _:
            try:
                return orjson.dumps(value, default=str, option=orjson.OPT_NON_STR_KEYS).decode()
            except orjson.JSONEncodeError:
                return str(value)
