"""Multi-line record formatter.

The first line starts with the bracketed timestamp; continuation lines of the
message carry the indent rail. Context and extra follow after a blank line as
an indented tree:

    [2024-05-01T12:00:00.000000+00:00] billing.ERROR: charge failed
     |  retry scheduled

     |  context:
     |    order: 1042
     |    exception:
     |      type: ValueError
     |      message: card declined
     ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from multilog.foundation.config import FormatterSettings, get_settings
from multilog.foundation.errors import NestedDict

from .chain import is_error
from .line import LineFormatter
from .normalize import Normalizer
from .record import LogRecord
from .tree import TreeRenderer

logger = logging.getLogger("multilog.formatter")


class MultilineFormatter:
    """Formats LogRecords into self-contained, newline-terminated text blocks.

    Settings are fixed at construction; overrides are validated against FormatterSettings.
    format() reads nothing mutable, so one instance can serve many threads.

    Example:
        >>> fmt = MultilineFormatter(include_stacktraces=False)
        >>> text = fmt.format(LogRecord.create("ready", context={"port": 8080}))
        >>> text.endswith(" |  context: port: 8080\\n")
        True
    """

    __slots__ = ("settings", "_line", "_normalizer", "_tree")

    def __init__(self, settings: FormatterSettings | None = None, **overrides: Any) -> None:
        self.settings = (settings or get_settings()).with_overrides(**overrides)
        self._line = LineFormatter.from_settings(self.settings)
        self._normalizer = Normalizer.from_settings(self.settings)
        # one level past the normalizer's cap so its "Over N levels deep" marker stays visible
        self._tree = TreeRenderer(self.settings.indent, self.settings.max_depth + 1)
        logger.debug("multiline formatter configured: %s", self.settings.model_dump())

    @property
    def normalizer(self) -> Normalizer:
        return self._normalizer

    def format(self, record: LogRecord) -> str:
        """Render one record: header block, then a blank line and the context/extra block if any.

        An error passed as the message renders as a nested mapping right under the header.
        """
        text = self._tree.render(self._line.format_header(record), leading="")
        if is_error(record.message):
            text += self._tree.render(self._normalizer.normalize_error(record.message))
        if side := self.side_data(record):
            text += "\n" + self._tree.render(self._normalizer.normalize(side))
        return trim_blank_lines(text) + "\n"

    def format_batch(self, records: Iterable[LogRecord]) -> str:
        return "".join(self.format(record) for record in records)

    @staticmethod
    def side_data(record: LogRecord) -> NestedDict:
        """``{"context": ..., "extra": ...}`` with empty maps left out."""
        side: NestedDict = {}
        if record.context:
            side["context"] = record.context
        if record.extra:
            side["extra"] = record.extra
        return side


def trim_blank_lines(text: str) -> str:
    """Drop leading and trailing whitespace-only lines. The result has no trailing newline."""
    lines = text.split("\n")
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])
