"""Immutable log record handed to the formatter."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime as _datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .chain import ErrorLike

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(slots=True, frozen=True)
class LogRecord:
    """One log event: timestamp, channel, level, message and side data.

    Naive datetimes are read as UTC. context and extra keep insertion order.
    The message may be an exception or error-like object; the header shows its
    message and the normalized error renders beneath it.

    Example:
        >>> rec = LogRecord.create("user signed in", channel="auth", context={"user_id": 42})
        >>> rec.level_name
        'INFO'
    """

    datetime: _datetime
    channel: str
    level_name: str
    message: str | BaseException | ErrorLike
    context: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    extra: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def create(
        cls,
        message: str | BaseException | ErrorLike,
        *,
        channel: str = "app",
        level_name: str = "INFO",
        context: Mapping[str, Any] | None = None,
        extra: Mapping[str, Any] | None = None,
        datetime: _datetime | None = None,
    ) -> LogRecord:
        """Build a record stamped with the current UTC time unless one is given."""
        return cls(
            datetime=datetime or _datetime.now(UTC),
            channel=channel,
            level_name=level_name,
            message=message,
            context=context or _EMPTY,
            extra=extra or _EMPTY,
        )

    @property
    def aware_datetime(self) -> _datetime:
        """Timestamp with a timezone attached (UTC for naive values)."""
        return self.datetime if self.datetime.tzinfo else self.datetime.replace(tzinfo=UTC)
