"""Standardized errors for multilog.

LoggableError is both the package's own exception base and a ready-made
implementation of the error capabilities the normalizer understands, so
applications can subclass it to get codes and fields into their logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, Self


class ErrorCode(StrEnum):
    """Machine-readable codes for errors raised by multilog."""
    INVALID_INPUT = "INVALID_INPUT"
    UNKNOWN = "UNKNOWN"


class LoggableError(Exception):
    """Exception carrying a code and explicit log fields.

    Attributes:
        message: Human-readable error message
        code: Machine-readable code (int or str)
        fields: Extra fields rendered under the error in log output
    """

    default_code: int | str = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        code: int | str | None = None,
        fields: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.fields: dict[str, Any] = dict(fields or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def previous(self) -> BaseException | None:
        return self.__cause__ or (None if self.__suppress_context__ else self.__context__)

    def log_fields(self) -> Mapping[str, Any]:
        """Fields rendered after type/message/code/file. Override to add more."""
        return self.fields

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code!r})"

    def __str__(self) -> str:
        return self.message


class InvalidInputError(LoggableError, TypeError):
    """Value handed to the error normalizer lacks the error capabilities."""

    default_code = ErrorCode.INVALID_INPUT

    @classmethod
    def for_value(cls, value: object, expected: str = "an exception or error-like object") -> Self:
        """Create for an offending value, recording its type."""
        kind = type(value).__qualname__
        return cls(f"Expected {expected}, got {kind}", fields={"given": kind})
