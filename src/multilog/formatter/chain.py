"""Error capabilities and cause chains.

The normalizer accepts any object with a message and a cause. Everything else
(code, source location, own fields, call frames) is optional and queried with
isinstance checks against the protocols below. Python exceptions are wrapped in
ExceptionView, which implements all of them from the exception and its traceback.

Example:
    >>> class Rejected:
    ...     message = "card declined"
    ...     previous = None
    ...     code = 402
    >>> isinstance(Rejected(), ErrorLike), isinstance(Rejected(), HasCode)
    (True, True)
"""

from __future__ import annotations

import inspect
import traceback
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import FrameType, TracebackType
from typing import Any, Protocol, runtime_checkable

from multilog.foundation.errors import CallFrame, InvalidInputError, frame

# ═══════════════════════════════════════════════════════════════════════════════
# Capabilities
# ═══════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class ErrorLike(Protocol):
    """Minimum capability set: a message and the cause (or None)."""

    @property
    def message(self) -> str: ...
    @property
    def previous(self) -> object | None: ...


@runtime_checkable
class HasCode(Protocol):
    code: int | str | None


@runtime_checkable
class HasLocation(Protocol):
    file: str | None
    line: int | None


@runtime_checkable
class HasFields(Protocol):
    """Explicit serialization hook: the error's own fields, in render order."""

    def log_fields(self) -> Mapping[str, Any]: ...


@runtime_checkable
class HasFrames(Protocol):
    """Captured call stack, innermost frame first. Raw mappings are accepted as frames."""

    def frames(self) -> Sequence[CallFrame | Mapping[str, Any]]: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Python Exceptions
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ExceptionView:
    """Read-only capability view over a Python exception.

    - previous follows ``__cause__``, then ``__context__`` unless suppressed
    - code comes from a ``code`` attribute when the exception has one
    - fields come from the exception's log_fields() hook and its notes
    - location is the innermost traceback entry (where it was raised)
    - frames come from the traceback, innermost first
    """

    error: BaseException

    @property
    def type_name(self) -> str:
        return qualified_name(type(self.error))

    @property
    def message(self) -> str:
        return str(self.error)

    @property
    def previous(self) -> BaseException | None:
        exc = self.error
        return exc.__cause__ or (None if exc.__suppress_context__ else exc.__context__)

    @property
    def code(self) -> int | str | None:
        code = self.error.code if isinstance(self.error, HasCode) else None
        return code if isinstance(code, int | str) else None

    @property
    def file(self) -> str | None:
        if isinstance(self.error, HasLocation):
            return self.error.file
        tb = _innermost(self.error)
        return tb.tb_frame.f_code.co_filename if tb else None

    @property
    def line(self) -> int | None:
        if isinstance(self.error, HasLocation):
            return self.error.line
        tb = _innermost(self.error)
        return tb.tb_lineno if tb else None

    def log_fields(self) -> Mapping[str, Any]:
        """The exception's own log_fields(), plus ``notes`` added with add_note()."""
        fields = dict(self.error.log_fields()) if isinstance(self.error, HasFields) else {}
        if notes := getattr(self.error, "__notes__", None):
            fields.setdefault("notes", list(notes))
        return fields

    def frames(self) -> Sequence[CallFrame | Mapping[str, Any]]:
        if isinstance(self.error, HasFrames):
            return self.error.frames()
        walked = list(traceback.walk_tb(self.error.__traceback__))
        return [_call_frame(f, lineno) for f, lineno in reversed(walked)]


def as_error(value: object) -> ErrorLike:
    """Wrap exceptions in ExceptionView; pass error-like objects through.

    Raises:
        InvalidInputError: value has neither a message nor a cause accessor
    """
    if isinstance(value, BaseException):
        return ExceptionView(value)
    if isinstance(value, ErrorLike):
        return value
    raise InvalidInputError.for_value(value)


def is_error(value: object) -> bool:
    return isinstance(value, (BaseException, ErrorLike))


def error_type_name(error: ErrorLike) -> str:
    return error.type_name if isinstance(error, ExceptionView) else qualified_name(type(error))


def qualified_name(cls: type) -> str:
    """``module.QualName``, without the module for builtins."""
    return cls.__qualname__ if cls.__module__ == "builtins" else f"{cls.__module__}.{cls.__qualname__}"


def walk_chain(error: ErrorLike, limit: int) -> tuple[list[ErrorLike], object | None]:
    """Collect the error and its causes, outermost first.

    Stops at a cause already seen, after ``limit`` nodes, or at a cause that is not an error.
    Returns the nodes and the value to show as the last node's cause: a note when the
    walk was cut short, the non-error cause itself, or None when the chain simply ended.
    """
    nodes: list[ErrorLike] = [error]
    seen = {_identity(error)}
    while (cause := nodes[-1].previous) is not None:
        if not is_error(cause):
            return nodes, cause
        if _identity(cause) in seen:
            return nodes, f"[circular reference: {error_type_name(as_error(cause))}]"
        if len(nodes) >= limit:
            return nodes, "[max depth reached]"
        seen.add(_identity(cause))
        nodes.append(as_error(cause))
    return nodes, None


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def _identity(value: object) -> int:
    return id(value.error) if isinstance(value, ExceptionView) else id(value)


def _innermost(exc: BaseException) -> TracebackType | None:
    tb = exc.__traceback__
    while tb is not None and tb.tb_next is not None:
        tb = tb.tb_next
    return tb


def _call_frame(f: FrameType, lineno: int) -> CallFrame:
    """Build a CallFrame from a live frame: receiver from self/cls, args from parameter locals."""
    code, local = f.f_code, f.f_locals
    names = list(code.co_varnames[:code.co_argcount + code.co_kwonlyargcount])
    receiver = None
    if names and names[0] in ("self", "cls") and names[0] in local:
        bound = local[names[0]]
        receiver = bound.__qualname__ if inspect.isclass(bound) else type(bound).__qualname__
        names = names[1:]
    args = [local[n] for n in names if n in local]
    if code.co_flags & inspect.CO_VARARGS:
        args.extend(local.get(code.co_varnames[code.co_argcount + code.co_kwonlyargcount], ()))
    return frame(code.co_name, *args, receiver=receiver, file=code.co_filename, line=lineno)
