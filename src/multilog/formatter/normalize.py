"""Normalization of log side data into plain nested values.

Errors become ordered mappings (type, message, code, file, own fields, trace,
previous), so a cause chain renders as nested structure. Models, dataclasses
and dates become plain data. Anything else is left for the renderer's type tag.
"""

from __future__ import annotations

import inspect
import io
import socket
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import fields as dataclass_fields, is_dataclass
from datetime import date
from numbers import Number
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import BaseModel

from multilog.foundation.config import DATE_FORMAT
from multilog.foundation.errors import CallFrame, NestedDict, validate_frame

from .chain import ErrorLike, HasCode, HasFields, HasFrames, HasLocation, as_error, error_type_name, is_error, walk_chain
from .tree import DEFAULT_MAX_DEPTH

if TYPE_CHECKING:
    from multilog.foundation.config import FormatterSettings

ANONYMOUS_FRAME = "[anonymous]"
_JSON_OPTIONS = orjson.OPT_NON_STR_KEYS | orjson.OPT_SERIALIZE_NUMPY


class Normalizer:
    """Converts records' side data into values the tree renderer understands.

    Example:
        >>> err = ValueError("boom")
        >>> Normalizer().normalize_error(err)["message"]
        'boom'
    """

    __slots__ = ("date_format", "include_stacktraces", "max_depth", "max_items")

    def __init__(
        self,
        *,
        date_format: str = DATE_FORMAT,
        include_stacktraces: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_items: int = 1000,
    ) -> None:
        self.date_format = date_format
        self.include_stacktraces = include_stacktraces
        self.max_depth = max_depth
        self.max_items = max_items

    @classmethod
    def from_settings(cls, settings: FormatterSettings) -> Normalizer:
        return cls(
            date_format=settings.date_format,
            include_stacktraces=settings.include_stacktraces,
            max_depth=settings.max_depth,
            max_items=settings.max_items,
        )

    def normalize(self, value: object, depth: int = 0) -> Any:
        """Normalize any value. Never raises; unknown values pass through unchanged."""
        if depth > self.max_depth:
            return f"Over {self.max_depth} levels deep, aborting normalization"
        match value:
            case None | bool() | str() | Number():
                return value
            case bytes() | bytearray():
                return bytes(value).decode("utf-8", "backslashreplace")
            case date():
                return value.strftime(self.date_format)
            case _ if is_error(value):
                return self.normalize_error(value, depth)
            case Mapping():
                return self._normalize_mapping(value, depth)
            case list() | tuple() | set() | frozenset():
                return self._normalize_items(value, len(value), depth)
            case BaseModel():
                return self._normalize_mapping(value.model_dump(), depth)
            case _ if is_dataclass(value) and not isinstance(value, type):
                return self._normalize_mapping({f.name: getattr(value, f.name) for f in dataclass_fields(value)}, depth)
            case HasFields():
                return self._normalize_mapping(value.log_fields(), depth)
            case _:
                return value

    def normalize_error(self, value: object, depth: int = 0) -> NestedDict:
        """Normalize an exception or error-like object and its causes into nested mappings.

        Raises:
            InvalidInputError: value is neither an exception nor error-like
        """
        # each cause nests one level deeper, so the chain shares the depth left at this point
        nodes, tail = walk_chain(as_error(value), max(1, self.max_depth - depth))
        normalized = [self._normalize_node(node, depth + i) for i, node in enumerate(nodes)]
        for parent, child in zip(normalized, normalized[1:]):
            parent["previous"] = child
        if isinstance(tail, str):
            normalized[-1]["previous"] = tail
        elif tail is not None:
            normalized[-1]["previous"] = self.normalize(tail, depth + len(nodes))
        return normalized[0]

    def _normalize_node(self, error: ErrorLike, depth: int) -> NestedDict:
        node: NestedDict = {
            "type": error_type_name(error),
            "message": error.message,
            "code": error.code if isinstance(error, HasCode) else None,
            "file": _location(error),
        }
        if isinstance(error, HasFields):
            for key, item in error.log_fields().items():
                node.setdefault(str(key), self.normalize(item, depth + 1))
        if self.include_stacktraces and depth < self.max_depth and isinstance(error, HasFrames) and (frames := error.frames()):
            node["trace"] = self._normalize_trace(frames, depth + 1)
        return node

    def _normalize_trace(self, frames: Sequence[CallFrame | Mapping[str, Any]], depth: int) -> NestedDict:
        """Key frames ``#NN`` counting down from the frame count, first frame highest."""
        total = len(frames)
        width = max(2, len(str(total)))
        return {f"#{total - i:0{width}d}": self._normalize_frame(raw, depth + 1) for i, raw in enumerate(frames)}

    def _normalize_frame(self, raw: object, depth: int) -> Any:
        try:
            call = raw if isinstance(raw, CallFrame) else validate_frame(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return self.normalize(raw, depth)
        if call.location:
            return f"{render_call(call)} at {call.location}"
        if call.is_anonymous:
            return f"{ANONYMOUS_FRAME} {render_call(call)}"
        return self.normalize(raw.model_dump() if isinstance(raw, CallFrame) else raw, depth)

    def _normalize_mapping(self, mapping: Mapping[Any, Any], depth: int) -> NestedDict:
        out: NestedDict = {}
        for count, (key, item) in enumerate(mapping.items()):
            if count >= self.max_items:
                out["..."] = f"Over {self.max_items} items ({len(mapping)} total), aborting normalization"
                break
            # int keys stay ints so 0..n-1 mappings still render as lists
            out[key if type(key) is int else str(key)] = self.normalize(item, depth + 1)
        return out

    def _normalize_items(self, items: Iterable[Any], total: int, depth: int) -> list[Any]:
        out: list[Any] = []
        for count, item in enumerate(items):
            if count >= self.max_items:
                out.append(f"Over {self.max_items} items ({total} total), aborting normalization")
                break
            out.append(self.normalize(item, depth + 1))
        return out


# ═══════════════════════════════════════════════════════════════════════════════
# Call Expressions
# ═══════════════════════════════════════════════════════════════════════════════


def render_call(call: CallFrame) -> str:
    """``Receiver.function(arg, ...)``."""
    return f"{call.callee}({stringify_args(call.args)})"


def stringify_args(args: Iterable[object]) -> str:
    return ", ".join(stringify_arg(arg) for arg in args)


def stringify_arg(value: object) -> str:
    """Compact one call argument by kind.

    - None, bools, ints, floats, strings, bytes, lists, tuples, dicts: compact JSON
    - other numbers (Decimal, Fraction, ...): their text
    - objects: ``Type#<hex id> <compact JSON of public state>``
    - streams and sockets: ``<name>(stream)`` / ``<fd>(socket)``
    - classes, modules and functions: ``?<kind>?``
    """
    match value:
        case None | bool() | int() | float() | str() | bytes() | bytearray() | list() | tuple() | dict():
            return _compact(value)
        case Number():
            return str(value)
        case io.IOBase():
            return f"{getattr(value, 'name', f'#{id(value):x}')}(stream)"
        case socket.socket():
            return f"{value.fileno()}(socket)"
        case _ if _is_object_like(value):
            return f"{type(value).__qualname__}#{id(value):x} {_compact(value)}"
        case _:
            return f"?{type(value).__name__}?"


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def _location(error: ErrorLike) -> str | None:
    if not isinstance(error, HasLocation) or not error.file:
        return None
    return f"{error.file}:{error.line}" if error.line is not None else error.file


def _is_object_like(value: object) -> bool:
    return not (inspect.isclass(value) or inspect.ismodule(value) or inspect.isroutine(value))


def _public_state(value: object) -> dict[str, Any]:
    """Public attributes from ``__dict__``, or from ``__slots__`` along the MRO for slotted instances."""
    if hasattr(value, "__dict__"):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    state: dict[str, Any] = {}
    for cls in type(value).__mro__:
        slots = getattr(cls, "__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if not name.startswith("_") and name not in state and hasattr(value, name):
                state[name] = getattr(value, name)
    return state


def _compact(value: object) -> str:
    try:
        return orjson.dumps(value, default=_json_default, option=_JSON_OPTIONS).decode()
    except orjson.JSONEncodeError:
        # cycles and ints beyond 64 bits
        return str(value)


def _json_default(value: object) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, set | frozenset):
        return list(value)
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode("utf-8", "backslashreplace")
    if isinstance(value, Number):
        return str(value)
    if _is_object_like(value):
        return _public_state(value) or str(value)
    return str(value)
