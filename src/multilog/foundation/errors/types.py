"""Type aliases and call frame model shared by the normalizer and renderer.

Uses Pydantic models for validation. Frames built from tracebacks bypass
validation via model_construct since every record with an exception builds one per frame.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, TypeAlias, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field

# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

# Recursive slots use Any to avoid Pydantic resolution issues
Scalar = Union[str, int, float, bool, None]
NestedValue: TypeAlias = Union[Scalar, Sequence[Any], Mapping[str, Any]]
NestedDict = dict[str, Any]

# ═══════════════════════════════════════════════════════════════════════════════
# Call Frames
# ═══════════════════════════════════════════════════════════════════════════════

_EMPTY_ARGS: tuple[Any, ...] = ()


class CallFrame(BaseModel):
    """One call site of a captured stack trace. Frozen for immutability."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", arbitrary_types_allowed=True,
        revalidate_instances="never",
        json_schema_extra={"title": "Call Frame", "examples": [
            {"function": "handle", "receiver": "Worker", "operator": ".", "args": [1], "file": "worker.py", "line": 12},
        ]},
    )

    function: Annotated[str, Field(min_length=1)]
    receiver: str | None = None
    operator: str = "."
    args: tuple[Any, ...] = _EMPTY_ARGS
    file: str | None = Field(default=None, repr=False)
    line: int | None = Field(default=None, repr=False)

    @computed_field
    @property
    def location(self) -> str | None:
        """``file:line`` or None when the frame has no source location."""
        if not self.file:
            return None
        return f"{self.file}:{self.line}" if self.line is not None else self.file

    @property
    def is_anonymous(self) -> bool:
        """Lambdas, closures and comprehensions (``<lambda>``, ``{closure}``, ...)."""
        name = self.function
        return len(name) > 1 and name[0] in "<{" and name[-1] in ">}"

    @property
    def callee(self) -> str:
        return f"{self.receiver}{self.operator}{self.function}" if self.receiver else self.function


_CallFrameAdapter: TypeAdapter[CallFrame] = TypeAdapter(CallFrame)


def frame(function: str, *args: Any, receiver: str | None = None, operator: str = ".",
          file: str | None = None, line: int | None = None) -> CallFrame:
    """Create CallFrame concisely (bypasses validation for performance)."""
    return CallFrame.model_construct(
        function=function, receiver=receiver, operator=operator,
        args=args or _EMPTY_ARGS, file=file, line=line,
    )


def validate_frame(data: Mapping[str, Any]) -> CallFrame:
    """Validate a raw frame mapping (``function``, ``class``, ``type``, ``args``, ``file``, ``line``).

    Accepts the common trace-dump spelling where ``class`` and ``type`` name the receiver and operator.
    Raises pydantic.ValidationError for malformed frames.
    """
    raw = dict(data)
    if "class" in raw:
        raw["receiver"] = raw.pop("class")
    if "type" in raw:
        raw["operator"] = raw.pop("type")
    if isinstance(raw.get("args"), list):
        raw["args"] = tuple(raw["args"])
    return _CallFrameAdapter.validate_python(raw)
