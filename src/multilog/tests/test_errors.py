"""Tests for package errors and the call frame model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from multilog.foundation.errors import CallFrame, ErrorCode, InvalidInputError, LoggableError, frame, validate_frame


def test_loggable_error_defaults() -> None:
    err = LoggableError("boom")
    assert (str(err), err.message, err.code, err.fields) == ("boom", "boom", ErrorCode.UNKNOWN, {})
    assert err.previous is None
    assert repr(err) == "LoggableError(message='boom', code=<ErrorCode.UNKNOWN: 'UNKNOWN'>)"


def test_loggable_error_cause_and_fields() -> None:
    root = OSError("disk")
    err = LoggableError("save failed", code=17, fields={"path": "/tmp/x"}, cause=root)
    assert err.__cause__ is root and err.previous is root
    assert err.log_fields() == {"path": "/tmp/x"}


def test_invalid_input_error_for_value() -> None:
    err = InvalidInputError.for_value(3, expected="a mapping")
    assert str(err) == "Expected a mapping, got int"
    assert err.code == ErrorCode.INVALID_INPUT
    assert isinstance(err, TypeError)


# ═════════════════════════════════════════════════════════════════════════════
# Call Frames
# ═════════════════════════════════════════════════════════════════════════════


def test_frame_location_and_callee() -> None:
    f = frame("run", 1, receiver="Job", operator="::", file="job.py", line=9)
    assert (f.location, f.callee, f.args) == ("job.py:9", "Job::run", (1,))
    assert frame("run", file="job.py").location == "job.py"
    assert frame("run").location is None


@pytest.mark.parametrize("name, anonymous", [
    ("<lambda>", True), ("{closure}", True), ("<listcomp>", True), ("run", False), ("<", False), ("<x", False),
])
def test_frame_is_anonymous(name: str, anonymous: bool) -> None:
    assert frame(name).is_anonymous is anonymous


def test_validate_frame_accepts_trace_dump_spelling() -> None:
    f = validate_frame({"function": "charge", "class": "Gateway", "type": "->", "args": [1], "file": "gw.py", "line": 7})
    assert isinstance(f, CallFrame)
    assert (f.receiver, f.operator, f.args, f.location) == ("Gateway", "->", (1,), "gw.py:7")


@pytest.mark.parametrize("raw", [{}, {"function": ""}, {"function": "f", "unknown": 1}, {"function": "f", "line": "x"}])
def test_validate_frame_rejects_malformed(raw: dict) -> None:
    with pytest.raises(ValidationError):
        validate_frame(raw)


def test_frames_are_frozen() -> None:
    with pytest.raises(ValidationError):
        validate_frame({"function": "f"}).function = "g"  # type: ignore[misc]
