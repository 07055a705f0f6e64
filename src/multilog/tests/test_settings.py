"""Tests for environment-based formatter settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from multilog.foundation.config import (
    DATE_FORMAT,
    INDENT_STRING,
    SIMPLE_FORMAT,
    FormatterSettings,
    clear_settings_cache,
    get_settings,
)


def test_defaults() -> None:
    s = FormatterSettings()
    assert (s.format, s.date_format, s.indent) == (SIMPLE_FORMAT, DATE_FORMAT, INDENT_STRING)
    assert s.include_stacktraces is True and s.inline_line_breaks is True
    assert (s.max_depth, s.max_items) == (32, 1000)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MULTILOG_MAX_DEPTH", "8")
    monkeypatch.setenv("MULTILOG_INCLUDE_STACKTRACES", "false")
    monkeypatch.setenv("MULTILOG_INDENT", "  ")
    s = FormatterSettings()
    assert (s.max_depth, s.include_stacktraces, s.indent) == (8, False, "  ")


def test_dotenv_file_is_read(tmp_path) -> None:
    """The autouse fixture runs each test inside tmp_path, so .env there is picked up."""
    (tmp_path / ".env").write_text("MULTILOG_MAX_ITEMS=10\n")
    assert FormatterSettings().max_items == 10


@pytest.mark.parametrize("field, value", [("max_depth", 0), ("max_items", -1), ("indent", "a\nb"), ("format", "")])
def test_invalid_values_are_rejected(field: str, value: object) -> None:
    with pytest.raises(ValidationError):
        FormatterSettings(**{field: value})


def test_settings_are_frozen() -> None:
    with pytest.raises(ValidationError):
        FormatterSettings().max_depth = 3  # type: ignore[misc]


def test_with_overrides_returns_validated_copy() -> None:
    base = FormatterSettings()
    assert base.with_overrides() is base
    changed = base.with_overrides(max_items=5)
    assert (changed.max_items, base.max_items) == (5, 1000)
    with pytest.raises(ValidationError):
        base.with_overrides(max_items=0)


def test_get_settings_is_cached_until_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    assert get_settings() is first
    monkeypatch.setenv("MULTILOG_MAX_DEPTH", "4")
    assert get_settings().max_depth == 32
    clear_settings_cache()
    assert get_settings().max_depth == 4
