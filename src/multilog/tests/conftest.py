"""
Pytest fixtures for multilog tests.
"""
import os
from datetime import UTC, datetime

import pytest

from multilog.foundation.config import clear_settings_cache
from multilog.formatter.record import LogRecord

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=UTC)
FIXED_STAMP = "[2024-05-01T12:30:45.123456+00:00]"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> object:
    """Drop MULTILOG_* env vars and any cwd .env so settings are the defaults."""
    for key in list(os.environ):
        if key.startswith("MULTILOG_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def make_record():
    """Factory for records stamped at FIXED_TIME."""
    def _make(message: str = "ready", **kw: object) -> LogRecord:
        kw.setdefault("datetime", FIXED_TIME)
        return LogRecord.create(message, **kw)  # type: ignore[arg-type]
    return _make
