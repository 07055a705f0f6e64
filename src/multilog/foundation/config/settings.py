"""Environment-based formatter configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files.

Example:
    >>> from multilog.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.indent
    ' |  '
    >>> settings.max_depth
    32

    # Or with environment variables:
    # MULTILOG_INCLUDE_STACKTRACES=false
    # MULTILOG_MAX_DEPTH=16
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SIMPLE_FORMAT = "[%datetime%] %channel%.%level_name%: %message%"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%:z"
INDENT_STRING = " |  "


class FormatterSettings(BaseSettings):
    """Configuration for MultilineFormatter. Frozen: a formatter never sees it change.

    Example environment variables:
        MULTILOG_FORMAT="%level_name% %message%"
        MULTILOG_DATE_FORMAT="%H:%M:%S"
        MULTILOG_INLINE_LINE_BREAKS=false
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTILOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        validate_default=True,
    )

    format: str = Field(default=SIMPLE_FORMAT, min_length=1, description="Header line template")
    date_format: str = Field(default=DATE_FORMAT, min_length=1, description="strftime pattern for %datetime%")
    indent: str = Field(default=INDENT_STRING, description="Rail prefixed to continuation lines")
    include_stacktraces: bool = Field(default=True, description="Render call frames of errors")
    inline_line_breaks: bool = Field(default=True, description="Keep newlines of the message in the header")
    max_depth: PositiveInt = Field(default=32, description="Nesting depth before values degrade")
    max_items: PositiveInt = Field(default=1000, description="Container size before normalization stops")

    @field_validator("indent")
    @classmethod
    def _single_line_indent(cls, v: str) -> str:
        """The rail is repeated on every line, so it cannot contain line breaks."""
        if "\n" in v or "\r" in v:
            raise ValueError("indent must not contain line breaks")
        return v

    def with_overrides(self, **overrides: Any) -> FormatterSettings:
        """Return a validated copy with the given fields replaced."""
        if not overrides:
            return self
        return type(self).model_validate({**self.model_dump(), **overrides})


@lru_cache(maxsize=1)
def get_settings() -> FormatterSettings:
    """Get the global settings instance (cached)."""
    return FormatterSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
