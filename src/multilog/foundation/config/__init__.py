"""Configuration management using pydantic-settings."""

from .settings import (
    DATE_FORMAT,
    INDENT_STRING,
    SIMPLE_FORMAT,
    FormatterSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DATE_FORMAT",
    "INDENT_STRING",
    "SIMPLE_FORMAT",
    "FormatterSettings",
    "clear_settings_cache",
    "get_settings",
]
