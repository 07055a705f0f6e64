"""Foundation - Core building blocks for multilog.

Contains: error handling, shared value types, config.
"""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "LoggableError", "InvalidInputError",
    "CallFrame", "frame", "validate_frame", "NestedValue", "NestedDict", "Scalar",
    # Config
    "FormatterSettings", "get_settings", "clear_settings_cache",
    "SIMPLE_FORMAT", "DATE_FORMAT", "INDENT_STRING",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "LoggableError", "InvalidInputError",
                "CallFrame", "frame", "validate_frame", "NestedValue", "NestedDict", "Scalar"):
        from . import errors
        return getattr(errors, name)

    if name in ("FormatterSettings", "get_settings", "clear_settings_cache",
                "SIMPLE_FORMAT", "DATE_FORMAT", "INDENT_STRING"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
