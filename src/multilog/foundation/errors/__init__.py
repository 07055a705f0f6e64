"""Error handling and shared types for multilog.

- ErrorCode: codes for errors raised by the package
- LoggableError/InvalidInputError: exceptions implementing the error capabilities
- CallFrame: one call site of a captured stack trace
- NestedValue/NestedDict/Scalar: aliases for renderable data
"""

from .errors import ErrorCode, InvalidInputError, LoggableError
from .types import CallFrame, NestedDict, NestedValue, Scalar, frame, validate_frame

__all__ = [
    # Errors
    "ErrorCode", "LoggableError", "InvalidInputError",
    # Types
    "CallFrame", "frame", "validate_frame", "NestedValue", "NestedDict", "Scalar",
]
