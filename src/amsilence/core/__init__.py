"""Core modules for amsilence - centralized error definitions."""

from amsilence.core.errors import (
    AmSilenceError,
    BackendError,
    ConfigurationError,
    ExitCode,
    PartialFailureError,
    SilenceNotFoundError,
    TimeParseError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "AmSilenceError",
    "ConfigurationError",
    "BackendError",
    "SilenceNotFoundError",
    "ValidationError",
    "TimeParseError",
    "PartialFailureError",
    "main_with_error_handling",
    "format_error_message",
]
