"""
Unified error handling for amsilence.

Every failure raised by the scheduling engine, the Alertmanager client and
the configuration layer derives from ``AmSilenceError`` and carries an exit
code, so that the CLI and the HTTP API can report it consistently.

Exit Codes:
- 0: Success
- 1: Partial failure (some silences of a batch could not be created)
- 10: Configuration error
- 11: Backend error (Alertmanager unreachable or returned an error)
- 12: Validation error (malformed request or timestamp)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    PARTIAL_FAILURE = 1
    CONFIG_ERROR = 10
    BACKEND_ERROR = 11
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127


class AmSilenceError(Exception):
    """Base exception for amsilence errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AmSilenceError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class BackendError(AmSilenceError):
    """Raised when the alerting backend fails or cannot be reached."""

    exit_code = ExitCode.BACKEND_ERROR


class SilenceNotFoundError(BackendError):
    """Raised when the backend has no silence with the requested ID."""


class ValidationError(AmSilenceError):
    """Raised when a silence request is rejected before any backend call."""

    exit_code = ExitCode.VALIDATION_ERROR


class TimeParseError(ValidationError, ValueError):
    """Raised when a timestamp does not match the fixed request format."""


class PartialFailureError(AmSilenceError):
    """Raised when a batch finished but some windows could not be created."""

    exit_code = ExitCode.PARTIAL_FAILURE


F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI main functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - AmSilenceError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except AmSilenceError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                _print_error(format_error_message(e))
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: AmSilenceError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg


def _print_error(message: str) -> None:
    from amsilence.cli.ux import error as print_error

    print_error(message)
