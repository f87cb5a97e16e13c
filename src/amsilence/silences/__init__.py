"""
Recurring silence scheduling.

Validates maintenance window requests, expands their repeat schedule into
absolute windows and creates one silence per window through an alerting
backend.
"""

from amsilence.silences.engine import OrchestrationResult, SilenceOrchestrator, WindowOutcome
from amsilence.silences.expander import SilenceWindow, WindowSequence, expand
from amsilence.silences.filters import filter_expired
from amsilence.silences.timefmt import add_duration, format_timestamp, parse_timestamp
from amsilence.silences.validation import (
    validate_matcher,
    validate_repeat,
    validate_request,
    validate_schedule,
)

__all__ = [
    "OrchestrationResult",
    "SilenceOrchestrator",
    "SilenceWindow",
    "WindowOutcome",
    "WindowSequence",
    "add_duration",
    "expand",
    "filter_expired",
    "format_timestamp",
    "parse_timestamp",
    "validate_matcher",
    "validate_repeat",
    "validate_request",
    "validate_schedule",
]
