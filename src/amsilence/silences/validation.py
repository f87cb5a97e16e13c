"""
Validation of silence requests.

Every check returns a ``(reason, ok)`` pair; ``reason`` is empty when the
input is accepted. Checks run in a fixed order and stop at the first failure.
"""

from __future__ import annotations

import re

from amsilence.core.errors import TimeParseError
from amsilence.domain.models import Matcher, Repeat, Schedule, SilenceRequest
from amsilence.silences.timefmt import parse_timestamp

REPEAT_COUNT_MIN = 0
REPEAT_COUNT_MAX = 50

_INTERVAL_PATTERN = re.compile(r"(h|d|w)?")


def validate_matcher(matcher: Matcher) -> bool:
    return bool(matcher.name) and bool(matcher.value)


def validate_schedule(schedule: Schedule) -> tuple[str, bool]:
    if schedule == Schedule():
        return "empty schedule provided", False

    try:
        parse_timestamp(schedule.start_time)
    except TimeParseError:
        return "invalid start time format", False

    try:
        parse_timestamp(schedule.end_time)
    except TimeParseError:
        return "invalid end time format", False
    return "", True


def validate_repeat(repeat: Repeat) -> tuple[str, bool]:
    if repeat == Repeat():
        return "schedule repeat is empty", False

    if repeat.count <= REPEAT_COUNT_MIN:
        return f"repeat count must be higher than {REPEAT_COUNT_MIN}", False

    if repeat.count > REPEAT_COUNT_MAX:
        return f"repeat count must be lower than or equal to {REPEAT_COUNT_MAX}", False

    if not _INTERVAL_PATTERN.fullmatch(repeat.interval):
        return "unknown schedule interval provided", False
    return "", True


def validate_request(request: SilenceRequest) -> tuple[str, bool]:
    """Decide whether a silence request can be sent to the backend."""
    if not request.comment:
        return "comment field empty", False

    if not request.created_by:
        return "createdBy field empty", False

    if len(request.matchers) < 1:
        return "number of matchers should be bigger than 0", False

    for matcher in request.matchers:
        if not validate_matcher(matcher):
            return f"matcher '{matcher.name}={matcher.value}' is invalid", False

    reason, ok = validate_schedule(request.schedule)
    if not ok:
        return reason, False

    return validate_repeat(request.schedule.repeat)
