"""
Expansion of a repeating schedule into absolute silence windows.

Window ``i`` is the base window shifted by ``i`` repeat intervals; both ends
move by the same offset so every window has the same duration. Windows may
overlap when the interval is shorter than the silence itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from amsilence.domain.models import Schedule
from amsilence.silences.timefmt import add_duration


@dataclass(frozen=True)
class SilenceWindow:
    """One absolute period to silence."""

    index: int
    start: str
    end: str


class WindowSequence:
    """Lazy, finite and restartable sequence of windows for one schedule."""

    def __init__(self, schedule: Schedule) -> None:
        self._schedule = schedule

    def __len__(self) -> int:
        return max(self._schedule.repeat.count, 0)

    def __iter__(self) -> Iterator[SilenceWindow]:
        for index in range(len(self)):
            yield self.at(index)

    def at(self, index: int) -> SilenceWindow:
        """Compute window ``index``; raises TimeParseError for that window only."""
        if not 0 <= index < len(self):
            raise IndexError(f"window index {index} out of range")
        interval = self._schedule.repeat.interval
        return SilenceWindow(
            index=index,
            start=add_duration(self._schedule.start_time, interval, index),
            end=add_duration(self._schedule.end_time, interval, index),
        )


def expand(schedule: Schedule) -> WindowSequence:
    return WindowSequence(schedule)
