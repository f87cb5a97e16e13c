from __future__ import annotations

from typing import Iterable

from amsilence.domain.models import Silence, SilenceState


def filter_expired(silences: Iterable[Silence]) -> list[Silence]:
    """Drop expired silences, keeping the order of the rest."""
    return [silence for silence in silences if silence.status.state != SilenceState.expired]
