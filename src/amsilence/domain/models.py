from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Interval(StrEnum):
    """Repeat interval codes accepted in a schedule."""

    none = ""
    hour = "h"
    day = "d"
    week = "w"


class SilenceState(StrEnum):
    """Silence states reported by Alertmanager."""

    pending = "pending"
    active = "active"
    expired = "expired"


class Matcher(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    value: str = ""
    is_regex: bool = Field(default=False, alias="isRegex")


class Repeat(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    # Kept as a plain string so unknown codes reach the validator.
    interval: str = Interval.none.value
    count: int = 0


class Schedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_time: str = ""
    end_time: str = ""
    repeat: Repeat = Field(default_factory=Repeat)


class SilenceRequest(BaseModel):
    """A maintenance window submission: what to silence and when."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    comment: str = ""
    created_by: str = Field(default="", alias="createdBy")
    matchers: tuple[Matcher, ...] = ()
    schedule: Schedule = Field(default_factory=Schedule)


class SilenceStatus(BaseModel):
    state: str


class Silence(BaseModel):
    """Silence as returned by the alerting backend."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    status: SilenceStatus
    matchers: list[Matcher] = Field(default_factory=list)
    starts_at: str | None = Field(default=None, alias="startsAt")
    ends_at: str | None = Field(default=None, alias="endsAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    created_by: str | None = Field(default=None, alias="createdBy")
    comment: str | None = None

    @property
    def expired(self) -> bool:
        return self.status.state == SilenceState.expired


class Receiver(BaseModel):
    name: str


class AlertStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    state: str
    silenced_by: list[str] = Field(default_factory=list, alias="silencedBy")
    inhibited_by: list[str] = Field(default_factory=list, alias="inhibitedBy")


class Alert(BaseModel):
    """Alert as returned by the alerting backend."""

    model_config = ConfigDict(populate_by_name=True)

    fingerprint: str
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    starts_at: str | None = Field(default=None, alias="startsAt")
    ends_at: str | None = Field(default=None, alias="endsAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    generator_url: str | None = Field(default=None, alias="generatorURL")
    receivers: list[Receiver] = Field(default_factory=list)
    status: AlertStatus
