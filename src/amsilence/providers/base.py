from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

from amsilence.domain.models import Alert, Silence, SilenceRequest


@dataclass(frozen=True)
class ProviderHealth:
    status: Literal["healthy", "degraded", "unreachable"]
    details: str | None = None


@runtime_checkable
class AlertingBackend(Protocol):
    """Capability the scheduling engine needs from the system of record for silences.

    Implementations raise ``BackendError`` (or ``SilenceNotFoundError``) on failure.
    """

    async def create_silence(self, start: str, end: str, request: SilenceRequest) -> str:
        ...

    async def get_silence(self, silence_id: str) -> Silence:
        ...

    async def list_silences(self) -> list[Silence]:
        ...

    async def list_alerts(self) -> list[Alert]:
        ...

    async def expire_silence(self, silence_id: str) -> None:
        ...
