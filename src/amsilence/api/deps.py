from __future__ import annotations

from fastapi import Depends, Request

from amsilence.providers.base import AlertingBackend
from amsilence.silences.engine import SilenceOrchestrator


def get_backend(request: Request) -> AlertingBackend:
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        raise RuntimeError("Alerting backend not initialized.")
    return backend


def get_orchestrator(
    backend: AlertingBackend = Depends(get_backend),  # noqa: B008
) -> SilenceOrchestrator:
    return SilenceOrchestrator(backend)
