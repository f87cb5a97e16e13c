from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from amsilence.api.deps import get_backend, get_orchestrator
from amsilence.core.errors import BackendError, SilenceNotFoundError, ValidationError
from amsilence.domain.models import Alert, Silence, SilenceRequest
from amsilence.providers.base import AlertingBackend
from amsilence.silences.engine import SilenceOrchestrator
from amsilence.silences.filters import filter_expired

router = APIRouter()


class APIResponse(BaseModel):
    status: Literal["success", "error"]
    message: str


class CreateSilenceResponse(APIResponse):
    silence_ids: list[str] = Field(default_factory=list)
    failed_indices: list[int] = Field(default_factory=list)


class UpdateSilenceResponse(APIResponse):
    silence_id: str


def error_response(message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> JSONResponse:
    body = APIResponse(status="error", message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _backend_status(exc: BackendError) -> int:
    if isinstance(exc, SilenceNotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get("/alerts", response_model=list[Alert])
async def list_alerts(
    backend: AlertingBackend = Depends(get_backend),  # noqa: B008
) -> list[Alert] | JSONResponse:
    try:
        return await backend.list_alerts()
    except BackendError as exc:
        return error_response(f"unable to retrieve alerts: {exc.message}")


@router.post("/silence", response_model=CreateSilenceResponse)
async def create_silence(
    payload: SilenceRequest,
    orchestrator: SilenceOrchestrator = Depends(get_orchestrator),  # noqa: B008
) -> CreateSilenceResponse | JSONResponse:
    result = await orchestrator.run(payload)
    if result.rejected:
        return error_response(result.message, status.HTTP_400_BAD_REQUEST)

    body = CreateSilenceResponse(
        status="success" if result.ok else "error",
        message=result.message,
        silence_ids=result.silence_ids,
        failed_indices=result.failed_indices,
    )
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )
    return body


async def _list_silences(backend: AlertingBackend, *, filtered: bool) -> list[Silence] | JSONResponse:
    try:
        silences = await backend.list_silences()
    except BackendError as exc:
        return error_response(f"unable to retrieve silences: {exc.message}")
    if filtered:
        silences = filter_expired(silences)
    return silences


@router.get("/silences", response_model=list[Silence])
async def list_silences(
    backend: AlertingBackend = Depends(get_backend),  # noqa: B008
) -> list[Silence] | JSONResponse:
    return await _list_silences(backend, filtered=False)


@router.get("/silences_filtered", response_model=list[Silence])
async def list_silences_filtered(
    backend: AlertingBackend = Depends(get_backend),  # noqa: B008
) -> list[Silence] | JSONResponse:
    return await _list_silences(backend, filtered=True)


@router.get("/silence/{silence_id}", response_model=Silence)
async def get_silence(
    silence_id: str,
    backend: AlertingBackend = Depends(get_backend),  # noqa: B008
) -> Silence | JSONResponse:
    try:
        return await backend.get_silence(silence_id)
    except BackendError as exc:
        return error_response(
            f"unable to retrieve silence from Alertmanager: {exc.message}",
            _backend_status(exc),
        )


@router.post("/silence/{silence_id}", response_model=UpdateSilenceResponse)
async def update_silence(
    silence_id: str,
    payload: SilenceRequest,
    orchestrator: SilenceOrchestrator = Depends(get_orchestrator),  # noqa: B008
) -> UpdateSilenceResponse | JSONResponse:
    try:
        new_id = await orchestrator.update(
            silence_id,
            payload.schedule.start_time,
            payload.schedule.end_time,
            payload,
        )
    except ValidationError as exc:
        return error_response(exc.message, status.HTTP_400_BAD_REQUEST)
    except BackendError as exc:
        return error_response(
            f"unable to update silence '{silence_id}': {exc.message}",
            _backend_status(exc),
        )

    return UpdateSilenceResponse(
        status="success",
        message=f"updated silence '{silence_id}', new ID: {new_id}",
        silence_id=new_id,
    )


@router.delete("/silence/{silence_id}", response_model=APIResponse)
async def expire_silence(
    silence_id: str,
    backend: AlertingBackend = Depends(get_backend),  # noqa: B008
) -> APIResponse | JSONResponse:
    try:
        await backend.expire_silence(silence_id)
    except BackendError as exc:
        return error_response(
            f"unable to expire silence '{silence_id}': {exc.message}",
            _backend_status(exc),
        )
    return APIResponse(status="success", message=f"expired silence with ID: {silence_id}")
