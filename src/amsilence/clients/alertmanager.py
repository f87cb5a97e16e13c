"""
Alertmanager v2 API client.

Implements the ``AlertingBackend`` capability over HTTP+JSON. The client is
rooted at the API base URL, e.g. ``http://localhost:9093/api/v2``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import structlog
from circuitbreaker import CircuitBreakerError
from pydantic import ValidationError as PydanticValidationError

from amsilence.clients.base import BaseHTTPClient, PermanentHTTPError, RetryableHTTPError
from amsilence.core.errors import BackendError, SilenceNotFoundError
from amsilence.domain.models import Alert, Silence, SilenceRequest
from amsilence.providers.base import ProviderHealth
from amsilence.silences.timefmt import format_timestamp, parse_timestamp

logger = structlog.get_logger()

DEFAULT_USER_AGENT = "amsilence-alertmanager/0.1.0"


def build_silence_payload(start: str, end: str, request: SilenceRequest) -> dict[str, Any]:
    """Build the body of ``POST /silences``; raises TimeParseError on bad timestamps."""
    starts_at = parse_timestamp(start)
    ends_at = parse_timestamp(end)
    return {
        "matchers": [
            {"name": m.name, "value": m.value, "isRegex": m.is_regex} for m in request.matchers
        ],
        "startsAt": format_timestamp(starts_at),
        "endsAt": format_timestamp(ends_at),
        "createdBy": request.created_by,
        "comment": request.comment,
    }


class AlertmanagerClient(BaseHTTPClient):
    """Alertmanager API client with retry logic and circuit breaker."""

    name = "alertmanager"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(
            base_url,
            timeout=timeout,
            max_retries=max_retries,
            backoff_factor=backoff_factor,
        )
        self._user_agent = user_agent

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["User-Agent"] = self._user_agent
        return headers

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and translate transport failures into BackendError."""
        try:
            if method == "POST":
                return await self.post(path, **kwargs)
            if method == "DELETE":
                return await self.delete(path, **kwargs)
            return await self.get(path, **kwargs)
        except PermanentHTTPError as exc:
            if exc.status_code is None:
                raise BackendError(f"unable to get response: {exc}", details={"path": path}) from exc
            if exc.status_code == 404 and path.startswith("/silence/"):
                raise SilenceNotFoundError(
                    f"Alertmanager returned an HTTP error code: {exc.status_code}",
                    details={"path": path},
                ) from exc
            raise BackendError(
                f"Alertmanager returned an HTTP error code: {exc.status_code}",
                details={"path": path},
            ) from exc
        except RetryableHTTPError as exc:
            raise BackendError(f"unable to get response: {exc}", details={"path": path}) from exc
        except CircuitBreakerError as exc:
            raise BackendError(f"Alertmanager circuit open: {exc}", details={"path": path}) from exc

    async def health_check(self) -> ProviderHealth:
        try:
            await self._call("GET", "/status")
        except BackendError as exc:
            return ProviderHealth(status="unreachable", details=exc.message)
        return ProviderHealth(status="healthy")

    async def list_alerts(self) -> list[Alert]:
        data = await self._call("GET", "/alerts")
        return _parse_list(Alert, data)

    async def list_silences(self) -> list[Silence]:
        data = await self._call("GET", "/silences")
        return _parse_list(Silence, data)

    async def get_silence(self, silence_id: str) -> Silence:
        data = await self._call("GET", _silence_path(silence_id))
        try:
            return Silence.model_validate(data)
        except PydanticValidationError as exc:
            raise BackendError(f"unable to unmarshal body: {exc}") from exc

    async def create_silence(self, start: str, end: str, request: SilenceRequest) -> str:
        payload = build_silence_payload(start, end, request)
        data = await self._call("POST", "/silences", json=payload)

        if not isinstance(data, dict):
            raise BackendError("unable to unmarshal body: expected a JSON object")
        if data.get("code") is not None:
            raise BackendError(
                f"unable to create silence: '{data.get('code')} {data.get('message', '')}'",
                details={"code": data.get("code")},
            )
        silence_id = data.get("silenceID")
        if not silence_id:
            raise BackendError("unable to create silence: response carried no silenceID")
        return str(silence_id)

    async def expire_silence(self, silence_id: str) -> None:
        await self._call("DELETE", _silence_path(silence_id))
        logger.info("silence_expired", silence_id=silence_id)


def _parse_list(model: Any, data: Any) -> list[Any]:
    if not isinstance(data, list):
        raise BackendError("unable to unmarshal body: expected a JSON array")
    try:
        return [model.model_validate(item) for item in data]
    except PydanticValidationError as exc:
        raise BackendError(f"unable to unmarshal body: {exc}") from exc


def _silence_path(silence_id: str) -> str:
    return f"/silence/{quote(silence_id, safe='')}"
