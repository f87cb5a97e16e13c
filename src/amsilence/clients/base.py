from __future__ import annotations

from typing import Any

import httpx
import structlog
from circuitbreaker import circuit
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger()


class RetryableHTTPError(Exception):
    """HTTP errors that should be retried."""


class PermanentHTTPError(Exception):
    """HTTP errors that should not be retried."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def is_retryable_status(status_code: int) -> bool:
    """Determine if HTTP status code is retryable."""
    return status_code in (408, 429, 500, 502, 503, 504)


class BaseHTTPClient:
    """Base HTTP client with retry logic and circuit breaker.

    Idempotent requests go through ``_request`` (retried, guarded by the
    circuit breaker). ``post`` is sent exactly once.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
        circuit_failure_threshold: int = 5,
        circuit_recovery_timeout: int = 60,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max(max_retries, 1)
        self._backoff_factor = backoff_factor
        self._guarded_request = circuit(
            failure_threshold=circuit_failure_threshold,
            recovery_timeout=circuit_recovery_timeout,
            expected_exception=RetryableHTTPError,
        )(self._request_with_retry)

    def _headers(self) -> dict[str, str]:
        """Override to provide custom headers."""
        return {"Accept": "application/json", "Content-Type": "application/json"}

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Execute a single HTTP request and decode its JSON body."""
        url = f"{self._base_url}{path}"
        req_headers = self._headers()
        if headers:
            req_headers.update(headers)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=req_headers,
                )
        except httpx.TransportError as exc:
            logger.warning("http_network_error", method=method, url=url, error=str(exc))
            raise RetryableHTTPError(str(exc) or type(exc).__name__) from exc
        except httpx.HTTPError as exc:
            logger.error("http_request_failed", method=method, url=url, error=str(exc))
            raise PermanentHTTPError(str(exc) or type(exc).__name__) from exc

        if is_retryable_status(response.status_code):
            logger.warning(
                "http_retryable_error",
                status=response.status_code,
                method=method,
                url=url,
            )
            raise RetryableHTTPError(f"HTTP {response.status_code}: {response.text}")

        if response.status_code >= 400:
            logger.error(
                "http_permanent_error",
                status=response.status_code,
                method=method,
                url=url,
            )
            raise PermanentHTTPError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            logger.error("http_invalid_body", method=method, url=url, error=str(exc))
            raise PermanentHTTPError(
                f"unable to decode response body: {exc}",
                status_code=response.status_code,
            ) from exc

    async def _request_with_retry(self, method: str, path: str, **kwargs: Any) -> Any:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(RetryableHTTPError),
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=self._backoff_factor, max=30),
            reraise=True,
        ):
            with attempt:
                return await self._send(method, path, **kwargs)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Execute HTTP request with retry and circuit breaker."""
        return await self._guarded_request(method, path, **kwargs)

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Execute GET request."""
        return await self._request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Execute POST request once, without retries."""
        return await self._send("POST", path, json=json, headers=headers)

    async def delete(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Execute DELETE request."""
        return await self._request("DELETE", path, headers=headers)
