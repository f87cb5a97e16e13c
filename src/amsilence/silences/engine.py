"""
Orchestration of recurring silences.

A validated request is expanded into its windows and one silence is created
per window, strictly one after another. A failing window is recorded and the
batch carries on; silences that were already created are never rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from amsilence.core.errors import (
    AmSilenceError,
    PartialFailureError,
    ValidationError,
)
from amsilence.domain.models import SilenceRequest
from amsilence.logging import bind_context
from amsilence.providers.base import AlertingBackend
from amsilence.silences.expander import WindowSequence, expand
from amsilence.silences.validation import validate_request

logger = structlog.get_logger()


@dataclass(frozen=True)
class WindowOutcome:
    """Result of creating the silence for one window."""

    index: int
    silence_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class OrchestrationResult:
    """Aggregated outcome of one orchestration run."""

    outcomes: list[WindowOutcome] = field(default_factory=list)
    rejected_reason: str | None = None

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed_indices(self) -> list[int]:
        return [outcome.index for outcome in self.outcomes if not outcome.ok]

    @property
    def silence_ids(self) -> list[str]:
        return [outcome.silence_id for outcome in self.outcomes if outcome.silence_id]

    @property
    def rejected(self) -> bool:
        return self.rejected_reason is not None

    @property
    def ok(self) -> bool:
        return not self.rejected and not self.failed_indices

    @property
    def message(self) -> str:
        if self.rejected:
            return f"silence request is invalid: {self.rejected_reason}"
        return f"{self.succeeded}/{self.attempted} new silences created"

    def raise_for_status(self) -> None:
        """Raise if the request was rejected or any window failed."""
        if self.rejected:
            raise ValidationError(self.message)
        if self.failed_indices:
            raise PartialFailureError(
                self.message,
                details={"failed_indices": self.failed_indices},
            )


class SilenceOrchestrator:
    """Creates and replaces silences through an explicitly supplied backend."""

    def __init__(self, backend: AlertingBackend) -> None:
        self._backend = backend

    async def run(self, request: SilenceRequest) -> OrchestrationResult:
        log = bind_context(created_by=request.created_by)
        reason, ok = validate_request(request)
        if not ok:
            log.info("silence_request_rejected", reason=reason)
            return OrchestrationResult(rejected_reason=reason)

        windows = expand(request.schedule)
        outcomes: list[WindowOutcome] = []
        for index in range(len(windows)):
            outcomes.append(await self._create_window(windows, index, request))

        result = OrchestrationResult(outcomes=outcomes)
        log.info(
            "silence_batch_finished",
            attempted=result.attempted,
            succeeded=result.succeeded,
            failed_indices=result.failed_indices,
        )
        return result

    async def _create_window(
        self, windows: WindowSequence, index: int, request: SilenceRequest
    ) -> WindowOutcome:
        try:
            window = windows.at(index)
            silence_id = await self._backend.create_silence(window.start, window.end, request)
        except AmSilenceError as exc:
            logger.warning("silence_window_failed", index=index, error=exc.message)
            return WindowOutcome(index=index, error=exc.message)

        logger.info(
            "silence_window_created",
            index=index,
            silence_id=silence_id,
            starts_at=window.start,
            ends_at=window.end,
        )
        return WindowOutcome(index=index, silence_id=silence_id)

    async def update(
        self,
        silence_id: str,
        new_start: str,
        new_end: str,
        request: SilenceRequest,
    ) -> str:
        """
        Replace a silence by expiring it and creating a new one.

        This is not atomic. If expiring fails, the error propagates and no
        silence is created. If creation fails after a successful expire, the
        original silence stays expired and the error propagates.

        Returns:
            ID of the newly created silence
        """
        reason, ok = validate_request(request)
        if not ok:
            raise ValidationError(f"silence request is invalid: {reason}")

        await self._backend.expire_silence(silence_id)

        try:
            new_id = await self._backend.create_silence(new_start, new_end, request)
        except AmSilenceError as exc:
            logger.error("silence_update_stranded", silence_id=silence_id, error=exc.message)
            raise

        logger.info("silence_updated", silence_id=silence_id, new_silence_id=new_id)
        return new_id
