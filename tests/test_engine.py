"""Tests for silence orchestration."""

import pytest
import respx
from amsilence.clients.alertmanager import AlertmanagerClient
from amsilence.core.errors import (
    BackendError,
    PartialFailureError,
    SilenceNotFoundError,
    ValidationError,
)
from amsilence.silences.engine import OrchestrationResult, SilenceOrchestrator, WindowOutcome
from httpx import ConnectError, RemoteProtocolError, Response

ALERTMANAGER_URL = "http://alertmanager.test/api/v2"


class TestRun:
    @pytest.mark.asyncio
    async def test_creates_one_silence_per_window(self, backend, request_factory):
        result = await SilenceOrchestrator(backend).run(request_factory(count=3, interval="d"))

        assert result.ok
        assert result.attempted == 3
        assert result.succeeded == 3
        assert result.silence_ids == ["silence-0", "silence-1", "silence-2"]
        assert result.message == "3/3 new silences created"
        assert backend.create_attempts == [
            ("2019-10-27T20:34:28.132Z", "2019-10-27T22:34:28.132Z"),
            ("2019-10-28T20:34:28.132Z", "2019-10-28T22:34:28.132Z"),
            ("2019-10-29T20:34:28.132Z", "2019-10-29T22:34:28.132Z"),
        ]

    @pytest.mark.asyncio
    async def test_single_window(self, backend, request_factory):
        result = await SilenceOrchestrator(backend).run(request_factory(count=1))

        assert result.message == "1/1 new silences created"
        assert len(backend.created) == 1

    @pytest.mark.asyncio
    async def test_passes_request_through(self, backend, request_factory):
        request = request_factory(count=2, interval="h")
        await SilenceOrchestrator(backend).run(request)

        assert all(created[2] is request for created in backend.created)

    @pytest.mark.asyncio
    async def test_windows_are_created_sequentially(self, backend, request_factory):
        await SilenceOrchestrator(backend).run(request_factory(count=3, interval="h"))

        assert backend.events == [
            "create-start-0",
            "create-end-0",
            "create-start-1",
            "create-end-1",
            "create-start-2",
            "create-end-2",
        ]

    @pytest.mark.asyncio
    async def test_partial_failure_continues(self, backend_factory, request_factory):
        backend = backend_factory(fail_on={2})
        result = await SilenceOrchestrator(backend).run(request_factory(count=5, interval="w"))

        assert not result.ok
        assert result.attempted == 5
        assert result.succeeded == 4
        assert result.failed_indices == [2]
        assert result.message == "4/5 new silences created"
        assert len(backend.create_attempts) == 5
        assert result.silence_ids == ["silence-0", "silence-1", "silence-3", "silence-4"]

    @pytest.mark.asyncio
    async def test_all_windows_fail(self, backend_factory, request_factory):
        backend = backend_factory(fail_on={0, 1})
        result = await SilenceOrchestrator(backend).run(request_factory(count=2, interval="h"))

        assert result.succeeded == 0
        assert result.failed_indices == [0, 1]
        assert result.message == "0/2 new silences created"

    @pytest.mark.asyncio
    async def test_invalid_request_makes_no_backend_calls(self, backend, request_factory):
        result = await SilenceOrchestrator(backend).run(request_factory(comment=""))

        assert result.rejected
        assert result.rejected_reason == "comment field empty"
        assert result.message == "silence request is invalid: comment field empty"
        assert result.attempted == 0
        assert backend.create_attempts == []

    @pytest.mark.asyncio
    async def test_repeat_count_above_limit_rejected(self, backend, request_factory):
        result = await SilenceOrchestrator(backend).run(request_factory(count=100, interval="h"))

        assert result.rejected
        assert backend.create_attempts == []

    @pytest.mark.asyncio
    async def test_window_overflow_counts_as_failure(self, backend, request_factory):
        request = request_factory(
            count=3,
            interval="w",
            start="9999-12-20T00:00:00.000Z",
            end="9999-12-20T01:00:00.000Z",
        )
        result = await SilenceOrchestrator(backend).run(request)

        assert result.attempted == 3
        assert result.succeeded == 2
        assert result.failed_indices == [2]
        assert len(backend.create_attempts) == 2


class TestRunAgainstAlertmanager:
    @pytest.mark.asyncio
    async def test_http_and_transport_failures_do_not_abort_batch(self, request_factory):
        client = AlertmanagerClient(ALERTMANAGER_URL, backoff_factor=0)

        with respx.mock:
            route = respx.post(f"{ALERTMANAGER_URL}/silences")
            route.side_effect = [
                Response(200, json={"silenceID": "s0"}),
                Response(500),
                RemoteProtocolError("Server disconnected without sending a response."),
                Response(200, json={"silenceID": "s3"}),
                Response(200, json={"silenceID": "s4"}),
            ]

            result = await SilenceOrchestrator(client).run(request_factory(count=5, interval="d"))

            assert route.call_count == 5

        assert result.attempted == 5
        assert result.succeeded == 3
        assert result.failed_indices == [1, 2]
        assert result.silence_ids == ["s0", "s3", "s4"]
        assert result.message == "3/5 new silences created"

    @pytest.mark.asyncio
    async def test_unreachable_backend_fails_every_window(self, request_factory):
        client = AlertmanagerClient(ALERTMANAGER_URL, backoff_factor=0)

        with respx.mock:
            route = respx.post(f"{ALERTMANAGER_URL}/silences").mock(
                side_effect=ConnectError("connection refused")
            )

            result = await SilenceOrchestrator(client).run(request_factory(count=3, interval="h"))

            assert route.call_count == 3

        assert result.failed_indices == [0, 1, 2]
        assert result.message == "0/3 new silences created"


class TestRaiseForStatus:
    def test_success_does_not_raise(self):
        OrchestrationResult(outcomes=[WindowOutcome(index=0, silence_id="a")]).raise_for_status()

    def test_rejected_raises_validation_error(self):
        with pytest.raises(ValidationError, match="comment field empty"):
            OrchestrationResult(rejected_reason="comment field empty").raise_for_status()

    def test_partial_failure_carries_indices(self):
        result = OrchestrationResult(
            outcomes=[
                WindowOutcome(index=0, silence_id="a"),
                WindowOutcome(index=1, error="boom"),
            ]
        )
        with pytest.raises(PartialFailureError) as exc_info:
            result.raise_for_status()

        assert exc_info.value.message == "1/2 new silences created"
        assert exc_info.value.details == {"failed_indices": [1]}


class TestUpdate:
    @pytest.mark.asyncio
    async def test_expires_then_creates(self, backend, request_factory):
        new_id = await SilenceOrchestrator(backend).update(
            "old-id",
            "2019-11-01T10:00:00.000Z",
            "2019-11-01T12:00:00.000Z",
            request_factory(),
        )

        assert new_id == "silence-0"
        assert backend.events == ["expire-old-id", "create-start-0", "create-end-0"]
        assert backend.create_attempts == [("2019-11-01T10:00:00.000Z", "2019-11-01T12:00:00.000Z")]

    @pytest.mark.asyncio
    async def test_expire_failure_skips_create(self, backend_factory, request_factory):
        error = SilenceNotFoundError("Alertmanager returned an HTTP error code: 404")
        backend = backend_factory(expire_error=error)

        with pytest.raises(SilenceNotFoundError) as exc_info:
            await SilenceOrchestrator(backend).update(
                "missing",
                "2019-11-01T10:00:00.000Z",
                "2019-11-01T12:00:00.000Z",
                request_factory(),
            )

        assert exc_info.value is error
        assert backend.create_attempts == []

    @pytest.mark.asyncio
    async def test_create_failure_leaves_old_expired(self, backend_factory, request_factory):
        backend = backend_factory(fail_on={0})

        with pytest.raises(BackendError):
            await SilenceOrchestrator(backend).update(
                "old-id",
                "2019-11-01T10:00:00.000Z",
                "2019-11-01T12:00:00.000Z",
                request_factory(),
            )

        assert backend.expired == ["old-id"]
        assert backend.created == []

    @pytest.mark.asyncio
    async def test_invalid_request_touches_nothing(self, backend, request_factory):
        with pytest.raises(ValidationError, match="createdBy field empty"):
            await SilenceOrchestrator(backend).update(
                "old-id",
                "2019-11-01T10:00:00.000Z",
                "2019-11-01T12:00:00.000Z",
                request_factory(created_by=""),
            )

        assert backend.events == []
