"""Root test configuration."""

import asyncio
import logging

import pytest
import structlog
from amsilence.core.errors import BackendError, SilenceNotFoundError
from amsilence.domain.models import Matcher, Repeat, Schedule, Silence, SilenceRequest


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


class FakeBackend:
    """In-memory alerting backend recording every call in order."""

    def __init__(self, silences=None, alerts=None, fail_on=(), expire_error=None):
        self.silences = list(silences or [])
        self.alerts = list(alerts or [])
        self.fail_on = set(fail_on)
        self.expire_error = expire_error
        self.create_attempts: list[tuple[str, str]] = []
        self.created: list[tuple[str, str, SilenceRequest]] = []
        self.expired: list[str] = []
        self.events: list[str] = []

    async def create_silence(self, start, end, request):
        index = len(self.create_attempts)
        self.create_attempts.append((start, end))
        self.events.append(f"create-start-{index}")
        await asyncio.sleep(0)
        self.events.append(f"create-end-{index}")
        if index in self.fail_on:
            raise BackendError(f"Alertmanager returned an HTTP error code: 500 (window {index})")
        self.created.append((start, end, request))
        return f"silence-{index}"

    async def get_silence(self, silence_id):
        for silence in self.silences:
            if silence.id == silence_id:
                return silence
        raise SilenceNotFoundError("Alertmanager returned an HTTP error code: 404")

    async def list_silences(self):
        return list(self.silences)

    async def list_alerts(self):
        return list(self.alerts)

    async def expire_silence(self, silence_id):
        self.events.append(f"expire-{silence_id}")
        if self.expire_error is not None:
            raise self.expire_error
        self.expired.append(silence_id)


def make_request(
    count=1,
    interval="",
    start="2019-10-27T20:34:28.132Z",
    end="2019-10-27T22:34:28.132Z",
    **overrides,
):
    fields = {
        "comment": "database maintenance",
        "created_by": "ops@example.com",
        "matchers": (Matcher(name="alertname", value="HighCPU"),),
        "schedule": Schedule(
            start_time=start,
            end_time=end,
            repeat=Repeat(enabled=count > 1, interval=interval, count=count),
        ),
    }
    fields.update(overrides)
    return SilenceRequest(**fields)


def make_silence(silence_id, state):
    return Silence.model_validate(
        {
            "id": silence_id,
            "status": {"state": state},
            "matchers": [{"name": "alertname", "value": "HighCPU", "isRegex": False}],
            "startsAt": "2019-10-27T20:34:28.132Z",
            "endsAt": "2019-10-27T22:34:28.132Z",
            "updatedAt": "2019-10-27T20:34:28.132Z",
            "createdBy": "ops@example.com",
            "comment": "database maintenance",
        }
    )


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def backend_factory():
    return FakeBackend


@pytest.fixture
def request_factory():
    return make_request


@pytest.fixture
def silence_factory():
    return make_silence
