"""
Silence commands: schedule, update, inspect and expire silences.

Commands:
    amsilence silence create request.yaml
    amsilence silence update <id> request.yaml
    amsilence silence get <id>
    amsilence silence expire <id>
    amsilence silence list [--filtered] [--output json]
"""

from __future__ import annotations

import asyncio
import json

from amsilence.cli import ux
from amsilence.cli.backend import load_request, resolve_backend
from amsilence.core.errors import ExitCode, main_with_error_handling
from amsilence.domain.models import Silence
from amsilence.providers.base import AlertingBackend
from amsilence.silences.engine import SilenceOrchestrator
from amsilence.silences.filters import filter_expired


def _format_matchers(silence: Silence) -> str:
    parts = []
    for matcher in silence.matchers:
        operator = "=~" if matcher.is_regex else "="
        parts.append(f"{matcher.name}{operator}{matcher.value}")
    return ", ".join(parts)


@main_with_error_handling()
def create_silence_command(
    request_file: str,
    *,
    config_file: str | None = None,
    backend: AlertingBackend | None = None,
) -> int:
    """Create one silence per window of the request's schedule."""
    request = load_request(request_file)
    orchestrator = SilenceOrchestrator(resolve_backend(config_file, backend))
    result = asyncio.run(orchestrator.run(request))

    if result.ok:
        ux.success(result.message)
        for silence_id in result.silence_ids:
            ux.info(f"created silence {silence_id}")
    elif not result.rejected:
        ux.warning(f"'{len(result.failed_indices)}' request(s) could not be completed")

    result.raise_for_status()
    return ExitCode.SUCCESS


@main_with_error_handling()
def update_silence_command(
    silence_id: str,
    request_file: str,
    *,
    config_file: str | None = None,
    backend: AlertingBackend | None = None,
) -> int:
    """Expire a silence and recreate it from the request's first window."""
    request = load_request(request_file)
    orchestrator = SilenceOrchestrator(resolve_backend(config_file, backend))
    new_id = asyncio.run(
        orchestrator.update(
            silence_id,
            request.schedule.start_time,
            request.schedule.end_time,
            request,
        )
    )
    ux.success(f"updated silence '{silence_id}', new ID: {new_id}")
    return ExitCode.SUCCESS


@main_with_error_handling()
def get_silence_command(
    silence_id: str,
    *,
    config_file: str | None = None,
    backend: AlertingBackend | None = None,
) -> int:
    silence = asyncio.run(resolve_backend(config_file, backend).get_silence(silence_id))
    print(json.dumps(silence.model_dump(by_alias=True), indent=2))
    return ExitCode.SUCCESS


@main_with_error_handling()
def expire_silence_command(
    silence_id: str,
    *,
    config_file: str | None = None,
    backend: AlertingBackend | None = None,
) -> int:
    asyncio.run(resolve_backend(config_file, backend).expire_silence(silence_id))
    ux.success(f"expired silence with ID: {silence_id}")
    return ExitCode.SUCCESS


@main_with_error_handling()
def list_silences_command(
    *,
    filtered: bool = False,
    output: str = "text",
    config_file: str | None = None,
    backend: AlertingBackend | None = None,
) -> int:
    silences = asyncio.run(resolve_backend(config_file, backend).list_silences())
    if filtered:
        silences = filter_expired(silences)

    if output == "json":
        print(json.dumps([s.model_dump(by_alias=True) for s in silences], indent=2))
        return ExitCode.SUCCESS

    if not silences:
        ux.info("No silences found")
        return ExitCode.SUCCESS

    rows = [
        [
            silence.id,
            silence.status.state,
            silence.starts_at or "",
            silence.ends_at or "",
            silence.created_by or "",
            _format_matchers(silence),
            silence.comment or "",
        ]
        for silence in silences
    ]
    ux.print_table(
        "Silences",
        ["ID", "State", "Starts", "Ends", "Created by", "Matchers", "Comment"],
        rows,
    )
    return ExitCode.SUCCESS
