"""Shared helpers for CLI commands: backend construction and request files."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from amsilence.api.main import build_backend
from amsilence.config import resolve_settings
from amsilence.core.errors import ConfigurationError, ValidationError
from amsilence.domain.models import SilenceRequest
from amsilence.providers.base import AlertingBackend
from amsilence.silences.timefmt import format_timestamp


def resolve_backend(
    config_file: str | None = None,
    backend: AlertingBackend | None = None,
) -> AlertingBackend:
    if backend is not None:
        return backend
    return build_backend(resolve_settings(config_file))


def load_request(path: str | Path) -> SilenceRequest:
    """Read a silence request from a YAML or JSON file."""
    request_path = Path(path).expanduser()
    try:
        with open(request_path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigurationError(
            f"unable to read silence request: {exc}", details={"path": str(request_path)}
        ) from exc
    except yaml.YAMLError as exc:
        raise ValidationError(
            f"unable to parse silence request: {exc}", details={"path": str(request_path)}
        ) from exc

    schedule = data.get("schedule") if isinstance(data, dict) else None
    if isinstance(schedule, dict):
        # unquoted YAML timestamps arrive as datetime objects
        for key in ("start_time", "end_time"):
            if isinstance(schedule.get(key), datetime):
                schedule[key] = format_timestamp(schedule[key])

    try:
        return SilenceRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(
            f"unable to read silence request: {exc}", details={"path": str(request_path)}
        ) from exc
