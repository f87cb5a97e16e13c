from __future__ import annotations

import asyncio
import json

from amsilence.cli import ux
from amsilence.cli.backend import resolve_backend
from amsilence.core.errors import ExitCode, main_with_error_handling
from amsilence.providers.base import AlertingBackend


@main_with_error_handling()
def list_alerts_command(
    *,
    output: str = "text",
    config_file: str | None = None,
    backend: AlertingBackend | None = None,
) -> int:
    """List alerts currently known to Alertmanager."""
    alerts = asyncio.run(resolve_backend(config_file, backend).list_alerts())

    if output == "json":
        print(json.dumps([a.model_dump(by_alias=True) for a in alerts], indent=2))
        return ExitCode.SUCCESS

    if not alerts:
        ux.info("No alerts found")
        return ExitCode.SUCCESS

    rows = [
        [
            alert.labels.get("alertname", ""),
            alert.status.state,
            alert.labels.get("severity", ""),
            alert.starts_at or "",
            ", ".join(alert.status.silenced_by),
        ]
        for alert in alerts
    ]
    ux.print_table("Alerts", ["Alert", "State", "Severity", "Starts", "Silenced by"], rows)
    return ExitCode.SUCCESS
