from __future__ import annotations

import uvicorn

from amsilence.api.main import create_app
from amsilence.config import resolve_settings
from amsilence.core.errors import ExitCode, main_with_error_handling
from amsilence.logging import configure_logging


@main_with_error_handling()
def serve_command(
    *,
    config_file: str | None = None,
    port: int | None = None,
) -> int:
    """Run the HTTP API until interrupted."""
    settings = resolve_settings(config_file)
    if port is not None:
        settings = settings.model_copy(update={"listen_port": port})

    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=settings.log_level.lower(),
    )
    return ExitCode.SUCCESS
