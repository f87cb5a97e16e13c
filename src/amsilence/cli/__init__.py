"""
CLI commands for amsilence.
"""

from amsilence.cli.alerts import list_alerts_command
from amsilence.cli.serve import serve_command
from amsilence.cli.silences import (
    create_silence_command,
    expire_silence_command,
    get_silence_command,
    list_silences_command,
    update_silence_command,
)

__all__ = [
    "create_silence_command",
    "update_silence_command",
    "get_silence_command",
    "expire_silence_command",
    "list_silences_command",
    "list_alerts_command",
    "serve_command",
]
