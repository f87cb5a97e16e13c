"""
amsilence configuration.

- Pydantic-based settings (environment variables, .env files)
- YAML configuration file passed with ``--config.file``
"""

from amsilence.config.loader import load_config, resolve_settings
from amsilence.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "load_config",
    "resolve_settings",
]
