"""
Configuration file loading.

The YAML file holds the same keys as ``Settings`` (most importantly
``alertmanager_api``). Values from the file override environment variables.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from amsilence.config.settings import Settings
from amsilence.core.errors import ConfigurationError

logger = structlog.get_logger()


def load_config(path: str | Path) -> Settings:
    """
    Load settings from a YAML configuration file.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = Path(path).expanduser()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigurationError(
            f"unable to read config file: {exc}", details={"path": str(config_path)}
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"unable to parse config file: {exc}", details={"path": str(config_path)}
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            "config file must contain a mapping", details={"path": str(config_path)}
        )

    try:
        settings = Settings(**data)
    except PydanticValidationError as exc:
        raise ConfigurationError(
            f"invalid configuration: {exc}", details={"path": str(config_path)}
        ) from exc

    logger.info("config_loaded", path=str(config_path))
    return settings


def resolve_settings(path: str | Path | None = None) -> Settings:
    """Settings from ``path`` when given, otherwise from the environment."""
    if path:
        return load_config(path)
    return Settings()
