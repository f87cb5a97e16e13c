"""Alerting backend capability shared by the engine, the API and the CLI."""

from amsilence.providers.base import AlertingBackend, ProviderHealth

__all__ = ["AlertingBackend", "ProviderHealth"]
