from amsilence.clients.alertmanager import AlertmanagerClient, build_silence_payload

__all__ = ["AlertmanagerClient", "build_silence_payload"]
