"""Client effects delivered as JSON control messages."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from adapters.client.base import ClientEffects
from constants import REDIRECT_AFTER_LOGIN_KEY
from observability.logger import now_ms


class BrowserClientBridge(ClientEffects):
    """
    Outbound:
        NAVIGATE       {path}
        TOAST          {severity, title, description}
        STORE_REDIRECT {key, path}   (client writes sessionStorage[key])
        VOICE_STATE    {state, run_id}
    """

    def __init__(self, *, send_control: Callable[[dict[str, Any]], None]) -> None:
        self._send_control = send_control

    async def navigate(self, path: str) -> None:
        self._send_control({"type": "NAVIGATE", "path": path, "ts_ms": now_ms()})

    async def show_toast(self, severity: str, title: str, description: str) -> None:
        self._send_control({
            "type": "TOAST",
            "severity": severity,
            "title": title,
            "description": description,
            "ts_ms": now_ms(),
        })

    async def store_pending_redirect(self, path: str) -> None:
        self._send_control({
            "type": "STORE_REDIRECT",
            "key": REDIRECT_AFTER_LOGIN_KEY,
            "path": path,
            "ts_ms": now_ms(),
        })

    async def publish_state(self, state: str, run_id: int) -> None:
        self._send_control({
            "type": "VOICE_STATE",
            "state": state,
            "run_id": run_id,
            "ts_ms": now_ms(),
        })
