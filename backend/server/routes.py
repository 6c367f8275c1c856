"""
Route registration for the voice navigation API.

Responsibilities:
- Define HTTP and WebSocket endpoints
- Wire gateway to WebSocket lifecycle
- Pull dependencies from app.state
"""

from __future__ import annotations

import asyncio
import json

from fastapi import FastAPI, Query, WebSocket, WebSocketDisconnect

from constants import PROTECTED_KEYWORDS
from navigation.routes import UserType, build_route_mapping, login_path_for, resolve_role
from observability.logger import log_event, now_ms
from session.gateway import SessionGateway
from session.voice_session import VoiceSession


def register_routes(app: FastAPI) -> None:
    """Register all routes on the FastAPI app."""
    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.get("/commands")
    async def commands( # pyright: ignore[reportUnusedFunction]
        user_type: str | None = Query(default=None),
        path: str = Query(default="/"),
    ) -> dict[str, object]:
        """Voice commands available for a role and page (help panel)."""
        parsed = UserType.parse(user_type) if user_type else None
        role = resolve_role(parsed, path)
        return {
            "role": role.value if role else None,
            "routes": build_route_mapping(parsed, path),
            "protected": sorted(PROTECTED_KEYWORDS),
            "login_path": login_path_for(role),
        }

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket) -> None: # pyright: ignore[reportUnusedFunction]
        await ws.accept()

        gateway = SessionGateway(
            config=app.state.config,
            openai_client=app.state.openai_client,
        )
        sender: asyncio.Task[None] | None = None

        try:
            await gateway.on_ws_connect()
            assert gateway.session is not None
            sender = asyncio.create_task(_pump_control(ws, gateway.session))

            while True:
                msg = await ws.receive()

                if msg["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(code=msg.get("code", 1000))

                if msg.get("text") is not None:
                    await gateway.on_json_message(msg["text"])

                elif msg.get("bytes") is not None:
                    log_event({
                        "ts_ms": now_ms(),
                        "event_type": "BINARY_NOT_SUPPORTED",
                        "session_id": gateway.session.session_id,
                        "payload_len": len(msg["bytes"]),
                    })

        except WebSocketDisconnect:
            await gateway.on_ws_disconnect(reason="client_disconnect")

        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "event_type": "WS_FATAL_ERROR",
                "session_id": gateway.session.session_id if gateway.session else None,
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            await gateway.on_ws_disconnect(reason="server_error")

        finally:
            if sender is not None:
                sender.cancel()
                await asyncio.gather(sender, return_exceptions=True)


async def _pump_control(ws: WebSocket, session: VoiceSession) -> None:
    """
    Single writer for the socket.

    Sends every control message the session produces, including those
    enqueued by timers between inbound messages.
    """
    try:
        while True:
            for msg in await session.next_control_batch():
                await ws.send_text(json.dumps(msg))
    except (WebSocketDisconnect, RuntimeError) as exc:
        log_event({
            "ts_ms": now_ms(),
            "event_type": "WS_SEND_STOPPED",
            "session_id": session.session_id,
            "exception": type(exc).__name__,
        })
