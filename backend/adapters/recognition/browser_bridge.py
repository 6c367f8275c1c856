"""
Recognition adapter backed by the browser's SpeechRecognition engine.

The engine lives in the client. This bridge sends control messages over the
session's outbound channel and turns the relayed engine callbacks back into
reducer events.

Outbound:
    RECOGNITION_START {run_id, config}
    RECOGNITION_STOP  {run_id}
    RECOGNITION_ABORT {run_id}

Inbound (relayed callbacks):
    RECOGNITION_STARTED {run_id}
    RECOGNITION_RESULT  {run_id, transcript}
    RECOGNITION_ERROR   {run_id, error, message?}
    RECOGNITION_ENDED   {run_id}
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from adapters.recognition.base import RecognitionAdapter
from observability.logger import log_event, now_ms
from orchestrator.commands import RecognitionConfig
from orchestrator.events import (
    Event,
    EventType,
    RecognitionEnded,
    RecognitionError,
    RecognitionResult,
    RecognitionStarted,
)


CALLBACK_MESSAGE_TYPES = frozenset({
    "RECOGNITION_STARTED",
    "RECOGNITION_RESULT",
    "RECOGNITION_ERROR",
    "RECOGNITION_ENDED",
})


class BrowserRecognitionBridge(RecognitionAdapter):
    """
    Concrete recognition adapter for a browser client.

    Design notes:
    - One bridge per session; serves many sequential runs.
    - Run ids only grow, so the last aborted id is enough: callbacks for it
      or any older run are dropped here and never reach the reducer.
    """

    def __init__(
        self,
        *,
        send_control: Callable[[dict[str, Any]], None],
        emit_event: Callable[[Event], Awaitable[None]],
        session_id: str,
    ) -> None:
        self._send_control = send_control
        self._emit_event = emit_event
        self._session_id = session_id
        self._active_run: int | None = None
        self._last_aborted: int | None = None

    @property
    def active_run(self) -> int | None:
        return self._active_run

    def _is_aborted(self, run_id: int) -> bool:
        return self._last_aborted is not None and run_id <= self._last_aborted

    # ------------------------------------------------------------------
    # RecognitionAdapter
    # ------------------------------------------------------------------

    async def start(self, run_id: int, config: RecognitionConfig) -> None:
        self._active_run = run_id
        self._send_control({
            "type": "RECOGNITION_START",
            "run_id": run_id,
            "config": config.to_payload(),
            "ts_ms": now_ms(),
        })

    async def stop(self, run_id: int) -> None:
        self._send_control({
            "type": "RECOGNITION_STOP",
            "run_id": run_id,
            "ts_ms": now_ms(),
        })

    async def abort(self, run_id: int) -> None:
        if self._is_aborted(run_id):
            return
        self._last_aborted = run_id
        if self._active_run == run_id:
            self._active_run = None
        self._send_control({
            "type": "RECOGNITION_ABORT",
            "run_id": run_id,
            "ts_ms": now_ms(),
        })

    # ------------------------------------------------------------------
    # Inbound callbacks
    # ------------------------------------------------------------------

    async def on_callback(self, data: dict[str, Any]) -> None:
        """Translate one relayed engine callback into a reducer event."""
        msg_type = data.get("type")
        ts_ms = data.get("ts_ms", now_ms())

        try:
            run_id = int(data["run_id"])
        except (KeyError, TypeError, ValueError):
            log_event({
                "ts_ms": now_ms(),
                "event_type": "RECOGNITION_CALLBACK_INVALID",
                "session_id": self._session_id,
                "msg_type": msg_type,
            })
            return

        if self._is_aborted(run_id):
            log_event({
                "ts_ms": now_ms(),
                "event_type": "RECOGNITION_CALLBACK_DROPPED",
                "session_id": self._session_id,
                "msg_type": msg_type,
                "run_id": run_id,
                "reason": "aborted",
            })
            return

        event: Event
        if msg_type == "RECOGNITION_STARTED":
            event = RecognitionStarted(
                event_type=EventType.RECOGNITION_STARTED,
                ts_ms=ts_ms,
                run_id=run_id,
            )
        elif msg_type == "RECOGNITION_RESULT":
            event = RecognitionResult(
                event_type=EventType.RECOGNITION_RESULT,
                ts_ms=ts_ms,
                run_id=run_id,
                transcript=str(data.get("transcript") or ""),
            )
        elif msg_type == "RECOGNITION_ERROR":
            event = RecognitionError(
                event_type=EventType.RECOGNITION_ERROR,
                ts_ms=ts_ms,
                run_id=run_id,
                error_code=str(data.get("error") or ""),
                message=data.get("message"),
            )
        elif msg_type == "RECOGNITION_ENDED":
            if self._active_run == run_id:
                self._active_run = None
            event = RecognitionEnded(
                event_type=EventType.RECOGNITION_ENDED,
                ts_ms=ts_ms,
                run_id=run_id,
            )
        else:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "RECOGNITION_CALLBACK_UNKNOWN",
                "session_id": self._session_id,
                "msg_type": msg_type,
            })
            return

        await self._emit_event(event)
