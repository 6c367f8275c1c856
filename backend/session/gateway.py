"""
Session gateway.

Responsibilities:
- Owns VoiceSession lifecycle
- Wires adapters, dispatcher and runtime for one connection
- Routes inbound JSON control messages -> reducer events
- Relays recognition callbacks through the recognition bridge
- Keeps the client-reported context (identity, path, language) current

NOT responsible for:
- Executing commands
- Any state machine logic
- Sending on the socket (the route's sender task drains the session)
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, TYPE_CHECKING

from uuid import uuid4

from adapters.client.browser_bridge import BrowserClientBridge
from adapters.llm.intent_resolver import OpenAIIntentResolver
from adapters.recognition.browser_bridge import (
    CALLBACK_MESSAGE_TYPES,
    BrowserRecognitionBridge,
)
from adapters.speech.browser_bridge import BrowserSpeechBridge
from navigation.dispatcher import NavigationDispatcher
from navigation.normalizer import FillerMatching
from orchestrator.commands import RecognitionConfig
from orchestrator.events import (
    Event,
    EventType,
    MicStop,
    MicToggle,
    SessionEnd,
    SessionStarted,
)
from orchestrator.runtime import Runtime, SleepFn
from orchestrator.runtime_context import RuntimeExecutionContext
from orchestrator.state_dataclass import VoiceNavState

from session.client_state import ClientState
from session.voice_session import VoiceSession

from observability.logger import log_event, now_ms

if TYPE_CHECKING:
    from config import AppConfig


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _new_session_id() -> str:
    return f"sess_{uuid4().hex[:12]}"


def _flag(data: dict[str, Any], key: str, *, default: bool) -> bool:
    """JSON booleans only; anything else (e.g. the string "false") is the default."""
    value = data.get(key)
    return value if isinstance(value, bool) else default


# ------------------------------------------------------------------
# SessionGateway
# ------------------------------------------------------------------

class SessionGateway:
    """One gateway == one voice session (one browser tab)."""

    def __init__(
        self,
        *,
        config: AppConfig,
        openai_client: Any | None = None,  # Type: openai.AsyncOpenAI
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._config = config
        self._openai_client = openai_client
        self._sleep = sleep
        self.session: VoiceSession | None = None
        self._recognizer: BrowserRecognitionBridge | None = None

    async def on_ws_connect(self) -> str:
        """Create and wire the session. Returns the new session id."""
        session_id = _new_session_id()
        session = VoiceSession(
            session_id=session_id,
            client_state=ClientState(language=self._config.default_language),
        )
        self.session = session

        runtime = Runtime(
            initial_state=VoiceNavState(
                recognition_locale=self._config.recognition_locale,
            ),
            context=RuntimeExecutionContext(session=session),
            sleep=self._sleep,
        )

        intent_resolver = None
        if self._config.intent_fallback and self._openai_client is not None:
            intent_resolver = OpenAIIntentResolver(
                client=self._openai_client,
                model=self._config.llm_model,
                provider=self._config.llm_provider,
            )

        self._recognizer = BrowserRecognitionBridge(
            send_control=session.enqueue_control,
            emit_event=runtime.handle_event,
            session_id=session_id,
        )
        session.attach_adapters(
            recognizer=self._recognizer,
            synthesizer=BrowserSpeechBridge(send_control=session.enqueue_control),
            client=BrowserClientBridge(send_control=session.enqueue_control),
            dispatcher=NavigationDispatcher(
                session_provider=session.client_state,
                intent_resolver=intent_resolver,
                filler_matching=FillerMatching.parse(self._config.filler_matching),
            ),
        )

        # Attach runtime (must be AFTER adapters)
        session.attach_runtime(runtime)

        session.enqueue_control({
            "type": "SESSION_INIT",
            "session_id": session_id,
            "state": runtime.state.state.value,
            "recognition": RecognitionConfig(
                lang=self._config.recognition_locale,
            ).to_payload(),
            "intent_fallback": intent_resolver is not None,
            "ts_ms": now_ms(),
        })

        log_event({
            "ts_ms": now_ms(),
            "event_type": "WS_CONNECTED",
            "session_id": session_id,
        })
        return session_id

    async def on_ws_disconnect(self, reason: str | None = None) -> None:
        """Called when the WebSocket disconnects."""
        if self.session is None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "WS_DISCONNECT_WITHOUT_SESSION",
                "reason": reason,
            })
            return

        session = self.session
        if session.closed:
            return

        await self._dispatch(
            SessionEnd(
                event_type=EventType.SESSION_END,
                ts_ms=now_ms(),
                reason=reason,
            )
        )

        runtime = session.runtime
        if runtime is not None:
            await runtime.shutdown()

        session.closed = True

        log_event({
            "ts_ms": now_ms(),
            "event_type": "WS_DISCONNECTED",
            "session_id": session.session_id,
            "reason": reason,
        })

    async def on_json_message(self, payload: str) -> None:
        """Route inbound JSON to reducer events."""
        if self.session is None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "MESSAGE_WITHOUT_SESSION",
                "payload_preview": payload[:100],
            })
            return

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "JSON_DECODE_ERROR",
                "session_id": self.session.session_id,
                "error": str(e),
                "payload_preview": payload[:100],
            })
            return

        if not isinstance(data, dict):
            log_event({
                "ts_ms": now_ms(),
                "event_type": "JSON_NOT_OBJECT",
                "session_id": self.session.session_id,
                "payload_preview": payload[:100],
            })
            return

        msg_type = data.get("type")
        ts_ms = data.get("ts_ms", now_ms())

        if msg_type in CALLBACK_MESSAGE_TYPES:
            assert self._recognizer is not None
            await self._recognizer.on_callback(data)
            return

        event: Event | None = None

        if msg_type == "HELLO":
            self.session.client_state.apply(data)
            event = SessionStarted(
                event_type=EventType.SESSION_STARTED,
                ts_ms=ts_ms,
                session_id=self.session.session_id,
                recognition_supported=_flag(data, "recognition_supported", default=True),
            )
        elif msg_type == "CONTEXT_UPDATE":
            self.session.client_state.apply(data)
            log_event({
                "ts_ms": now_ms(),
                "event_type": "CONTEXT_UPDATED",
                **self.session.log_context(),
            })
            return
        elif msg_type == "MIC_TOGGLE":
            event = MicToggle(event_type=EventType.MIC_TOGGLE, ts_ms=ts_ms)
        elif msg_type == "MIC_STOP":
            event = MicStop(event_type=EventType.MIC_STOP, ts_ms=ts_ms)
        elif msg_type == "UNMOUNT":
            event = SessionEnd(
                event_type=EventType.SESSION_END,
                ts_ms=ts_ms,
                reason="unmount",
            )
        else:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "UNKNOWN_MESSAGE_TYPE",
                "msg_type": msg_type,
                "session_id": self.session.session_id,
            })
            return

        await self._dispatch(event)

    # ------------------------------------------------------------------
    # Reducer dispatch
    # ------------------------------------------------------------------

    async def _dispatch(self, event: Event) -> None:
        """Forward event into runtime."""
        if self.session is None:
            log_event({
                "ts_ms": now_ms(),
                "event_type": "DISPATCH_WITHOUT_SESSION",
                "dropped_event": event.event_type.value,
            })
            return

        runtime = self.session.runtime
        assert runtime is not None, "Runtime must exist before dispatch"

        await runtime.handle_event(event)
