"""
Voice session container.

- Owned and mutated by SessionGateway
- Holds the runtime, adapters and client context for one connection
- NOT a state machine
- Contains no orchestration logic
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from orchestrator.runtime import Runtime
from session.client_state import ClientState


# ---------------------------------------------------------------------
# VoiceSession
# ---------------------------------------------------------------------


@dataclass
class VoiceSession:
    """Mutable runtime container for a single voice session."""

    # ------------------------------------------------------------------
    # Identity / lifecycle
    # ------------------------------------------------------------------

    session_id: str
    created_at: float = field(default_factory=time.time)
    closed: bool = False

    # ------------------------------------------------------------------
    # Client-reported context (SessionProvider)
    # ------------------------------------------------------------------

    client_state: ClientState = field(default_factory=ClientState)

    # ------------------------------------------------------------------
    # Runtime (executes commands + owns authoritative state)
    # ------------------------------------------------------------------

    runtime: Runtime | None = None

    # ------------------------------------------------------------------
    # Adapters (concrete, side-effectful)
    # ------------------------------------------------------------------

    recognizer: Any = None
    synthesizer: Any = None
    client: Any = None
    dispatcher: Any = None

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def __post_init__(self) -> None:
        self._control_out: deque[dict[str, Any]] = deque()
        self._control_ready = asyncio.Event()

    # ------------------------------------------------------------------
    # Wiring helpers (called by SessionGateway)
    # ------------------------------------------------------------------

    def attach_adapters(
        self,
        *,
        recognizer: Any,
        synthesizer: Any,
        client: Any,
        dispatcher: Any,
    ) -> None:
        """Attach concrete adapters. Must run before attach_runtime()."""
        self.recognizer = recognizer
        self.synthesizer = synthesizer
        self.client = client
        self.dispatcher = dispatcher

    def attach_runtime(self, runtime: Runtime) -> None:
        """Attach the runtime executor."""
        self.runtime = runtime

    # ------------------------------------------------------------------
    # Observability helpers (read-only)
    # ------------------------------------------------------------------

    def log_context(self) -> dict[str, Any]:
        """Standard logging context for this session."""
        return {
            "session_id": self.session_id,
            "client": self.client_state.snapshot(),
        }

    # ------------------------------------------------------------------
    # Outbound control channel
    # ------------------------------------------------------------------

    def enqueue_control(self, msg: dict[str, Any]) -> None:
        """
        Enqueue a control message for delivery to the client.

        Messages are buffered in FIFO order. Timer-driven messages are
        enqueued from background tasks, so the sender is woken up here.
        """
        if self.closed:
            return
        self._control_out.append(msg)
        self._control_ready.set()

    def drain_control(self) -> tuple[dict[str, Any], ...]:
        """
        Atomically drain all pending control messages.

        Returns a FIFO-ordered tuple; empty if nothing is pending.
        """
        self._control_ready.clear()
        if not self._control_out:
            return ()
        out = tuple(self._control_out)
        self._control_out.clear()
        return out

    async def next_control_batch(self) -> tuple[dict[str, Any], ...]:
        """Wait until at least one control message is pending, then drain."""
        while not self._control_out:
            self._control_ready.clear()
            await self._control_ready.wait()
        return self.drain_control()
