"""
Runtime execution context.

Provides Runtime with live access to session-owned imperative resources
needed for command execution (recognition, speech, client effects, dispatch).

This module contains:
- Narrow Protocols (capabilities, not implementations)
- Zero orchestration logic
- Zero state mutation
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from navigation.auth_gate import NavigationOutcome
    from orchestrator.commands import RecognitionConfig
    from session.voice_session import VoiceSession


# ---------------------------------------------------------------------
# Adapter Protocols
# ---------------------------------------------------------------------

@runtime_checkable
class RecognitionAdapterProtocol(Protocol):
    async def start(self, run_id: int, config: RecognitionConfig) -> None: ...
    async def stop(self, run_id: int) -> None: ...
    async def abort(self, run_id: int) -> None: ...


@runtime_checkable
class SpeechSynthesizerProtocol(Protocol):
    async def speak(self, text: str, language: str) -> None: ...
    async def cancel(self) -> None: ...


@runtime_checkable
class ClientEffectsProtocol(Protocol):
    """Router, toaster, redirect storage and state mirror of the client."""

    async def navigate(self, path: str) -> None: ...
    async def show_toast(self, severity: str, title: str, description: str) -> None: ...
    async def store_pending_redirect(self, path: str) -> None: ...
    async def publish_state(self, state: str, run_id: int) -> None: ...


@runtime_checkable
class DispatcherProtocol(Protocol):
    async def resolve(self, transcript: str) -> NavigationOutcome: ...


# ---------------------------------------------------------------------
# Runtime Execution Context
# ---------------------------------------------------------------------

class RuntimeExecutionContext:
    """
    Imperative execution context for Runtime.

    This object provides *live views* into session-owned resources
    so Runtime does not need to synchronize or cache anything.

    Runtime is allowed to:
    - Call adapters
    - Ask the dispatcher to resolve a transcript

    Runtime is NOT allowed to:
    - Mutate session state directly
    - Perform orchestration decisions
    """

    def __init__(self, session: VoiceSession) -> None:
        self.session = session

    # ----------------------------
    # Session metadata
    # ----------------------------

    @property
    def session_id(self) -> str:
        return self.session.session_id

    # ----------------------------
    # Adapters
    # ----------------------------

    @property
    def recognizer(self) -> RecognitionAdapterProtocol | None:
        return self.session.recognizer

    @property
    def synthesizer(self) -> SpeechSynthesizerProtocol | None:
        return self.session.synthesizer

    @property
    def client(self) -> ClientEffectsProtocol | None:
        return self.session.client

    @property
    def dispatcher(self) -> DispatcherProtocol | None:
        return self.session.dispatcher
