"""
Side-effect command definitions for voice navigation.

Rules:
- Commands are declarative requests for side effects.
- Commands are emitted by the reducer and executed by the runtime.
- No behavior, no async, no I/O, no clocks.
Invariant:
    - All concrete Command subclasses MUST be frozen dataclasses.
    - Commands are immutable value objects emitted by the reducer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from constants import (
    RECOGNITION_CONTINUOUS,
    RECOGNITION_INTERIM_RESULTS,
    RECOGNITION_LOCALE_DEFAULT,
    RECOGNITION_MAX_ALTERNATIVES,
)
from orchestrator.events import EventType

# =============================================================================
# Command Type Enumeration
# =============================================================================

class CommandType(str, Enum):
    """
    Canonical command types emitted by the reducer.

    Stable discriminants used for logging and runtime dispatch.
    """

    # Recognition
    START_RECOGNITION = "START_RECOGNITION"
    STOP_RECOGNITION = "STOP_RECOGNITION"
    ABORT_RECOGNITION = "ABORT_RECOGNITION"

    # Dispatch
    RESOLVE_COMMAND = "RESOLVE_COMMAND"

    # Client effects
    SPEAK = "SPEAK"
    NAVIGATE = "NAVIGATE"
    STORE_PENDING_REDIRECT = "STORE_PENDING_REDIRECT"
    SHOW_TOAST = "SHOW_TOAST"
    PUBLISH_STATE = "PUBLISH_STATE"

    # Timers
    START_TIMER = "START_TIMER"
    CANCEL_TIMER = "CANCEL_TIMER"
    CANCEL_ALL_TIMERS = "CANCEL_ALL_TIMERS"
    SCHEDULE_RETRY = "SCHEDULE_RETRY"

    # Observability
    LOG_EVENT = "LOG_EVENT"


# =============================================================================
# Base Command
# =============================================================================

class Command:
    """
    Base command type.

    command_type is an explicit discriminant and must never be inferred
    from Python type identity.
    """

    command_type: CommandType


# =============================================================================
# Recognition configuration
# =============================================================================

@dataclass(frozen=True)
class RecognitionConfig:
    """
    Engine configuration for a single recognition handle.

    The locale is fixed and does not follow the display language.
    Fields set to None are omitted from the engine configuration.
    """
    lang: str = RECOGNITION_LOCALE_DEFAULT
    continuous: bool = RECOGNITION_CONTINUOUS
    interim_results: bool = RECOGNITION_INTERIM_RESULTS
    max_alternatives: int | None = RECOGNITION_MAX_ALTERNATIVES

    @classmethod
    def minimal(cls, lang: str = RECOGNITION_LOCALE_DEFAULT) -> RecognitionConfig:
        """Degraded configuration used for network retries."""
        return cls(lang=lang, max_alternatives=None)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "lang": self.lang,
            "continuous": self.continuous,
            "interimResults": self.interim_results,
        }
        if self.max_alternatives is not None:
            payload["maxAlternatives"] = self.max_alternatives
        return payload


# =============================================================================
# Recognition Commands
# =============================================================================

@dataclass(frozen=True)
class StartRecognition(Command):
    """Request to open a fresh recognition handle for run_id."""
    run_id: int
    config: RecognitionConfig = field(default_factory=RecognitionConfig)
    command_type: CommandType = CommandType.START_RECOGNITION


@dataclass(frozen=True)
class StopRecognition(Command):
    """Graceful stop of the active handle."""
    run_id: int
    command_type: CommandType = CommandType.STOP_RECOGNITION


@dataclass(frozen=True)
class AbortRecognition(Command):
    """Hard abort; no further callbacks for run_id may be delivered."""
    run_id: int
    command_type: CommandType = CommandType.ABORT_RECOGNITION


# =============================================================================
# Dispatch Commands
# =============================================================================

@dataclass(frozen=True)
class ResolveCommand(Command):
    """
    Run the dispatch pipeline for a final transcript.

    Runtime must emit CommandResolved(run_id, outcome) when done.
    """
    run_id: int
    transcript: str
    command_type: CommandType = CommandType.RESOLVE_COMMAND


# =============================================================================
# Client effect Commands
# =============================================================================

@dataclass(frozen=True)
class Speak(Command):
    """Speak text; any in-flight utterance is cancelled first."""
    text: str
    language: str
    command_type: CommandType = CommandType.SPEAK


@dataclass(frozen=True)
class Navigate(Command):
    """Push path to the router after delay_ms."""
    path: str
    delay_ms: int = 0
    command_type: CommandType = CommandType.NAVIGATE


@dataclass(frozen=True)
class StorePendingRedirect(Command):
    """Persist the intended destination for post-login redirect."""
    path: str
    command_type: CommandType = CommandType.STORE_PENDING_REDIRECT


@dataclass(frozen=True)
class ShowToast(Command):
    """User-visible notification."""
    severity: str  # "info" | "destructive"
    title: str
    description: str
    command_type: CommandType = CommandType.SHOW_TOAST


@dataclass(frozen=True)
class PublishState(Command):
    """Mirror the control state to the client (button affordance)."""
    state: str
    run_id: int
    command_type: CommandType = CommandType.PUBLISH_STATE


# =============================================================================
# Timer Commands
# =============================================================================

@dataclass(frozen=True)
class StartTimer(Command):
    """
    Request to start a named timer.

    On expiration, the runtime must inject the specified timeout event,
    carrying run_id.
    """
    timer_id: str
    duration_ms: int
    timeout_event_type: EventType
    run_id: int
    command_type: CommandType = CommandType.START_TIMER


@dataclass(frozen=True)
class CancelTimer(Command):
    """Request to cancel a previously scheduled timer."""
    timer_id: str
    command_type: CommandType = CommandType.CANCEL_TIMER


@dataclass(frozen=True)
class CancelAllTimers(Command):
    """Cancel every timer, retry and pending navigation (teardown)."""
    command_type: CommandType = CommandType.CANCEL_ALL_TIMERS


@dataclass(frozen=True)
class ScheduleRetry(Command):
    """
    Request that runtime schedule a recognition retry after delay_ms.

    Runtime responsibilities:
    - wait delay_ms
    - emit RetryReady(run_id=...)
    """
    run_id: int
    delay_ms: int
    command_type: CommandType = CommandType.SCHEDULE_RETRY


# =============================================================================
# Observability Commands
# =============================================================================

@dataclass(frozen=True)
class LogEvent(Command):
    """Request to emit a structured observability event."""
    event: dict[str, Any]
    command_type: CommandType = CommandType.LOG_EVENT
