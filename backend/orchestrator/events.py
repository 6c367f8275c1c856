"""
Unified event definitions for the voice navigation reducer.

Rules:
- Events describe facts that have occurred.
- Events carry data only (no behavior).
- All reducer decisions are based on these events.
- No clocks, no timers, no async, no side effects.

Recognition events carry run_id for stale gating.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from navigation.auth_gate import NavigationOutcome


# =============================================================================
# Event Type Enumeration
# =============================================================================

class EventType(str, Enum):
    """
    Canonical event types understood by the reducer.

    Every (state, event_type) pair must be explicitly handled
    or explicitly ignored by the reducer.
    """

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    SESSION_STARTED = "SESSION_STARTED"
    SESSION_END = "SESSION_END"

    # ------------------------------------------------------------------
    # User control
    # ------------------------------------------------------------------
    MIC_TOGGLE = "MIC_TOGGLE"
    MIC_STOP = "MIC_STOP"

    # ------------------------------------------------------------------
    # Recognition engine callbacks
    # ------------------------------------------------------------------
    RECOGNITION_STARTED = "RECOGNITION_STARTED"
    RECOGNITION_RESULT = "RECOGNITION_RESULT"
    RECOGNITION_ERROR = "RECOGNITION_ERROR"
    RECOGNITION_ENDED = "RECOGNITION_ENDED"

    # ------------------------------------------------------------------
    # Command dispatch
    # ------------------------------------------------------------------
    COMMAND_RESOLVED = "COMMAND_RESOLVED"

    # ------------------------------------------------------------------
    # Timers / internal control
    # ------------------------------------------------------------------
    LISTEN_TIMEOUT = "LISTEN_TIMEOUT"
    PROCESSING_RESET = "PROCESSING_RESET"
    RETRY_READY = "RETRY_READY"


# =============================================================================
# Base Event
# =============================================================================

@dataclass(frozen=True)
class Event:
    """
    Base event type.

    All events must specify:
    - event_type: discriminant
    - ts_ms: timestamp provided by the source (or fake in tests)
    """

    event_type: EventType
    ts_ms: int


@dataclass(frozen=True)
class RunEvent(Event):
    """Event scoped to a single recognition handle."""
    run_id: int


# =============================================================================
# Session lifecycle
# =============================================================================

@dataclass(frozen=True)
class SessionStarted(Event):
    """Client mounted the voice control and reported its capabilities."""
    session_id: str
    recognition_supported: bool = True


@dataclass(frozen=True)
class SessionEnd(Event):
    """Consumer unmounted; all live handles must be aborted."""
    reason: str | None = None


# =============================================================================
# User control
# =============================================================================

@dataclass(frozen=True)
class MicToggle(Event):
    """User activated the microphone control."""


@dataclass(frozen=True)
class MicStop(Event):
    """Explicit stop request."""


# =============================================================================
# Recognition callbacks
# =============================================================================

@dataclass(frozen=True)
class RecognitionStarted(RunEvent):
    """Engine ``onstart``."""


@dataclass(frozen=True)
class RecognitionResult(RunEvent):
    """Engine ``onresult`` with the final transcript (may be empty)."""
    transcript: str


@dataclass(frozen=True)
class RecognitionError(RunEvent):
    """Engine ``onerror`` with the raw error code."""
    error_code: str
    message: str | None = None


@dataclass(frozen=True)
class RecognitionEnded(RunEvent):
    """Engine ``onend``."""


# =============================================================================
# Command dispatch
# =============================================================================

@dataclass(frozen=True)
class CommandResolved(RunEvent):
    """Dispatcher finished resolving the transcript of run_id."""
    outcome: NavigationOutcome


# =============================================================================
# Timers
# =============================================================================

@dataclass(frozen=True)
class ListenTimeout(RunEvent):
    """LISTENING lasted longer than LISTEN_TIMEOUT_MS."""


@dataclass(frozen=True)
class ProcessingReset(RunEvent):
    """Fixed UX pause after dispatch elapsed."""


@dataclass(frozen=True)
class RetryReady(RunEvent):
    """Retry delay elapsed; run_id is the fresh handle to start."""
