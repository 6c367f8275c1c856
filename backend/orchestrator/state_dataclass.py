"""
Authoritative voice navigation state container.

Rules:
- This dataclass is a pure data model.
- It contains ALL state the reducer may ever need.
- No behavior, no helpers, no derived logic.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from constants import RECOGNITION_LOCALE_DEFAULT
from orchestrator.enums.state import State
from orchestrator.retry import RetryAttempt


@dataclass(frozen=True)
class VoiceNavState:
    """Immutable snapshot of all reducer-owned state."""

    # ------------------------------------------------------------------
    # Control state
    # ------------------------------------------------------------------
    state: State = State.IDLE

    # ------------------------------------------------------------------
    # Platform capability (reported once by the client)
    # ------------------------------------------------------------------
    recognition_supported: bool = True

    # Fixed recognition locale (independent of display language)
    recognition_locale: str = RECOGNITION_LOCALE_DEFAULT

    # ------------------------------------------------------------------
    # Recognition handle tracking
    # ------------------------------------------------------------------
    # Bumped for every fresh handle (start and retries).
    run_id: int = 0

    # A network retry is scheduled but its handle is not started yet.
    retry_pending: bool = False

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    # True between ResolveCommand and its CommandResolved for run_id.
    awaiting_resolution: bool = False

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------
    last_error: str | None = None

    # ------------------------------------------------------------------
    # Retry bookkeeping (network errors only)
    # ------------------------------------------------------------------
    retry_attempt: RetryAttempt = field(default_factory=lambda: RetryAttempt(attempt=0))
