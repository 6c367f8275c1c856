"""
Authoritative voice session state enumeration.

Rules:
- This enum defines ONLY the control states.
- No behavior, no helper methods, no side effects.
- Transitions are defined exclusively in the reducer.
"""

from __future__ import annotations

from enum import Enum


class State(str, Enum):
    """
    Control states for a single voice navigation session.

    IDLE is both the initial and the terminal state.
    """

    IDLE = "idle"
    LISTENING = "listening"
    PROCESSING = "processing"
