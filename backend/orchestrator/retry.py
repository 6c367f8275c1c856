"""
Recognition error classification and retry policy.

Purpose:
- Map engine error codes to a closed set of error classes
- Decide retry eligibility for a (class, attempt) pair
- Keep the reducer pure

This module contains NO timers, NO async, NO side effects.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from constants import RECOGNITION_MAX_RETRIES, RECOGNITION_RETRY_DELAY_MS


# =============================================================================
# Error classes
# =============================================================================

class ErrorClass(str, Enum):
    """
    Classification of recognition engine error codes.

    NETWORK:
        Transient transport failure. Retried with a fresh handle and
        minimal configuration, up to RECOGNITION_MAX_RETRIES times.

    NO_SPEECH / AUDIO_CAPTURE / NOT_ALLOWED / SERVICE_NOT_ALLOWED /
    BAD_GRAMMAR / LANGUAGE_NOT_SUPPORTED / ABORTED:
        Terminal for the session. Each has a specific user-facing message.

    UNKNOWN:
        Any unclassified code. Terminal, generic message; never swallowed.
    """

    NETWORK = "network"
    NO_SPEECH = "no-speech"
    AUDIO_CAPTURE = "audio-capture"
    NOT_ALLOWED = "not-allowed"
    SERVICE_NOT_ALLOWED = "service-not-allowed"
    BAD_GRAMMAR = "bad-grammar"
    LANGUAGE_NOT_SUPPORTED = "language-not-supported"
    ABORTED = "aborted"
    UNKNOWN = "unknown"


ERROR_MESSAGES: dict[ErrorClass, str] = {
    ErrorClass.NO_SPEECH: "No speech detected. Please try again.",
    ErrorClass.AUDIO_CAPTURE: (
        "Microphone not accessible. Check your microphone permissions."
    ),
    ErrorClass.NOT_ALLOWED: (
        "Microphone access denied. "
        "Please enable microphone access in your browser settings."
    ),
    ErrorClass.SERVICE_NOT_ALLOWED: "Speech recognition service not allowed.",
    ErrorClass.BAD_GRAMMAR: "Speech not recognized. Please speak more clearly.",
    ErrorClass.LANGUAGE_NOT_SUPPORTED: (
        "Speech recognition language is not supported in this browser."
    ),
    ErrorClass.ABORTED: "Voice recognition was interrupted. Please try again.",
    ErrorClass.NETWORK: "Network error occurred. Check your internet connection.",
    ErrorClass.UNKNOWN: "Speech recognition error. Please try again.",
}


def classify_error(code: str | None) -> ErrorClass:
    """Map an engine error code to an ErrorClass (UNKNOWN on miss)."""
    if not code:
        return ErrorClass.UNKNOWN
    try:
        return ErrorClass(code.strip().lower())
    except ValueError:
        return ErrorClass.UNKNOWN


def error_message(error_class: ErrorClass) -> str:
    return ERROR_MESSAGES[error_class]


# =============================================================================
# Retry state
# =============================================================================

@dataclass(frozen=True)
class RetryAttempt:
    """
    Immutable retry counter scoped to one listening session.

    Semantics:
    - attempt == 0: the initial recognition handle (no retry yet).
    - attempt == N: the Nth retry handle is (or was) active.
    """
    attempt: int


def next_attempt(current: RetryAttempt) -> RetryAttempt:
    """Return a new RetryAttempt with attempt incremented by 1."""
    return RetryAttempt(attempt=current.attempt + 1)


def reset_attempt() -> RetryAttempt:
    """Returns a fresh retry attempt counter."""
    return RetryAttempt(attempt=0)


# =============================================================================
# Policy
# =============================================================================

def max_attempts(error_class: ErrorClass) -> int:
    """Maximum retries (excluding the initial attempt) for an error class."""
    if error_class is ErrorClass.NETWORK:
        return RECOGNITION_MAX_RETRIES
    return 0


def should_retry(*, error_class: ErrorClass, attempt: RetryAttempt) -> bool:
    """
    Returns True if a retry is allowed.

    attempt = number of retries already performed
    """
    return attempt.attempt < max_attempts(error_class)


def get_retry_delay_ms(*, attempt: RetryAttempt) -> int:
    """Delay before retry attempt N (fixed)."""
    del attempt
    return RECOGNITION_RETRY_DELAY_MS
