"""
BEHAVIOR-AS-CONSTANTS
---------------------
Single source of truth for all behavioral invariants of voice navigation.

Rules:
- If changing a value changes runtime behavior, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final, Tuple

# =============================================================================
# UX pacing delays
# =============================================================================
# Pauses that let spoken confirmation begin before the page changes.
# They are not waits on any external event.

NAVIGATE_DELAY_MS: Final[int] = 1_500
LOGIN_REDIRECT_DELAY_MS: Final[int] = 2_500
PROCESSING_RESET_DELAY_MS: Final[int] = 3_000

# Hard ceiling on LISTENING if the engine never calls back.
LISTEN_TIMEOUT_MS: Final[int] = 10_000

# =============================================================================
# Recognition
# =============================================================================

RECOGNITION_LOCALE_DEFAULT: Final[str] = "en-US"
RECOGNITION_CONTINUOUS: Final[bool] = False
RECOGNITION_INTERIM_RESULTS: Final[bool] = False
RECOGNITION_MAX_ALTERNATIVES: Final[int] = 1

# Network-class errors only
RECOGNITION_MAX_RETRIES: Final[int] = 2
RECOGNITION_RETRY_DELAY_MS: Final[int] = 300

# =============================================================================
# Speech synthesis
# =============================================================================

SPEECH_RATE: Final[float] = 1.0
SPEECH_PITCH: Final[float] = 1.0
SPEECH_VOLUME: Final[float] = 0.8

BASE_LANGUAGE: Final[str] = "English"
BASE_SPEECH_LOCALE: Final[str] = "en-US"

SPEECH_LOCALES: Final[dict[str, str]] = {
    "English": "en-US",
    "Tamil": "ta-IN",
    "Hindi": "hi-IN",
    "Malayalam": "ml-IN",
    "Telugu": "te-IN",
    "Kannada": "kn-IN",
    "Bengali": "bn-IN",
    "Arabic": "ar-SA",
    "Urdu": "ur-PK",
    "Srilanka": "si-LK",
}

# =============================================================================
# Command normalization
# =============================================================================

# Order matters: phrases are stripped sequentially.
FILLER_PHRASES: Final[Tuple[str, ...]] = (
    "go to",
    "navigate to",
    "open",
    "show",
    "take me to",
    "visit",
    "page",
)

# =============================================================================
# Routing / auth
# =============================================================================

HOME_PATH: Final[str] = "/"
FAQ_PATH: Final[str] = "/dashboard/faq"
LOGIN_PATH_PREFIX: Final[str] = "/login"

# Keywords that require a logged-in session regardless of resolved path.
PROTECTED_KEYWORDS: Final[frozenset[str]] = frozenset({
    "dashboard",
    "orders",
    "products",
    "track",
    "profile",
    "inventory",
    "matchmaking",
    "analytics",
    "reports",
    "settings",
})

# Client storage key for post-login redirect
REDIRECT_AFTER_LOGIN_KEY: Final[str] = "redirectAfterLogin"
