"""
Auth gate for resolved voice commands.

Decides whether a resolved keyword may be navigated to directly, or whether
the user must log in first.

Rules:
- Pure decision: no side effects, no sleeping, no storage writes.
- The runtime performs the outcome (speak, persist redirect, delayed push).
- Login-page resolution mirrors route-table role inference.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from constants import (
    LOGIN_REDIRECT_DELAY_MS,
    NAVIGATE_DELAY_MS,
    PROTECTED_KEYWORDS,
)
from navigation.identity import SessionProvider, effective_user_type
from navigation.messages import navigating_text, spoken
from navigation.routes import login_path_for, resolve_role


class OutcomeKind(str, Enum):
    """Terminal result of dispatching one voice command."""

    NAVIGATE = "NAVIGATE"
    LOGIN_REDIRECT = "LOGIN_REDIRECT"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class NavigationOutcome:
    """
    Immutable description of what a voice command should do.

    path:
        Destination pushed to the router (login page for LOGIN_REDIRECT,
        None for NOT_FOUND).
    pending_redirect:
        Intended destination persisted for post-login redirect.
    spoken_text / language:
        Confirmation spoken before navigating.
    delay_ms:
        UX pause between speaking and navigating.
    """
    kind: OutcomeKind
    keyword: str
    spoken_text: str
    language: str
    path: str | None = None
    pending_redirect: str | None = None
    delay_ms: int = 0


def is_protected(keyword: str) -> bool:
    return keyword.lower() in PROTECTED_KEYWORDS


class AuthGate:
    """Session-aware gate between route resolution and navigation."""

    def __init__(self, session_provider: SessionProvider) -> None:
        self._session = session_provider

    def login_path(self) -> str:
        role = resolve_role(
            effective_user_type(self._session),
            self._session.current_path(),
        )
        return login_path_for(role)

    def decide(self, keyword: str, route: str) -> NavigationOutcome:
        """
        Decide between direct navigation and login redirect.

        A protected keyword without a session never navigates directly.
        """
        language = self._session.selected_language()

        if is_protected(keyword) and self._session.current_user() is None:
            return NavigationOutcome(
                kind=OutcomeKind.LOGIN_REDIRECT,
                keyword=keyword,
                spoken_text=spoken("login_required", language),
                language=language,
                path=self.login_path(),
                pending_redirect=route,
                delay_ms=LOGIN_REDIRECT_DELAY_MS,
            )

        return NavigationOutcome(
            kind=OutcomeKind.NAVIGATE,
            keyword=keyword,
            spoken_text=navigating_text(keyword, language),
            language=language,
            path=route,
            delay_ms=NAVIGATE_DELAY_MS,
        )
