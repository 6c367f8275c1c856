"""
Session identity seen by voice navigation.

Identity is owned by an external auth collaborator. Navigation code only reads
it through the SessionProvider protocol; it never holds a global session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from navigation.routes import UserType


@dataclass(frozen=True)
class SessionUser:
    """Opaque logged-in identity."""
    uid: str
    user_type: UserType = UserType.UNKNOWN


@runtime_checkable
class SessionProvider(Protocol):
    """Read-only accessor for session and page context."""

    def current_user(self) -> SessionUser | None:
        """Logged-in user, or None when there is no session."""

    def remembered_user_type(self) -> UserType | None:
        """Role the client persisted at last login (survives logout)."""

    def current_path(self) -> str:
        """Current in-app URL path."""

    def selected_language(self) -> str:
        """Display language name (e.g. "English", "Tamil")."""


def effective_user_type(provider: SessionProvider) -> UserType | None:
    """Session user type first, then the remembered role."""
    user = provider.current_user()
    if user is not None and user.user_type is not UserType.UNKNOWN:
        return user.user_type
    return provider.remembered_user_type()
