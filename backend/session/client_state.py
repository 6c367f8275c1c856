"""
Client-reported page and identity context.

The browser owns the auth session, router and language picker. It reports
them with HELLO and CONTEXT_UPDATE; this object is the SessionProvider the
navigation pipeline reads from. One instance per connection, never global.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from constants import HOME_PATH
from navigation.identity import SessionUser
from navigation.routes import UserType


@dataclass
class ClientState:
    """Mutable mirror of the client's session context."""

    user: SessionUser | None = None
    remembered_type: UserType | None = None
    path: str = HOME_PATH
    language: str = "English"

    # ------------------------------------------------------------------
    # SessionProvider
    # ------------------------------------------------------------------

    def current_user(self) -> SessionUser | None:
        return self.user

    def remembered_user_type(self) -> UserType | None:
        return self.remembered_type

    def current_path(self) -> str:
        return self.path

    def selected_language(self) -> str:
        return self.language

    # ------------------------------------------------------------------
    # Updates (called by SessionGateway)
    # ------------------------------------------------------------------

    def apply(self, data: dict[str, Any]) -> None:
        """
        Apply a HELLO / CONTEXT_UPDATE payload.

        Only keys present in the payload are updated, so partial updates
        (e.g. a route change) leave the rest untouched. ``"user": null``
        clears the session (logout).
        """
        if "user" in data:
            self.user = _parse_user(data["user"])

        if "remembered_user_type" in data:
            raw = data["remembered_user_type"]
            self.remembered_type = UserType.parse(raw) if raw else None

        path = data.get("path")
        if isinstance(path, str) and path:
            self.path = path

        language = data.get("language")
        if isinstance(language, str) and language:
            self.language = language

    def snapshot(self) -> dict[str, Any]:
        """Log-friendly view of the current context."""
        return {
            "uid": self.user.uid if self.user else None,
            "user_type": self.user.user_type.value if self.user else None,
            "remembered_user_type": (
                self.remembered_type.value if self.remembered_type else None
            ),
            "path": self.path,
            "language": self.language,
        }


def _parse_user(raw: Any) -> SessionUser | None:
    if not isinstance(raw, dict):
        return None
    uid = raw.get("uid")
    if not uid:
        return None
    return SessionUser(uid=str(uid), user_type=UserType.parse(raw.get("user_type")))
