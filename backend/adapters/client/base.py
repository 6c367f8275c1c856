"""
Client effects contract.

The router, toast surface, redirect storage and voice button all live in the
client. This interface is how the runtime reaches them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ClientEffects(ABC):
    """Abstract interface for client-side effects."""

    @abstractmethod
    async def navigate(self, path: str) -> None:
        """Push an absolute in-app path to the client router."""
        raise NotImplementedError

    @abstractmethod
    async def show_toast(self, severity: str, title: str, description: str) -> None:
        """Show a notification; severity is "info" or "destructive"."""
        raise NotImplementedError

    @abstractmethod
    async def store_pending_redirect(self, path: str) -> None:
        """Persist the intended destination for the post-login redirect."""
        raise NotImplementedError

    @abstractmethod
    async def publish_state(self, state: str, run_id: int) -> None:
        """Mirror the voice control state to the client."""
        raise NotImplementedError
