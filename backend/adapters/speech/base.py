"""
Speech synthesis adapter contract.

Interface only. At most one utterance may be active at a time; speak()
implementations cancel any in-flight utterance before starting a new one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SpeechSynthesizer(ABC):
    """Abstract interface for spoken confirmations."""

    @abstractmethod
    async def speak(self, text: str, language: str) -> None:
        """
        Speak text in the display language.

        Contract:
        - Cancels any in-flight utterance first.
        - Never blocks until playback finishes.
        """
        raise NotImplementedError

    @abstractmethod
    async def cancel(self) -> None:
        """Stop any in-flight utterance. Idempotent."""
        raise NotImplementedError
