"""Speech synthesizer backed by the browser's speechSynthesis API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from adapters.speech.base import SpeechSynthesizer
from constants import SPEECH_PITCH, SPEECH_RATE, SPEECH_VOLUME
from navigation.messages import locale_for_language
from observability.logger import now_ms


class BrowserSpeechBridge(SpeechSynthesizer):
    """
    Sends SPEECH_CANCEL / SPEAK control messages to the client.

    The utterance locale comes from the display language; rate, pitch and
    volume are fixed.
    """

    def __init__(self, *, send_control: Callable[[dict[str, Any]], None]) -> None:
        self._send_control = send_control

    async def speak(self, text: str, language: str) -> None:
        await self.cancel()
        self._send_control({
            "type": "SPEAK",
            "text": text,
            "lang": locale_for_language(language),
            "rate": SPEECH_RATE,
            "pitch": SPEECH_PITCH,
            "volume": SPEECH_VOLUME,
            "ts_ms": now_ms(),
        })

    async def cancel(self) -> None:
        self._send_control({"type": "SPEECH_CANCEL", "ts_ms": now_ms()})
