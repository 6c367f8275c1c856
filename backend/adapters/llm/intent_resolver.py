"""LLM intent fallback for voice commands that miss the route table."""
from __future__ import annotations

import json
from typing import Any

from adapters.llm.prompts import INTENT_PROMPT_VERSION, build_intent_messages
from observability.logger import log_event, now_ms


class OpenAIIntentResolver:
    """
    Map a free-form transcript to one keyword of the current route mapping.

    Design notes:
    - Works with any OpenAI-compatible chat completions client
      (OpenAI, or Groq through its base URL).
    - One request per lookup; no streaming, no retries.
    - Returns the raw keyword or None. The dispatcher validates the answer
      against the mapping and handles exceptions.
    """

    def __init__(
        self,
        *,
        client: Any,
        model: str,
        provider: str,
    ) -> None:
        """
        Args:
            client:
                Vendor client (openai.AsyncOpenAI).
            model:
                Model identifier string.
            provider:
                "openai" or "groq" (logging only).
        """
        self._client = client
        self._model = model
        self._provider = provider

    async def resolve_intent(
        self,
        *,
        transcript: str,
        keywords: tuple[str, ...],
        language: str,
    ) -> str | None:
        """Pick one of ``keywords`` for ``transcript`` or return None."""
        if not keywords:
            return None

        started_ms = now_ms()
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=build_intent_messages(
                transcript=transcript,
                keywords=keywords,
                language=language,
            ),
            response_format={"type": "json_object"},
            temperature=0,
        )

        content = self._extract_content(response)
        keyword = self._parse_keyword(content)

        log_event({
            "ts_ms": now_ms(),
            "event_type": "INTENT_LLM_RESPONSE",
            "provider": self._provider,
            "model": self._model,
            "prompt_version": INTENT_PROMPT_VERSION,
            "latency_ms": now_ms() - started_ms,
            "keyword": keyword,
        })
        return keyword

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_content(response: Any) -> str:
        """Extract message text from vendor response (OpenAI format)."""
        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError):
            return ""

    @staticmethod
    def _parse_keyword(content: str) -> str | None:
        if not content:
            return None
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        keyword = data.get("keyword")
        if not isinstance(keyword, str):
            return None
        keyword = keyword.strip().lower()
        return keyword or None
