"""
Voice command dispatch pipeline.

transcript -> normalizer -> route table -> (intent fallback) -> auth gate

The dispatcher reads session context through the injected SessionProvider
and returns a NavigationOutcome. It performs no side effects; the runtime
turns the outcome into an event and the reducer decides the commands.
"""

from __future__ import annotations

from typing import Protocol

from navigation.auth_gate import AuthGate, NavigationOutcome, OutcomeKind
from navigation.identity import SessionProvider, effective_user_type
from navigation.messages import spoken
from navigation.normalizer import FillerMatching, normalize_command
from navigation.routes import build_route_mapping

from observability.logger import log_event


class IntentResolverProtocol(Protocol):
    async def resolve_intent(
        self,
        *,
        transcript: str,
        keywords: tuple[str, ...],
        language: str,
    ) -> str | None:
        """Pick one of ``keywords`` for ``transcript`` or return None."""


class NavigationDispatcher:
    """Resolve a transcript to a NavigationOutcome for the current session."""

    def __init__(
        self,
        *,
        session_provider: SessionProvider,
        intent_resolver: IntentResolverProtocol | None = None,
        filler_matching: FillerMatching = FillerMatching.SUBSTRING,
    ) -> None:
        self._session = session_provider
        self._intent_resolver = intent_resolver
        self._filler_matching = filler_matching
        self._gate = AuthGate(session_provider)

    def route_mapping(self) -> dict[str, str]:
        return build_route_mapping(
            effective_user_type(self._session),
            self._session.current_path(),
        )

    async def resolve(self, transcript: str) -> NavigationOutcome:
        keyword = normalize_command(transcript, self._filler_matching)
        mapping = self.route_mapping()
        route = mapping.get(keyword)

        if route is None and self._intent_resolver is not None:
            fallback = await self._resolve_fallback(transcript, mapping)
            if fallback is not None:
                keyword, route = fallback, mapping[fallback]

        if route is None:
            language = self._session.selected_language()
            return NavigationOutcome(
                kind=OutcomeKind.NOT_FOUND,
                keyword=keyword,
                spoken_text=spoken("not_found", language),
                language=language,
            )

        return self._gate.decide(keyword, route)

    async def _resolve_fallback(
        self,
        transcript: str,
        mapping: dict[str, str],
    ) -> str | None:
        assert self._intent_resolver is not None
        try:
            key = await self._intent_resolver.resolve_intent(
                transcript=transcript,
                keywords=tuple(sorted(mapping)),
                language=self._session.selected_language(),
            )
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "event_type": "INTENT_FALLBACK_FAILED",
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            return None

        if key is None or key not in mapping:
            log_event({
                "event_type": "INTENT_FALLBACK_MISS",
                "transcript": transcript,
                "answer": key,
            })
            return None

        log_event({
            "event_type": "INTENT_FALLBACK_HIT",
            "transcript": transcript,
            "keyword": key,
        })
        return key
