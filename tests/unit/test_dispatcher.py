# pylint: disable=missing-module-docstring,missing-function-docstring

import asyncio
from typing import Any

from navigation.auth_gate import OutcomeKind
from navigation.dispatcher import NavigationDispatcher
from navigation.identity import SessionUser
from navigation.routes import UserType
from session.client_state import ClientState


class FakeIntentResolver:
    def __init__(self, answer: str | None = None, exc: Exception | None = None) -> None:
        self.answer = answer
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    async def resolve_intent(
        self,
        *,
        transcript: str,
        keywords: tuple[str, ...],
        language: str,
    ) -> str | None:
        self.calls.append(
            {"transcript": transcript, "keywords": keywords, "language": language}
        )
        if self.exc is not None:
            raise self.exc
        return self.answer


def _farmer() -> ClientState:
    return ClientState(user=SessionUser("u1", UserType.FARMER), path="/dashboard/farmer")


def test_exact_keyword_navigates() -> None:
    dispatcher = NavigationDispatcher(session_provider=_farmer())

    outcome = asyncio.run(dispatcher.resolve("Go to Products"))

    assert outcome.kind is OutcomeKind.NAVIGATE
    assert outcome.path == "/dashboard/farmer/products"
    assert outcome.keyword == "products"


def test_miss_without_fallback_is_not_found() -> None:
    state = ClientState(language="Tamil")
    dispatcher = NavigationDispatcher(session_provider=state)

    outcome = asyncio.run(dispatcher.resolve("open weather"))

    assert outcome.kind is OutcomeKind.NOT_FOUND
    assert outcome.keyword == "weather"
    assert outcome.path is None
    assert outcome.spoken_text == "கிடைக்கவில்லை"


def test_mapping_reflects_context_changes_between_commands() -> None:
    state = ClientState()
    dispatcher = NavigationDispatcher(session_provider=state)

    assert dispatcher.route_mapping()["dashboard"] == "/dashboard"
    state.apply({"user": {"uid": "u2", "user_type": "hub"}})
    assert dispatcher.route_mapping()["dashboard"] == "/dashboard/hub"


def test_exact_hit_does_not_call_fallback() -> None:
    resolver = FakeIntentResolver(answer="faq")
    dispatcher = NavigationDispatcher(session_provider=_farmer(), intent_resolver=resolver)

    asyncio.run(dispatcher.resolve("open analytics"))

    assert resolver.calls == []


def test_fallback_hit_goes_through_auth_gate() -> None:
    resolver = FakeIntentResolver(answer="orders")
    dispatcher = NavigationDispatcher(
        session_provider=ClientState(path="/"),
        intent_resolver=resolver,
    )

    outcome = asyncio.run(dispatcher.resolve("where are my purchases"))

    assert outcome.kind is OutcomeKind.LOGIN_REDIRECT
    assert outcome.keyword == "orders"
    assert outcome.pending_redirect == "/dashboard/orders"
    assert "orders" in resolver.calls[0]["keywords"]
    assert resolver.calls[0]["transcript"] == "where are my purchases"


def test_fallback_answer_outside_mapping_is_not_found() -> None:
    resolver = FakeIntentResolver(answer="attendance")
    dispatcher = NavigationDispatcher(session_provider=_farmer(), intent_resolver=resolver)

    outcome = asyncio.run(dispatcher.resolve("check staff"))

    assert outcome.kind is OutcomeKind.NOT_FOUND


def test_fallback_failure_degrades_to_not_found() -> None:
    resolver = FakeIntentResolver(exc=RuntimeError("boom"))
    dispatcher = NavigationDispatcher(session_provider=_farmer(), intent_resolver=resolver)

    outcome = asyncio.run(dispatcher.resolve("something odd"))

    assert outcome.kind is OutcomeKind.NOT_FOUND
    assert outcome.keyword == "something odd"
