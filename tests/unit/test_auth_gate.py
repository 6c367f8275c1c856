# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from constants import LOGIN_REDIRECT_DELAY_MS, NAVIGATE_DELAY_MS, PROTECTED_KEYWORDS
from navigation.auth_gate import AuthGate, OutcomeKind, is_protected
from navigation.identity import SessionUser
from navigation.routes import UserType
from session.client_state import ClientState


@pytest.mark.parametrize("keyword", sorted(PROTECTED_KEYWORDS))
def test_protected_keyword_without_session_redirects_to_login(keyword: str) -> None:
    gate = AuthGate(ClientState(path="/"))

    outcome = gate.decide(keyword, f"/dashboard/{keyword}")

    assert outcome.kind is OutcomeKind.LOGIN_REDIRECT
    assert outcome.path == "/"
    assert outcome.pending_redirect == f"/dashboard/{keyword}"
    assert outcome.delay_ms == LOGIN_REDIRECT_DELAY_MS
    assert outcome.spoken_text == "Please login first. Taking you to login page."


def test_unprotected_keyword_navigates_without_session() -> None:
    gate = AuthGate(ClientState())

    outcome = gate.decide("faq", "/dashboard/faq")

    assert outcome.kind is OutcomeKind.NAVIGATE
    assert outcome.path == "/dashboard/faq"
    assert outcome.delay_ms == NAVIGATE_DELAY_MS
    assert outcome.spoken_text == "Navigating to faq"


def test_logged_in_user_navigates_to_protected_route() -> None:
    gate = AuthGate(ClientState(user=SessionUser("u1", UserType.FARMER)))

    outcome = gate.decide("products", "/dashboard/farmer/products")

    assert outcome.kind is OutcomeKind.NAVIGATE
    assert outcome.path == "/dashboard/farmer/products"
    assert outcome.pending_redirect is None


def test_login_page_follows_remembered_role() -> None:
    state = ClientState(remembered_type=UserType.HUB, path="/")
    outcome = AuthGate(state).decide("orders", "/dashboard/hub/orders")

    assert outcome.kind is OutcomeKind.LOGIN_REDIRECT
    assert outcome.path == "/login/hub"


def test_login_page_inferred_from_path() -> None:
    state = ClientState(path="/dashboard/restaurant")
    assert AuthGate(state).login_path() == "/login/restaurant"


def test_spoken_text_is_localized() -> None:
    state = ClientState(user=SessionUser("u1", UserType.CUSTOMER), language="Hindi")
    outcome = AuthGate(state).decide("cart", "/dashboard/customer/cart")

    assert outcome.spoken_text == "जा रहे हैं cart"
    assert outcome.language == "Hindi"


def test_is_protected_is_case_insensitive() -> None:
    assert is_protected("Dashboard")
    assert not is_protected("home")
