# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from navigation.routes import (
    BASE_ROUTES,
    DEFAULT_ROUTES,
    ROLE_ROUTES,
    UserType,
    build_route_mapping,
    login_path_for,
    resolve_role,
)


@pytest.mark.parametrize(
    "user_type",
    [UserType.FARMER, UserType.HUB, UserType.CUSTOMER, UserType.RESTAURANT],
)
def test_mapping_is_base_plus_exactly_one_role_overlay(user_type: UserType) -> None:
    mapping = build_route_mapping(user_type, "/")

    assert mapping == {**BASE_ROUTES, **ROLE_ROUTES[user_type]}
    for key in BASE_ROUTES:
        assert key in mapping


def test_farmer_products_route() -> None:
    mapping = build_route_mapping(UserType.FARMER, "/")
    assert mapping["products"] == "/dashboard/farmer/products"


def test_no_role_uses_default_overlay() -> None:
    mapping = build_route_mapping(None, "/")
    assert mapping == {**BASE_ROUTES, **DEFAULT_ROUTES}
    assert mapping["dashboard"] == "/dashboard"


def test_role_inferred_from_path_when_identity_unknown() -> None:
    assert resolve_role(None, "/dashboard/hub/orders") is UserType.HUB
    assert resolve_role(UserType.UNKNOWN, "/login/restaurant") is UserType.RESTAURANT
    assert build_route_mapping(None, "/dashboard/hub")["dashboard"] == "/dashboard/hub"


def test_identity_wins_over_path() -> None:
    # A farmer browsing a hub page still gets farmer routes.
    assert resolve_role(UserType.FARMER, "/dashboard/hub/orders") is UserType.FARMER
    mapping = build_route_mapping(UserType.FARMER, "/dashboard/hub/orders")
    assert mapping["dashboard"] == "/dashboard/farmer"
    assert "attendance" not in mapping


def test_path_inference_order_prefers_restaurant() -> None:
    assert resolve_role(None, "/restaurant/farmer") is UserType.RESTAURANT


def test_unmapped_keyword_is_a_miss_not_empty_route() -> None:
    mapping = build_route_mapping(UserType.CUSTOMER, "/")
    assert mapping.get("attendance") is None
    assert all(path for path in mapping.values())


def test_mapping_is_fresh_each_call() -> None:
    first = build_route_mapping(UserType.HUB, "/")
    first["dashboard"] = "/tampered"
    assert build_route_mapping(UserType.HUB, "/")["dashboard"] == "/dashboard/hub"


def test_user_type_parse() -> None:
    assert UserType.parse("Farmer") is UserType.FARMER
    assert UserType.parse(" hub ") is UserType.HUB
    assert UserType.parse("admin") is UserType.UNKNOWN
    assert UserType.parse(None) is UserType.UNKNOWN
    assert UserType.parse(5) is UserType.UNKNOWN
    assert UserType.parse(["farmer"]) is UserType.UNKNOWN


def test_login_path_for_role() -> None:
    assert login_path_for(UserType.HUB) == "/login/hub"
    assert login_path_for(UserType.UNKNOWN) == "/"
    assert login_path_for(None) == "/"
