"""
Route table builder.

Maps spoken keywords to in-app paths for the current user role.

Rules:
- Built fresh for every voice command; never cached.
- Always contains the base keywords.
- Exactly one overlay is applied: the resolved role's, or the default one.
- A missing keyword is a lookup miss, never an empty-string route.
"""

from __future__ import annotations

from enum import Enum

from constants import FAQ_PATH, HOME_PATH, LOGIN_PATH_PREFIX


class UserType(str, Enum):
    """Role attached to a session user."""

    FARMER = "farmer"
    HUB = "hub"
    CUSTOMER = "customer"
    RESTAURANT = "restaurant"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: object) -> UserType:
        """Parse a client-supplied role string. Unrecognized values map to UNKNOWN."""
        if not isinstance(value, str) or not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


# Path inference order when identity is unknown
ROLE_INFERENCE_ORDER: tuple[UserType, ...] = (
    UserType.RESTAURANT,
    UserType.FARMER,
    UserType.HUB,
    UserType.CUSTOMER,
)


BASE_ROUTES: dict[str, str] = {
    "home": HOME_PATH,
    "faq": FAQ_PATH,
    "help": FAQ_PATH,
    "support": FAQ_PATH,
}

ROLE_ROUTES: dict[UserType, dict[str, str]] = {
    UserType.RESTAURANT: {
        "dashboard": "/dashboard/restaurant",
        "orders": "/dashboard/restaurant/orders",
        "products": "/dashboard/restaurant/products",
        "inventory": "/dashboard/restaurant/inventory",
        "farmers": "/dashboard/restaurant/farmers",
        "reports": "/dashboard/restaurant/reports",
        "analytics": "/dashboard/restaurant/reports",
        "settings": "/dashboard/restaurant/settings",
        "profile": "/dashboard/profile",
    },
    UserType.FARMER: {
        "dashboard": "/dashboard/farmer",
        "products": "/dashboard/farmer/products",
        "matchmaking": "/dashboard/farmer/matchmaking",
        "analytics": "/dashboard/farmer/analytics",
        "orders": "/dashboard/orders",
        "profile": "/dashboard/profile",
    },
    UserType.HUB: {
        "dashboard": "/dashboard/hub",
        "orders": "/dashboard/hub/orders",
        "inventory": "/dashboard/hub/inventory",
        "attendance": "/dashboard/hub/attendance",
        "analytics": "/dashboard/hub/analytics",
        "profile": "/dashboard/profile",
    },
    UserType.CUSTOMER: {
        "dashboard": "/dashboard/customer",
        "products": "/dashboard/products",
        "orders": "/dashboard/orders",
        "track": "/dashboard/track",
        "cart": "/dashboard/customer/cart",
        "settings": "/dashboard/customer/settings",
        "profile": "/dashboard/profile",
    },
}

DEFAULT_ROUTES: dict[str, str] = {
    "dashboard": "/dashboard",
    "orders": "/dashboard/orders",
    "products": "/dashboard/products",
    "track": "/dashboard/track",
    "profile": "/dashboard/profile",
}


def resolve_role(user_type: UserType | None, current_path: str) -> UserType | None:
    """
    Resolve the effective role for routing.

    Identity wins: a known user type is returned as-is.
    Path inference (``/<role>`` substring) is only the fallback when the
    identity is missing or unknown.
    """
    if user_type is not None and user_type is not UserType.UNKNOWN:
        return user_type

    path = current_path or ""
    for role in ROLE_INFERENCE_ORDER:
        if f"/{role.value}" in path:
            return role
    return None


def build_route_mapping(user_type: UserType | None, current_path: str) -> dict[str, str]:
    """Return a fresh keyword -> path mapping for the given role context."""
    role = resolve_role(user_type, current_path)
    overlay = ROLE_ROUTES[role] if role is not None else DEFAULT_ROUTES
    return {**BASE_ROUTES, **overlay}


def login_path_for(role: UserType | None) -> str:
    """Role-specific login page, or the home page which offers every login."""
    if role is None or role is UserType.UNKNOWN:
        return HOME_PATH
    return f"{LOGIN_PATH_PREFIX}/{role.value}"
