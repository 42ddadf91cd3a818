"""Per-user state for the load test journeys.

Each Locust user keeps its own ids; nothing is shared between users.
"""

from dataclasses import dataclass, field


def headers(user_id: str | None, role: str = "Customer") -> dict:
    """Auth headers the upstream gateway would forward."""
    return {"X-User-Id": user_id or "", "X-User-Role": role}


@dataclass
class ShopperState:
    user_id: str | None = None
    address_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None


@dataclass
class VendorState:
    user_id: str | None = None
    store_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
