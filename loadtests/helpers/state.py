"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state: no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper from browsing through checkout."""

    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_number: str | None = None


@dataclass
class CatalogAdminState:
    product_ids: list[str] = field(default_factory=list)
    category_ids: list[str] = field(default_factory=list)
