"""
Order summary recorded at checkout.

There is no server-side order processing: checkout only snapshots the cart
into the session's store so the order summary page can show it after the
cart is cleared.
"""
import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from goblin_store.cart import CartState, Product
from goblin_store.db import KeyValueStore, RedisKeys
from goblin_store.errors import StorageUnavailableError
from goblin_store.logging import get_logger
from goblin_store.money import round_money, to_decimal

logger = get_logger(__name__)


@dataclass
class OrderSummary:
    customer_name: str
    address: str
    products: List[Product] = field(default_factory=list)
    total: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "customer_name": self.customer_name,
            "address": self.address,
            "products": [p.to_dict() for p in self.products],
            "total": str(self.total),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OrderSummary":
        return cls(
            customer_name=data["customer_name"],
            address=data["address"],
            products=[Product.from_dict(p) for p in data.get("products", [])],
            total=to_decimal(data.get("total", 0)),
        )


def place_order(cart: CartState, customer_name: str, address: str) -> OrderSummary:
    """
    Snapshot the cart as the session's last order, then clear the cart.

    The order is written before the cart is cleared, so a failed write
    leaves the cart as it was.

    Raises:
        ValueError: the cart is empty
        StorageUnavailableError: the order or the cleared cart could not be persisted
    """
    if cart.count == 0:
        raise ValueError("cannot place an order with an empty cart")

    order = OrderSummary(
        customer_name=customer_name,
        address=address,
        products=cart.products,
        total=round_money(cart.total_price()),
    )
    cart.store.set(RedisKeys.ORDER, json.dumps(order.to_dict(), separators=(",", ":")))
    cart.clear_cart()
    logger.info(f"Order placed: {len(order.products)} items, total {order.total}")
    return order


def get_last_order(store: KeyValueStore) -> Optional[OrderSummary]:
    """Read the session's last order; None when there is none or it is unreadable."""
    try:
        raw = store.get(RedisKeys.ORDER)
    except StorageUnavailableError as e:
        logger.warning(f"Order store unavailable: {e}")
        return None

    if not raw:
        return None

    try:
        return OrderSummary.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Corrupted order data: {e}")
        return None
