"""Cart state kept in lock-step with the session's persistent store."""
from decimal import Decimal
from typing import List

from goblin_store.db import KeyValueStore, RedisKeys
from goblin_store.errors import StorageUnavailableError
from goblin_store.logging import get_logger, sanitize_string_for_logging
from goblin_store.money import to_decimal
from .models import Product, decode_products, encode_products

logger = get_logger(__name__)


class CartState:
    """
    Authoritative list of products in one session's cart.

    The list is read from the store once, on creation. After that every
    mutation rewrites the whole list under the "products" key before
    returning, so the stored value always decodes to the in-memory list.

    Duplicates are allowed: adding the same product twice means two units.
    """

    def __init__(self, store: KeyValueStore, key: str = RedisKeys.PRODUCTS):
        self._store = store
        self._key = key
        self._products: List[Product] = self._hydrate()

    def _hydrate(self) -> List[Product]:
        """Load the persisted cart; anything unreadable means an empty cart."""
        try:
            raw = self._store.get(self._key)
        except StorageUnavailableError as e:
            logger.warning(f"Cart store unavailable on hydration, starting empty: {e}")
            return []

        if not raw:
            return []

        try:
            return decode_products(raw)
        except ValueError as e:
            logger.warning(f"Corrupted cart data, starting empty: {e}")
            return []

    def _persist(self) -> None:
        try:
            self._store.set(self._key, encode_products(self._products))
        except StorageUnavailableError:
            logger.error(f"Failed to persist cart ({len(self._products)} items)")
            raise

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def products(self) -> List[Product]:
        """Copy of the products currently in the cart, in insertion order."""
        return list(self._products)

    @property
    def count(self) -> int:
        return len(self._products)

    def contains(self, product: Product) -> bool:
        return product in self._products

    def add_to_cart(self, product: Product) -> None:
        """Append product to the end of the cart and persist."""
        self._products.append(product)
        logger.info(f"Added {sanitize_string_for_logging(product.name)} to cart")
        self._persist()

    def remove_from_cart(self, product: Product) -> None:
        """
        Remove one unit of product (the first equal entry) and persist.

        Removing a product that is not in the cart leaves it unchanged; the
        cart is still written so every call ends with a store write.
        """
        try:
            self._products.remove(product)
            logger.info(f"Removed {sanitize_string_for_logging(product.name)} from cart")
        except ValueError:
            logger.debug(f"{sanitize_string_for_logging(product.name)} not in cart")
        self._persist()

    def total_price(self) -> Decimal:
        """Sum of prices over every unit in the cart (0 when empty)."""
        return sum((to_decimal(p.price) for p in self._products), Decimal("0"))

    def clear_cart(self) -> None:
        """Empty the cart. Always writes, even when already empty."""
        self._products = []
        self._persist()
