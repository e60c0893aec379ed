"""Cart Context Provider - one CartState per browser session."""
from collections import OrderedDict
from typing import Callable

from goblin_store.db import KeyValueStore
from goblin_store.logging import get_logger, sanitize_id_for_logging
from .service import CartState

logger = get_logger(__name__)

StoreFactory = Callable[[str], KeyValueStore]


class CartProvider:
    """
    Hands out the single CartState of each session.

    Every request of a session gets the same CartState object, so a mutation
    made while handling one request is what the next request reads. Carts are
    kept in LRU order; an evicted cart is rebuilt from its store on next
    access, which holds exactly what was in memory.
    """

    def __init__(self, store_factory: StoreFactory, max_sessions: int = 1000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be a positive integer")
        self._store_factory = store_factory
        self._max_sessions = max_sessions
        self._carts: "OrderedDict[str, CartState]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._carts)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._carts

    def cart_for(self, session_id: str) -> CartState:
        """Get the session's cart, hydrating it on first access."""
        cart = self._carts.get(session_id)
        if cart is None:
            cart = CartState(self._store_factory(session_id))
            self._carts[session_id] = cart
            logger.debug(
                f"Hydrated cart for session {sanitize_id_for_logging(session_id)} "
                f"with {cart.count} items"
            )
            self._evict()
        self._carts.move_to_end(session_id)
        return cart

    def store_for(self, session_id: str) -> KeyValueStore:
        """Get the persistent store of a session (shared with its cart)."""
        return self.cart_for(session_id).store

    def _evict(self) -> None:
        while len(self._carts) > self._max_sessions:
            session_id, _ = self._carts.popitem(last=False)
            logger.debug(f"Evicted cart for session {sanitize_id_for_logging(session_id)}")
